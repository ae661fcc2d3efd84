"""
Implicit finite-volume operators: ``fvm.d2dt2(vf)`` and ``fvm.d2dt2(rho, vf)``.

The scheme is the one named by ``mesh.d2dt2_scheme`` of the field's mesh.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from fvtemporal.schemes import create_d2dt2_scheme

if TYPE_CHECKING:
    from fvtemporal.fields import VolField
    from fvtemporal.matrices import FvOperatorContribution
    from fvtemporal.schemes.d2dt2_scheme import Density


def d2dt2(rho_or_vf: Density | VolField, vf: VolField | None = None) -> FvOperatorContribution:
    """
    Implicit second time derivative operator.

    Args:
        rho_or_vf: The unknown field, or the density when ``vf`` is given.
        vf: The unknown field, when a density is passed first.

    Returns:
        Diagonal/source contribution for the matrix assembler.
    """
    if vf is None:
        vf, rho = rho_or_vf, None
    else:
        rho = rho_or_vf
    return create_d2dt2_scheme(vf.mesh.d2dt2_scheme, vf.mesh).fvm_d2dt2(vf, rho)
