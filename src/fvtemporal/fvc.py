"""
Explicit finite-volume calculus: ``fvc.d2dt2(vf)`` and ``fvc.d2dt2(rho, vf)``.

The scheme is the one named by ``mesh.d2dt2_scheme`` of the field's mesh.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from fvtemporal.schemes import create_d2dt2_scheme

if TYPE_CHECKING:
    from fvtemporal.fields import VolField
    from fvtemporal.schemes.d2dt2_scheme import Density


def d2dt2(rho_or_vf: Density | VolField, vf: VolField | None = None) -> VolField:
    """
    Explicit second time derivative.

    Args:
        rho_or_vf: The field, or the density when ``vf`` is given.
        vf: The field, when a density is passed first.

    Returns:
        New field holding the second time derivative.
    """
    if vf is None:
        vf, rho = rho_or_vf, None
    else:
        rho = rho_or_vf
    return create_d2dt2_scheme(vf.mesh.d2dt2_scheme, vf.mesh).fvc_d2dt2(vf, rho)
