from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from fvtemporal.dimensions import DIM_TIME, DIM_VOLUME
from fvtemporal.fields import VolField
from fvtemporal.matrices import FvOperatorContribution
from fvtemporal.schemes.d2dt2_scheme import D2dt2Scheme, Density, register_d2dt2_scheme

if TYPE_CHECKING:
    from fvtemporal.dimensions import DimensionSet

logger = logging.getLogger(__name__)


@register_d2dt2_scheme
class SteadyStateD2dt2Scheme(D2dt2Scheme):
    """
    Second time-derivative scheme for steady-state runs.

    The derivative is identically zero: the explicit value is a zero field
    and the operator has zero diagonal and source. Dimensions are the same
    as for the transient schemes so that equations stay consistent. No
    time history is read.
    """
    NAME = "steadyState"

    @staticmethod
    def _dimensions(vf: VolField, rho, per_volume: bool) -> DimensionSet:
        dimensions = vf.dimensions / DIM_TIME ** 2
        if not per_volume:
            dimensions = dimensions * DIM_VOLUME
        if rho is not None:
            dimensions = rho.dimensions * dimensions
        return dimensions

    def fvc_d2dt2(self, vf: VolField, rho: Density | None = None) -> VolField:
        rho = self._check_density(rho)
        return VolField(
            self._result_name(vf, rho),
            self.mesh,
            self._dimensions(vf, rho, per_volume=True),
            np.zeros_like(vf.internal),
            {k: np.zeros_like(v) for k, v in vf.boundary.items()},
        )

    def fvm_d2dt2(self, vf: VolField, rho: Density | None = None) -> FvOperatorContribution:
        rho = self._check_density(rho)
        logger.debug(f"steadyState d2dt2 of '{vf.name}': empty operator")
        return FvOperatorContribution(vf, self._dimensions(vf, rho, per_volume=False))
