"""
Euler Second Time-Derivative Scheme
===================================
Second-order backward difference of the second time derivative on
variable time steps and deforming meshes.

All variants share one weighted formula::

    d2dt2 = rDeltaT2 * scale * ( coefft  * W_new * (phi   - phi0)
                               - coefft00 * W_old * (phi0 - phi00) ) / V

The weighting terms ``W_new``/``W_old`` and the factor ``scale`` depend on
the variant:

===================  ===============  =================  =====
variant              W_new            W_old              scale
===================  ===============  =================  =====
static, explicit     1                1                  1
static, implicit     V                V                  1
moving               V + V0           V0 + V00           1/2
density field        W_new*(rho+rho0) W_old*(rho0+rho00) *1/2
constant density     unchanged        unchanged          *rho
===================  ===============  =================  =====

On a static mesh the explicit value is not divided by ``V``; on a moving
mesh it is. Boundary face values always use the static unweighted form (with
the density sums for a density field), since faces carry no control volume.

The implicit operator splits the same formula into a diagonal multiplying
the unknown ``phi`` and a source made of old-time values::

    diag   = rDeltaT2 * scale * coefft * W_new
    source = rDeltaT2 * scale * ((coefft*W_new + coefft00*W_old)*phi0 - coefft00*W_old*phi00)
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

import numpy as np

from fvtemporal.dimensions import DIM_VOLUME, DimensionedScalar
from fvtemporal.fields import VolField
from fvtemporal.matrices import FvOperatorContribution
from fvtemporal.schemes.coefficients import TemporalCoefficients
from fvtemporal.schemes.d2dt2_scheme import D2dt2Scheme, Density, register_d2dt2_scheme
from fvtemporal.schemes.kernels import old_time_source, weighted_second_difference
from fvtemporal.utils import as_component_matrix

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Weights:
    """Per-item weights of the newer and older difference plus a global factor."""
    new: npt.NDArray[np.float64]
    old: npt.NDArray[np.float64]
    scale: float

    def with_density(
        self,
        rho: npt.NDArray[np.float64],
        rho0: npt.NDArray[np.float64],
        rho00: npt.NDArray[np.float64],
    ) -> _Weights:
        return _Weights(new=self.new * (rho + rho0), old=self.old * (rho0 + rho00), scale=0.5 * self.scale)

    def with_constant(self, value: float) -> _Weights:
        return _Weights(new=self.new, old=self.old, scale=value * self.scale)


@register_d2dt2_scheme
class EulerD2dt2Scheme(D2dt2Scheme):
    """
    Second-order Euler scheme for ``d2/dt2`` on variable time steps.
    """
    NAME = "Euler"

    def _coefficients(self) -> TemporalCoefficients:
        coeffs = TemporalCoefficients.from_time(self.mesh.time)
        logger.debug(
            f"Euler d2dt2 at t = {self.mesh.time.time_name}: coefft = {coeffs.coefft:.6g}, "
            f"coefft0 = {coeffs.coefft0:.6g}, coefft00 = {coeffs.coefft00:.6g}, "
            f"rDeltaT2 = {coeffs.r_delta_t2:.6g}"
        )
        return coeffs

    def _cell_weights(self, rho: VolField | DimensionedScalar | None, implicit: bool) -> _Weights:
        """
        Cell weights for the given density and output contract.

        Args:
            rho: Normalized density argument.
            implicit: Whether the weights are for an operator (static volume included).
        """
        mesh = self.mesh
        if mesh.moving:
            weights = _Weights(new=mesh.V + mesh.V0, old=mesh.V0 + mesh.V00, scale=0.5)
        elif implicit:
            weights = _Weights(new=mesh.V, old=mesh.V, scale=1.0)
        else:
            ones = np.ones(mesh.n_cells, dtype=np.float64)
            weights = _Weights(new=ones, old=ones, scale=1.0)

        if isinstance(rho, VolField):
            return weights.with_density(
                rho.internal, rho.old_time().internal, rho.old_old_time().internal
            )
        if isinstance(rho, DimensionedScalar):
            return weights.with_constant(rho.value)
        return weights

    @staticmethod
    def _patch_weights(patch_name: str, n_faces: int, rho: VolField | DimensionedScalar | None) -> _Weights:
        """Boundary face weights: no volume weighting, density sums only."""
        ones = np.ones(n_faces, dtype=np.float64)
        weights = _Weights(new=ones, old=ones, scale=1.0)
        if isinstance(rho, VolField):
            return weights.with_density(
                rho.boundary[patch_name],
                rho.old_time().boundary[patch_name],
                rho.old_old_time().boundary[patch_name],
            )
        if isinstance(rho, DimensionedScalar):
            return weights.with_constant(rho.value)
        return weights

    @staticmethod
    def _second_difference(
        values: tuple[npt.NDArray[np.float64], npt.NDArray[np.float64], npt.NDArray[np.float64]],
        weights: _Weights,
        coeffs: TemporalCoefficients,
        r_volume: npt.NDArray[np.float64],
    ) -> npt.NDArray[np.float64]:
        vf, vf0, vf00 = values
        out = weighted_second_difference(
            as_component_matrix(vf),
            as_component_matrix(vf0),
            as_component_matrix(vf00),
            np.ascontiguousarray(weights.new, dtype=np.float64),
            np.ascontiguousarray(weights.old, dtype=np.float64),
            coeffs.coefft,
            coeffs.coefft00,
            coeffs.r_delta_t2 * weights.scale,
            np.ascontiguousarray(r_volume, dtype=np.float64),
        )
        return out.reshape(vf.shape)

    def fvc_d2dt2(self, vf: VolField, rho: Density | None = None) -> VolField:
        rho = self._check_density(rho)
        coeffs = self._coefficients()
        vf0, vf00 = vf.old_time(), vf.old_old_time()

        if self.mesh.moving:
            r_volume = 1.0 / self.mesh.V
        else:
            r_volume = np.ones(self.mesh.n_cells, dtype=np.float64)

        internal = self._second_difference(
            (vf.internal, vf0.internal, vf00.internal),
            self._cell_weights(rho, implicit=False),
            coeffs,
            r_volume,
        )

        boundary = {}
        for patch_name, patch in self.mesh.patches.items():
            boundary[patch_name] = self._second_difference(
                (vf.boundary[patch_name], vf0.boundary[patch_name], vf00.boundary[patch_name]),
                self._patch_weights(patch_name, patch.n_faces, rho),
                coeffs,
                np.ones(patch.n_faces, dtype=np.float64),
            )

        dimensions = coeffs.r_delta_t2_dimensioned.dimensions * vf.dimensions
        if rho is not None:
            dimensions = rho.dimensions * dimensions

        return VolField(self._result_name(vf, rho), self.mesh, dimensions, internal, boundary)

    def fvm_d2dt2(self, vf: VolField, rho: Density | None = None) -> FvOperatorContribution:
        rho = self._check_density(rho)
        coeffs = self._coefficients()
        vf0, vf00 = vf.old_time(), vf.old_old_time()
        weights = self._cell_weights(rho, implicit=True)
        scale = coeffs.r_delta_t2 * weights.scale

        diag = (coeffs.coefft * scale) * weights.new
        source = old_time_source(
            as_component_matrix(vf0.internal),
            as_component_matrix(vf00.internal),
            np.ascontiguousarray(weights.new, dtype=np.float64),
            np.ascontiguousarray(weights.old, dtype=np.float64),
            coeffs.coefft,
            coeffs.coefft00,
            scale,
        ).reshape(vf.internal.shape)

        dimensions = coeffs.r_delta_t2_dimensioned.dimensions * vf.dimensions * DIM_VOLUME
        if rho is not None:
            dimensions = rho.dimensions * dimensions

        return FvOperatorContribution(vf, dimensions, diag=diag, source=source)
