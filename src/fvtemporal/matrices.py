"""
Linear Operator Contributions
=============================
Diagonal/source pairs produced by the implicit time schemes.

The discretized equation represented by a contribution is::

    diag * psi - source = 0

where ``psi`` are the unknown current-time cell values. ``diag`` already
contains the cell volume (and density) weighting, so it has the dimensions
of the operator divided by the field dimensions. ``source`` holds every known
old-time contribution.

The contribution is built fresh per call and handed over to the global
matrix assembler, which sums all terms of an equation before solving.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import scipy as sp

from fvtemporal.utils import scale_rows

if TYPE_CHECKING:
    import numpy.typing as npt

    from fvtemporal.dimensions import DimensionSet
    from fvtemporal.fields import VolField


class FvOperatorContribution:
    """
    Cell-local linear operator contribution of one discretized term.
    """

    def __init__(
        self,
        psi: VolField,
        dimensions: DimensionSet,
        diag: npt.NDArray[np.float64] | None = None,
        source: npt.NDArray[np.float64] | None = None,
    ) -> None:
        """
        Initialize the contribution for the unknown field ``psi``.

        Args:
            psi: The field solved for. Only its name, mesh and value type are used.
            dimensions: Dimensions of the operator (e.g. field dims * volume / time²).
            diag: Diagonal coefficients, shape (n_cells,). Defaults to zeros.
            source: Source values, shape of ``psi.internal``. Defaults to zeros.
        """
        self.psi_name = psi.name
        self.mesh = psi.mesh
        self.value_type = psi.value_type
        self.dimensions = dimensions

        n_cells = psi.mesh.n_cells
        self.diag: npt.NDArray[np.float64] = (
            np.zeros(n_cells, dtype=np.float64) if diag is None
            else np.asarray(diag, dtype=np.float64)
        )
        self.source: npt.NDArray[np.float64] = (
            np.zeros_like(psi.internal) if source is None
            else np.asarray(source, dtype=np.float64)
        )

        if self.diag.shape != (n_cells,):
            raise ValueError(f"Diagonal must have shape ({n_cells},), got {self.diag.shape}.")
        if self.source.shape != psi.internal.shape:
            raise ValueError(
                f"Source must have shape {psi.internal.shape}, got {self.source.shape}."
            )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(psi='{self.psi_name}', dimensions={self.dimensions}, "
            f"n_cells={self.diag.size})"
        )

    def _like(self, diag: npt.NDArray[np.float64], source: npt.NDArray[np.float64]) -> FvOperatorContribution:
        out = object.__new__(FvOperatorContribution)
        out.psi_name = self.psi_name
        out.mesh = self.mesh
        out.value_type = self.value_type
        out.dimensions = self.dimensions
        out.diag = diag
        out.source = source
        return out

    def _check_compatible(self, other: FvOperatorContribution, operation: str) -> None:
        if other.psi_name != self.psi_name or other.mesh is not self.mesh:
            raise ValueError(
                f"Cannot combine operators for '{self.psi_name}' and '{other.psi_name}' ({operation})."
            )
        self.dimensions.check_same(other.dimensions, operation)

    def __add__(self, other: FvOperatorContribution) -> FvOperatorContribution:
        if not isinstance(other, FvOperatorContribution):
            return NotImplemented
        self._check_compatible(other, "+")
        return self._like(self.diag + other.diag, self.source + other.source)

    def __sub__(self, other: FvOperatorContribution) -> FvOperatorContribution:
        if not isinstance(other, FvOperatorContribution):
            return NotImplemented
        self._check_compatible(other, "-")
        return self._like(self.diag - other.diag, self.source - other.source)

    def __neg__(self) -> FvOperatorContribution:
        return self._like(-self.diag, -self.source)

    def __mul__(self, factor: float) -> FvOperatorContribution:
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return self._like(float(factor) * self.diag, float(factor) * self.source)

    __rmul__ = __mul__

    def residual(self, psi: VolField) -> npt.NDArray[np.float64]:
        """
        Evaluate ``diag * psi - source`` for the given cell values.

        Args:
            psi: Field whose internal values are substituted for the unknown.

        Returns:
            Residual per cell, shape of ``psi.internal``.
        """
        return scale_rows(self.diag, psi.internal) - self.source

    def explicit_value(self, psi: VolField) -> npt.NDArray[np.float64]:
        """
        Residual per unit cell volume.

        For a time-derivative operator this is the explicit value of the
        derivative at the current time level.
        """
        return scale_rows(1.0 / self.mesh.V, self.residual(psi))

    def to_sparse(self) -> sp.sparse.csr_matrix:
        """
        Diagonal coefficients as a sparse matrix in CSR form.

        Returns:
            (n_cells x n_cells) csr_matrix with ``diag`` on the main diagonal.
        """
        n = self.diag.size
        idx = np.arange(n, dtype=np.int64)
        return sp.sparse.coo_matrix(
            (self.diag, (idx, idx)),
            shape=(n, n),
            dtype=np.float64,
        ).tocsr()
