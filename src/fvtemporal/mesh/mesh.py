from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING

import numpy as np

from fvtemporal.config import DEFAULT_D2DT2_SCHEME

if TYPE_CHECKING:
    import numpy.typing as npt

    from fvtemporal.mesh.time import Time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundaryPatch:
    """A named group of boundary faces."""
    name: str
    n_faces: int

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Boundary patch name must be non-empty.")
        if self.n_faces < 0:
            raise ValueError(f"Boundary patch '{self.name}' has negative face count {self.n_faces}.")


def _as_volumes(volumes: list[float] | npt.NDArray[np.float64], n_cells: int | None = None) -> npt.NDArray[np.float64]:
    """Validate and copy a per-cell volume array."""
    v = np.array(volumes, dtype=np.float64)
    if v.ndim != 1:
        raise ValueError(f"Cell volumes must be a 1D array, got shape {v.shape}.")
    if n_cells is not None and v.size != n_cells:
        raise ValueError(f"Expected {n_cells} cell volumes, got {v.size}.")
    if not np.all(v > 0.0):
        raise ValueError("Cell volumes must be strictly positive.")
    v.setflags(write=False)
    return v


class FvMesh:
    """
    Finite-volume mesh as seen by the time schemes.

    Only the per-cell control volumes of the current and the two previous
    time levels (``V``, ``V0``, ``V00``), the boundary patch sizes and the
    moving flag are held here. Cell connectivity and geometry belong to the
    spatial discretization and the mesh-motion solver.
    """

    def __init__(
        self,
        time: Time,
        volumes: list[float] | npt.NDArray[np.float64],
        patches: list[BoundaryPatch] | None = None,
        moving: bool = False,
        d2dt2_scheme: str = DEFAULT_D2DT2_SCHEME,
    ) -> None:
        """
        Initialize the mesh.

        Args:
            time: Time controller providing the step sizes.
            volumes: Cell volumes at the current time level, shape (n_cells,).
            patches: Boundary patches. Stored ordered by name.
            moving: Whether the mesh deforms in time.
            d2dt2_scheme: Name of the second time-derivative scheme used by
                          :mod:`fvtemporal.fvc` and :mod:`fvtemporal.fvm`.
        """
        self.time = time
        self._v = _as_volumes(volumes)
        self._v0: npt.NDArray[np.float64] | None = None
        self._v00: npt.NDArray[np.float64] | None = None
        self.moving = moving
        self.d2dt2_scheme = d2dt2_scheme

        patches = patches or []
        names = [p.name for p in patches]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate boundary patch names: {names}.")
        self.patches: dict[str, BoundaryPatch] = {p.name: p for p in sorted(patches, key=lambda p: p.name)}

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(n_cells={self.n_cells}, "
            f"patches={list(self.patches)}, moving={self.moving})"
        )

    @property
    def n_cells(self) -> int:
        """Number of cells in the mesh."""
        return int(self._v.size)

    @property
    def n_boundary_faces(self) -> int:
        """Total number of boundary faces over all patches."""
        return sum(p.n_faces for p in self.patches.values())

    @property
    def V(self) -> npt.NDArray[np.float64]:
        """Cell volumes at the current time level."""
        return self._v

    @property
    def V0(self) -> npt.NDArray[np.float64]:
        """Cell volumes at the previous time level."""
        return self._v if self._v0 is None else self._v0

    @property
    def V00(self) -> npt.NDArray[np.float64]:
        """Cell volumes two time levels back."""
        if self._v00 is not None:
            return self._v00
        return self.V0

    def move(self, new_volumes: list[float] | npt.NDArray[np.float64]) -> None:
        """
        Advance the volume history by one time level.

        The current volumes become ``V0``, the previous ``V00`` and
        ``new_volumes`` the current ones. Marks the mesh as moving.

        Args:
            new_volumes: Cell volumes at the new time level, shape (n_cells,).
        """
        v = _as_volumes(new_volumes, n_cells=self.n_cells)
        self._v00 = self.V0
        self._v0 = self._v
        self._v = v
        self.moving = True
        logger.debug(
            f"Mesh moved: total volume {self._v0.sum():.6g} -> {self._v.sum():.6g}"
        )

    def update_volumes(self, volumes: list[float] | npt.NDArray[np.float64]) -> None:
        """
        Replace the current-level volumes without shifting the history.

        Used by mesh-motion solvers that correct the volumes within a step.

        Args:
            volumes: Corrected cell volumes at the current level, shape (n_cells,).
        """
        self._v = _as_volumes(volumes, n_cells=self.n_cells)

    def set_volume_history(
        self,
        V: list[float] | npt.NDArray[np.float64],
        V0: list[float] | npt.NDArray[np.float64],
        V00: list[float] | npt.NDArray[np.float64],
    ) -> None:
        """
        Set all three volume levels at once and mark the mesh as moving.

        Args:
            V: Current volumes.
            V0: Volumes one time level back.
            V00: Volumes two time levels back.
        """
        self._v = _as_volumes(V, n_cells=self.n_cells)
        self._v0 = _as_volumes(V0, n_cells=self.n_cells)
        self._v00 = _as_volumes(V00, n_cells=self.n_cells)
        self.moving = True
