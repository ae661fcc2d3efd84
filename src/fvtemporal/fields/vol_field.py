"""
Volume Fields
=============
Cell-centred fields with per-patch boundary values and a two-level time history.

A :class:`VolField` holds one value per mesh cell ("internal") and one value
per boundary face, grouped by patch ("boundary"). Values may be scalars,
vectors or tensors; the component shape is the trailing shape of the arrays.

The time history (the "old" and "old-old" snapshots) is owned by the field
but created and advanced by the external time-stepping loop through
:meth:`VolField.seed_old_times` and :meth:`VolField.store_old_times`. The
time schemes only read it.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Union

import numpy as np

from fvtemporal.dimensions import DimensionedScalar, DimensionSet
from fvtemporal.fields.value_types import ValueType
from fvtemporal.utils import scale_rows

if TYPE_CHECKING:
    import numpy.typing as npt

    from fvtemporal.mesh import FvMesh

logger = logging.getLogger(__name__)

BoundaryValues = dict[str, "npt.NDArray[np.float64]"]
Factor = Union[float, int, DimensionedScalar, "VolField"]


class TimeHistoryError(RuntimeError):
    """A field's old-time snapshots were requested before they were created."""


class VolField:
    """
    Cell-centred field of scalars, vectors or tensors.
    """

    def __init__(
        self,
        name: str,
        mesh: FvMesh,
        dimensions: DimensionSet,
        internal: list | npt.NDArray[np.float64],
        boundary: dict[str, float | list | npt.NDArray[np.float64]] | None = None,
    ) -> None:
        """
        Initialize the field.

        Args:
            name: Field name.
            mesh: Mesh the field lives on.
            dimensions: Physical dimensions of the field values.
            internal: Cell values, shape (n_cells, *component_shape).
            boundary: Face values per patch name, each broadcastable to
                      (n_faces, *component_shape). Every mesh patch must be given.

        Raises:
            ValueError: On shape mismatch or missing/unknown patches.
        """
        self.name = name
        self.mesh = mesh
        self.dimensions = dimensions

        values = np.array(internal, dtype=np.float64)
        if values.ndim == 0 or values.shape[0] != mesh.n_cells:
            raise ValueError(
                f"Field '{name}': internal values must have shape (n_cells={mesh.n_cells}, ...), "
                f"got {values.shape}."
            )
        self.value_type = ValueType.from_component_shape(values.shape[1:])
        self.internal: npt.NDArray[np.float64] = values
        self.boundary: BoundaryValues = self._check_boundary(boundary or {})

        self._old: VolField | None = None
        self._old_old: VolField | None = None

    def _check_boundary(self, boundary: dict) -> BoundaryValues:
        given, expected = set(boundary), set(self.mesh.patches)
        if given != expected:
            raise ValueError(
                f"Field '{self.name}': boundary patches {sorted(given)} do not match "
                f"mesh patches {sorted(expected)}."
            )

        checked: BoundaryValues = {}
        for patch_name, patch in self.mesh.patches.items():
            shape = (patch.n_faces,) + self.component_shape
            try:
                checked[patch_name] = np.broadcast_to(
                    np.asarray(boundary[patch_name], dtype=np.float64), shape
                ).copy()
            except ValueError as e:
                raise ValueError(
                    f"Field '{self.name}': values for patch '{patch_name}' cannot be "
                    f"broadcast to {shape}: {e}"
                ) from e
        return checked

    @classmethod
    def uniform(
        cls,
        name: str,
        mesh: FvMesh,
        dimensions: DimensionSet,
        value: float | list[float] | npt.NDArray[np.float64],
    ) -> VolField:
        """
        Create a field holding the same value in every cell and on every boundary face.

        Args:
            name: Field name.
            mesh: Mesh the field lives on.
            dimensions: Physical dimensions.
            value: A scalar, or a vector/tensor given as a (nested) sequence.
        """
        item = np.asarray(value, dtype=np.float64)
        internal = np.broadcast_to(item, (mesh.n_cells,) + item.shape)
        boundary = {name_: item for name_ in mesh.patches}
        return cls(name, mesh, dimensions, internal, boundary)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(name='{self.name}', type={self.value_type.name}, "
            f"dimensions={self.dimensions}, n_old_times={self.n_old_times})"
        )

    @property
    def component_shape(self) -> tuple[int, ...]:
        return self.value_type.component_shape

    @property
    def n_cells(self) -> int:
        return self.mesh.n_cells

    def copy(self, name: str | None = None) -> VolField:
        """Deep copy of the current values; the history is not copied."""
        return VolField(
            name or self.name,
            self.mesh,
            self.dimensions,
            self.internal.copy(),
            {k: v.copy() for k, v in self.boundary.items()},
        )

    # ------------------------------------------------------------------
    # Time history
    # ------------------------------------------------------------------
    @property
    def n_old_times(self) -> int:
        """Number of stored old-time levels (0, 1 or 2)."""
        return int(self._old is not None) + int(self._old_old is not None)

    def old_time(self) -> VolField:
        """
        Field values at the previous time level.

        Raises:
            TimeHistoryError: If the history has not been seeded.
        """
        if self._old is None:
            raise TimeHistoryError(
                f"Field '{self.name}' has no old-time values. "
                "The time loop must seed the history before time schemes are used."
            )
        return self._old

    def old_old_time(self) -> VolField:
        """
        Field values two time levels back.

        Raises:
            TimeHistoryError: If the history has not been seeded.
        """
        if self._old_old is None:
            raise TimeHistoryError(
                f"Field '{self.name}' has no old-old-time values. "
                "The time loop must seed the history before time schemes are used."
            )
        return self._old_old

    def seed_old_times(self) -> None:
        """Set both old-time snapshots to copies of the current values."""
        self._old = self.copy(f"{self.name}_0")
        self._old_old = self.copy(f"{self.name}_0_0")
        logger.debug(f"Seeded old-time history of field '{self.name}'.")

    def store_old_times(self) -> None:
        """
        Shift the history by one level at the start of a new time step.

        The old values become the old-old values and the current values
        are copied into the old values.

        Raises:
            TimeHistoryError: If the history has not been seeded.
        """
        old = self.old_time()
        old.name = f"{self.name}_0_0"
        self._old_old = old
        self._old = self.copy(f"{self.name}_0")

    def set_old_times(self, old: VolField, old_old: VolField) -> None:
        """
        Install explicit old and old-old snapshots (e.g. read from a restart).

        Raises:
            ValueError: If the snapshots do not match this field's mesh, type or dimensions.
        """
        for snapshot in (old, old_old):
            if snapshot.mesh is not self.mesh or snapshot.value_type is not self.value_type:
                raise ValueError(
                    f"Snapshot '{snapshot.name}' is not compatible with field '{self.name}'."
                )
            self.dimensions.check_same(snapshot.dimensions, f"history of {self.name}")
        self._old = old.copy(f"{self.name}_0")
        self._old_old = old_old.copy(f"{self.name}_0_0")

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------
    def _check_mesh(self, other: VolField) -> None:
        if other.mesh is not self.mesh:
            raise ValueError(f"Fields '{self.name}' and '{other.name}' live on different meshes.")

    def _new(self, name: str, dimensions: DimensionSet, internal, boundary) -> VolField:
        return VolField(name, self.mesh, dimensions, internal, boundary)

    def __add__(self, other: VolField) -> VolField:
        if not isinstance(other, VolField):
            return NotImplemented
        self._check_mesh(other)
        self.dimensions.check_same(other.dimensions, f"{self.name} + {other.name}")
        return self._new(
            f"({self.name}+{other.name})",
            self.dimensions,
            self.internal + other.internal,
            {k: v + other.boundary[k] for k, v in self.boundary.items()},
        )

    def __sub__(self, other: VolField) -> VolField:
        if not isinstance(other, VolField):
            return NotImplemented
        self._check_mesh(other)
        self.dimensions.check_same(other.dimensions, f"{self.name} - {other.name}")
        return self._new(
            f"({self.name}-{other.name})",
            self.dimensions,
            self.internal - other.internal,
            {k: v - other.boundary[k] for k, v in self.boundary.items()},
        )

    def __neg__(self) -> VolField:
        return self._new(
            f"-{self.name}",
            self.dimensions,
            -self.internal,
            {k: -v for k, v in self.boundary.items()},
        )

    def __mul__(self, other: Factor) -> VolField:
        if isinstance(other, (int, float)):
            f = float(other)
            return self._new(
                self.name, self.dimensions, f * self.internal,
                {k: f * v for k, v in self.boundary.items()},
            )
        if isinstance(other, DimensionedScalar):
            f = float(other.value)
            return self._new(
                f"({other.name}*{self.name})", other.dimensions * self.dimensions, f * self.internal,
                {k: f * v for k, v in self.boundary.items()},
            )
        if isinstance(other, VolField):
            self._check_mesh(other)
            if other.value_type is ValueType.SCALAR:
                weights, values = other, self
            elif self.value_type is ValueType.SCALAR:
                weights, values = self, other
            else:
                raise TypeError(
                    f"Product of {self.value_type.name} and {other.value_type.name} fields is not supported."
                )
            return self._new(
                f"({self.name}*{other.name})",
                self.dimensions * other.dimensions,
                scale_rows(weights.internal, values.internal),
                {k: scale_rows(weights.boundary[k], values.boundary[k]) for k in self.boundary},
            )
        return NotImplemented

    def __rmul__(self, other: Factor) -> VolField:
        return self.__mul__(other)

    def __truediv__(self, other: Factor) -> VolField:
        if isinstance(other, (int, float)):
            return self * (1.0 / float(other))
        if isinstance(other, DimensionedScalar):
            return self._new(
                f"({self.name}|{other.name})", self.dimensions / other.dimensions,
                self.internal / other.value,
                {k: v / other.value for k, v in self.boundary.items()},
            )
        if isinstance(other, VolField):
            self._check_mesh(other)
            if other.value_type is not ValueType.SCALAR:
                raise TypeError(f"Cannot divide by a {other.value_type.name} field.")
            return self._new(
                f"({self.name}|{other.name})",
                self.dimensions / other.dimensions,
                scale_rows(1.0 / other.internal, self.internal),
                {k: scale_rows(1.0 / other.boundary[k], v) for k, v in self.boundary.items()},
            )
        return NotImplemented

    # ------------------------------------------------------------------
    # Reductions
    # ------------------------------------------------------------------
    def _all_values(self) -> npt.NDArray[np.float64]:
        parts = [self.internal.ravel()] + [v.ravel() for v in self.boundary.values()]
        return np.concatenate(parts)

    def min(self) -> float:
        """Minimum over all components of internal and boundary values."""
        return float(self._all_values().min())

    def max(self) -> float:
        """Maximum over all components of internal and boundary values."""
        return float(self._all_values().max())
