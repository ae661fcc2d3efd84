from __future__ import annotations

from enum import Enum


class ValueType(Enum):
    """
    Algebraic value types a field can hold, keyed by their per-item component shape.
    """
    SCALAR = ()
    VECTOR = (3,)
    SYMM_TENSOR = (6,)
    TENSOR = (3, 3)

    @property
    def component_shape(self) -> tuple[int, ...]:
        return self.value

    @property
    def n_components(self) -> int:
        n = 1
        for s in self.value:
            n *= s
        return n

    @classmethod
    def from_component_shape(cls, shape: tuple[int, ...]) -> ValueType:
        """
        Resolve the value type from the trailing shape of a field array.

        Raises:
            ValueError: If no value type has this component shape.
        """
        for value_type in cls:
            if value_type.value == tuple(shape):
                return value_type
        raise ValueError(
            f"Unsupported component shape {tuple(shape)}; expected one of "
            f"{[v.value for v in cls]}."
        )
