"""
Physical Dimensions
===================
Dimension bookkeeping for fields, constants and operator contributions.

Every quantity carries the exponents of the seven SI base dimensions
(mass, length, time, temperature, moles, current, luminous intensity).
Multiplication adds exponents, division subtracts them, and addition or
subtraction of two quantities is only allowed when the exponents match.

Classes:
    DimensionSet: Immutable exponent vector.
    DimensionedScalar: A named uniform scalar constant with dimensions.
    DimensionError: Raised when quantities with different dimensions are combined.
"""
from __future__ import annotations

from dataclasses import dataclass
import math

from fvtemporal.config import DIMENSION_TOLERANCE


class DimensionError(ValueError):
    """Quantities with incompatible dimensions were combined."""


@dataclass(frozen=True)
class DimensionSet:
    """
    Exponents of the SI base dimensions.

    Equality allows a difference of ``DIMENSION_TOLERANCE`` per exponent. The
    hash rounds each exponent to that tolerance grid, so two sets that are
    equal but lie on opposite sides of a grid midpoint hash differently.
    Exponents built from integers and simple fractions by ``*``, ``/`` and
    ``**`` always land on the same grid point as their exact value.
    """
    mass: float = 0.0
    length: float = 0.0
    time: float = 0.0
    temperature: float = 0.0
    moles: float = 0.0
    current: float = 0.0
    luminous_intensity: float = 0.0

    def as_tuple(self) -> tuple[float, ...]:
        return (
            self.mass,
            self.length,
            self.time,
            self.temperature,
            self.moles,
            self.current,
            self.luminous_intensity,
        )

    @classmethod
    def from_tuple(cls, exponents: tuple[float, ...]) -> DimensionSet:
        if len(exponents) != 7:
            raise ValueError(f"Expected 7 dimension exponents, got {len(exponents)}.")
        return cls(*(float(e) for e in exponents))

    def __mul__(self, other: DimensionSet) -> DimensionSet:
        if not isinstance(other, DimensionSet):
            return NotImplemented
        return DimensionSet.from_tuple(tuple(a + b for a, b in zip(self.as_tuple(), other.as_tuple())))

    def __truediv__(self, other: DimensionSet) -> DimensionSet:
        if not isinstance(other, DimensionSet):
            return NotImplemented
        return DimensionSet.from_tuple(tuple(a - b for a, b in zip(self.as_tuple(), other.as_tuple())))

    def __pow__(self, power: float) -> DimensionSet:
        return DimensionSet.from_tuple(tuple(a * power for a in self.as_tuple()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DimensionSet):
            return NotImplemented
        return all(
            math.isclose(a, b, rel_tol=0.0, abs_tol=DIMENSION_TOLERANCE)
            for a, b in zip(self.as_tuple(), other.as_tuple())
        )

    def __hash__(self) -> int:
        return hash(tuple(round(a / DIMENSION_TOLERANCE) for a in self.as_tuple()))

    def __str__(self) -> str:
        return "[" + " ".join(f"{e:g}" for e in self.as_tuple()) + "]"

    @property
    def dimensionless(self) -> bool:
        return self == DIMLESS

    def check_same(self, other: DimensionSet, operation: str) -> None:
        """
        Ensure two operands of an additive operation share the same dimensions.

        Args:
            other: Dimensions of the second operand.
            operation: Description used in the error message (e.g. "a + b").

        Raises:
            DimensionError: If the dimensions differ.
        """
        if self != other:
            raise DimensionError(
                f"Incompatible dimensions for operation '{operation}': {self} vs {other}."
            )


DIMLESS = DimensionSet()
DIM_MASS = DimensionSet(mass=1)
DIM_LENGTH = DimensionSet(length=1)
DIM_TIME = DimensionSet(time=1)
DIM_TEMPERATURE = DimensionSet(temperature=1)
DIM_AREA = DIM_LENGTH ** 2
DIM_VOLUME = DIM_LENGTH ** 3
DIM_DENSITY = DIM_MASS / DIM_VOLUME
DIM_VELOCITY = DIM_LENGTH / DIM_TIME
DIM_ACCELERATION = DIM_VELOCITY / DIM_TIME


@dataclass(frozen=True)
class DimensionedScalar:
    """
    A named, spatially uniform scalar with physical dimensions.

    Used for constant density weights and for the inverse time-scale
    constants of the time schemes.
    """
    name: str
    dimensions: DimensionSet
    value: float

    def __mul__(self, other: DimensionedScalar | float) -> DimensionedScalar:
        if isinstance(other, DimensionedScalar):
            return DimensionedScalar(
                name=f"{self.name}*{other.name}",
                dimensions=self.dimensions * other.dimensions,
                value=self.value * other.value,
            )
        if isinstance(other, (int, float)):
            return DimensionedScalar(self.name, self.dimensions, self.value * float(other))
        return NotImplemented

    def __rmul__(self, other: float) -> DimensionedScalar:
        if isinstance(other, (int, float)):
            return self * other
        return NotImplemented

    def __truediv__(self, other: DimensionedScalar | float) -> DimensionedScalar:
        if isinstance(other, DimensionedScalar):
            return DimensionedScalar(
                name=f"{self.name}|{other.name}",
                dimensions=self.dimensions / other.dimensions,
                value=self.value / other.value,
            )
        if isinstance(other, (int, float)):
            return DimensionedScalar(self.name, self.dimensions, self.value / float(other))
        return NotImplemented

    def __add__(self, other: DimensionedScalar) -> DimensionedScalar:
        if not isinstance(other, DimensionedScalar):
            return NotImplemented
        self.dimensions.check_same(other.dimensions, f"{self.name} + {other.name}")
        return DimensionedScalar(f"{self.name}+{other.name}", self.dimensions, self.value + other.value)

    def __neg__(self) -> DimensionedScalar:
        return DimensionedScalar(f"-{self.name}", self.dimensions, -self.value)

    def __float__(self) -> float:
        return float(self.value)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r}, {self.dimensions}, {self.value:g})"
