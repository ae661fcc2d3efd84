from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from fvtemporal.dimensions import DIM_TIME, DimensionedScalar

if TYPE_CHECKING:
    from fvtemporal.mesh import Time


@dataclass(frozen=True)
class TemporalCoefficients:
    """
    Blending coefficients of the variable-step second time difference.

    With the current step ``dt`` and the previous step ``dt0``::

        coefft   = (dt + dt0) / (2 dt)
        coefft00 = (dt + dt0) / (2 dt0)
        coefft0  = coefft + coefft00
        rDeltaT2 = 4 / (dt + dt0)²

    so that ``rDeltaT2 * (coefft*phi - coefft0*phi0 + coefft00*phi00)``
    approximates the second time derivative. For ``dt == dt0 == h`` this is
    the classical ``(phi - 2 phi0 + phi00) / h²``.

    Both step sizes must be strictly positive; this is guaranteed by the
    time controller and not checked here.
    """
    coefft: float
    coefft00: float
    coefft0: float
    r_delta_t2: float

    @classmethod
    def from_step_sizes(cls, delta_t: float, delta_t0: float) -> TemporalCoefficients:
        """
        Compute the coefficients for the given current and previous step sizes.

        Args:
            delta_t: Current time step size.
            delta_t0: Previous time step size.
        """
        coefft = (delta_t + delta_t0) / (2.0 * delta_t)
        coefft00 = (delta_t + delta_t0) / (2.0 * delta_t0)
        return cls(
            coefft=coefft,
            coefft00=coefft00,
            coefft0=coefft + coefft00,
            r_delta_t2=4.0 / (delta_t + delta_t0) ** 2,
        )

    @classmethod
    def from_time(cls, time: Time) -> TemporalCoefficients:
        """Coefficients for the step sizes currently held by the time controller."""
        return cls.from_step_sizes(time.delta_t, time.delta_t0)

    @property
    def r_delta_t2_dimensioned(self) -> DimensionedScalar:
        """``rDeltaT2`` with its dimensions of 1/time²."""
        return DimensionedScalar("rDeltaT2", DIM_TIME ** -2, self.r_delta_t2)
