from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class Time:
    """
    Global time controller.

    Owns the current time value, the current step size ``delta_t`` and the
    step size of the previous time step ``delta_t0``. Unless given, the
    previous step size at start-up is taken equal to the current one, so both
    are always defined and strictly positive.
    """

    def __init__(
        self,
        delta_t: float,
        start_time: float = 0.0,
        delta_t0: float | None = None,
    ) -> None:
        """
        Initialize the time controller.

        Args:
            delta_t: Initial time step size in seconds (> 0).
            start_time: Time value at the start of the run in seconds.
            delta_t0: Size of the step preceding the start time. Defaults to
                      ``delta_t`` (restart without a stored previous step).
        """
        if delta_t0 is None:
            delta_t0 = delta_t
        self._validate_delta_t(delta_t)
        self._validate_delta_t(delta_t0)
        self.value: float = float(start_time)
        self.time_index: int = 0
        self._delta_t: float = float(delta_t)
        self._delta_t0: float = float(delta_t0)
        self._delta_t_save: float = float(delta_t0)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(value={self.value:g}, index={self.time_index}, "
            f"delta_t={self._delta_t:g}, delta_t0={self._delta_t0:g})"
        )

    @staticmethod
    def _validate_delta_t(delta_t: float) -> None:
        if not delta_t > 0.0:
            raise ValueError(f"Time step size must be strictly positive, got {delta_t}.")

    @property
    def delta_t(self) -> float:
        """Current time step size."""
        return self._delta_t

    @property
    def delta_t0(self) -> float:
        """Time step size of the previous time step."""
        return self._delta_t0

    @property
    def time_name(self) -> str:
        """Time value formatted as used in result names."""
        return f"{self.value:g}"

    def set_delta_t(self, delta_t: float) -> None:
        """
        Change the size of the upcoming time step.

        Args:
            delta_t: New time step size (> 0).

        Raises:
            ValueError: If ``delta_t`` is not strictly positive.
        """
        self._validate_delta_t(delta_t)
        self._delta_t = float(delta_t)

    def increment(self) -> None:
        """
        Advance to the next time level using the current step size.

        Afterwards ``delta_t`` is the step just taken and ``delta_t0`` the
        step taken before it.
        """
        self._delta_t0 = self._delta_t_save
        self._delta_t_save = self._delta_t
        self.value += self._delta_t
        self.time_index += 1
        logger.debug(f"Time = {self.time_name} (index {self.time_index}, dt = {self._delta_t:g}, dt0 = {self._delta_t0:g})")
