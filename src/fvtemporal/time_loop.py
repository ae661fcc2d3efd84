"""
Time Loop
=========
External time-stepping driver for fields that use the time schemes.

Why is this file needed?
------------------------
The time schemes read the old and old-old values of each field but never
create them. Before the first step no history exists, so the loop seeds
both snapshots from the initial condition (:meth:`TimeLoop.start`). At the
beginning of every step it shifts the field history, advances the time
controller and, for a deforming mesh, the volume history
(:meth:`TimeLoop.advance`).

Fields are passed in explicitly; there is no global object registry.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    import numpy as np
    import numpy.typing as npt

    from fvtemporal.fields import VolField
    from fvtemporal.mesh import FvMesh, Time

logger = logging.getLogger(__name__)


class TimeLoop:
    """
    Drives the time history of a mesh and its fields.
    """

    def __init__(
        self,
        time: Time,
        mesh: FvMesh,
        fields: list[VolField],
    ) -> None:
        """
        Initialize the loop.

        Args:
            time: Time controller shared with the mesh.
            mesh: Mesh whose volume history is advanced.
            fields: All fields whose history is needed (unknowns and densities).

        Raises:
            ValueError: If the mesh uses another time controller or a field
                        lives on another mesh.
        """
        if mesh.time is not time:
            raise ValueError("The mesh must use the time controller driven by the loop.")
        for field in fields:
            if field.mesh is not mesh:
                raise ValueError(f"Field '{field.name}' does not live on the loop's mesh.")

        self.time = time
        self.mesh = mesh
        self.fields = list(fields)
        self.started: bool = False

    def start(self) -> None:
        """
        Seed the old and old-old values of every field from the current values.

        Calling it again has no effect.
        """
        if self.started:
            return
        for field in self.fields:
            field.seed_old_times()
        self.started = True
        logger.info(
            f"Time loop started at t = {self.time.time_name} with fields "
            f"{[f.name for f in self.fields]}"
        )

    def advance(
        self,
        delta_t: float | None = None,
        new_volumes: npt.NDArray[np.float64] | None = None,
    ) -> None:
        """
        Start a new time step.

        Args:
            delta_t: Size of the new step; keeps the current size if None.
            new_volumes: Cell volumes at the new time level for a deforming
                         mesh, shape (n_cells,).

        Raises:
            RuntimeError: If :meth:`start` has not been called.
        """
        if not self.started:
            raise RuntimeError("TimeLoop.start() must be called before advancing.")

        if delta_t is not None:
            self.time.set_delta_t(delta_t)

        for field in self.fields:
            field.store_old_times()

        self.time.increment()

        if new_volumes is not None:
            self.mesh.move(new_volumes)

        logger.info(
            f"Time = {self.time.time_name} (step {self.time.time_index}, "
            f"dt = {self.time.delta_t:g}, dt0 = {self.time.delta_t0:g})"
        )

    def run(
        self,
        end_time: float,
        solve_step: Callable[[TimeLoop], None],
        volumes_at: Optional[Callable[[float], npt.NDArray[np.float64]]] = None,
    ) -> int:
        """
        Step until ``end_time`` is reached, calling ``solve_step`` once per step.

        Args:
            end_time: Time at which to stop.
            solve_step: Callback updating the current field values for the new time level.
            volumes_at: Optional function returning the cell volumes at a given time.

        Returns:
            Number of steps taken.
        """
        self.start()
        n_steps = 0
        # Half a step of slack absorbs round-off in the accumulated time
        while self.time.value + 0.5 * self.time.delta_t < end_time:
            new_volumes = None
            if volumes_at is not None:
                new_volumes = volumes_at(self.time.value + self.time.delta_t)
            self.advance(new_volumes=new_volumes)
            solve_step(self)
            n_steps += 1
        return n_steps
