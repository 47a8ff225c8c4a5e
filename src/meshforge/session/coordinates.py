"""Work and machine coordinate registers."""

from __future__ import annotations

from collections.abc import Callable

from meshforge.models.machine import Axis, AxisPosition, GoToTarget, MachineStatus
from meshforge.session.observable import Observable
from meshforge.utils.logging import get_logger

logger = get_logger(__name__)

# Work Z starts above the material.
DEFAULT_WORK_Z = 25.0

GoToHandler = Callable[[GoToTarget], None]


class CoordinateModel(Observable):
    """Per-axis work and machine positions.

    Machine registers mirror the hardware and are only written by
    :meth:`apply_status`. Zeroing sets a work-coordinate offset; it never
    moves the machine and never touches machine registers.
    """

    def __init__(self) -> None:
        super().__init__()
        self._work = AxisPosition(z=DEFAULT_WORK_Z)
        self._machine = AxisPosition()
        self._go_to_handlers: list[GoToHandler] = []

    # --- Registers ---

    @property
    def work_pos(self) -> AxisPosition:
        return self._work

    @property
    def machine_pos(self) -> AxisPosition:
        return self._machine

    @property
    def work_x(self) -> float:
        return self._work.x

    @property
    def work_y(self) -> float:
        return self._work.y

    @property
    def work_z(self) -> float:
        return self._work.z

    @property
    def machine_x(self) -> float:
        return self._machine.x

    @property
    def machine_y(self) -> float:
        return self._machine.y

    @property
    def machine_z(self) -> float:
        return self._machine.z

    # --- Zeroing ---

    def zero_axis(self, axis: Axis | str) -> None:
        """Set the work register of *axis* to 0.

        Raises:
            ValueError: If *axis* is not x, y or z.
        """
        axis = Axis(axis)
        self._work = self._work.model_copy(update={axis.value: 0.0})
        logger.info("axis_zeroed", axis=axis.value)
        self._notify()

    def zero_all(self) -> None:
        self._work = self._work.model_copy(update={"x": 0.0, "y": 0.0, "z": 0.0})
        logger.info("all_axes_zeroed")
        self._notify()

    # --- Go-to intents ---

    def add_go_to_handler(self, handler: GoToHandler) -> Callable[[], None]:
        """Register a receiver for go-to intents; returns a remover."""
        self._go_to_handlers.append(handler)

        def remove() -> None:
            if handler in self._go_to_handlers:
                self._go_to_handlers.remove(handler)

        return remove

    def go_to(self, target: GoToTarget | str) -> GoToTarget:
        """Emit a go-to-zero intent for *target* to the device layer.

        No register changes; the machine position is reported back through
        :meth:`apply_status` once the device has moved.

        Raises:
            ValueError: If *target* is not x, y, z or xy.
        """
        target = GoToTarget(target)
        logger.info("go_to_requested", target=target.value, handlers=len(self._go_to_handlers))
        for handler in list(self._go_to_handlers):
            handler(target)
        return target

    # --- Status snapshots ---

    def apply_status(self, status: MachineStatus, include_work: bool = True) -> None:
        """Replace registers from a status snapshot.

        Machine registers are always replaced. Work registers are replaced
        wholesale when *include_work* is true, i.e. when the backend is
        authoritative for work coordinates.
        """
        self._machine = status.machine_pos
        if include_work:
            self._work = status.work_pos
        self._notify()

    def reset(self) -> None:
        """Restore the power-on defaults."""
        self._work = AxisPosition(z=DEFAULT_WORK_Z)
        self._machine = AxisPosition()
        self._notify()
