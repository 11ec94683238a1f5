"""A button-like node that counts how often it was triggered."""

from __future__ import annotations

from .values import VarTypeId
from .vartype import Signal, VarType, VarTypeFlag, register_var_type

__all__ = ["VarTrigger"]


class VarTrigger(VarType):
    """A node shown as a button; each trigger increments an internal counter."""

    def __init__(self, name: str = "", label: str = "") -> None:
        super().__init__(name=name)
        self._label = label
        self._counter = 0
        self._flags |= VarTypeFlag.PERSISTENT
        self.signal_triggered = Signal()

    def type_id(self) -> int:
        return VarTypeId.TRIGGER

    def reset_to_default(self) -> None:
        """Triggers have no default state; nothing happens."""

    def trigger(self) -> None:
        """Count one activation and notify listeners."""
        with self._guard():
            self._counter += 1
            self.signal_triggered.emit()
        self._changed()
        self.was_edited.emit(self)

    def counter(self) -> int:
        with self._guard():
            return self._counter

    def get_and_reset_counter(self) -> int:
        """Return the counter and set it back to zero."""
        with self._guard():
            value, self._counter = self._counter, 0
            return value

    def reset_counter(self) -> None:
        with self._guard():
            self._counter = 0

    def label(self) -> str:
        """The text of the button."""
        with self._guard():
            return self._label

    def set_label(self, label: str) -> None:
        with self._guard():
            self._label = label
        self._changed()


register_var_type(VarTypeId.TRIGGER, VarTrigger)