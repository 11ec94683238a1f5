"""Value holders: the data part of a variable-tree node, without naming or tree structure."""

from __future__ import annotations

import re
from contextlib import nullcontext
from enum import IntEnum
from typing import ContextManager

__all__ = [
    "VarTypeId",
    "VarVal",
    "VarIntVal",
    "VarStringVal",
    "type_to_string",
    "string_to_type",
]


class VarTypeId(IntEnum):
    """Numeric identifiers of the known node types."""

    UNDEFINED = 0
    BOOL = 1
    INT = 2
    DOUBLE = 3
    STRING = 4
    BLOB = 5
    EXTERNAL = 6
    VECTOR2D = 7
    VECTOR3D = 8
    TIMEVAR = 9
    TIMELINE = 10
    LIST = 11
    STRINGENUM = 12
    SELECTION = 13
    TRIGGER = 14
    QWIDGET = 15
    COUNT = 16
    MIN_USERTYPE = 128


_TYPE_NAMES: dict[VarTypeId, str] = {
    member: member.name.lower()
    for member in VarTypeId
    if member not in (VarTypeId.COUNT, VarTypeId.MIN_USERTYPE)
}
_NAME_TYPES: dict[str, VarTypeId] = {name: tid for tid, name in _TYPE_NAMES.items()}


def type_to_string(type_id: int) -> str:
    """Return the label used for ``type_id`` in serialized trees."""
    try:
        return _TYPE_NAMES[VarTypeId(type_id)]
    except (ValueError, KeyError):
        return _TYPE_NAMES[VarTypeId.UNDEFINED]


def string_to_type(name: str) -> VarTypeId:
    """Return the type id for a label; unknown labels give ``UNDEFINED``."""
    return _NAME_TYPES.get(name, VarTypeId.UNDEFINED)


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _scan_int(text: str) -> int:
    """Read a leading decimal integer the way ``%d`` scanning does; 0 if none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


class VarVal:
    """Base value holder. Holds nothing; all accessors return neutral values."""

    # Number of changes recorded by the change hook.
    _revision: int = 0

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)

    # Hooks that tree nodes override to add locking and change notification.
    def _guard(self) -> ContextManager:
        return nullcontext()

    def _changed(self) -> None:
        self._revision += 1

    def clone(self) -> VarVal:
        """Return a shallow copy of this value."""
        return VarVal()

    def deep_clone(self) -> VarVal:
        """Return a recursive copy of this value."""
        return self.clone()

    def type_id(self) -> int:
        return VarTypeId.UNDEFINED

    def type_name(self) -> str:
        return type_to_string(self.type_id())

    def debug_string(self) -> str:
        """Return a short text for debugging output."""
        return ""

    def to_string(self) -> str:
        """Return a human-readable representation of the value."""
        return ""

    def set_string(self, val: str) -> bool:
        """Set the value from text; return True if it changed."""
        return False

    def serial_string(self) -> str:
        """Return the canonical text used when storing the value."""
        return self.to_string()

    def set_serial_string(self, val: str) -> None:
        self.set_string(val)

    def binary_serial_string(self) -> str:
        return self.serial_string()

    def set_binary_serial_string(self, val: str) -> None:
        self.set_serial_string(val)

    def has_value(self) -> bool:
        """Whether the value is numeric (and so can be plotted)."""
        return False

    def has_max_value(self) -> bool:
        return False

    def has_min_value(self) -> bool:
        return False

    def min_value(self) -> float:
        return 0.0

    def max_value(self) -> float:
        return 1.0

    def value(self) -> float:
        return 0.0


class VarIntVal(VarVal):
    """An integer value."""

    def __init__(self, default_val: int = 0, **kwargs) -> None:
        super().__init__(**kwargs)
        self._val = int(default_val)

    def set_int(self, val: int) -> bool:
        """Store ``val``; return True if the stored value changed."""
        val = int(val)
        with self._guard():
            if self._val == val:
                return False
            self._val = val
        self._changed()
        return True

    def get(self) -> int:
        with self._guard():
            return self._val

    def debug_string(self) -> str:
        return str(self.get())

    def clone(self) -> VarIntVal:
        return VarIntVal(self.get())

    def type_id(self) -> int:
        return VarTypeId.INT

    def to_string(self) -> str:
        return str(self.get())

    def to_double(self) -> float:
        return float(self.get())

    def to_bool(self) -> bool:
        return self.get() == 1

    def set_string(self, val: str) -> bool:
        return self.set_int(_scan_int(val))

    def set_double(self, val: float) -> bool:
        return self.set_int(int(val))

    def set_bool(self, val: bool) -> bool:
        return self.set_int(1 if val else 0)

    def has_value(self) -> bool:
        return True

    def min_value(self) -> float:
        return 0.0

    def max_value(self) -> float:
        return 1.0

    def value(self) -> float:
        return self.to_double()


class VarStringVal(VarVal):
    """A text value."""

    def __init__(self, default_val: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self._val = default_val

    def debug_string(self) -> str:
        return self.to_string()

    def type_id(self) -> int:
        return VarTypeId.STRING

    def to_string(self) -> str:
        with self._guard():
            return self._val

    def has_value(self) -> bool:
        return False

    def set_string(self, val: str) -> bool:
        with self._guard():
            if self._val == val:
                return False
            self._val = val
        self._changed()
        return True

    def clone(self) -> VarStringVal:
        return VarStringVal(self.to_string())