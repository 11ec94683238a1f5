"""A node that holds one string chosen from an ordered set of labels."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from .primitives import VarString
from .values import VarTypeId
from .vartype import VarType, VarTypeFlag, read_children_helper, register_var_type

__all__ = ["VarStringEnum"]


def _make_item(index: int, label: str) -> VarString:
    item = VarString(str(index), label)
    item.add_flags(VarTypeFlag.HIDDEN)
    return item


class VarStringEnum(VarType):
    """A single-choice selection among string items.

    Each item is a hidden string node named after its position. The
    selection is a plain string and need not match any item.
    """

    def __init__(self, name: str = "", default: str = "") -> None:
        super().__init__(name=name)
        self._list: list[VarType] = []
        self._default = default
        self._selected = default

    def type_id(self) -> int:
        return VarTypeId.STRINGENUM

    def to_string(self) -> str:
        with self._guard():
            return self._selected

    def debug_string(self) -> str:
        return f"StringEnum named {self.name()} containing {self.count()} element(s)"

    def reset_to_default(self) -> None:
        """Drop all items and restore the default selection."""
        with self._guard():
            self._list.clear()
            self._selected = self._default

    def count(self) -> int:
        with self._guard():
            return len(self._list)

    def __len__(self) -> int:
        return self.count()

    def set_string(self, val: str) -> bool:
        """Select ``val``; return True if the selection changed."""
        return self.select(val)

    def index(self) -> int:
        """Return the position of the first item matching the selection, or -1."""
        with self._guard():
            return next(
                (
                    position
                    for position, item in enumerate(self._list)
                    if item.to_string() == self._selected
                ),
                -1,
            )

    def select_index(self, i: int) -> bool:
        """Select the item at ``i``; an index out of range selects the default."""
        with self._guard():
            if 0 <= i < len(self._list):
                result = self._list[i].to_string()
            else:
                result = self._default
            if result == self._selected:
                return False
            self._selected = result
        self._changed()
        return True

    def select(self, val: str) -> bool:
        """Select the string ``val``; return True if the selection changed."""
        with self._guard():
            if val == self._selected:
                return False
            self._selected = val
        self._changed()
        return True

    def selection(self) -> str:
        return self.to_string()

    def label(self, index: int) -> str:
        """Return the label of item ``index``, or "" if there is none."""
        with self._guard():
            if 0 <= index < len(self._list):
                return self._list[index].to_string()
            return ""

    def set_size(self, size: int, default_label: str = "") -> None:
        """Trim or extend the item list to ``size`` items."""
        with self._guard():
            while len(self._list) < size:
                self._list.append(_make_item(len(self._list), default_label))
            del self._list[max(size, 0):]
        self._changed()

    def set_label(self, index: int, label: str) -> None:
        """Relabel item ``index``; the selection follows if it was on that item."""
        with self._guard():
            if 0 <= index < len(self._list):
                item = self._list[index]
                if item.to_string() == self._selected:
                    self._selected = label
                item.set_string(label)
        self._changed()

    def add_item(self, label: str) -> int:
        """Append an item; return its index."""
        with self._guard():
            index = len(self._list)
            self._list.append(_make_item(index, label))
        self._changed()
        return index

    def children(self) -> list[VarType]:
        with self._guard():
            return list(self._list)

    def _read_children(self, element: ET.Element) -> None:
        if not self.are_flags_set(VarTypeFlag.NOLOAD_ENUM_CHILDREN):
            with self._guard():
                self._list = read_children_helper(element, self._list, False, False)
                for item in self._list:
                    item.add_flags(VarTypeFlag.HIDDEN)
        self._changed()


register_var_type(VarTypeId.STRINGENUM, VarStringEnum)