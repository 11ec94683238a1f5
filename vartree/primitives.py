"""Core node types: bounded integers, strings, ordered lists and file-backed lists."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Iterable, Optional

from .values import VarIntVal, VarStringVal, VarTypeId, _scan_int
from .vartype import (
    Signal,
    VarType,
    int_to_string,
    read_children_helper,
    register_var_type,
)

__all__ = [
    "INT_MIN",
    "INT_MAX",
    "EXTERNAL_ROOT_TAG",
    "VarInt",
    "VarString",
    "VarList",
    "VarExternal",
]

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

EXTERNAL_ROOT_TAG = "VarXML"


class VarInt(VarType, VarIntVal):
    """An integer node with an optional value range and a default."""

    def __init__(
        self,
        name: str = "",
        default_val: int = 0,
        min_val: int = INT_MIN,
        max_val: int = INT_MAX,
    ) -> None:
        self._min = INT_MIN
        self._max = INT_MAX
        self._default = int(default_val)
        super().__init__(name=name, default_val=default_val)
        self.set_min(min_val)
        self.set_max(max_val)
        self.set_default(default_val)

    # -- range ------------------------------------------------------------

    def min(self) -> int:
        with self._guard():
            return self._min

    def max(self) -> int:
        with self._guard():
            return self._max

    def has_min(self) -> bool:
        with self._guard():
            return self._min != INT_MIN

    def has_max(self) -> bool:
        with self._guard():
            return self._max != INT_MAX

    def set_min(self, minval: int) -> None:
        with self._guard():
            self._min = int(minval)
        self._changed()

    def set_max(self, maxval: int) -> None:
        with self._guard():
            self._max = int(maxval)
        self._changed()

    def unset_min(self) -> None:
        self.set_min(INT_MIN)

    def unset_max(self) -> None:
        self.set_max(INT_MAX)

    # -- value ------------------------------------------------------------

    def set_int(self, val: int) -> bool:
        """Store ``val`` clamped to the range; return True if the value changed."""
        val = int(val)
        if self.has_min() and val < self.min():
            val = self.min()
        elif self.has_max() and val > self.max():
            val = self.max()
        return super().set_int(val)

    def set_default(self, val: int) -> None:
        with self._guard():
            self._default = int(val)
        self._changed()

    def reset_to_default(self) -> None:
        with self._guard():
            default = self._default
        self.set_int(default)

    # -- plotting ---------------------------------------------------------

    def has_max_value(self) -> bool:
        return self.has_max()

    def has_min_value(self) -> bool:
        return self.has_min()

    def min_value(self) -> float:
        return float(self.min())

    def max_value(self) -> float:
        return float(self.max())

    # -- XML --------------------------------------------------------------

    def _update_attributes(self, element: ET.Element) -> None:
        element.set("minval", int_to_string(self.min()) if self.has_min() else "")
        element.set("maxval", int_to_string(self.max()) if self.has_max() else "")

    def _read_attributes(self, element: ET.Element) -> None:
        text = element.get("minval", "")
        if text == "":
            self.unset_min()
        else:
            self.set_min(_scan_int(text))
        text = element.get("maxval", "")
        if text == "":
            self.unset_max()
        else:
            self.set_max(_scan_int(text))


class VarString(VarType, VarStringVal):
    """A text node with a default."""

    def __init__(self, name: str = "", default_val: str = "") -> None:
        self._default = default_val
        super().__init__(name=name, default_val=default_val)

    def set_default(self, val: str) -> None:
        with self._guard():
            self._default = val
        self._changed()

    def reset_to_default(self) -> None:
        with self._guard():
            default = self._default
        self.set_string(default)


class VarList(VarType):
    """An ordered list of child nodes."""

    def __init__(self, name: str = "") -> None:
        super().__init__(name=name)
        self._list: list[Optional[VarType]] = []
        self.child_added = Signal()
        self.child_removed = Signal()

    def type_id(self) -> int:
        return VarTypeId.LIST

    def to_string(self) -> str:
        return ""

    def debug_string(self) -> str:
        return f"VarList named {self.name()} containing {len(self._list)} element(s)"

    def reset_to_default(self) -> None:
        """Remove every child, announcing each removal."""
        with self._guard():
            for child in self._list:
                self.child_removed.emit(child)
            self._list.clear()

    def add_child(self, child: VarType) -> int:
        """Append ``child``; return its index."""
        with self._guard():
            self._list.append(child)
            self.child_added.emit(child)
            index = len(self._list) - 1
        self._changed()
        return index

    def remove_child(self, child: VarType) -> bool:
        """Remove every occurrence of ``child``; return True if it was present."""
        with self._guard():
            remaining = [c for c in self._list if c is not child]
            found = len(remaining) != len(self._list)
            if found:
                self.child_removed.emit(child)
                self._list = remaining
                self._changed()
        return found

    def children(self) -> list[VarType]:
        with self._guard():
            return list(self._list)

    def __len__(self) -> int:
        with self._guard():
            return len(self._list)

    def delete_all_children(self) -> None:
        """Recursively drop the whole subtree."""
        with self._guard():
            for child in self._list:
                if child is not None:
                    child.delete_all_children()
            self._list.clear()

    def find_child_or_replace(self, other: VarType) -> VarType:
        """Return the child named like ``other``; if there is none, add ``other``."""
        found = self.find_child(other.name())
        if found is not None:
            return found
        self.add_child(other)
        return other

    def _merge_children(self, element: ET.Element) -> None:
        before = len(self._list)
        self._list = read_children_helper(element, self._list, False, False)
        for child in self._list[before:]:
            self.child_added.emit(child)

    def _read_children(self, element: ET.Element) -> None:
        with self._guard():
            self._merge_children(element)
        self._changed()


def _open_external(filename: str) -> tuple[ET.ElementTree, ET.Element]:
    """Parse ``filename`` and return its tree and the ``VarXML`` element."""
    tree = ET.parse(filename)
    root = tree.getroot()
    node = root if root.tag == EXTERNAL_ROOT_TAG else root.find(f".//{EXTERNAL_ROOT_TAG}")
    if node is None:
        raise ValueError(f"{filename}: no <{EXTERNAL_ROOT_TAG}> element found")
    return tree, node


class VarExternal(VarList):
    """A list whose children are kept in a separate XML file."""

    def __init__(
        self,
        filename: str = "",
        name: str = "",
        children: Iterable[VarType] = (),
    ) -> None:
        super().__init__(name=name)
        self._list = list(children)
        self._filename = filename

    def type_id(self) -> int:
        return VarTypeId.EXTERNAL

    def filename(self) -> str:
        with self._guard():
            return self._filename

    def load_external(self) -> None:
        """Merge the children stored in the external file into this list."""
        with self._guard():
            _, node = _open_external(self._filename)
            self._merge_children(node)
            self._changed()

    def _update_attributes(self, element: ET.Element) -> None:
        element.set("filename", self.filename())
        super()._update_attributes(element)

    def _read_attributes(self, element: ET.Element) -> None:
        with self._guard():
            self._filename = element.get("filename", "")
        super()._read_attributes(element)

    def _update_children(self, element: ET.Element) -> None:
        filename = self.filename()
        _, node = _open_external(filename)
        super()._update_children(node)
        out = ET.ElementTree(node)
        ET.indent(out)
        out.write(filename, encoding="utf-8", xml_declaration=True)

    def _read_children(self, element: ET.Element) -> None:
        self.load_external()


register_var_type(VarTypeId.INT, VarInt)
register_var_type(VarTypeId.STRING, VarString)
register_var_type(VarTypeId.LIST, VarList)
register_var_type(VarTypeId.EXTERNAL, VarExternal)