"""Named tree nodes with flags, change signals and XML load/store."""

from __future__ import annotations

import logging
import threading
import xml.etree.ElementTree as ET
from collections import deque
from enum import IntFlag
from typing import Callable, ContextManager, Iterable, Optional

from .values import VarTypeId, VarVal, string_to_type

__all__ = [
    "VAR_TAG",
    "VarTypeFlag",
    "Signal",
    "VarType",
    "register_var_type",
    "new_var_type",
    "int_to_string",
    "double_to_string",
    "find_or_append_child",
    "delete_all_var_children",
    "read_children_helper",
]

log = logging.getLogger(__name__)

VAR_TAG = "Var"


class VarTypeFlag(IntFlag):
    """Bit flags describing meta-properties of a node."""

    NONE = 0
    READONLY = 1 << 0
    HIDDEN = 1 << 1
    AUTO_EXPAND = 1 << 2
    AUTO_EXPAND_TREE = 1 << 3
    NOSAVE = 1 << 4
    NOLOAD = 1 << 5
    PERSISTENT = 1 << 6
    HIDE_CHILDREN = 1 << 7
    NOLOAD_ENUM_CHILDREN = 1 << 8
    NOLOAD_ATTRIBUTES = 1 << 9
    ENUM_COUNT = 1 << 10
    NOSTORE = NOSAVE | NOLOAD


class Signal:
    """A minimal observer list: callbacks are called in connection order."""

    def __init__(self) -> None:
        self._callbacks: list[Callable[..., object]] = []

    def connect(self, callback: Callable[..., object]) -> None:
        self._callbacks.append(callback)

    def disconnect(self, callback: Callable[..., object]) -> None:
        """Remove ``callback``; raises ValueError if it was not connected."""
        self._callbacks.remove(callback)

    def emit(self, *args) -> None:
        for callback in list(self._callbacks):
            callback(*args)


_FACTORIES: dict[int, Callable[[], "VarType"]] = {}


def register_var_type(
    type_id: int, factory: Optional[Callable[[], "VarType"]]
) -> Optional[Callable[[], "VarType"]]:
    """Register the factory building nodes of ``type_id``.

    Passing ``None`` removes the registration. Returns the previous factory.
    """
    previous = _FACTORIES.get(int(type_id))
    if factory is None:
        _FACTORIES.pop(int(type_id), None)
    else:
        _FACTORIES[int(type_id)] = factory
    return previous


def new_var_type(type_id: int) -> "VarType":
    """Create a fresh node of ``type_id``; raises LookupError if unknown."""
    try:
        factory = _FACTORIES[int(type_id)]
    except KeyError:
        raise LookupError(f"no node type registered for id {int(type_id)}") from None
    return factory()


def int_to_string(val: int) -> str:
    return "%d" % val


def double_to_string(val: float) -> str:
    return "%f" % val


def find_or_append_child(parent: ET.Element, key: str, val: str) -> ET.Element:
    """Return the first ``Var`` child whose attribute ``key`` equals ``val``, or append one."""
    for child in parent.findall(VAR_TAG):
        if child.get(key, "") == val:
            return child
    return ET.SubElement(parent, VAR_TAG)


def delete_all_var_children(node: ET.Element) -> None:
    """Remove every ``Var`` child of ``node``, leaving other children alone."""
    for child in node.findall(VAR_TAG):
        node.remove(child)


def read_children_helper(
    parent: ET.Element,
    existing_children: Iterable[Optional["VarType"]],
    only_update_existing: bool = False,
    blind_append: bool = False,
) -> list["VarType"]:
    """Merge the ``Var`` children of ``parent`` into ``existing_children``.

    Existing nodes with a matching name are updated in place; unknown ones are
    created and appended (unless ``only_update_existing``). Existing nodes not
    mentioned in the XML, and all their descendants, get ``load_external`` called.
    """
    existing = list(existing_children)
    result = list(existing)
    unmatched = {id(child): child for child in existing if child is not None}

    for element in parent.findall(VAR_TAG):
        sname = element.get("name", "")
        stype = element.get("type", "")
        type_id = string_to_type(stype)
        if type_id == VarTypeId.UNDEFINED:
            log.warning("Found var with no or unknown type in XML... type: %s", stype)
            continue

        found = False
        if sname and not blind_append:
            match = next(
                (c for c in existing if c is not None and c.name() == sname), None
            )
            if match is not None:
                if match.type_id() == type_id:
                    match.read_xml(element)
                else:
                    log.warning(
                        "Type mismatch between XML and Data-Tree. Object name: %s. "
                        "XML type was: %s. Internal type was: %s",
                        sname,
                        stype,
                        match.type_name(),
                    )
                unmatched.pop(id(match), None)
                found = True

        if not found and not only_update_existing:
            try:
                node = new_var_type(type_id)
            except LookupError:
                log.warning("No node type available for XML type: %s", stype)
                continue
            node.set_name(sname)
            node.read_xml(element)
            result.append(node)

    pending = deque(unmatched.values())
    while pending:
        node = pending.popleft()
        node.load_external()
        pending.extend(child for child in node.children() if child is not None)
    return result


class VarType(VarVal):
    """Base class of all tree nodes: a name, flags, signals and XML persistence."""

    def __init__(self, name: str = "", **kwargs) -> None:
        self._lock = threading.RLock()
        self._name = name
        self._flags = VarTypeFlag.NONE
        self.has_changed = Signal()
        self.was_edited = Signal()
        self.xml_was_read = Signal()
        self.xml_was_written = Signal()
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._name!r}>"

    def _guard(self) -> ContextManager:
        return self._lock

    def _changed(self) -> None:
        self.has_changed.emit(self)

    # -- naming and flags -------------------------------------------------

    def name(self) -> str:
        return self._name

    def set_name(self, name: str) -> None:
        with self._guard():
            if name == self._name:
                return
            self._name = name
        self._changed()

    def flags(self) -> VarTypeFlag:
        return self._flags

    def _replace_flags(self, flags: VarTypeFlag) -> None:
        with self._guard():
            if flags == self._flags:
                return
            self._flags = flags
        self._changed()

    def set_flags(self, flags: int) -> None:
        self._replace_flags(VarTypeFlag(flags))

    def add_flags(self, flags: int) -> None:
        self._replace_flags(self._flags | VarTypeFlag(flags))

    def remove_flags(self, flags: int) -> None:
        self._replace_flags(self._flags & ~VarTypeFlag(flags))

    def are_flags_set(self, flags: int) -> bool:
        """True if every flag in ``flags`` is set."""
        flags = VarTypeFlag(flags)
        with self._guard():
            return (self._flags & flags) == flags

    # -- tree structure ---------------------------------------------------

    def children(self) -> list["VarType"]:
        return []

    def delete_all_children(self) -> None:
        """Drop all descendants; nodes without children do nothing."""

    def reset_to_default(self) -> None:
        self._changed()

    def find_child(self, label: str) -> Optional["VarType"]:
        """Return the first child named ``label``, or None."""
        return next((c for c in self.children() if c.name() == label), None)

    def load_external(self) -> None:
        """Load content kept outside the main document; nothing by default."""

    def mvc_edit_completed(self) -> None:
        """Report that a user finished editing this node."""
        self.was_edited.emit(self)

    # -- XML hooks for subclasses -----------------------------------------

    def _update_attributes(self, element: ET.Element) -> None:
        pass

    def _update_text(self, element: ET.Element) -> None:
        element.text = self.serial_string()

    def _update_children(self, element: ET.Element) -> None:
        delete_all_var_children(element)
        for child in self.children():
            child.write_xml(element, True)

    def _read_attributes(self, element: ET.Element) -> None:
        pass

    def _read_text(self, element: ET.Element) -> None:
        text = element.text or ""
        if not text.strip():
            text = ""
        self.set_serial_string(text)

    def _read_children(self, element: ET.Element) -> None:
        pass

    # -- XML load/store ---------------------------------------------------

    def write_xml(self, parent: ET.Element, blind_append: bool = True) -> None:
        """Write this node below ``parent``.

        With ``blind_append`` a new element is always added; otherwise an
        existing element with the same name is updated.
        """
        if self.are_flags_set(VarTypeFlag.NOSAVE):
            return
        if blind_append:
            element = ET.SubElement(parent, VAR_TAG)
        else:
            element = find_or_append_child(parent, "name", self.name())
        element.set("name", self.name())
        element.set("type", self.type_name())
        self._update_attributes(element)
        self._update_text(element)
        self._update_children(element)
        self.xml_was_written.emit(self)

    def read_xml(self, element: ET.Element) -> None:
        """Load this node's attributes, value and children from ``element``."""
        if self.are_flags_set(VarTypeFlag.NOLOAD):
            return
        if not self.are_flags_set(VarTypeFlag.NOLOAD_ATTRIBUTES):
            self._read_attributes(element)
        self._read_text(element)
        self._read_children(element)
        self.xml_was_read.emit(self)