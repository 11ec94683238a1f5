"""A node wrapping a serializable message object, stored as base64 text."""

from __future__ import annotations

import base64
from typing import Callable, Optional, Protocol

from .vartype import VarType

__all__ = ["Message", "VarProtoBuffer"]

_LINE_LENGTH = 72


class Message(Protocol):
    """What a wrapped message must offer: binary serialization both ways."""

    def SerializeToString(self) -> bytes: ...

    def ParseFromString(self, data: bytes) -> object: ...


def _encode_base64(data: bytes) -> str:
    text = base64.b64encode(data).decode("ascii")
    return "\n".join(
        text[start : start + _LINE_LENGTH] for start in range(0, len(text), _LINE_LENGTH)
    )


def _decode_base64(text: str) -> bytes:
    # Line breaks and other non-alphabet characters are skipped.
    return base64.b64decode(text)


class VarProtoBuffer(VarType):
    """A node holding a message object.

    In XML the message is kept as line-wrapped base64 of its binary form.
    ``message_type`` builds the default message; ``type_id`` is the node's
    type identifier.
    """

    def __init__(
        self,
        message_type: Callable[[], Message],
        type_id: int,
        name: str = "",
        default_val: Optional[Message] = None,
    ) -> None:
        super().__init__(name=name)
        self._message_type = message_type
        self._type_id = int(type_id)
        self._val: Optional[Message] = (
            default_val if default_val is not None else message_type()
        )

    def type_id(self) -> int:
        return self._type_id

    def get(self) -> Optional[Message]:
        with self._guard():
            return self._val

    def set(self, val: Optional[Message]) -> bool:
        """Hold ``val``; return True if it is a different object."""
        with self._guard():
            if val is self._val:
                return False
            self._val = val
        self._changed()
        return True

    def to_string(self) -> str:
        msg = self.get()
        return "Pointer: (nil)" if msg is None else f"Pointer: {id(msg):#x}"

    def debug_string(self) -> str:
        return self.to_string()

    def binary_serial_string(self) -> bytes:
        with self._guard():
            return b"" if self._val is None else bytes(self._val.SerializeToString())

    def set_binary_serial_string(self, val: bytes) -> None:
        with self._guard():
            if self._val is not None:
                self._val.ParseFromString(bytes(val))
        self._changed()

    def serial_string(self) -> str:
        """Return the message as base64, broken into lines of 72 characters."""
        return _encode_base64(self.binary_serial_string())

    def set_serial_string(self, val: str) -> None:
        """Load the message from base64 text; malformed text raises ValueError."""
        with self._guard():
            if self._val is not None:
                self._val.ParseFromString(_decode_base64(val))
        self._changed()

    def clone(self) -> VarProtoBuffer:
        """Return a new node of the same kind sharing the held message."""
        copy = VarProtoBuffer(self._message_type, self._type_id)
        copy.set(self.get())
        return copy