import binascii
import xml.etree.ElementTree as ET

import pytest

from vartree.protobuf import VarProtoBuffer
from vartree.values import VarTypeId

USER_TYPE = VarTypeId.MIN_USERTYPE + 1


class FakeMessage:
    def __init__(self, payload=b""):
        self.payload = payload

    def SerializeToString(self):
        return self.payload

    def ParseFromString(self, data):
        self.payload = bytes(data)
        return len(data)


def make_node(payload=b""):
    return VarProtoBuffer(FakeMessage, USER_TYPE, "msg", FakeMessage(payload))


def test_default_message_is_built():
    node = VarProtoBuffer(FakeMessage, USER_TYPE)
    assert isinstance(node.get(), FakeMessage)
    assert node.get().payload == b""
    assert node.type_id() == USER_TYPE


def test_set_reports_identity_change():
    node = make_node()
    other = FakeMessage(b"x")
    seen = []
    node.has_changed.connect(seen.append)
    assert node.set(other) is True
    assert node.set(other) is False
    assert node.get() is other
    assert seen == [node]


def test_serial_string_is_base64():
    node = make_node(b"hello")
    assert node.serial_string() == "aGVsbG8="


def test_serial_string_wraps_lines():
    node = make_node(bytes(range(200)))
    lines = node.serial_string().split("\n")
    assert len(lines) > 1
    assert all(len(line) <= 72 for line in lines)
    assert all(len(line) == 72 for line in lines[:-1])


def test_serial_round_trip():
    payload = bytes(range(256))
    text = make_node(payload).serial_string()
    target = make_node()
    target.set_serial_string(text)
    assert target.get().payload == payload


def test_binary_round_trip():
    payload = b"\x00\x01binary\xff"
    source = make_node(payload)
    assert source.binary_serial_string() == payload
    target = make_node()
    target.set_binary_serial_string(source.binary_serial_string())
    assert target.get().payload == payload


def test_empty_when_no_message():
    node = make_node(b"data")
    node.set(None)
    assert node.binary_serial_string() == b""
    assert node.serial_string() == ""
    node.set_serial_string("aGVsbG8=")
    assert node.get() is None


def test_malformed_base64_raises():
    node = make_node()
    with pytest.raises(binascii.Error):
        node.set_serial_string("abc")


def test_clone_shares_message_and_type():
    node = make_node(b"shared")
    copy = node.clone()
    assert copy.get() is node.get()
    assert copy.type_id() == node.type_id()


def test_xml_round_trip():
    payload = bytes(range(120))
    root = ET.Element("root")
    make_node(payload).write_xml(root)
    element = root.find("Var")
    restored = make_node()
    restored.read_xml(element)
    assert restored.get().payload == payload
    assert element.get("name") == "msg"