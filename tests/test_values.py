import pytest

from vartree.values import (
    VarIntVal,
    VarStringVal,
    VarTypeId,
    VarVal,
    string_to_type,
    type_to_string,
)


@pytest.mark.parametrize(
    "tid", [t for t in VarTypeId if t not in (VarTypeId.COUNT, VarTypeId.MIN_USERTYPE)]
)
def test_type_name_round_trip(tid):
    assert string_to_type(type_to_string(tid)) == tid


def test_unknown_type_name_is_undefined():
    assert string_to_type("no-such-type") == VarTypeId.UNDEFINED
    assert type_to_string(200) == type_to_string(VarTypeId.UNDEFINED)


def test_type_id_values_fixed():
    assert VarVal().type_id() == 0
    assert VarIntVal().type_id() == 2
    assert string_to_type(type_to_string(2)) == VarTypeId.INT
    assert VarTypeId.MIN_USERTYPE == 128


def test_base_value_defaults():
    v = VarVal()
    assert v.type_id() == VarTypeId.UNDEFINED
    assert v.to_string() == ""
    assert v.set_string("x") is False
    assert v.has_value() is False
    assert (v.min_value(), v.max_value(), v.value()) == (0.0, 1.0, 0.0)
    assert v.serial_string() == ""
    assert v.deep_clone().type_id() == VarTypeId.UNDEFINED


def test_int_set_reports_change():
    v = VarIntVal(5)
    assert v.get() == 5
    assert v.set_int(5) is False
    assert v.get() == 5
    assert v.set_int(7) is True
    assert v.get() == 7
    assert v.set_int(7) is False


def test_int_set_string_scans_leading_integer():
    v = VarIntVal()
    assert v.set_string("  42abc") is True
    assert v.get() == 42
    v.set_string("-13")
    assert v.get() == -13
    v.set_string("abc")
    assert v.get() == 0


def test_int_conversions():
    v = VarIntVal(1)
    assert v.to_bool() is True
    assert v.to_double() == 1.0
    v.set_int(2)
    assert v.to_bool() is False
    v.set_double(3.9)
    assert v.get() == 3
    v.set_bool(True)
    assert v.get() == 1
    v.set_bool(False)
    assert v.get() == 0


def test_int_string_and_serial_round_trip():
    v = VarIntVal(-25)
    other = VarIntVal()
    other.set_serial_string(v.serial_string())
    assert other.get() == v.get()
    other2 = VarIntVal()
    other2.set_binary_serial_string(v.binary_serial_string())
    assert other2.get() == -25
    assert v.to_string() == "-25"
    assert v.debug_string() == v.to_string()


def test_int_plot_values():
    v = VarIntVal(9)
    assert v.has_value() is True
    assert v.value() == 9.0
    assert v.has_min_value() is False
    assert v.has_max_value() is False
    assert v.type_name() == type_to_string(VarTypeId.INT)


def test_int_clone_is_independent():
    v = VarIntVal(4)
    c = v.clone()
    assert c.get() == 4
    c.set_int(8)
    assert v.get() == 4


def test_string_value():
    s = VarStringVal("hello")
    assert s.to_string() == "hello"
    assert s.set_string("hello") is False
    assert s.set_string("world") is True
    assert s.to_string() == "world"
    assert s.has_value() is False
    assert s.type_id() == VarTypeId.STRING


def test_string_clone_and_serial():
    s = VarStringVal("abc")
    c = s.clone()
    assert c.to_string() == "abc"
    c.set_string("xyz")
    assert s.to_string() == "abc"
    t = VarStringVal()
    t.set_serial_string(s.serial_string())
    assert t.to_string() == s.to_string()


def test_int_set_double_rejects_nan():
    with pytest.raises(ValueError):
        VarIntVal().set_double(float("nan"))