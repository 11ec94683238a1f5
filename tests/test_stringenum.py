import xml.etree.ElementTree as ET

from vartree.stringenum import VarStringEnum
from vartree.values import VarTypeId
from vartree.vartype import VarTypeFlag, new_var_type


def make_enum():
    node = VarStringEnum("mode", "fast")
    for label in ("fast", "slow", "off"):
        node.add_item(label)
    return node


def test_default_is_selected():
    node = VarStringEnum("mode", "fast")
    assert node.selection() == "fast"
    assert node.to_string() == "fast"
    assert node.count() == 0


def test_add_item_returns_positions_and_labels():
    node = VarStringEnum("mode")
    assert node.add_item("a") == 0
    assert node.add_item("b") == 1
    assert [node.label(i) for i in range(node.count())] == ["a", "b"]


def test_items_are_hidden_and_named_by_position():
    node = make_enum()
    kids = node.children()
    assert [k.name() for k in kids] == [str(i) for i in range(len(kids))]
    assert all(k.are_flags_set(VarTypeFlag.HIDDEN) for k in kids)


def test_label_out_of_range_is_empty():
    node = make_enum()
    assert node.label(node.count()) == ""
    assert node.label(-1) == ""


def test_select_reports_change():
    node = make_enum()
    assert node.select("slow") is True
    assert node.select("slow") is False
    assert node.selection() == "slow"


def test_set_string_selects():
    node = make_enum()
    assert node.set_string("off") is True
    assert node.selection() == "off"


def test_index_of_selection():
    node = make_enum()
    node.select("off")
    assert node.label(node.index()) == "off"
    node.select("missing")
    assert node.index() == -1


def test_select_index_and_out_of_range_uses_default():
    node = make_enum()
    assert node.select_index(1) is True
    assert node.selection() == node.label(1)
    assert node.select_index(99) is True
    assert node.selection() == "fast"
    assert node.select_index(99) is False


def test_set_size_extends_and_trims():
    node = make_enum()
    node.set_size(5, "new")
    assert node.count() == 5
    assert node.label(4) == "new"
    assert node.children()[4].name() == "4"
    node.set_size(2)
    assert node.count() == 2
    assert [node.label(0), node.label(1)] == ["fast", "slow"]


def test_set_label_moves_selection_with_item():
    node = make_enum()
    node.select("slow")
    node.set_label(1, "medium")
    assert node.label(1) == "medium"
    assert node.selection() == "medium"
    node.set_label(0, "quick")
    assert node.selection() == "medium"


def test_reset_to_default_clears_items():
    node = make_enum()
    node.select("off")
    node.reset_to_default()
    assert node.count() == 0
    assert node.selection() == "fast"


def test_change_signal_on_select():
    node = make_enum()
    seen = []
    node.has_changed.connect(seen.append)
    node.select("slow")
    node.select("slow")
    assert seen == [node]


def test_factory_creates_enum():
    node = new_var_type(VarTypeId.STRINGENUM)
    assert isinstance(node, VarStringEnum)
    assert node.type_name() == "stringenum"


def test_xml_round_trip():
    node = make_enum()
    node.select("slow")
    root = ET.Element("root")
    node.write_xml(root)
    element = root.find("Var")
    assert element.get("type") == "stringenum"

    restored = VarStringEnum("mode")
    restored.read_xml(element)
    assert restored.selection() == "slow"
    assert [restored.label(i) for i in range(restored.count())] == [
        node.label(i) for i in range(node.count())
    ]
    assert all(k.are_flags_set(VarTypeFlag.HIDDEN) for k in restored.children())


def test_noload_enum_children_keeps_items_out():
    node = make_enum()
    root = ET.Element("root")
    node.write_xml(root)

    restored = VarStringEnum("mode")
    restored.add_flags(VarTypeFlag.NOLOAD_ENUM_CHILDREN)
    restored.read_xml(root.find("Var"))
    assert restored.count() == 0
    assert restored.selection() == node.selection()