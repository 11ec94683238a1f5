# vartree

`vartree` keeps application settings and parameters as a tree of named,
typed variables. Every node reports changes through signals, and a tree
can be written to and read back from XML using `xml.etree.ElementTree`.

It is a library only: it has no command-line program.

## Installation

```
pip install .
```

## Modules

- `vartree.values`: the value holders `VarVal`, `VarIntVal` and
  `VarStringVal`, the `VarTypeId` enumeration, and `type_to_string` /
  `string_to_type`, which map type ids to the labels used in XML
  (`"int"`, `"string"`, `"list"`, `"external"`, `"stringenum"`,
  `"trigger"`, ...; unknown labels map to `VarTypeId.UNDEFINED`).
- `vartree.vartype`: the `VarType` base node, the `VarTypeFlag` bit
  flags, the `Signal` observer list, the node factory registry
  (`register_var_type`, `new_var_type`) and the XML helpers
  (`find_or_append_child`, `delete_all_var_children`,
  `read_children_helper`).
- `vartree.primitives`: `VarInt`, `VarString`, `VarList`, `VarExternal`.
- `vartree.stringenum`: `VarStringEnum`.
- `vartree.trigger`: `VarTrigger`.
- `vartree.protobuf`: `VarProtoBuffer`.

## Node types

- `VarInt`: an integer with an optional minimum and maximum (`set_min`,
  `set_max`, `unset_min`, `unset_max`). `set_int` clamps values outside
  the range; `reset_to_default` restores the default.
- `VarString`: a string with a default value.
- `VarList`: an ordered list of child nodes (`add_child`, `remove_child`,
  `children`, `find_child_or_replace`, `delete_all_children`).
  `reset_to_default` removes all children.
- `VarExternal`: a list whose children are kept in a separate XML file,
  under a `<VarXML>` element. `load_external` merges the file's children
  into the list; writing the node rewrites that file. The file must
  already exist and contain a `<VarXML>` element.
- `VarStringEnum`: a single choice from an ordered list of string items
  (`add_item`, `set_size`, `set_label`, `select`, `select_index`,
  `selection`, `index`, `label`, `count`). The selection is a plain string
  and need not match an item; `select_index` with an index out of range
  selects the default.
- `VarTrigger`: a button-like node. `trigger()` increments a counter and
  emits `signal_triggered`, `has_changed` and `was_edited`; read the count
  with `counter()` or `get_and_reset_counter()`.
- `VarProtoBuffer`: holds any object with `SerializeToString()` and
  `ParseFromString(data)` methods. Its serial form is the message's binary
  form in base64, broken into lines of 72 characters.

All nodes derive from `VarType`, which holds the name, the flags and the
signals, and adds XML load/store.

## Example

```python
from vartree.primitives import VarInt, VarList, VarString

settings = VarList("settings")
speed = VarInt("speed", 5, 0, 10)
title = VarString("title", "untitled")
settings.add_child(speed)
settings.add_child(title)

speed.set_int(42)          # clamped to 10
print(speed.get())         # 10

speed.has_changed.connect(lambda node: print(node.name(), "changed"))
speed.reset_to_default()   # prints "speed changed"; value is 5 again

found = settings.find_child("title")
print(found.to_string())   # untitled
```

## Signals

Each node has `has_changed`, `was_edited`, `xml_was_read` and
`xml_was_written` signals. Connect any callable with `Signal.connect`
and remove it with `Signal.disconnect`; it is called with the node that
emitted the signal. `VarList` also emits `child_added` and
`child_removed` with the child concerned.

## XML

`VarType.write_xml(parent, blind_append=True)` writes a node into an
`ElementTree` element as a `Var` child carrying `name` and `type`
attributes, the serial value as text, and its children below it. With
`blind_append=False` an existing `Var` child of the same name is updated
instead. Nodes flagged `NOSAVE` are skipped.

`VarType.read_xml(element)` loads a node back. Reading merges into the
existing tree: children with a matching name and type are updated, and
unknown ones are created through `new_var_type`. Nodes flagged `NOLOAD`
are skipped; `NOLOAD_ATTRIBUTES` keeps attributes such as a `VarInt`
range from being read.

`new_var_type` only knows the types registered with `register_var_type`.
Importing `vartree.primitives` registers `int`, `string`, `list` and
`external`; importing `vartree.stringenum` and `vartree.trigger`
registers `stringenum` and `trigger`.

## What it does not do

- There are no boolean, floating-point, vector, time-line or
  multi-selection node types. XML entries of those types, or of any type
  with no registered factory, are logged as warnings and skipped when a
  tree is read.
- `VarProtoBuffer` is not registered with `new_var_type`, so it is only
  updated in place when reading XML, never created from it.
- There are no editor widgets or other graphical views of a tree.

## Running the tests

```
pip install .[test]
pytest
```