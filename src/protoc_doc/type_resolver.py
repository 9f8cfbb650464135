"""Resolve the short, long and full names of types referenced by fields."""

from __future__ import annotations

from typing import Tuple

from google.protobuf import descriptor_pb2

FieldProto = descriptor_pb2.FieldDescriptorProto

# protoc synthesizes a nested "<Field>Entry" message for every map field.
MAP_ENTRY_SUFFIX = "Entry"


def base_name(name: str) -> str:
    """Last dot-separated segment of a name."""
    return name.split(".")[-1]


def full_name(name: str) -> str:
    """Fully-qualified name without the leading separator."""
    if name.startswith("."):
        return name[1:]
    return name


def long_name(name: str, package: str) -> str:
    """Fully-qualified name relative to ``package``."""
    name = full_name(name)
    prefix = package + "."
    if package and name.startswith(prefix):
        return name[len(prefix):]
    return name


def type_names(name: str, package: str) -> Tuple[str, str, str]:
    """Short, long and full variants of a fully-qualified type reference."""
    return base_name(name), long_name(name, package), full_name(name)


def label_name(label: int, is_proto3: bool, proto3_optional: bool) -> str:
    if is_proto3 and not proto3_optional and label != FieldProto.LABEL_REPEATED:
        return ""
    return _enum_name(FieldProto.Label, label, "LABEL_")


def resolve_type(type_: int, type_name: str, package: str) -> Tuple[str, str, str]:
    """Name triple for a field's type.

    Message and enum references are qualified with a leading ``.``; anything
    else is named after its scalar type (``TYPE_INT32`` -> ``int32``).
    """
    if type_name.startswith("."):
        return type_names(type_name, package)

    name = _enum_name(FieldProto.Type, type_, "TYPE_")
    return name, name, name


def is_map(label: str, type_: str, long_type: str, full_type: str) -> bool:
    """Whether a field points at a synthesized map entry message.

    A user-defined nested ``...Entry`` message used by a repeated field
    matches as well.
    """
    return (
        label == "repeated"
        and "." in long_type
        and type_.endswith(MAP_ENTRY_SUFFIX)
        and long_type.endswith(MAP_ENTRY_SUFFIX)
        and full_type.endswith(MAP_ENTRY_SUFFIX)
    )


def _enum_name(enum_type, value: int, prefix: str) -> str:
    name = enum_type.Name(value)
    if name.startswith(prefix):
        name = name[len(prefix):]
    return name.lower()
