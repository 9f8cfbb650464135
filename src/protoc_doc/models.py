"""Documentation model handed to template engines.

Records are built once from a descriptor set and never mutated. Top-level
enums, extensions, messages and services of a ``File`` are sorted by long
name; enum values, fields and methods keep their declaration order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

Options = Optional[Dict[str, Any]]


def _options_field():
    return field(default=None, metadata={"omitempty": True})


def _option_names(children) -> Optional[List[str]]:
    names = set()
    for child in children:
        names.update(child.options or ())
    if not names:
        return None
    return sorted(names)


def _with_option(children, name: str) -> Optional[List[Any]]:
    found = [child for child in children if child.options and name in child.options]
    return found or None


class _OptionLookup:
    options: Options

    def option(self, name: str) -> Any:
        """Return the named option, or None when it is not set."""
        if not self.options:
            return None
        return self.options.get(name)


@dataclass(frozen=True)
class ScalarValue:
    """How a protobuf scalar type maps onto each supported language."""

    proto_type: str
    notes: str = ""
    cpp_type: str = ""
    cs_type: str = ""
    go_type: str = ""
    java_type: str = ""
    php_type: str = ""
    python_type: str = ""
    ruby_type: str = ""


@dataclass(frozen=True)
class EnumValue(_OptionLookup):
    name: str
    number: str
    description: str = ""
    options: Options = _options_field()


@dataclass(frozen=True)
class Enum(_OptionLookup):
    """A top-level or nested enum. Nesting shows only in the long/full names."""

    name: str
    long_name: str
    full_name: str
    description: str = ""
    values: Tuple[EnumValue, ...] = field(default=(), metadata={"nullempty": True})
    exclude: bool = False
    options: Options = _options_field()

    def value_options(self) -> Optional[List[str]]:
        return _option_names(self.values)

    def values_with_option(self, name: str) -> Optional[List[EnumValue]]:
        return _with_option(self.values, name)


@dataclass(frozen=True)
class FileExtension(_OptionLookup):
    """A top-level extension within a proto2 file."""

    name: str
    long_name: str
    full_name: str
    description: str = ""
    label: str = ""
    type: str = ""
    long_type: str = ""
    full_type: str = ""
    number: int = 0
    default_value: str = ""
    containing_type: str = ""
    containing_long_type: str = ""
    containing_full_type: str = ""
    options: Options = _options_field()


@dataclass(frozen=True)
class MessageExtension(FileExtension):
    """An extension declared inside a message; the scope is that message."""

    scope_type: str = ""
    scope_long_type: str = ""
    scope_full_type: str = ""


@dataclass(frozen=True)
class MessageField(_OptionLookup):
    """A single field of a message.

    Under proto3 the label is empty unless the field is repeated or marked
    ``optional``, and ``default_value`` is always empty.
    """

    name: str
    description: str = ""
    label: str = ""
    type: str = ""
    long_type: str = ""
    full_type: str = ""
    is_map: bool = field(default=False, metadata={"json": "ismap"})
    is_oneof: bool = field(default=False, metadata={"json": "isoneof"})
    oneof_decl: str = field(default="", metadata={"json": "oneofdecl"})
    default_value: str = ""
    required: bool = False
    options: Options = _options_field()


@dataclass(frozen=True)
class Message(_OptionLookup):
    """A message definition. Nested types are lifted into the owning file."""

    name: str
    long_name: str
    full_name: str
    description: str = ""
    has_extensions: bool = False
    has_fields: bool = False
    has_oneofs: bool = False
    extensions: Tuple[MessageExtension, ...] = ()
    fields: Tuple[MessageField, ...] = ()
    exclude: bool = False
    options: Options = _options_field()

    def field_options(self) -> Optional[List[str]]:
        return _option_names(self.fields)

    def fields_with_option(self, name: str) -> Optional[List[MessageField]]:
        return _with_option(self.fields, name)


@dataclass(frozen=True)
class ServiceMethod(_OptionLookup):
    name: str
    description: str = ""
    request_type: str = ""
    request_long_type: str = ""
    request_full_type: str = ""
    request_streaming: bool = False
    response_type: str = ""
    response_long_type: str = ""
    response_full_type: str = ""
    response_streaming: bool = False
    title: str = ""
    action: str = ""
    version: str = ""
    exclude: bool = False
    options: Options = _options_field()


@dataclass(frozen=True)
class Service(_OptionLookup):
    name: str
    long_name: str
    full_name: str
    description: str = ""
    methods: Tuple[ServiceMethod, ...] = field(default=(), metadata={"nullempty": True})
    title: str = ""
    exclude: bool = False
    options: Options = _options_field()

    def method_options(self) -> Optional[List[str]]:
        return _option_names(self.methods)

    def methods_with_option(self, name: str) -> Optional[List[ServiceMethod]]:
        return _with_option(self.methods, name)


@dataclass(frozen=True)
class File(_OptionLookup):
    """Everything documented for one .proto file.

    In the case of proto3 files, ``has_extensions`` is always False and
    ``extensions`` is empty.
    """

    name: str
    description: str = ""
    package: str = ""
    has_enums: bool = False
    has_extensions: bool = False
    has_messages: bool = False
    has_services: bool = False
    enums: Tuple[Enum, ...] = ()
    extensions: Tuple[FileExtension, ...] = ()
    messages: Tuple[Message, ...] = ()
    services: Tuple[Service, ...] = ()
    options: Options = _options_field()


@dataclass(frozen=True)
class Template:
    """All parsed files plus the scalar value reference table."""

    files: Tuple[File, ...] = ()
    scalars: Optional[Tuple[ScalarValue, ...]] = field(
        default=None, metadata={"json": "scalarValueTypes"}
    )
