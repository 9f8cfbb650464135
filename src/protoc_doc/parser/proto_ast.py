"""Read-only views over descriptor_pb2 messages.

Each node keeps the raw descriptor proto and adds what the documentation
transform needs: resolved comments, long/full names, the owning package and
the custom option extensions set on it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from google.protobuf import descriptor_pb2


@dataclass
class Comment:
    """Comments attached to a source location."""

    leading: str = ""
    trailing: str = ""
    detached: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        text = ""
        if self.leading:
            text = self.leading + "\n"
        return (text + self.trailing).strip()


@dataclass
class ProtoEnumValue:
    proto: descriptor_pb2.EnumValueDescriptorProto
    comments: Comment = field(default_factory=Comment)
    option_extensions: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ProtoEnum:
    proto: descriptor_pb2.EnumDescriptorProto
    package: str
    long_name: str
    full_name: str
    comments: Comment = field(default_factory=Comment)
    values: List[ProtoEnumValue] = field(default_factory=list)
    option_extensions: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ProtoField:
    """A message field; also the base of extension definitions."""

    proto: descriptor_pb2.FieldDescriptorProto
    package: str
    is_proto3: bool
    comments: Comment = field(default_factory=Comment)
    option_extensions: Dict[str, Any] = field(default_factory=dict)

    @property
    def oneof_index(self) -> Optional[int]:
        if self.proto.HasField("oneof_index"):
            return self.proto.oneof_index
        return None


@dataclass
class ProtoExtension(ProtoField):
    long_name: str = ""
    full_name: str = ""
    # The message an extension is declared in, None for file-level ones.
    parent: Optional[ProtoMessage] = field(default=None, repr=False, compare=False)


@dataclass
class ProtoMessage:
    proto: descriptor_pb2.DescriptorProto
    package: str
    is_proto3: bool
    long_name: str
    full_name: str
    comments: Comment = field(default_factory=Comment)
    fields: List[ProtoField] = field(default_factory=list)
    extensions: List[ProtoExtension] = field(default_factory=list)
    enums: List[ProtoEnum] = field(default_factory=list)
    messages: List[ProtoMessage] = field(default_factory=list)
    option_extensions: Dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.proto.name


@dataclass
class ProtoMethod:
    proto: descriptor_pb2.MethodDescriptorProto
    package: str
    comments: Comment = field(default_factory=Comment)
    option_extensions: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ProtoService:
    proto: descriptor_pb2.ServiceDescriptorProto
    package: str
    long_name: str
    full_name: str
    comments: Comment = field(default_factory=Comment)
    methods: List[ProtoMethod] = field(default_factory=list)
    option_extensions: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ProtoFile:
    """Top-level view of one FileDescriptorProto."""

    proto: descriptor_pb2.FileDescriptorProto
    syntax_comments: Comment = field(default_factory=Comment)
    package_comments: Comment = field(default_factory=Comment)
    enums: List[ProtoEnum] = field(default_factory=list)
    extensions: List[ProtoExtension] = field(default_factory=list)
    messages: List[ProtoMessage] = field(default_factory=list)
    services: List[ProtoService] = field(default_factory=list)
    option_extensions: Dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.proto.name

    @property
    def package(self) -> str:
        return self.proto.package

    @property
    def is_proto3(self) -> bool:
        return self.proto.syntax == "proto3"
