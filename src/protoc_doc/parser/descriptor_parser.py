"""Build proto AST views from FileDescriptorProto messages.

Comments come from each file's ``source_code_info``; a location is addressed
by the field-number/index path leading to it from the file descriptor.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from google.protobuf import descriptor_pb2

from protoc_doc.options import option_extensions

from .proto_ast import (
    Comment,
    ProtoEnum,
    ProtoEnumValue,
    ProtoExtension,
    ProtoField,
    ProtoFile,
    ProtoMessage,
    ProtoMethod,
    ProtoService,
)

# FileDescriptorProto field numbers
FILE_PACKAGE = 2
FILE_MESSAGE = 4
FILE_ENUM = 5
FILE_SERVICE = 6
FILE_EXTENSION = 7
FILE_SYNTAX = 12

# DescriptorProto field numbers
MESSAGE_FIELD = 2
MESSAGE_NESTED = 3
MESSAGE_ENUM = 4
MESSAGE_EXTENSION = 6

# EnumDescriptorProto / ServiceDescriptorProto field numbers
ENUM_VALUE = 2
SERVICE_METHOD = 2

Path = Tuple[int, ...]


def parse_file_descriptors(
    protos: Iterable[descriptor_pb2.FileDescriptorProto],
) -> List[ProtoFile]:
    """Wrap every file descriptor, preserving input order."""
    return [parse_file_descriptor(p) for p in protos]


def parse_file_descriptor(proto: descriptor_pb2.FileDescriptorProto) -> ProtoFile:
    comments = _parse_comments(proto)
    package = proto.package
    is_proto3 = proto.syntax == "proto3"
    ctx = _Context(package, is_proto3, comments)

    return ProtoFile(
        proto=proto,
        syntax_comments=ctx.comment((FILE_SYNTAX,)),
        package_comments=ctx.comment((FILE_PACKAGE,)),
        enums=[
            _parse_enum(ctx, e, None, (FILE_ENUM, i))
            for i, e in enumerate(proto.enum_type)
        ],
        extensions=[
            _parse_extension(ctx, ext, None, (FILE_EXTENSION, i))
            for i, ext in enumerate(proto.extension)
        ],
        messages=[
            _parse_message(ctx, m, None, (FILE_MESSAGE, i))
            for i, m in enumerate(proto.message_type)
        ],
        services=[
            _parse_service(ctx, s, (FILE_SERVICE, i))
            for i, s in enumerate(proto.service)
        ],
        option_extensions=option_extensions(proto.options),
    )


def _scrub(text: str) -> str:
    return text.replace("\n ", "\n").strip()


def _parse_comments(proto: descriptor_pb2.FileDescriptorProto) -> Dict[Path, Comment]:
    comments: Dict[Path, Comment] = {}
    for location in proto.source_code_info.location:
        comments[tuple(location.path)] = Comment(
            leading=_scrub(location.leading_comments),
            trailing=_scrub(location.trailing_comments),
            detached=[_scrub(c) for c in location.leading_detached_comments],
        )
    return comments


class _Context:
    """Per-file state shared by every node built for that file."""

    def __init__(self, package: str, is_proto3: bool, comments: Dict[Path, Comment]):
        self.package = package
        self.is_proto3 = is_proto3
        self._comments = comments

    def comment(self, path: Path) -> Comment:
        return self._comments.get(path) or Comment()

    def names(self, name: str, parent: Optional[ProtoMessage]) -> Tuple[str, str]:
        long_name = f"{parent.long_name}.{name}" if parent is not None else name
        full_name = f"{self.package}.{long_name}" if self.package else long_name
        return long_name, full_name


def _parse_enum(
    ctx: _Context,
    proto: descriptor_pb2.EnumDescriptorProto,
    parent: Optional[ProtoMessage],
    path: Path,
) -> ProtoEnum:
    long_name, full_name = ctx.names(proto.name, parent)
    values = [
        ProtoEnumValue(
            proto=v,
            comments=ctx.comment(path + (ENUM_VALUE, i)),
            option_extensions=option_extensions(v.options),
        )
        for i, v in enumerate(proto.value)
    ]
    return ProtoEnum(
        proto=proto,
        package=ctx.package,
        long_name=long_name,
        full_name=full_name,
        comments=ctx.comment(path),
        values=values,
        option_extensions=option_extensions(proto.options),
    )


def _parse_extension(
    ctx: _Context,
    proto: descriptor_pb2.FieldDescriptorProto,
    parent: Optional[ProtoMessage],
    path: Path,
) -> ProtoExtension:
    long_name, full_name = ctx.names(proto.name, parent)
    return ProtoExtension(
        proto=proto,
        package=ctx.package,
        is_proto3=ctx.is_proto3,
        comments=ctx.comment(path),
        option_extensions=option_extensions(proto.options),
        long_name=long_name,
        full_name=full_name,
        parent=parent,
    )


def _parse_message(
    ctx: _Context,
    proto: descriptor_pb2.DescriptorProto,
    parent: Optional[ProtoMessage],
    path: Path,
) -> ProtoMessage:
    long_name, full_name = ctx.names(proto.name, parent)
    msg = ProtoMessage(
        proto=proto,
        package=ctx.package,
        is_proto3=ctx.is_proto3,
        long_name=long_name,
        full_name=full_name,
        comments=ctx.comment(path),
        option_extensions=option_extensions(proto.options),
    )

    msg.fields = [
        ProtoField(
            proto=f,
            package=ctx.package,
            is_proto3=ctx.is_proto3,
            comments=ctx.comment(path + (MESSAGE_FIELD, i)),
            option_extensions=option_extensions(f.options),
        )
        for i, f in enumerate(proto.field)
    ]
    msg.extensions = [
        _parse_extension(ctx, ext, msg, path + (MESSAGE_EXTENSION, i))
        for i, ext in enumerate(proto.extension)
    ]
    msg.enums = [
        _parse_enum(ctx, e, msg, path + (MESSAGE_ENUM, i))
        for i, e in enumerate(proto.enum_type)
    ]
    msg.messages = [
        _parse_message(ctx, m, msg, path + (MESSAGE_NESTED, i))
        for i, m in enumerate(proto.nested_type)
    ]
    return msg


def _parse_service(
    ctx: _Context,
    proto: descriptor_pb2.ServiceDescriptorProto,
    path: Path,
) -> ProtoService:
    long_name, full_name = ctx.names(proto.name, None)
    methods = [
        ProtoMethod(
            proto=m,
            package=ctx.package,
            comments=ctx.comment(path + (SERVICE_METHOD, i)),
            option_extensions=option_extensions(m.options),
        )
        for i, m in enumerate(proto.method)
    ]
    return ProtoService(
        proto=proto,
        package=ctx.package,
        long_name=long_name,
        full_name=full_name,
        comments=ctx.comment(path),
        methods=methods,
        option_extensions=option_extensions(proto.options),
    )
