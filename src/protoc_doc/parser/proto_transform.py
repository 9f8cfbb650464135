"""Transform proto AST nodes into documentation model records."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from google.protobuf import descriptor_pb2

from protoc_doc.directives import description, parse_directives, strip_required
from protoc_doc.models import (
    Enum,
    EnumValue,
    FileExtension,
    Message,
    MessageExtension,
    MessageField,
    Service,
    ServiceMethod,
)
from protoc_doc.options import (
    ExtensionTransform,
    extract_options,
    merge_options,
    transform_extensions,
)
from protoc_doc.type_resolver import (
    is_map,
    label_name,
    resolve_type,
    type_names,
)

from .proto_ast import (
    ProtoEnum,
    ProtoEnumValue,
    ProtoExtension,
    ProtoField,
    ProtoMessage,
    ProtoMethod,
    ProtoService,
)


class TransformError(Exception):
    """Raised when a descriptor cannot be mapped onto the documentation model."""


def _options(node, transform: ExtensionTransform):
    return merge_options(
        extract_options(node.proto.options),
        transform(node.option_extensions),
    )


def parse_enum(node: ProtoEnum, transform: ExtensionTransform = transform_extensions) -> Enum:
    directives = parse_directives(description(str(node.comments)))
    return Enum(
        name=node.proto.name,
        long_name=node.long_name,
        full_name=node.full_name,
        description=directives.description,
        values=tuple(parse_enum_value(v, transform) for v in node.values),
        exclude=directives.exclude,
        options=_options(node, transform),
    )


def parse_enum_value(
    node: ProtoEnumValue, transform: ExtensionTransform = transform_extensions
) -> EnumValue:
    return EnumValue(
        name=node.proto.name,
        number=str(node.proto.number),
        description=description(str(node.comments)),
        options=_options(node, transform),
    )


def parse_file_extension(
    node: ProtoExtension, transform: ExtensionTransform = transform_extensions
) -> FileExtension:
    return FileExtension(**_extension_attrs(node, transform))


def parse_message_extension(
    node: ProtoExtension, transform: ExtensionTransform = transform_extensions
) -> MessageExtension:
    scope = node.parent
    if scope is None:
        raise TransformError(f"Extension '{node.full_name}' is not declared inside a message")
    return MessageExtension(
        scope_type=scope.name,
        scope_long_type=scope.long_name,
        scope_full_type=scope.full_name,
        **_extension_attrs(node, transform),
    )


def _extension_attrs(node: ProtoExtension, transform: ExtensionTransform) -> dict:
    proto = node.proto
    type_, long_type, full_type = resolve_type(proto.type, proto.type_name, node.package)
    containing_type, containing_long_type, containing_full_type = type_names(
        proto.extendee, node.package
    )
    return dict(
        name=proto.name,
        long_name=node.long_name,
        full_name=node.full_name,
        description=description(str(node.comments)),
        label=label_name(proto.label, node.is_proto3, proto.proto3_optional),
        type=type_,
        long_type=long_type,
        full_type=full_type,
        number=proto.number,
        default_value=proto.default_value,
        containing_type=containing_type,
        containing_long_type=containing_long_type,
        containing_full_type=containing_full_type,
        options=_options(node, transform),
    )


def parse_message(
    node: ProtoMessage, transform: ExtensionTransform = transform_extensions
) -> Message:
    directives = parse_directives(description(str(node.comments)))
    oneof_decls = node.proto.oneof_decl
    return Message(
        name=node.name,
        long_name=node.long_name,
        full_name=node.full_name,
        description=directives.description,
        has_extensions=len(node.extensions) > 0,
        has_fields=len(node.fields) > 0,
        has_oneofs=len(oneof_decls) > 0,
        extensions=tuple(parse_message_extension(e, transform) for e in node.extensions),
        fields=tuple(parse_message_field(f, oneof_decls, transform) for f in node.fields),
        exclude=directives.exclude,
        options=_options(node, transform),
    )


def parse_message_field(
    node: ProtoField,
    oneof_decls: Sequence[descriptor_pb2.OneofDescriptorProto],
    transform: ExtensionTransform = transform_extensions,
) -> MessageField:
    proto = node.proto
    type_, long_type, full_type = resolve_type(proto.type, proto.type_name, node.package)
    label = label_name(proto.label, node.is_proto3, proto.proto3_optional)
    desc, required = strip_required(description(str(node.comments)))

    oneof_decl = ""
    index = node.oneof_index
    if index is not None:
        if not 0 <= index < len(oneof_decls):
            raise TransformError(
                f"Field '{proto.name}' references oneof #{index}, "
                f"but only {len(oneof_decls)} oneof(s) are declared"
            )
        oneof_decl = oneof_decls[index].name

    return MessageField(
        name=proto.name,
        description=desc,
        label=label,
        type=type_,
        long_type=long_type,
        full_type=full_type,
        is_map=is_map(label, type_, long_type, full_type),
        is_oneof=index is not None,
        oneof_decl=oneof_decl,
        default_value=proto.default_value,
        required=required,
        options=_options(node, transform),
    )


def parse_service(
    node: ProtoService, transform: ExtensionTransform = transform_extensions
) -> Service:
    directives = parse_directives(description(str(node.comments)), "title")
    return Service(
        name=node.proto.name,
        long_name=node.long_name,
        full_name=node.full_name,
        description=directives.description,
        methods=tuple(parse_service_method(m, transform) for m in node.methods),
        title=directives.title,
        exclude=directives.exclude,
        options=_options(node, transform),
    )


def parse_service_method(
    node: ProtoMethod, transform: ExtensionTransform = transform_extensions
) -> ServiceMethod:
    proto = node.proto
    directives = parse_directives(
        description(str(node.comments)), "action", "version", "title"
    )
    request_type, request_long_type, request_full_type = type_names(
        proto.input_type, node.package
    )
    response_type, response_long_type, response_full_type = type_names(
        proto.output_type, node.package
    )
    return ServiceMethod(
        name=proto.name,
        description=directives.description,
        request_type=request_type,
        request_long_type=request_long_type,
        request_full_type=request_full_type,
        request_streaming=proto.client_streaming,
        response_type=response_type,
        response_long_type=response_long_type,
        response_full_type=response_full_type,
        response_streaming=proto.server_streaming,
        title=directives.title,
        action=directives.action,
        version=directives.version,
        exclude=directives.exclude,
        options=_options(node, transform),
    )


def transform_message_tree(
    node: ProtoMessage, transform: ExtensionTransform = transform_extensions
) -> Tuple[List[Message], List[Enum]]:
    """Flatten a message and everything nested in it.

    The message comes first, then its own enums, then each nested message
    subtree in declaration order.
    """
    messages = [parse_message(node, transform)]
    enums = [parse_enum(e, transform) for e in node.enums]
    for nested in node.messages:
        nested_messages, nested_enums = transform_message_tree(nested, transform)
        messages.extend(nested_messages)
        enums.extend(nested_enums)
    return messages, enums
