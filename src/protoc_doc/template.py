"""Assemble the documentation model for a set of parsed files."""

from __future__ import annotations

from operator import attrgetter
from typing import Iterable, List, Optional, Sequence, TypeVar

from protoc_doc.directives import description
from protoc_doc.models import File, ScalarValue, Template
from protoc_doc.options import (
    ExtensionTransform,
    extract_options,
    merge_options,
    transform_extensions,
)
from protoc_doc.parser.proto_ast import ProtoFile
from protoc_doc.parser.proto_transform import (
    parse_enum,
    parse_file_extension,
    parse_service,
    transform_message_tree,
)
from protoc_doc.scalars import load_scalars

T = TypeVar("T")


def _by_long_name(items: List[T]) -> tuple:
    return tuple(sorted(items, key=attrgetter("long_name")))


def make_template(
    files: Iterable[ProtoFile],
    scalars: Optional[Sequence[ScalarValue]] = None,
    transform: ExtensionTransform = transform_extensions,
) -> Template:
    """Build the Template for ``files``.

    The bundled scalar table is loaded when ``scalars`` is not given; a table
    that fails to load leaves ``Template.scalars`` as None.
    """
    if scalars is None:
        scalars = load_scalars()

    return Template(
        files=tuple(make_file(f, transform) for f in files),
        scalars=tuple(scalars) if scalars is not None else None,
    )


def make_file(
    proto_file: ProtoFile, transform: ExtensionTransform = transform_extensions
) -> File:
    """Build one File with its enums, extensions, messages and services sorted."""
    enums = [parse_enum(e, transform) for e in proto_file.enums]
    extensions = [parse_file_extension(e, transform) for e in proto_file.extensions]

    messages = []
    for m in proto_file.messages:
        nested_messages, nested_enums = transform_message_tree(m, transform)
        messages.extend(nested_messages)
        enums.extend(nested_enums)

    services = [parse_service(s, transform) for s in proto_file.services]

    return File(
        name=proto_file.name,
        description=description(str(proto_file.syntax_comments)),
        package=proto_file.package,
        has_enums=len(proto_file.enums) > 0,
        has_extensions=len(proto_file.extensions) > 0,
        has_messages=len(proto_file.messages) > 0,
        has_services=len(proto_file.services) > 0,
        enums=_by_long_name(enums),
        extensions=_by_long_name(extensions),
        messages=_by_long_name(messages),
        services=_by_long_name(services),
        options=merge_options(
            extract_options(proto_file.proto.options),
            transform(proto_file.option_extensions),
        ),
    )
