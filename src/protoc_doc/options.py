"""Option extraction and merging.

Each entity's option mapping combines the standard options of its
descriptor with the values of custom option extensions. The first source to
define a key wins.
"""

from __future__ import annotations

import base64
from collections.abc import Iterable
from typing import Any, Callable, Dict, Mapping, Optional

from google.protobuf import descriptor_pb2, json_format
from google.protobuf.message import Message as ProtoMessage

# Host-supplied capability turning raw extension values into template values.
ExtensionTransform = Callable[[Mapping[str, Any]], Optional[Mapping[str, Any]]]


def extract_options(options: Optional[ProtoMessage]) -> Dict[str, Any]:
    """Pull the documented standard options off a descriptor options message.

    Only ``deprecated`` and, for methods, ``idempotency_level`` are reported.
    """
    out: Dict[str, Any] = {}
    if options is None:
        return out
    if getattr(options, "deprecated", False):
        out["deprecated"] = True
    # Compared by name so options built from other descriptor pools qualify.
    is_method = options.DESCRIPTOR.full_name == descriptor_pb2.MethodOptions.DESCRIPTOR.full_name
    if is_method and options.HasField("idempotency_level"):
        out["idempotency_level"] = descriptor_pb2.MethodOptions.IdempotencyLevel.Name(
            options.idempotency_level
        )
    return out


def merge_options(*sources: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """Merge option mappings in priority order; returns None when empty."""
    out: Dict[str, Any] = {}
    for source in sources:
        if not source:
            continue
        for key, value in source.items():
            if key in out:
                continue
            out[key] = value
    if not out:
        return None
    return out


def option_extensions(options: Optional[ProtoMessage]) -> Dict[str, Any]:
    """Collect the extension fields set on an options message by full name."""
    if options is None:
        return {}
    return {
        fd.full_name: value
        for fd, value in options.ListFields()
        if fd.is_extension
    }


def transform_extensions(extensions: Mapping[str, Any]) -> Dict[str, Any]:
    """Default extension transform: convert values into plain Python data.

    Messages become dicts, repeated values lists and bytes base64 text.
    """
    return {name: _plain_value(value) for name, value in extensions.items()}


def _plain_value(value: Any) -> Any:
    if isinstance(value, ProtoMessage):
        return json_format.MessageToDict(value, preserving_proto_field_name=True)
    if isinstance(value, bytes):
        return base64.b64encode(value).decode("ascii")
    if isinstance(value, str):
        return value
    if isinstance(value, Iterable):
        return [_plain_value(item) for item in value]
    return value
