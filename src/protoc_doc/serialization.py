"""Convert documentation records to and from their structured record form.

Keys are the camelCase attribute names (``long_name`` -> ``longName``)
unless a field overrides its key through ``metadata["json"]``. Fields marked
``omitempty`` are left out when they hold no value, and empty ``nullempty``
sequences become null.
"""

from __future__ import annotations

import dataclasses
import json
from typing import Any, Mapping, Type, TypeVar

from protoc_doc.models import Template

T = TypeVar("T")


def json_key(f: dataclasses.Field) -> str:
    if "json" in f.metadata:
        return f.metadata["json"]
    first, *rest = f.name.split("_")
    return first + "".join(p.capitalize() for p in rest)


def to_dict(record: Any) -> Any:
    """Recursively turn a model record into JSON-compatible data."""
    if dataclasses.is_dataclass(record) and not isinstance(record, type):
        out = {}
        for f in dataclasses.fields(record):
            value = getattr(record, f.name)
            if f.metadata.get("omitempty") and not value:
                continue
            if f.metadata.get("nullempty") and not value:
                value = None
            out[json_key(f)] = to_dict(value)
        return out
    if isinstance(record, Mapping):
        return {key: to_dict(value) for key, value in record.items()}
    if isinstance(record, (list, tuple)):
        return [to_dict(item) for item in record]
    return record


def from_dict(cls: Type[T], data: Mapping[str, Any]) -> T:
    """Build a flat record (no nested records) from its structured form."""
    kwargs = {}
    for f in dataclasses.fields(cls):
        key = json_key(f)
        if key in data:
            kwargs[f.name] = data[key]
    return cls(**kwargs)


def to_json(template: Template, indent: int = 2) -> str:
    return json.dumps(to_dict(template), indent=indent, ensure_ascii=False)
