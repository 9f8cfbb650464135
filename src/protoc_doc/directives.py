"""Comment cleanup and extraction of the ``@`` directives embedded in comments.

Recognized directives:
  - ``@exclude``  drop the entity from generated documentation
  - ``@title``    display title of a service or method
  - ``@action``   method action metadata
  - ``@version``  method version metadata
  - ``@required`` field-only, documents the field as required
"""

from __future__ import annotations

import json
import re
from typing import Dict, NamedTuple, Tuple

EXCLUDE_TAG = "@exclude"
REQUIRED_TAG = "@required"

# Line directives capture everything after the tag up to the end of its line.
# They are always applied in this order, and before @exclude.
LINE_DIRECTIVES: Dict[str, re.Pattern] = {
    "action": re.compile(r"@action.*"),
    "version": re.compile(r"@version.*"),
    "title": re.compile(r"@title.*"),
}

JSON_BEGIN_TAG = "```json"
JSON_END_TAG = "```"
JSON_INDENT = "  "
JSON_WHITESPACE = " \t\n\r"


class Directives(NamedTuple):
    description: str
    exclude: bool = False
    title: str = ""
    action: str = ""
    version: str = ""


def parse_directives(comment: str, *names: str) -> Directives:
    """Extract ``@exclude`` and the requested line directives from a comment.

    Every extracted directive is removed from the returned description;
    line directives that were not requested stay in the text.
    """
    unknown = set(names) - set(LINE_DIRECTIVES)
    if unknown:
        raise ValueError(f"Unknown directive(s): {sorted(unknown)}")

    text = comment
    values: Dict[str, str] = {}
    for name, pattern in LINE_DIRECTIVES.items():
        if name not in names:
            continue
        match = pattern.search(text)
        value = ""
        if match:
            line = match.group(0)
            value = line.replace(f"@{name}", "")
            text = text.replace(line, "")
        values[name] = value.strip()

    exclude = EXCLUDE_TAG in text
    if exclude:
        text = text.replace(EXCLUDE_TAG, "")

    return Directives(description=text, exclude=exclude, **values)


def strip_required(description: str) -> Tuple[str, bool]:
    """Remove every ``@required`` tag, reporting whether one was present."""
    required = REQUIRED_TAG in description
    return description.replace(REQUIRED_TAG, ""), required


def description(comment: str) -> str:
    """Normalize a raw comment into a displayable description."""
    text = comment.lstrip("*/\n ")
    return indent_json_in_comment(text, JSON_BEGIN_TAG, JSON_END_TAG)


def _reject_constant(name: str):
    raise ValueError(f"Invalid JSON constant: {name}")


def _newline(depth: int) -> str:
    return "\n" + JSON_INDENT * depth


def indent_json(text: str) -> str:
    """Re-indent a JSON document with two-space indentation.

    Only whitespace outside of strings changes; tokens are kept exactly as
    written. Leading whitespace is dropped and trailing whitespace kept.
    Anything that does not parse as JSON is returned untouched.
    """
    try:
        json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return text

    body = text.strip(JSON_WHITESPACE)
    trailing = text[len(text.rstrip(JSON_WHITESPACE)):]

    out = []
    depth = 0
    in_string = escaped = False
    opened = False  # last token opened a container
    for ch in body:
        if in_string:
            out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch in JSON_WHITESPACE:
            continue
        if ch in "]}":
            depth -= 1
            if not opened:
                out.append(_newline(depth))
            out.append(ch)
            opened = False
            continue
        if opened:
            out.append(_newline(depth))
            opened = False
        if ch in "[{":
            out.append(ch)
            depth += 1
            opened = True
        elif ch == ",":
            out.append(ch + _newline(depth))
        elif ch == ":":
            out.append(": ")
        else:
            in_string = ch == '"'
            out.append(ch)
    return "".join(out) + trailing


def indent_json_in_comment(comment: str, begin_tag: str, end_tag: str) -> str:
    """Re-indent every fenced JSON block found after the start of a comment.

    A block opening at offset 0 is not considered. If a block is never
    closed the comment is returned unchanged.
    """
    original = comment
    result = ""

    start = comment.find(begin_tag)
    while start > 0:
        result += comment[:start] + begin_tag
        comment = comment[start + len(begin_tag):]

        end = comment.find(end_tag)
        if end == -1:
            return original
        result += "\n" + indent_json(comment[:end]) + end_tag
        comment = comment[end + len(end_tag):]

        start = comment.find(begin_tag)

    if not result:
        return comment
    return result + comment
