from __future__ import annotations

import json
import re

DEFAULT_ALIAS_PREFIX = "T"

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _normalize_identifier(value: str, fallback: str) -> str:
    cleaned = re.sub(r"[^a-zA-Z0-9_$]", "", value)
    if not cleaned:
        return fallback
    if cleaned[0].isdigit():
        return f"{fallback}{cleaned}"
    return cleaned


def alias_prefix(value: str | None) -> str:
    return _normalize_identifier(value or "", DEFAULT_ALIAS_PREFIX)


def type_alias(declaration_id: int, prefix: str = DEFAULT_ALIAS_PREFIX) -> str:
    """Alias name for a declaration; unique because ids are unique."""
    return f"{prefix}{declaration_id}"


def property_name(name: str) -> str:
    if _IDENTIFIER_RE.match(name):
        return name
    quoted = json.dumps(name, ensure_ascii=False)
    return quoted.replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")


ELEMENT_TOKEN = "*"

# Line terminators are percent-encoded as in the URI fragment form of a JSON
# pointer, so a label always fits in a single-line comment.
_LINE_ESCAPES = str.maketrans(
    {
        "\n": "%0A",
        "\r": "%0D",
        "\u2028": "%E2%80%A8",
        "\u2029": "%E2%80%A9",
    }
)


def single_line(text: str) -> str:
    return text.translate(_LINE_ESCAPES)


def _escape_pointer_token(token: str) -> str:
    escaped = single_line(
        token.replace("%", "%25").replace("~", "~0").replace("/", "~1")
    )
    if escaped == ELEMENT_TOKEN:
        return "%2A"
    return escaped


def pointer_child(pointer: str, token: str) -> str:
    """Extend a JSON pointer by one object key."""
    return f"{pointer}/{_escape_pointer_token(token)}"


def pointer_element(pointer: str) -> str:
    """Extend a JSON pointer to the elements of an array."""
    return f"{pointer}/{ELEMENT_TOKEN}"


def context_label(document: str, pointer: str = "") -> str:
    """Provenance label for a position inside a document.

    >>> context_label("a.json")
    'a.json'
    >>> context_label("a.json", "/items/*")
    'a.json#/items/*'
    """
    if not pointer:
        return document
    return f"{document}#{pointer}"
