"""Hand-written parser for CSS-like style strings.

Syntax example:
    background: #f80; margin: 2,4,2,4; font: bold +1; foreground: $Label.foreground;

Statements are separated by ``;`` and split into key and value at the
first ``:``. Empty statements are ignored, so trailing and repeated
separators are allowed.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from restyle.coerce import ValueCoercer
from restyle.errors import StyleSyntaxError
from restyle.values import format_value

__all__ = ["parse_style", "format_style"]


def _split_statement(statement: str, key_separator: str) -> tuple[str, str]:
    """Split one ``key: value`` statement into its trimmed key and value."""
    key, sep, value = statement.partition(key_separator)
    if not sep:
        raise StyleSyntaxError(f"missing colon in '{statement}'", statement=statement)
    key = key.strip()
    value = value.strip()
    if not key:
        raise StyleSyntaxError(f"missing key in '{statement}'", statement=statement)
    if not value:
        raise StyleSyntaxError(f"missing value in '{statement}'", statement=statement)
    return key, value


def parse_style(text: str | None, coercer: ValueCoercer | None = None) -> dict[str, Any] | None:
    """Parse a style string into an ordered mapping of key to typed value.

    Returns ``None`` when *text* is ``None`` or blank, so callers can tell
    "no style" apart from an empty mapping. A key given more than once
    keeps the last value at the position of its first occurrence.

    Raises :class:`StyleSyntaxError` for a statement without a colon, key,
    or value.
    """
    if text is None or not text.strip():
        return None

    coercer = coercer or ValueCoercer()
    config = coercer.config
    style: dict[str, Any] | None = None
    for part in text.split(config.separator):
        part = part.strip()
        if not part:
            continue
        key, value = _split_statement(part, config.key_separator)
        if style is None:
            style = {}
        style[key] = coercer.coerce(key, value)
    return style


def format_style(style: Mapping[str, Any]) -> str:
    """Serialize a style mapping back to ``key: value; key: value`` text."""
    return "; ".join(f"{key}: {format_value(value)}" for key, value in style.items())
