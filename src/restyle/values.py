"""Default-value parser: turns literal style values into typed values.

The target type is inferred from the style key. Keys ending in ``Color``,
``Background`` or ``Foreground`` hold colors, ``Insets``/``Margin`` hold
insets, ``Size`` holds a dimension, ``Font`` holds a font, and so on.
Anything without a matching rule goes through plain literal inference.

Structured literals are parsed with a small Lark grammar:

    #f80  #ff8800  #ff880080  rgb(255, 136, 0)  rgba(255, 136, 0, 128)
    1,2,3,4                       (insets: top, left, bottom, right)
    100,20                        (dimension: width, height)
    bold italic +2 "Segoe UI", Arial
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from functools import cache
from typing import Any

from lark import Lark, LarkError, Token, Transformer

from restyle.errors import StyleValueError
from restyle.model.values import Color, Dimension, Font, Insets, TypedValue

__all__ = ["ValueParser", "format_value", "parse_literal"]

_GRAMMAR = r"""
color: HEX_COLOR                                  -> hex_color
     | "rgb" "(" INT "," INT "," INT ")"          -> rgb_color
     | "rgba" "(" INT "," INT "," INT "," INT ")" -> rgb_color

insets: SIGNED_INT "," SIGNED_INT "," SIGNED_INT "," SIGNED_INT

dimension: SIGNED_INT "," SIGNED_INT

font: font_style* font_size? family_list?
font_style: BOLD | ITALIC | PLAIN
font_size: SIGNED_NUMBER
family_list: family ("," family)*
family: ESCAPED_STRING -> quoted_family
      | CNAME+

BOLD: "bold"
ITALIC: "italic"
PLAIN: "plain"
HEX_COLOR: /#[0-9a-fA-F]+/

%import common.INT
%import common.SIGNED_INT
%import common.SIGNED_NUMBER
%import common.CNAME
%import common.ESCAPED_STRING
%import common.WS
%ignore WS
"""

_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?")
_HEX_COLOR_RE = re.compile(r"#([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})")
_CNAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class _ValueTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into a typed value."""

    # ---- colors ----

    def hex_color(self, items: list[Token]) -> Color:
        digits = str(items[0])[1:]
        if len(digits) in (3, 4):
            digits = "".join(c * 2 for c in digits)
        if len(digits) not in (6, 8):
            raise ValueError(f"expected 3, 4, 6 or 8 hex digits, got {len(str(items[0])) - 1}")
        channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
        return Color(*channels)

    def rgb_color(self, items: list[Token]) -> Color:
        return Color(*(int(t) for t in items))

    # ---- geometry ----

    def insets(self, items: list[Token]) -> Insets:
        return Insets(*(int(t) for t in items))

    def dimension(self, items: list[Token]) -> Dimension:
        return Dimension(*(int(t) for t in items))

    # ---- fonts ----

    def font_style(self, items: list[Token]) -> tuple[str, str]:
        return ("style", str(items[0]))

    def font_size(self, items: list[Token]) -> tuple[str, str]:
        return ("size", str(items[0]))

    def quoted_family(self, items: list[Token]) -> str:
        return str(items[0])[1:-1].replace('\\"', '"')

    def family(self, items: list[Token]) -> str:
        return " ".join(str(t) for t in items)

    def family_list(self, items: list[str]) -> tuple[str, tuple[str, ...]]:
        return ("families", tuple(items))

    def font(self, items: list[tuple[str, Any]]) -> Font:
        kwargs: dict[str, Any] = {}
        for kind, value in items:
            if kind == "style":
                if value != "plain":
                    kwargs[value] = True
            elif kind == "size":
                if value[0] in "+-":
                    kwargs["relative_size"] = float(value)
                else:
                    kwargs["size"] = float(value)
            else:
                kwargs["families"] = value
        return Font(**kwargs)


@cache
def _parser() -> Lark:
    return Lark(_GRAMMAR, parser="lalr", start=["color", "insets", "dimension", "font"])


def _parse_structured(start: str, key: str, raw: str) -> Any:
    try:
        tree = _parser().parse(raw, start=start)
        return _ValueTransformer().transform(tree)
    except LarkError as e:
        reason = (str(getattr(e, "orig_exc", e)).splitlines() or [""])[0]
        raise StyleValueError(key, raw, reason) from e


def parse_color(key: str, raw: str) -> Color:
    return _parse_structured("color", key, raw)


def parse_insets(key: str, raw: str) -> Insets:
    return _parse_structured("insets", key, raw)


def parse_dimension(key: str, raw: str) -> Dimension:
    return _parse_structured("dimension", key, raw)


def parse_font(key: str, raw: str) -> Font:
    return _parse_structured("font", key, raw)


def parse_number(key: str, raw: str) -> int | float:
    if _INT_RE.fullmatch(raw):
        return int(raw)
    if _FLOAT_RE.fullmatch(raw):
        return float(raw)
    raise StyleValueError(key, raw, "expected a number")


def parse_literal(key: str, raw: str) -> Any:
    """Infer the type of a value whose key carries no type hint."""
    if raw in ("true", "false"):
        return raw == "true"
    if _INT_RE.fullmatch(raw):
        return int(raw)
    if _FLOAT_RE.fullmatch(raw):
        return float(raw)
    if _HEX_COLOR_RE.fullmatch(raw):
        return parse_color(key, raw)
    return raw


Converter = Callable[[str, str], Any]

BUILTIN_RULES: list[tuple[tuple[str, ...], Converter]] = [
    (("color", "background", "foreground"), parse_color),
    (("insets", "margin", "margins", "padding"), parse_insets),
    (("size",), parse_dimension),
    (("font",), parse_font),
    (("width", "height", "arc", "gap", "thickness"), parse_number),
]


class ValueParser:
    """Key-driven conversion of literal strings into typed values.

    Rules are ``(suffixes, converter)`` pairs checked in order against the
    lower-cased key; the first match converts the value. Keys matching no
    rule fall back to :func:`parse_literal`. ``null`` is ``None`` for
    every key.
    """

    def __init__(self, rules: Iterable[tuple[Iterable[str], Converter]] | None = None) -> None:
        source = BUILTIN_RULES if rules is None else rules
        self._rules: list[tuple[tuple[str, ...], Converter]] = [
            (tuple(s.lower() for s in suffixes), converter) for suffixes, converter in source
        ]

    def register(self, suffixes: Iterable[str], converter: Converter) -> None:
        """Add a rule that takes precedence over all existing rules."""
        self._rules.insert(0, (tuple(s.lower() for s in suffixes), converter))

    def parse(self, key: str, raw: str) -> TypedValue:
        if raw == "null":
            return None
        lowered = key.lower()
        for suffixes, converter in self._rules:
            if lowered.endswith(suffixes):
                return converter(key, raw)
        return parse_literal(key, raw)


def _format_size(size: float, signed: bool = False) -> str:
    text = repr(float(size))
    if text.endswith(".0"):
        text = text[:-2]
    if signed and not text.startswith("-"):
        text = "+" + text
    return text


def _format_family(name: str) -> str:
    if all(_CNAME_RE.fullmatch(word) for word in name.split(" ")) and name not in ("bold", "italic", "plain"):
        return name
    return '"' + name.replace('"', '\\"') + '"'


def format_value(value: Any) -> str:
    """Render a typed value as literal style text."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, str)):
        return str(value)
    if isinstance(value, Color):
        return value.hex
    if isinstance(value, Insets):
        return f"{value.top},{value.left},{value.bottom},{value.right}"
    if isinstance(value, Dimension):
        return f"{value.width},{value.height}"
    if isinstance(value, Font):
        parts: list[str] = []
        if value.bold:
            parts.append("bold")
        if value.italic:
            parts.append("italic")
        if value.size is not None:
            parts.append(_format_size(value.size))
        elif value.relative_size is not None:
            parts.append(_format_size(value.relative_size, signed=True))
        if value.families:
            parts.append(", ".join(_format_family(f) for f in value.families))
        return " ".join(parts) or "plain"
    raise TypeError(f"cannot format value of type {type(value).__name__}")
