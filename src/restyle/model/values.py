"""Typed style values: Color, Insets, Dimension, and Font dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Color:
    """An RGBA color with 8-bit channels."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "alpha"):
            channel = getattr(self, name)
            if not 0 <= channel <= 255:
                raise ValueError(f"Color channel {name} out of range: {channel}")

    @property
    def hex(self) -> str:
        """Return ``#rrggbb``, or ``#rrggbbaa`` when not fully opaque."""
        text = f"#{self.red:02x}{self.green:02x}{self.blue:02x}"
        if self.alpha != 255:
            text += f"{self.alpha:02x}"
        return text


@dataclass(frozen=True)
class Insets:
    """Space around the four edges of a rectangle."""

    top: int
    left: int
    bottom: int
    right: int


@dataclass(frozen=True)
class Dimension:
    width: int
    height: int


@dataclass(frozen=True)
class Font:
    """A font description.

    Attributes:
        families: Font family names in order of preference.
        size: Absolute point size, if given.
        relative_size: Size delta relative to the inherited font (``+2``, ``-1``).
        bold: Whether the font is bold.
        italic: Whether the font is italic.
    """

    families: tuple[str, ...] = ()
    size: float | None = None
    relative_size: float | None = None
    bold: bool = False
    italic: bool = False

    @property
    def family(self) -> str:
        """Return the preferred family, or an empty string."""
        return self.families[0] if self.families else ""


# Values produced by parsing literal style text. Values read from the
# defaults store through a reference can be any object.
TypedValue = Union[None, bool, int, float, str, Color, Insets, Dimension, Font]
