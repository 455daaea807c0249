"""Restyle model layer -- public type re-exports."""

from restyle.model.defaults import Defaults
from restyle.model.values import Color, Dimension, Font, Insets, TypedValue

__all__ = [
    # values
    "Color",
    "Insets",
    "Dimension",
    "Font",
    "TypedValue",
    # defaults
    "Defaults",
]
