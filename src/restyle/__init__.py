"""Restyle: CSS-like style strings applied to, and reverted from, Python objects."""

__version__ = "0.1.0"

from restyle.apply import STYLE_PROPERTY, Styler, apply_style, chain_apply, get_style  # noqa: E402
from restyle.binding import (  # noqa: E402
    Cloneable,
    Slot,
    apply_to_object,
    clone_prototype,
    styleable,
    styleable_slots,
)
from restyle.coerce import ValueCoercer  # noqa: E402
from restyle.config import DEFAULT_CONFIG, RestyleConfig  # noqa: E402
from restyle.errors import (  # noqa: E402
    InvalidAssignmentError,
    StyleError,
    StyleSyntaxError,
    StyleValueError,
    UnknownStyleError,
)
from restyle.model import Color, Defaults, Dimension, Font, Insets  # noqa: E402
from restyle.parser import format_style, parse_style  # noqa: E402
from restyle.values import ValueParser, format_value  # noqa: E402

__all__ = [
    "__version__",
    # parse / apply
    "parse_style",
    "format_style",
    "apply_style",
    "chain_apply",
    "get_style",
    "Styler",
    "STYLE_PROPERTY",
    # values
    "ValueCoercer",
    "ValueParser",
    "format_value",
    "Color",
    "Insets",
    "Dimension",
    "Font",
    "Defaults",
    # binding
    "styleable",
    "styleable_slots",
    "apply_to_object",
    "clone_prototype",
    "Cloneable",
    "Slot",
    # config
    "RestyleConfig",
    "DEFAULT_CONFIG",
    # errors
    "StyleError",
    "StyleSyntaxError",
    "StyleValueError",
    "UnknownStyleError",
    "InvalidAssignmentError",
]
