"""Applying and reverting styles through a caller-supplied apply function.

The apply function receives ``(key, value)``, performs the change, and
returns the value that was in effect before. The old values collected
while applying one style are passed back on the next call so that style
is reverted first::

    old = apply_style(None, "arc: 8; background: #f80", apply_property)
    old = apply_style(old, "arc: 4", apply_property)   # restores background
    old = apply_style(old, None, apply_property)       # restores arc

No locking is done here: a target must not be styled from two threads
at the same time.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from restyle.binding import apply_to_object
from restyle.coerce import ValueCoercer
from restyle.config import DEFAULT_CONFIG, RestyleConfig
from restyle.errors import UnknownStyleError
from restyle.parser import parse_style

__all__ = ["STYLE_PROPERTY", "ApplyProperty", "Styler", "apply_style", "chain_apply", "get_style"]

logger = logging.getLogger(__name__)

STYLE_PROPERTY = "style"

ApplyProperty = Callable[[str, Any], Any]


def _apply_mapping(style: Mapping[str, Any], apply_property: ApplyProperty) -> dict[str, Any] | None:
    if not style:
        return None

    old_values: dict[str, Any] = {}
    for key, value in style.items():
        old_values[key] = apply_property(key, value)
        logger.debug("Applied style %s = %r", key, value)
    return old_values


def apply_style(
    old_values: Mapping[str, Any] | None,
    style: str | Mapping[str, Any] | None,
    apply_property: ApplyProperty,
    coercer: ValueCoercer | None = None,
) -> dict[str, Any] | None:
    """Revert *old_values*, then apply *style*.

    *style* is style text, an already typed mapping, or ``None``. The
    revert always runs first and always completes, even if the new style
    is empty or fails to parse.

    Returns the values replaced by *style*, keyed like *style*, or
    ``None`` when nothing was applied. Errors from parsing or from
    *apply_property* propagate; keys applied before the failing one stay
    applied.
    """
    if old_values is not None:
        for key, value in old_values.items():
            apply_property(key, value)
            logger.debug("Reverted style %s = %r", key, value)

    if style is None:
        return None

    if isinstance(style, str):
        if not style.strip():
            return None
        parsed = parse_style(style, coercer)
        if parsed is None:
            return None
        return _apply_mapping(parsed, apply_property)

    if isinstance(style, Mapping):
        return _apply_mapping(style, apply_property)

    logger.warning("Ignoring style of unsupported type %s", type(style).__name__)
    return None


def chain_apply(*targets: object, config: RestyleConfig = DEFAULT_CONFIG) -> ApplyProperty:
    """Return an apply function that writes to the first target owning the key.

    Targets are tried in order; a target without a styleable field for the
    key is skipped. If no target has one, :class:`UnknownStyleError` is
    raised.
    """

    def apply_property(key: str, value: Any) -> Any:
        for target in targets:
            try:
                return apply_to_object(target, key, value, config)
            except UnknownStyleError:
                continue
        raise UnknownStyleError(key)

    return apply_property


def get_style(component: object) -> Any:
    """Return the style attached to *component*, or ``None``."""
    return getattr(component, STYLE_PROPERTY, None)


class Styler:
    """Keeps the old values of the current style between updates.

    Example::

        styler = Styler(chain_apply(button_style, border))
        styler.update("arc: 8; borderColor: #888")
        styler.update(get_style(button))
        styler.reset()
    """

    def __init__(self, apply_property: ApplyProperty, coercer: ValueCoercer | None = None) -> None:
        self._apply_property = apply_property
        self._coercer = coercer
        self._old_values: dict[str, Any] | None = None

    @property
    def old_values(self) -> dict[str, Any] | None:
        """Values to restore on the next update, or ``None``."""
        return dict(self._old_values) if self._old_values is not None else None

    def update(self, style: str | Mapping[str, Any] | None) -> None:
        """Revert the current style and apply *style*."""
        if self._old_values is not None:
            # Kept until every old value has been restored.
            apply_style(self._old_values, None, self._apply_property)
            self._old_values = None
        self._old_values = apply_style(None, style, self._apply_property, self._coercer)

    def reset(self) -> None:
        """Revert the current style."""
        self.update(None)
