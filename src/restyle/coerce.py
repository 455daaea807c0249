"""Value coercion: resolves ``$name`` references or parses literal values."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from restyle.config import DEFAULT_CONFIG, RestyleConfig
from restyle.model.defaults import Defaults
from restyle.values import ValueParser

logger = logging.getLogger(__name__)


class ValueCoercer:
    """Convert a raw style value string into a typed value.

    A value starting with the reference prefix (``$`` by default) names an
    entry in the defaults store; the stored object is returned as-is.
    Every other value is handed to the value parser, which infers the type
    from the key.
    """

    def __init__(
        self,
        defaults: Mapping[str, Any] | None = None,
        value_parser: ValueParser | None = None,
        config: RestyleConfig = DEFAULT_CONFIG,
    ) -> None:
        self.defaults = defaults if defaults is not None else Defaults()
        self.value_parser = value_parser or ValueParser()
        self.config = config

    def coerce(self, key: str, raw: str) -> Any:
        prefix = self.config.reference_prefix
        if raw.startswith(prefix):
            name = raw[len(prefix):]
            value = self.defaults.get(name)
            logger.debug("Resolved reference %s%s for %s: %r", prefix, name, key, value)
            return value
        return self.value_parser.parse(key, raw)
