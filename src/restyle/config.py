from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RestyleConfig:
    reference_prefix: str = "$"  # "$name" reads a value from the defaults store
    separator: str = ";"
    key_separator: str = ":"
    check_types: bool = True
    # Top-level module names that end the slot lookup, in addition to the stdlib.
    boundary_modules: frozenset[str] = field(default_factory=frozenset)


DEFAULT_CONFIG = RestyleConfig()
