"""Styleable fields: marking dataclass fields and writing style values to them.

A field becomes a style target by declaring it with :func:`styleable`::

    @dataclass
    class ButtonStyle:
        background: Color | None = styleable(default=None)
        arc: int = styleable(default=6)
        focus_width: Final[int] = styleable(default=2)   # read-only

Slots are collected once per class into a registry that already contains
the slots of every base class, so applying a key is a dictionary lookup.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import re
import sys
import types
import typing
from collections.abc import Mapping
from dataclasses import MISSING, dataclass
from typing import Any, Final, Protocol, runtime_checkable

from restyle.config import DEFAULT_CONFIG, RestyleConfig
from restyle.errors import InvalidAssignmentError, UnknownStyleError

__all__ = [
    "Cloneable",
    "Slot",
    "apply_to_object",
    "clone_border",
    "clone_icon",
    "clone_prototype",
    "styleable",
    "styleable_slots",
]

logger = logging.getLogger(__name__)

_STYLEABLE = "styleable"
_READONLY = "readonly"


def styleable(
    default: Any = MISSING,
    *,
    default_factory: Any = MISSING,
    readonly: bool = False,
    **kwargs: Any,
) -> Any:
    """Declare a dataclass field that style keys may write to.

    Do not rename styleable fields: their names are the style keys.
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[_STYLEABLE] = True
    metadata[_READONLY] = readonly
    return dataclasses.field(
        default=default, default_factory=default_factory, metadata=metadata, **kwargs
    )


@dataclass(frozen=True)
class Slot:
    """A styleable field of a class."""

    owner: type
    name: str
    type: Any  # declared type, Final unwrapped
    readonly: bool = False

    @property
    def qualified_name(self) -> str:
        return f"{self.owner.__module__}.{self.owner.__qualname__}.{self.name}"

    def get(self, obj: object) -> Any:
        return getattr(obj, self.name)

    def set(self, obj: object, value: Any) -> None:
        setattr(obj, self.name, value)


# ---------------------------------------------------------------------------
# Slot registry
# ---------------------------------------------------------------------------

_REGISTRY: dict[tuple[type, RestyleConfig], dict[str, Slot]] = {}


def _is_boundary(cls: type, config: RestyleConfig) -> bool:
    """True if *cls* belongs to the standard library or a configured framework."""
    top = cls.__module__.split(".")[0]
    return top in sys.stdlib_module_names or top in config.boundary_modules


_FINAL_RE = re.compile(r"(?:typing\.)?Final(?:\[(?P<inner>.*)\])?", re.DOTALL)


def _own_annotations(cls: type) -> dict[str, Any]:
    try:
        return inspect.get_annotations(cls)
    except NameError:
        # Lazily evaluated annotations (3.14+) naming TYPE_CHECKING-only imports.
        import annotationlib

        return annotationlib.get_annotations(cls, format=annotationlib.Format.STRING)


def _resolve(cls: type, name: str, annotation: Any) -> Any:
    """Evaluate one string annotation, or return it unchanged if it cannot be."""
    if not isinstance(annotation, str):
        return annotation
    module = sys.modules.get(cls.__module__)
    globalns = vars(module) if module is not None else {}
    try:
        return eval(annotation, globalns, dict(vars(cls)))
    except NameError as e:
        # Names imported only under TYPE_CHECKING.
        logger.debug("Cannot resolve annotation of %s.%s: %s", cls.__qualname__, name, e)
        return annotation


def _own_slots(cls: type) -> dict[str, Slot]:
    """Collect the styleable fields declared directly on *cls*."""
    dc_fields: dict[str, dataclasses.Field] = cls.__dict__.get("__dataclass_fields__", {})
    if not dc_fields:
        return {}
    own_annotations = _own_annotations(cls)
    frozen = cls.__dict__["__dataclass_params__"].frozen

    slots: dict[str, Slot] = {}
    for name, annotation in own_annotations.items():
        f = dc_fields.get(name)
        if f is None or not f.metadata.get(_STYLEABLE):
            continue
        readonly = bool(f.metadata.get(_READONLY)) or frozen
        hint = _resolve(cls, name, annotation)
        if isinstance(hint, str):
            match = _FINAL_RE.fullmatch(hint.strip())
            if match:
                readonly = True
                inner = match.group("inner")
                hint = _resolve(cls, name, inner) if inner else Any
        elif typing.get_origin(hint) is Final or hint is Final:
            readonly = True
            args = typing.get_args(hint)
            hint = args[0] if args else Any
        if isinstance(hint, str):
            hint = Any
        slots[name] = Slot(owner=cls, name=name, type=hint, readonly=readonly)
    return slots


def styleable_slots(cls: type, config: RestyleConfig = DEFAULT_CONFIG) -> Mapping[str, Slot]:
    """Return every styleable slot reachable from *cls*, keyed by field name.

    The walk goes from *cls* towards its bases along the MRO, skipping
    classes from the standard library or a boundary module, so mixins such
    as ``Generic`` or ``ABC`` do not hide the bases after them. For a name
    declared at several levels, the most-derived styleable declaration
    wins; an unmarked redeclaration does not hide a styleable base field.
    """
    cache_key = (cls, config)
    slots = _REGISTRY.get(cache_key)
    if slots is None:
        slots = {}
        for klass in cls.__mro__:
            if _is_boundary(klass, config):
                continue
            for name, slot in _own_slots(klass).items():
                slots.setdefault(name, slot)
        _REGISTRY[cache_key] = slots
        logger.debug("Registered %d styleable slot(s) for %s", len(slots), cls.__qualname__)
    return types.MappingProxyType(slots)


# ---------------------------------------------------------------------------
# Type checking
# ---------------------------------------------------------------------------


def _accepts(hint: Any, value: Any) -> bool:
    """Return True if *value* may be stored in a slot declared as *hint*."""
    if hint is Any or hint is object:
        return True
    if hint is None or hint is type(None):
        return value is None
    origin = typing.get_origin(hint)
    if origin is typing.Union or origin is types.UnionType:
        return any(_accepts(arm, value) for arm in typing.get_args(hint))
    if origin is typing.Literal:
        return value in typing.get_args(hint)
    if origin is not None:
        hint = origin
    if not isinstance(hint, type):
        return True
    if hint is float and isinstance(value, int) and not isinstance(value, bool):
        return True
    return isinstance(value, hint)


# ---------------------------------------------------------------------------
# Applying values
# ---------------------------------------------------------------------------


def apply_to_object(
    obj: object, key: str, value: Any, config: RestyleConfig = DEFAULT_CONFIG
) -> Any:
    """Write *value* to the styleable field *key* of *obj* and return the old value.

    Raises :class:`UnknownStyleError` if *obj* has no styleable field named
    *key*, and :class:`InvalidAssignmentError` if the field is read-only or
    *value* does not fit its declared type.
    """
    slot = styleable_slots(type(obj), config).get(key)
    if slot is None:
        raise UnknownStyleError(key)
    if slot.readonly:
        raise InvalidAssignmentError(f"field '{slot.qualified_name}' is final", key=key)
    if config.check_types and not _accepts(slot.type, value):
        raise InvalidAssignmentError(
            f"value {value!r} does not fit type of field '{slot.qualified_name}'", key=key
        )

    old_value = slot.get(obj)
    slot.set(obj, value)
    logger.debug("Set %s = %r (was %r)", slot.qualified_name, value, old_value)
    return old_value


# ---------------------------------------------------------------------------
# Prototype cloning
# ---------------------------------------------------------------------------


@runtime_checkable
class Cloneable(Protocol):
    """A value that can produce a fresh, independently styleable copy of itself."""

    def clone(self) -> Any: ...


def clone_prototype(prototype: Any) -> Any:
    """Return a fresh instance of *prototype*'s class.

    Uses :meth:`Cloneable.clone` when the prototype provides it, otherwise
    the class's no-argument constructor.
    """
    cls = type(prototype)
    try:
        if isinstance(prototype, Cloneable):
            return prototype.clone()
        return cls()
    except Exception as e:
        raise InvalidAssignmentError(f"failed to clone '{cls.__module__}.{cls.__qualname__}'") from e


clone_border = clone_prototype
clone_icon = clone_prototype
