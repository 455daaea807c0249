"""Tests for styleable fields, the slot registry, and prototype cloning."""

from __future__ import annotations

from abc import ABC
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Final, Generic, Literal, Optional, TypeVar

import pytest

from restyle.binding import (
    Cloneable,
    apply_to_object,
    clone_border,
    clone_icon,
    clone_prototype,
    styleable,
    styleable_slots,
)
from restyle.config import RestyleConfig
from restyle.errors import InvalidAssignmentError, StyleError, UnknownStyleError
from restyle.model import Color, Insets

if TYPE_CHECKING:
    from decimal import Decimal

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Fixture classes
# ---------------------------------------------------------------------------


@dataclass
class BaseStyle:
    arc: int = styleable(default=6)
    margin: Insets = styleable(default_factory=lambda: Insets(0, 0, 0, 0))
    focus_width: Final[int] = styleable(default=2)
    locked: str = styleable(default="x", readonly=True)
    plain: int = 0


@dataclass
class DerivedStyle(BaseStyle):
    # Redeclared without the marker: the base's styleable slot still applies.
    arc: int = 8
    background: Optional[Color] = styleable(default=None)
    scale: float = styleable(default=1.0)
    align: Literal["left", "right"] = styleable(default="left")
    tags: list[str] = styleable(default_factory=list)
    anything: Any = styleable(default=None)


@dataclass(frozen=True)
class FrozenStyle:
    arc: int = styleable(default=1)


class StyledDict(OrderedDict):
    """Lives on top of a standard library class; the walk stops there."""


@dataclass
class ShadowStyle(DerivedStyle):
    background: Optional[Color] = styleable(default=Color(1, 2, 3))


@dataclass
class LockedStyle:
    focus_width: Final[int] = styleable(default=2)
    limit: Final[Decimal] = styleable(default=None)
    scale: Decimal | None = styleable(default=None)
    arc: int = styleable(default=4)


@dataclass
class GenericStyle(Generic[T], BaseStyle):
    payload: Optional[T] = styleable(default=None)


@dataclass
class AbstractStyle(ABC, BaseStyle):
    pass


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_slots_include_bases(self):
        names = set(styleable_slots(DerivedStyle))
        assert names == {
            "arc",
            "margin",
            "focus_width",
            "locked",
            "background",
            "scale",
            "align",
            "tags",
            "anything",
        }

    def test_unmarked_field_is_not_a_slot(self):
        assert "plain" not in styleable_slots(BaseStyle)

    def test_unmarked_redeclaration_keeps_base_slot(self):
        slot = styleable_slots(DerivedStyle)["arc"]
        assert slot.owner is BaseStyle

    def test_most_derived_slot_wins(self):
        assert styleable_slots(ShadowStyle)["background"].owner is ShadowStyle

    def test_final_is_unwrapped_and_readonly(self):
        slot = styleable_slots(BaseStyle)["focus_width"]
        assert slot.readonly
        assert slot.type is int

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            styleable_slots(BaseStyle)["new"] = None  # type: ignore[index]

    def test_stdlib_class_has_no_slots(self):
        assert dict(styleable_slots(StyledDict)) == {}

    def test_boundary_modules(self):
        config = RestyleConfig(boundary_modules=frozenset({__name__}))
        assert dict(styleable_slots(DerivedStyle, config)) == {}


# ---------------------------------------------------------------------------
# apply_to_object
# ---------------------------------------------------------------------------


class TestApplyToObject:
    def test_returns_old_value(self):
        style = DerivedStyle()
        assert apply_to_object(style, "scale", 2.0) == 1.0
        assert style.scale == 2.0

    def test_inherited_slot(self):
        style = DerivedStyle()
        assert apply_to_object(style, "margin", Insets(1, 1, 1, 1)) == Insets(0, 0, 0, 0)
        assert style.margin == Insets(1, 1, 1, 1)

    def test_shadowed_without_marker_writes_field(self):
        style = DerivedStyle()
        assert apply_to_object(style, "arc", 3) == 8
        assert style.arc == 3

    def test_unknown_key(self):
        with pytest.raises(UnknownStyleError) as exc_info:
            apply_to_object(DerivedStyle(), "shadow", 1)
        assert exc_info.value.key == "shadow"
        assert str(exc_info.value) == "unknown style 'shadow'"

    def test_unmarked_key(self):
        with pytest.raises(UnknownStyleError):
            apply_to_object(BaseStyle(), "plain", 1)

    def test_stdlib_object(self):
        with pytest.raises(UnknownStyleError):
            apply_to_object(StyledDict(), "arc", 1)

    def test_final_slot(self):
        with pytest.raises(InvalidAssignmentError, match="is final"):
            apply_to_object(BaseStyle(), "focus_width", 3)

    def test_readonly_slot(self):
        style = BaseStyle()
        with pytest.raises(InvalidAssignmentError):
            apply_to_object(style, "locked", "y")
        assert style.locked == "x"

    def test_frozen_owner(self):
        with pytest.raises(InvalidAssignmentError):
            apply_to_object(FrozenStyle(), "arc", 2)

    def test_errors_share_base(self):
        with pytest.raises(StyleError):
            apply_to_object(BaseStyle(), "nope", 1)


class TestTypeChecks:
    def test_wrong_type(self):
        style = DerivedStyle()
        with pytest.raises(InvalidAssignmentError) as exc_info:
            apply_to_object(style, "margin", "1,2,3,4")
        assert exc_info.value.key == "margin"
        assert style.margin == Insets(0, 0, 0, 0)

    def test_int_accepted_for_float(self):
        style = DerivedStyle()
        apply_to_object(style, "scale", 2)
        assert style.scale == 2

    def test_bool_rejected_for_float(self):
        with pytest.raises(InvalidAssignmentError):
            apply_to_object(DerivedStyle(), "scale", True)

    def test_optional_accepts_none(self):
        style = ShadowStyle()
        assert apply_to_object(style, "background", None) == Color(1, 2, 3)

    def test_none_rejected_when_not_optional(self):
        with pytest.raises(InvalidAssignmentError):
            apply_to_object(DerivedStyle(), "arc", None)

    def test_literal(self):
        style = DerivedStyle()
        apply_to_object(style, "align", "right")
        with pytest.raises(InvalidAssignmentError):
            apply_to_object(style, "align", "center")

    def test_generic_checked_by_origin(self):
        style = DerivedStyle()
        apply_to_object(style, "tags", ["a"])
        with pytest.raises(InvalidAssignmentError):
            apply_to_object(style, "tags", ("a",))

    def test_any(self):
        style = DerivedStyle()
        apply_to_object(style, "anything", object())

    def test_checks_can_be_disabled(self):
        style = DerivedStyle()
        apply_to_object(style, "margin", "raw", RestyleConfig(check_types=False))
        assert style.margin == "raw"


# ---------------------------------------------------------------------------
# Cloning
# ---------------------------------------------------------------------------


class LineBorder:
    def __init__(self) -> None:
        self.width = 1


class MatteBorder:
    def __init__(self, color: Color) -> None:
        self.color = color


class BrokenIcon:
    def __init__(self) -> None:
        raise RuntimeError("no resources")


@dataclass
class CheckIcon:
    size: int = 16
    checked: list[bool] = field(default_factory=list)

    def clone(self) -> CheckIcon:
        return CheckIcon(size=self.size)


class TestCloning:
    def test_no_arg_constructor(self):
        original = LineBorder()
        original.width = 5
        copy = clone_border(original)
        assert isinstance(copy, LineBorder)
        assert copy is not original
        assert copy.width == 1

    def test_cloneable_protocol(self):
        icon = CheckIcon(size=24)
        assert isinstance(icon, Cloneable)
        copy = clone_icon(icon)
        assert copy == CheckIcon(size=24)
        assert copy is not icon

    def test_missing_no_arg_constructor(self):
        with pytest.raises(InvalidAssignmentError, match="failed to clone"):
            clone_prototype(MatteBorder(Color(0, 0, 0)))

    def test_constructor_raises(self):
        icon = BrokenIcon.__new__(BrokenIcon)
        with pytest.raises(InvalidAssignmentError) as exc_info:
            clone_icon(icon)
        assert isinstance(exc_info.value.__cause__, RuntimeError)


# ---------------------------------------------------------------------------
# Unresolvable annotations and mixins
# ---------------------------------------------------------------------------


class TestTypeCheckingOnlyAnnotations:
    def test_final_slot_stays_read_only(self):
        style = LockedStyle()
        with pytest.raises(InvalidAssignmentError, match="is final"):
            apply_to_object(style, "focus_width", 99)
        assert style.focus_width == 2

    def test_unresolvable_final_is_read_only(self):
        with pytest.raises(InvalidAssignmentError):
            apply_to_object(LockedStyle(), "limit", 1)

    def test_unresolvable_field_accepts_any_value(self):
        style = LockedStyle()
        apply_to_object(style, "scale", "1.25")
        assert style.scale == "1.25"

    def test_other_fields_still_type_checked(self):
        with pytest.raises(InvalidAssignmentError):
            apply_to_object(LockedStyle(), "arc", "wide")
        assert styleable_slots(LockedStyle)["arc"].type is int


class TestStdlibMixins:
    def test_generic_before_styleable_base(self):
        style = GenericStyle()
        assert apply_to_object(style, "arc", 3) == 6
        assert style.arc == 3
        assert {"arc", "margin", "payload"} <= set(styleable_slots(GenericStyle))

    def test_abc_before_styleable_base(self):
        style = AbstractStyle()
        apply_to_object(style, "arc", 9)
        assert style.arc == 9
        with pytest.raises(InvalidAssignmentError):
            apply_to_object(style, "focus_width", 1)
