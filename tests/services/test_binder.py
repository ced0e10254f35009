"""Tests for constructor eligibility and per-combination binding."""

from __future__ import annotations

import abc

import pytest

from paramatrix.domain.dimensions import Combination
from paramatrix.domain.errors import BindingError, DeclarationError
from paramatrix.domain.slots import resolve_slots
from paramatrix.domain.types import BindingStrategy, ErrorCode
from paramatrix.services.binder import Binder, check_constructor


class Pair:
    def __init__(self, left: int, right: str) -> None:
        self.left = left
        self.right = right


class Varargs:
    def __init__(self, *items: int) -> None:
        self.items = items


class Point:
    x: int = 0

    def __init__(self) -> None:
        self.y = 0
        self.calls: list[str] = []

    def setY(self, value: int) -> None:  # noqa: N802
        self.calls.append("setY")
        self.y = value


class Exploding:
    def __init__(self, value: int) -> None:
        raise RuntimeError("boom")


class Picky:
    level: int = 0

    def setMode(self, mode: str) -> None:  # noqa: N802
        raise ValueError(f"unsupported mode {mode}")


class Base(abc.ABC):
    @abc.abstractmethod
    def run(self) -> None: ...


def _combo(*values: object) -> Combination:
    return Combination(values=values, indices=tuple(range(len(values))))


def _attribute_binder(subject_type: type, names: list[str], *, check: bool = True) -> Binder:
    signature = check_constructor(subject_type, BindingStrategy.ATTRIBUTES)
    return Binder(
        subject_type,
        BindingStrategy.ATTRIBUTES,
        slots=resolve_slots(subject_type, names),
        attribute_names=names,
        signature=signature,
        check_types=check,
    )


def _constructor_binder(subject_type: type, *, check: bool = True) -> Binder:
    signature = check_constructor(subject_type, BindingStrategy.CONSTRUCTOR)
    return Binder(
        subject_type, BindingStrategy.CONSTRUCTOR, signature=signature, check_types=check
    )


class TestCheckConstructor:
    def test_abstract_rejected(self) -> None:
        with pytest.raises(DeclarationError) as exc_info:
            check_constructor(Base, BindingStrategy.CONSTRUCTOR)
        assert exc_info.value.code is ErrorCode.INVALID_CONSTRUCTOR

    def test_non_class_rejected(self) -> None:
        with pytest.raises(DeclarationError) as exc_info:
            check_constructor(len, BindingStrategy.CONSTRUCTOR)
        assert exc_info.value.code is ErrorCode.INVALID_CONSTRUCTOR

    def test_attributes_need_no_arg_constructor(self) -> None:
        with pytest.raises(DeclarationError) as exc_info:
            check_constructor(Pair, BindingStrategy.ATTRIBUTES)
        assert exc_info.value.code is ErrorCode.INVALID_CONSTRUCTOR

    def test_constructor_strategy_accepts_arguments(self) -> None:
        signature = check_constructor(Pair, BindingStrategy.CONSTRUCTOR)
        assert signature is not None
        assert list(signature.parameters) == ["left", "right"]


class TestConstructorBinding:
    def test_values_passed_positionally(self) -> None:
        subject = _constructor_binder(Pair).bind(_combo(1, "A"))
        assert isinstance(subject, Pair)
        assert (subject.left, subject.right) == (1, "A")

    def test_fresh_instance_per_bind(self) -> None:
        binder = _constructor_binder(Pair)
        a = binder.bind(_combo(1, "A"))
        b = binder.bind(_combo(1, "A"))
        assert a is not b

    def test_arity_mismatch(self) -> None:
        with pytest.raises(BindingError) as exc_info:
            _constructor_binder(Pair).bind(_combo(1))
        assert exc_info.value.code is ErrorCode.ARITY_MISMATCH

    def test_type_mismatch(self) -> None:
        with pytest.raises(BindingError) as exc_info:
            _constructor_binder(Pair).bind(_combo("1", "A"))
        assert exc_info.value.code is ErrorCode.TYPE_MISMATCH
        assert exc_info.value.detail["slot"] == "left"

    def test_type_check_disabled(self) -> None:
        subject = _constructor_binder(Pair, check=False).bind(_combo("1", "A"))
        assert subject.left == "1"

    def test_varargs_checked_per_item(self) -> None:
        binder = _constructor_binder(Varargs)
        assert binder.bind(_combo(1, 2, 3)).items == (1, 2, 3)
        with pytest.raises(BindingError) as exc_info:
            binder.bind(_combo(1, "two"))
        assert exc_info.value.code is ErrorCode.TYPE_MISMATCH

    def test_constructor_exception_wrapped(self) -> None:
        with pytest.raises(BindingError) as exc_info:
            _constructor_binder(Exploding).bind(_combo(1))
        assert exc_info.value.code is ErrorCode.BIND_FAILED
        assert isinstance(exc_info.value.__cause__, RuntimeError)


class TestAttributeBinding:
    def test_field_then_setter(self) -> None:
        subject = _attribute_binder(Point, ["x", "y"]).bind(_combo(5, 6))
        assert (subject.x, subject.y) == (5, 6)
        assert subject.calls == ["setY"]

    def test_subjects_do_not_share_state(self) -> None:
        binder = _attribute_binder(Point, ["x", "y"])
        a = binder.bind(_combo(1, 2))
        b = binder.bind(_combo(3, 4))
        assert (a.x, a.y) == (1, 2)
        assert (b.x, b.y) == (3, 4)
        assert a.calls is not b.calls
        assert Point.x == 0

    def test_value_count_mismatch(self) -> None:
        with pytest.raises(BindingError) as exc_info:
            _attribute_binder(Point, ["x", "y"]).bind(_combo(1))
        assert exc_info.value.code is ErrorCode.ARITY_MISMATCH

    def test_field_type_mismatch(self) -> None:
        with pytest.raises(BindingError) as exc_info:
            _attribute_binder(Point, ["x"]).bind(_combo("five"))
        assert exc_info.value.code is ErrorCode.TYPE_MISMATCH

    def test_setter_exception_wrapped(self) -> None:
        with pytest.raises(BindingError) as exc_info:
            _attribute_binder(Picky, ["mode"]).bind(_combo("turbo"))
        error = exc_info.value
        assert error.code is ErrorCode.BIND_FAILED
        assert error.detail == {"attribute": "mode", "slot": "setter", "exception": "ValueError"}
        assert isinstance(error.__cause__, ValueError)
