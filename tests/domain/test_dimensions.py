"""Tests for Dimension capture and Combination value objects."""

import pytest
from pydantic import ValidationError

from paramatrix.domain.dimensions import Combination, Dimension, dimensions_from


class TestDimension:
    def test_values_captured_as_tuple(self) -> None:
        dim = Dimension(values=[1, 2, 3])
        assert dim.values == (1, 2, 3)
        assert dim.size == 3
        assert len(dim) == 3

    def test_generator_is_captured_once(self) -> None:
        dim = Dimension(values=(x * 2 for x in range(3)))
        assert dim.values == (0, 2, 4)
        assert dim.values == (0, 2, 4)

    def test_empty_by_default(self) -> None:
        dim = Dimension()
        assert dim.values == ()
        assert dim.name is None

    def test_string_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Dimension(values="abc")

    def test_frozen(self) -> None:
        dim = Dimension(values=[1])
        with pytest.raises(ValidationError):
            dim.values = (2,)  # type: ignore[misc]

    def test_values_are_opaque(self) -> None:
        marker = object()
        dim = Dimension(values=[None, marker, [1, 2]])
        assert dim.values[1] is marker
        assert dim.values[2] == [1, 2]


class TestDimensionsFrom:
    def test_positional(self) -> None:
        dims = dimensions_from([[1, 2], ["A"]])
        assert [d.values for d in dims] == [(1, 2), ("A",)]
        assert all(d.name is None for d in dims)

    def test_named(self) -> None:
        dims = dimensions_from([[1], [2]], names=["x", "y"])
        assert [d.name for d in dims] == ["x", "y"]

    def test_name_count_must_match(self) -> None:
        with pytest.raises(ValueError):
            dimensions_from([[1], [2]], names=["x"])


class TestCombination:
    def test_len_and_describe(self) -> None:
        combo = Combination(values=(1, "A"), indices=(0, 1))
        assert len(combo) == 2
        assert combo.describe() == "0:1, 1:'A'"

    def test_immutable(self) -> None:
        combo = Combination(values=(1,), indices=(0,))
        with pytest.raises(AttributeError):
            combo.values = (2,)  # type: ignore[misc]

    def test_equality_by_value(self) -> None:
        a = Combination(values=(1,), indices=(0,), ordinal=3)
        b = Combination(values=(1,), indices=(0,), ordinal=3)
        assert a == b
