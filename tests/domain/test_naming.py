"""Tests for case-name template rendering."""

from paramatrix.domain.dimensions import Combination
from paramatrix.domain.naming import DEFAULT_TEMPLATE, format_name


def _combo(values: tuple, indices: tuple, ordinal: int = 0) -> Combination:
    return Combination(values=values, indices=indices, ordinal=ordinal)


class TestFormatName:
    def test_default_template_renders_indices(self) -> None:
        assert format_name(DEFAULT_TEMPLATE, _combo(("x", "y"), (0, 1))) == "[0, 1]"

    def test_none_template_uses_default(self) -> None:
        assert format_name(None, _combo((5,), (2,))) == "[2]"

    def test_positional_renders_values(self) -> None:
        name = format_name("{0}-{1}", _combo(("x", "y"), (0, 1)))
        assert name == "x-y"
        assert name != format_name(DEFAULT_TEMPLATE, _combo(("x", "y"), (0, 1)))

    def test_repeated_positional(self) -> None:
        assert format_name("{0}{0}", _combo((7,), (0,))) == "77"

    def test_out_of_range_left_verbatim(self) -> None:
        assert format_name("{0}/{5}", _combo((1,), (0,))) == "1/{5}"

    def test_index_placeholder(self) -> None:
        assert format_name("[{index}]", _combo((1,), (3,), ordinal=3)) == "[3]"

    def test_list_and_positional_together(self) -> None:
        assert format_name("{list}:{1}", _combo((1, "B"), (0, 1))) == "[0, 1]:B"

    def test_values_rendered_with_str(self) -> None:
        assert format_name("{0}", _combo((None,), (0,))) == "None"

    def test_value_text_is_not_reinterpreted(self) -> None:
        assert format_name("{0}", _combo(("{1}", "z"), (0, 0))) == "{1}"

    def test_plain_text_passes_through(self) -> None:
        assert format_name("case", _combo((1,), (0,))) == "case"

    def test_unprintable_value_falls_back_to_object_repr(self) -> None:
        class Unprintable:
            def __str__(self) -> str:
                raise RuntimeError("no text")

        value = Unprintable()
        name = format_name("v={0}/{1}", _combo((value, 2), (0, 1)))
        assert name == f"v={object.__repr__(value)}/2"
