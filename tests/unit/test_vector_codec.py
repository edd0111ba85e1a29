"""Unit tests for pgkb.utils.vector_codec."""

from __future__ import annotations

from fractions import Fraction

import pytest

from pgkb.utils.vector_codec import is_vector_value, parse_vector, to_vector_literal


class _ArrayLike:
    def __init__(self, values):
        self._values = values

    def tolist(self):
        return list(self._values)


class _RealArray:
    """Sized, iterable container like a numpy array, not a list or tuple."""

    def __init__(self, values):
        self._values = list(values)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self):
        return iter(self._values)


class TestToVectorLiteral:
    def test_integers(self) -> None:
        assert to_vector_literal([1, 2, 3]) == "[1,2,3]"

    def test_floats(self) -> None:
        assert to_vector_literal([2.5, -0.125]) == "[2.5,-0.125]"

    def test_single_component(self) -> None:
        assert to_vector_literal((7,)) == "[7]"

    def test_non_float_reals(self) -> None:
        assert to_vector_literal([Fraction(1, 2), Fraction(3, 1)]) == "[0.5,3.0]"

    def test_array_like_of_reals(self) -> None:
        assert to_vector_literal(_RealArray([Fraction(1, 4), 2])) == "[0.25,2]"

    @pytest.mark.parametrize("bad", [["1"], [True], [None]])
    def test_non_numbers_rejected(self, bad) -> None:
        with pytest.raises(TypeError, match="must be numbers"):
            to_vector_literal(bad)


class TestParseVector:
    def test_text_literal(self) -> None:
        assert parse_vector("[1,2,3]") == [1.0, 2.0, 3.0]

    def test_text_literal_with_spaces_and_exponent(self) -> None:
        assert parse_vector("[1.5, 2e-3]") == [1.5, 0.002]

    def test_bytes_literal(self) -> None:
        assert parse_vector(b"[4,5]") == [4.0, 5.0]

    def test_list_passthrough(self) -> None:
        assert parse_vector([1, 2]) == [1.0, 2.0]

    def test_array_like(self) -> None:
        assert parse_vector(_ArrayLike([0.5, 1])) == [0.5, 1.0]

    def test_null_rejected(self) -> None:
        with pytest.raises(ValueError, match="NULL"):
            parse_vector(None)

    def test_non_array_literal_rejected(self) -> None:
        with pytest.raises(ValueError, match="Not a vector literal"):
            parse_vector("42")

    def test_unsupported_type_rejected(self) -> None:
        with pytest.raises(TypeError):
            parse_vector(3.14)


class TestIsVectorValue:
    @pytest.mark.parametrize("value", [[1], (1, 2), []])
    def test_sequences(self, value) -> None:
        assert is_vector_value(value)

    @pytest.mark.parametrize("value", ["[1,2]", 1, None, {"a": 1}])
    def test_scalars_and_strings(self, value) -> None:
        assert not is_vector_value(value)
