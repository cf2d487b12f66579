"""Unit tests for split orientation parsing."""

import pytest

from airmux.schemas.split import PaneSplit, decode_split, parse_split


class TestParseSplit:
    """Test split spellings."""

    @pytest.mark.parametrize("value", ["v", "V", "vertical", "VERTICAL", "Vertical"])
    def test_vertical_spellings(self, value):
        """Test every vertical spelling, case-insensitively."""
        assert parse_split(value) is PaneSplit.VERTICAL

    @pytest.mark.parametrize("value", ["h", "H", "horizontal", "HORIZONTAL"])
    def test_horizontal_spellings(self, value):
        """Test every horizontal spelling, case-insensitively."""
        assert parse_split(value) is PaneSplit.HORIZONTAL

    def test_unknown_value(self):
        """Test that an unknown value names itself and the vocabulary."""
        with pytest.raises(ValueError) as exc_info:
            parse_split("x")
        assert str(exc_info.value) == 'expected split value "x" to match v|h|vertical|horizontal'


class TestDecodeSplit:
    """Test the split field decoder."""

    def test_null_unset(self):
        """Test that null leaves the split unset."""
        assert decode_split("pane", "split", None) is None

    def test_string_parsed(self):
        """Test that strings are parsed."""
        assert decode_split("pane", "split", "h") is PaneSplit.HORIZONTAL

    def test_number_rejected(self):
        """Test that a number is a shape error."""
        with pytest.raises(ValueError) as exc_info:
            decode_split("pane", "split", 1)
        assert str(exc_info.value) == 'pane field "split" cannot be a number'
