"""Pane split orientation."""

from enum import Enum
from typing import Any

from airmux.schemas.fields import describe_value, field_error, quote


class PaneSplit(str, Enum):
    """Direction in which a pane is split off its sibling."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


_SPELLINGS = {
    "v": PaneSplit.VERTICAL,
    "vertical": PaneSplit.VERTICAL,
    "h": PaneSplit.HORIZONTAL,
    "horizontal": PaneSplit.HORIZONTAL,
}


def parse_split(value: str) -> PaneSplit:
    """Parse a split orientation, case-insensitively.

    Raises:
        ValueError: If the value is not one of v|h|vertical|horizontal
    """
    split = _SPELLINGS.get(value.lower())
    if split is None:
        raise ValueError(f"expected split value {quote(value)} to match v|h|vertical|horizontal")
    return split


def decode_split(level: str, field: str, value: Any):
    """Decode an optional split field: null leaves it unset, strings are parsed."""
    if value is None or isinstance(value, PaneSplit):
        return value
    if isinstance(value, str):
        return parse_split(value)
    raise field_error(level, field, describe_value(value, level))
