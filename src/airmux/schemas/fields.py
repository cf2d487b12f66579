"""Shape categories and error messages shared by the Project/Window/Pane decoders."""

import json
from typing import Any, Callable, Optional

from pydantic import ValidationInfo

# Validation context flag: set by the text decoder, absent for direct construction
DECODE_CONTEXT = {"decode": True}


def is_decoding(info: ValidationInfo) -> bool:
    """True when a model is being validated from raw markup rather than built in code."""
    return bool(info.context and info.context.get("decode"))


def quote(value: Any) -> str:
    """Double-quote a value for an error message, escaping like a string literal."""
    return json.dumps(str(value), ensure_ascii=False)


def render(value: Any) -> str:
    """Render a raw scalar the way it reads in markup (true, 42, null)."""
    try:
        return json.dumps(value, ensure_ascii=False)
    except TypeError:
        return repr(value)


def describe_value(value: Any, level: str) -> str:
    """Name the shape category of a raw markup value, as used in shape errors."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "a boolean"
    if isinstance(value, (int, float)):
        return "a number"
    if isinstance(value, str):
        return "a string"
    if isinstance(value, list):
        if all(isinstance(item, str) for item in value):
            return "a command list"
        if level == "window":
            return "a pane list"
        return "a list"
    if isinstance(value, dict):
        if level in ("pane", "window"):
            return f"a {level} definition"
        return "a map"
    return f"a {type(value).__name__}"


def field_error(level: str, field: str, category: str) -> ValueError:
    """Build the shape error for a field that does not accept ``category``."""
    return ValueError(f"{level} field {quote(field)} cannot be {category}")


def is_index(value: Any) -> bool:
    """True for non-negative integers (booleans excluded)."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def decode_index(level: str, field: str, value: Any) -> Any:
    """Decode an optional non-negative integer field."""
    if value is None or is_index(value):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        raise field_error(level, field, "a negative number")
    raise field_error(level, field, describe_value(value, level))


def decode_text(level: str, field: str, value: Any, numbers: bool = True) -> Any:
    """Decode an optional textual field; numbers are accepted as their textual form."""
    if value is None or isinstance(value, str):
        return value
    if numbers and is_index(value):
        return str(value)
    raise field_error(level, field, describe_value(value, level))


def decode_flag(level: str, field: str, value: Any) -> bool:
    """Decode a boolean field; null is false and numbers are true when non-zero."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if is_index(value):
        return value != 0
    raise field_error(level, field, describe_value(value, level))


def map_key(key: Any, level: str) -> Any:
    """Validate a mapping key: names are strings, ``~`` is the null name."""
    if key is None or isinstance(key, str):
        return key
    raise ValueError(
        f"invalid {level} key {key!r}: invalid type: {describe_value(key, level)}, expected a string"
    )


def decode_definition(level: str, data: dict, aliases: dict[str, str]) -> dict[str, Any]:
    """Decode an attributed map: every key must be a known field or alias.

    Returns a dict keyed by canonical field names with the raw values; the
    model's field validators decode the values themselves.
    """
    decoded: dict[str, Any] = {}
    for key, value in data.items():
        key = map_key(key, level)
        field = aliases.get(key) if key is not None else None
        if field is None:
            raise ValueError(f"unknown {level} field {quote(key)}")
        if field in decoded:
            raise ValueError(f"duplicate {level} field {quote(field)}")
        decoded[field] = value
    return decoded


def decode_entries(
    level: str,
    data: dict,
    aliases: dict[str, str],
    decode_named: Callable[[Optional[str], Any], dict[str, Any]],
) -> dict[str, Any]:
    """Decode a pane/window map entry by entry, in source order.

    Known keys (and their aliases) set the matching field. The first entry may
    instead carry the entity's name: an unknown key, or ``~`` for "no name",
    whose value is interpreted by ``decode_named``. An unknown key anywhere
    after the first entry is a shape error naming that key.
    """
    decoded: dict[str, Any] = {}
    for position, (key, value) in enumerate(data.items()):
        first = position == 0
        key = map_key(key, level)
        if key is None:
            if not first:
                raise ValueError("null name can only be set as first element of the map")
            decoded.update(decode_named(None, value))
            continue

        field = aliases.get(key)
        if field is not None:
            decoded[field] = value
        elif first:
            decoded.update(decode_named(key, value))
        else:
            raise field_error(level, key, describe_value(value, level))
    return decoded


def invalid_named_value(level: str, name: Optional[str], value: Any) -> ValueError:
    """Error for a name-prefixed entry whose value is a scalar no field accepts."""
    if name is None:
        return ValueError(f"invalid value for {level}: {render(value)}")
    return field_error(level, name, describe_value(value, level))
