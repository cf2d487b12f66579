"""Command-list normalization shared by every hook and command field."""

from typing import Any

from airmux.schemas.fields import describe_value, field_error


def normalize_command(command: str) -> str:
    """Escape a single command for tmux's control syntax.

    Every ``#`` is doubled so it survives tmux's format expansion, and line
    endings are folded so the command stays a single logical line: ``\\n``
    becomes a space and ``\\r`` is dropped.
    """
    return command.replace("#", "##").replace("\n", " ").replace("\r", "")


def normalize_command_list(commands: list[str]) -> list[str]:
    """Normalize every command of a list, preserving order."""
    return [normalize_command(command) for command in commands]


def unescape_command(command: str) -> str:
    """Inverse of the ``#`` doubling done by :func:`normalize_command`."""
    return command.replace("##", "#")


def is_command_list(value: Any) -> bool:
    """True when ``value`` is a list made only of strings."""
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def decode_command_list(level: str, field: str, value: Any) -> list[str]:
    """Decode an ``absent | string | list of strings`` field into a command list.

    Args:
        level: Entity being decoded ("project", "window" or "pane"), used in errors
        field: Canonical field name, used in errors
        value: Raw decoded markup value

    Returns:
        Ordered list of normalized commands (empty for null)

    Raises:
        ValueError: If the value is any other shape
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [normalize_command(value)]
    if is_command_list(value):
        return normalize_command_list(value)
    raise field_error(level, field, describe_value(value, level))
