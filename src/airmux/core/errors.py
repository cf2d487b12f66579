"""Typed error taxonomy for airmux."""

__all__ = [
    "AirmuxError",
    "DecodeError",
    "CheckError",
    "ConfigError",
    "format_error",
]


class AirmuxError(Exception):
    """Base class for all operator-facing errors raised by airmux."""


class DecodeError(AirmuxError, ValueError):
    """Project text could not be decoded: bad shape, unknown field, conflicting fields."""


class CheckError(AirmuxError, ValueError):
    """A decoded project is structurally invalid (bad name, dangling index, missing directory)."""


class ConfigError(AirmuxError):
    """The tool configuration itself is invalid."""


def format_error(e: BaseException) -> str:
    """Return a short, uniform operator-facing message like 'CheckError: detail'."""
    name = e.__class__.__name__
    msg = str(e).strip()
    return f"{name}: {msg}" if msg else name
