"""Working directory resolution and its home-relative serialization."""

import os
from pathlib import Path
from typing import Any, Optional

from airmux.schemas.fields import describe_value, field_error, is_index


def home_working_dir() -> Path:
    """The user's home directory, used when a working_dir is explicitly null."""
    return Path(os.path.expanduser("~"))


def process_working_dir(path: str) -> Path:
    """Expand a leading ``~`` in a path string."""
    return Path(os.path.expanduser(path))


def resolve_working_dir(level: str, field: str, value: Any) -> Optional[Path]:
    """Decode a working_dir value.

    null means "the home directory", a string is a path (tilde-expanded) and a
    number is taken as its textual form. An absent field never reaches this
    function and stays unset so it can inherit from the parent.
    """
    if value is None:
        return home_working_dir()
    if isinstance(value, Path):
        return value
    if isinstance(value, str):
        return process_working_dir(value)
    if is_index(value) or isinstance(value, float):
        return process_working_dir(str(value))
    raise field_error(level, field, describe_value(value, level))


def serialize_working_dir(path: Path) -> str:
    """Collapse paths at or under the home directory back to ``~`` form."""
    home = home_working_dir()
    if path == home:
        return "~"
    try:
        relative = path.relative_to(home)
    except ValueError:
        return str(path)
    return str(Path("~") / relative)
