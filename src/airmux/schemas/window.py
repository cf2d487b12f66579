"""Schema for a window and its panes."""

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from airmux.schemas.command import decode_command_list
from airmux.schemas.fields import (
    DECODE_CONTEXT,
    decode_definition,
    decode_entries,
    decode_text,
    invalid_named_value,
    is_decoding,
)
from airmux.schemas.pane import Pane
from airmux.schemas.working_dir import resolve_working_dir

WINDOW_FIELD_ALIASES = {
    "name": "name",
    "title": "name",
    "working_dir": "working_dir",
    "root": "working_dir",
    "layout": "layout",
    "on_create": "on_create",
    "post_create": "post_create",
    "on_pane_create": "on_pane_create",
    "post_pane_create": "post_pane_create",
    "pane_commands": "pane_commands",
    "pane_command": "pane_commands",
    "pre": "pane_commands",
    "panes": "panes",
}


def default_panes() -> list[Pane]:
    """A window starts with a single empty pane."""
    return [Pane()]


class Window(BaseModel):
    """A tab-like container of panes within the session."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Optional[str] = Field(default=None, description="Window name, unset when absent")
    working_dir: Optional[Path] = Field(
        default=None, description="Directory for the window; inherits the project's when unset"
    )
    layout: Optional[str] = Field(
        default=None, description="tmux layout, exclusive with pane split/split_size"
    )
    on_create: list[str] = Field(default_factory=list)
    post_create: list[str] = Field(default_factory=list)
    on_pane_create: list[str] = Field(default_factory=list)
    post_pane_create: list[str] = Field(default_factory=list)
    pane_commands: list[str] = Field(
        default_factory=list, description="Commands run in every pane before its own"
    )
    panes: list[Pane] = Field(default_factory=default_panes)

    @model_validator(mode="before")
    @classmethod
    def decode_shape(cls, data: Any, info: ValidationInfo) -> Any:
        """Turn any accepted window shape into a dict of canonical fields.

        null is the default window, a string is a window with one pane running
        that command, a list is one pane per item, and a map is decoded entry
        by entry like a pane map. A name-prefixed entry may also carry a list
        of pane definitions (``my window: [pane, pane]``).
        """
        if not is_decoding(info) or isinstance(data, Window):
            return data
        if data is None:
            return {}
        if isinstance(data, str):
            return {"panes": [data]}
        if isinstance(data, list):
            return {"panes": data}
        if isinstance(data, dict):
            return decode_entries("window", data, WINDOW_FIELD_ALIASES, cls._decode_named)
        raise invalid_named_value("window", None, data)

    @staticmethod
    def _decode_named(name: Optional[str], value: Any) -> dict[str, Any]:
        named = {} if name is None else {"name": name}
        if value is None:
            return named
        if isinstance(value, str):
            return {**named, "panes": [value]}
        if isinstance(value, list):
            return {**named, "panes": value}
        if isinstance(value, dict):
            return {**named, **decode_definition("window", value, WINDOW_FIELD_ALIASES)}
        raise invalid_named_value("window", name, value)

    @field_validator("name", mode="before")
    @classmethod
    def decode_name(cls, v: Any, info: ValidationInfo) -> Any:
        if not is_decoding(info):
            return v
        return decode_text("window", info.field_name, v)

    @field_validator("layout", mode="before")
    @classmethod
    def decode_layout(cls, v: Any, info: ValidationInfo) -> Any:
        if not is_decoding(info):
            return v
        return decode_text("window", info.field_name, v, numbers=False)

    @field_validator("working_dir", mode="before")
    @classmethod
    def decode_working_dir(cls, v: Any, info: ValidationInfo) -> Any:
        if not is_decoding(info):
            return v
        return resolve_working_dir("window", info.field_name, v)

    @field_validator(
        "on_create", "post_create", "on_pane_create", "post_pane_create", "pane_commands",
        mode="before",
    )
    @classmethod
    def decode_commands(cls, v: Any, info: ValidationInfo) -> Any:
        """Normalize hook and pane command lists."""
        if not is_decoding(info):
            return v
        return decode_command_list("window", info.field_name, v)

    @field_validator("panes", mode="before")
    @classmethod
    def decode_panes(cls, v: Any, info: ValidationInfo) -> Any:
        """Accept null (one default pane), a single pane shape or a list of pane shapes."""
        if not is_decoding(info):
            return v
        if v is None or v == []:
            return [None]
        if isinstance(v, list):
            return v
        return [v]

    @classmethod
    def from_commands(cls, *commands: str) -> "Window":
        """Build the window a bare command string (or list) decodes to."""
        return cls.model_validate(list(commands), context=DECODE_CONTEXT)
