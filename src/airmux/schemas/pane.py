"""Schema for a single pane of a window."""

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from airmux.schemas.command import decode_command_list, is_command_list
from airmux.schemas.fields import (
    DECODE_CONTEXT,
    decode_definition,
    decode_entries,
    decode_flag,
    decode_index,
    decode_text,
    invalid_named_value,
    is_decoding,
)
from airmux.schemas.split import PaneSplit, decode_split
from airmux.schemas.working_dir import resolve_working_dir

PANE_FIELD_ALIASES = {
    "name": "name",
    "title": "name",
    "working_dir": "working_dir",
    "root": "working_dir",
    "split": "split",
    "split_from": "split_from",
    "split_size": "split_size",
    "clear": "clear",
    "on_create": "on_create",
    "post_create": "post_create",
    "commands": "commands",
    "command": "commands",
}


class Pane(BaseModel):
    """One terminal viewport and the commands it runs."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: Optional[str] = Field(default=None, description="Pane title, unset when absent")
    working_dir: Optional[Path] = Field(
        default=None, description="Directory the pane starts in; inherits the window's when unset"
    )
    split: Optional[PaneSplit] = Field(default=None, description="Split orientation")
    split_from: Optional[int] = Field(
        default=None, description="Zero-based position of the sibling pane to split"
    )
    split_size: Optional[str] = Field(
        default=None, description="Cell count (e.g. '20') or percentage (e.g. '50%')"
    )
    clear: bool = Field(default=False, description="Clear the pane before running commands")
    on_create: list[str] = Field(default_factory=list)
    post_create: list[str] = Field(default_factory=list)
    commands: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def decode_shape(cls, data: Any, info: ValidationInfo) -> Any:
        """Turn any accepted pane shape into a dict of canonical fields.

        null is the default pane, a string is a single command, a list is a
        command list and a map is decoded entry by entry (see
        :func:`~airmux.schemas.fields.decode_entries`).
        """
        if not is_decoding(info) or isinstance(data, Pane):
            return data
        if data is None:
            return {}
        if isinstance(data, (str, list)):
            return {"commands": data}
        if isinstance(data, dict):
            return decode_entries("pane", data, PANE_FIELD_ALIASES, cls._decode_named)
        raise invalid_named_value("pane", None, data)

    @staticmethod
    def _decode_named(name: Optional[str], value: Any) -> dict[str, Any]:
        named = {} if name is None else {"name": name}
        if value is None:
            return named
        if isinstance(value, str) or is_command_list(value):
            return {**named, "commands": value}
        if isinstance(value, dict):
            return {**named, **decode_definition("pane", value, PANE_FIELD_ALIASES)}
        raise invalid_named_value("pane", name, value)

    @field_validator("name", "split_size", mode="before")
    @classmethod
    def decode_text_fields(cls, v: Any, info: ValidationInfo) -> Any:
        if not is_decoding(info):
            return v
        return decode_text("pane", info.field_name, v)

    @field_validator("working_dir", mode="before")
    @classmethod
    def decode_working_dir(cls, v: Any, info: ValidationInfo) -> Any:
        if not is_decoding(info):
            return v
        return resolve_working_dir("pane", info.field_name, v)

    @field_validator("split", mode="before")
    @classmethod
    def decode_split_field(cls, v: Any, info: ValidationInfo) -> Any:
        if not is_decoding(info):
            return v
        return decode_split("pane", info.field_name, v)

    @field_validator("split_from", mode="before")
    @classmethod
    def decode_split_from(cls, v: Any, info: ValidationInfo) -> Any:
        if not is_decoding(info):
            return v
        return decode_index("pane", info.field_name, v)

    @field_validator("clear", mode="before")
    @classmethod
    def decode_clear(cls, v: Any, info: ValidationInfo) -> Any:
        if not is_decoding(info):
            return v
        return decode_flag("pane", info.field_name, v)

    @field_validator("on_create", "post_create", "commands", mode="before")
    @classmethod
    def decode_commands(cls, v: Any, info: ValidationInfo) -> Any:
        """Normalize command lists (string, list of strings or null)."""
        if not is_decoding(info):
            return v
        return decode_command_list("pane", info.field_name, v)

    @classmethod
    def from_commands(cls, *commands: str) -> "Pane":
        """Build the pane a bare command string (or list) decodes to."""
        return cls.model_validate(list(commands), context=DECODE_CONTEXT)
