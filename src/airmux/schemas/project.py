"""Schema for a project: the root of a session definition."""

from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from airmux.schemas.command import decode_command_list
from airmux.schemas.fields import (
    decode_index,
    decode_text,
    describe_value,
    field_error,
    is_decoding,
    is_index,
    map_key,
)
from airmux.schemas.template import ProjectTemplate
from airmux.schemas.window import Window
from airmux.schemas.working_dir import resolve_working_dir

PROJECT_FIELD_ALIASES = {
    "session_name": "session_name",
    "name": "session_name",
    "tmux_command": "tmux_command",
    "tmux_options": "tmux_options",
    "tmux_socket": "tmux_socket",
    "socket_name": "tmux_socket",
    "working_dir": "working_dir",
    "root": "working_dir",
    "window_base_index": "window_base_index",
    "pane_base_index": "pane_base_index",
    "startup_window": "startup_window",
    "startup_pane": "startup_pane",
    "on_start": "on_start",
    "on_project_start": "on_start",
    "on_first_start": "on_first_start",
    "on_project_first_start": "on_first_start",
    "on_create": "on_first_start",
    "on_restart": "on_restart",
    "on_project_restart": "on_restart",
    "on_exit": "on_exit",
    "on_project_exit": "on_exit",
    "on_stop": "on_stop",
    "on_project_stop": "on_stop",
    "post_create": "post_create",
    "on_pane_create": "on_pane_create",
    "post_pane_create": "post_pane_create",
    "pane_commands": "pane_commands",
    "pane_command": "pane_commands",
    "pre_window": "pane_commands",
    "attach": "attach",
    "tmux_attached": "attach",
    "detached": "detached",
    "tmux_detached": "detached",
    "template": "template",
    "windows": "windows",
    "window": "windows",
}

COMMAND_LIST_FIELDS = (
    "on_start",
    "on_first_start",
    "on_restart",
    "on_exit",
    "on_stop",
    "post_create",
    "on_pane_create",
    "post_pane_create",
    "pane_commands",
)

DEFAULT_BASE_INDEX = 1
DEFAULT_TMUX_COMMAND = "tmux"


def default_windows() -> list[Window]:
    """A project starts with a single default window."""
    return [Window()]


class PrepareContext(BaseModel):
    """What the invoking workflow knows when a project is prepared for use."""

    model_config = ConfigDict(frozen=True)

    default_name: str = Field(description="Session name to use when the project sets none")
    configured_launch_command: Optional[str] = Field(
        default=None, description="tmux command configured for this environment, if any"
    )


class Project(BaseModel):
    """A session definition: tmux settings, lifecycle hooks and windows."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    session_name: Optional[str] = None
    tmux_command: Optional[str] = None
    tmux_options: Optional[str] = None
    tmux_socket: Optional[str] = None
    working_dir: Optional[Path] = None
    window_base_index: int = DEFAULT_BASE_INDEX
    pane_base_index: int = DEFAULT_BASE_INDEX
    startup_window: Optional[Union[int, str]] = Field(
        default=None, description="Window selected after start: an index, a name, or unset"
    )
    startup_pane: Optional[int] = None
    on_start: list[str] = Field(default_factory=list)
    on_first_start: list[str] = Field(default_factory=list)
    on_restart: list[str] = Field(default_factory=list)
    on_exit: list[str] = Field(default_factory=list)
    on_stop: list[str] = Field(default_factory=list)
    post_create: list[str] = Field(default_factory=list)
    on_pane_create: list[str] = Field(default_factory=list)
    post_pane_create: list[str] = Field(default_factory=list)
    pane_commands: list[str] = Field(default_factory=list)
    attach: bool = True
    template: ProjectTemplate = Field(default_factory=ProjectTemplate)
    windows: list[Window] = Field(default_factory=default_windows)

    @model_validator(mode="before")
    @classmethod
    def decode_shape(cls, data: Any, info: ValidationInfo) -> Any:
        """Decode the closed project map: resolve aliases and attach/detached."""
        if not is_decoding(info) or isinstance(data, Project):
            return data
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(
                f"expected project definition to be a map, found {describe_value(data, 'project')}"
            )

        decoded: dict[str, Any] = {}
        for key, value in data.items():
            key = map_key(key, "project")
            field = PROJECT_FIELD_ALIASES.get(key) if key is not None else None
            if field is None:
                expected = ", ".join(f"`{name}`" for name in cls.model_fields)
                raise ValueError(f"unknown field `{key}`, expected one of {expected}")
            if field in decoded:
                raise ValueError(f"duplicate field `{field}`")
            decoded[field] = value

        attach = _decode_switch("attach", decoded.pop("attach", None))
        detached = _decode_switch("detached", decoded.pop("detached", None))
        if attach is not None and detached is not None:
            raise ValueError("cannot set both 'attach' and 'detached' fields")
        if attach is not None:
            decoded["attach"] = attach
        elif detached is not None:
            decoded["attach"] = not detached

        return decoded

    @field_validator("session_name", mode="before")
    @classmethod
    def decode_session_name(cls, v: Any, info: ValidationInfo) -> Any:
        if not is_decoding(info):
            return v
        return decode_text("project", info.field_name, v)

    @field_validator("tmux_command", "tmux_options", "tmux_socket", mode="before")
    @classmethod
    def decode_tmux_settings(cls, v: Any, info: ValidationInfo) -> Any:
        if not is_decoding(info):
            return v
        return decode_text("project", info.field_name, v, numbers=False)

    @field_validator("working_dir", mode="before")
    @classmethod
    def decode_working_dir(cls, v: Any, info: ValidationInfo) -> Any:
        if not is_decoding(info):
            return v
        return resolve_working_dir("project", info.field_name, v)

    @field_validator("window_base_index", "pane_base_index", mode="before")
    @classmethod
    def decode_base_index(cls, v: Any, info: ValidationInfo) -> Any:
        """null resets a base index to its default of 1."""
        if not is_decoding(info):
            return v
        index = decode_index("project", info.field_name, v)
        return DEFAULT_BASE_INDEX if index is None else index

    @field_validator("startup_window", mode="before")
    @classmethod
    def decode_startup_window(cls, v: Any, info: ValidationInfo) -> Any:
        """An integer selects by index, a string by name; null is the default window."""
        if not is_decoding(info):
            return v
        if v is None or isinstance(v, str) or is_index(v):
            return v
        raise field_error("project", info.field_name, describe_value(v, "project"))

    @field_validator("startup_pane", mode="before")
    @classmethod
    def decode_startup_pane(cls, v: Any, info: ValidationInfo) -> Any:
        if not is_decoding(info):
            return v
        return decode_index("project", info.field_name, v)

    @field_validator(*COMMAND_LIST_FIELDS, mode="before")
    @classmethod
    def decode_commands(cls, v: Any, info: ValidationInfo) -> Any:
        """Normalize lifecycle hook and pane command lists."""
        if not is_decoding(info):
            return v
        return decode_command_list("project", info.field_name, v)

    @field_validator("windows", mode="before")
    @classmethod
    def decode_windows(cls, v: Any, info: ValidationInfo) -> Any:
        """Accept null (one default window), a single window shape or a list of them."""
        if not is_decoding(info):
            return v
        if v is None or v == []:
            return [None]
        if isinstance(v, list):
            return v
        return [v]

    def prepare(self, context: PrepareContext, force_attach: Optional[bool] = None) -> "Project":
        """Fill in what the invoking environment decides; returns a new project.

        - session_name falls back to ``context.default_name``
        - ``force_attach`` overrides ``attach`` when given
        - a configured launch command always wins; otherwise the project's own
          command is kept, defaulting to ``tmux``
        """
        update: dict[str, Any] = {}
        if self.session_name is None:
            update["session_name"] = context.default_name
        if force_attach is not None:
            update["attach"] = force_attach
        if context.configured_launch_command is not None:
            update["tmux_command"] = context.configured_launch_command
        elif self.tmux_command is None:
            update["tmux_command"] = DEFAULT_TMUX_COMMAND
        return self.model_copy(update=update)


def _decode_switch(field: str, value: Any) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    raise field_error("project", field, describe_value(value, "project"))
