"""Compact re-serialization: the tersest text that decodes back to the same project."""

import json
from typing import Any

import yaml

from airmux.schemas.command import unescape_command
from airmux.schemas.pane import Pane
from airmux.schemas.project import DEFAULT_BASE_INDEX, Project
from airmux.schemas.template import ProjectTemplate
from airmux.schemas.window import Window, default_panes
from airmux.schemas.working_dir import serialize_working_dir

PANE_COMMAND_FIELDS = ("on_create", "post_create", "commands")
WINDOW_COMMAND_FIELDS = ("on_create", "post_create", "on_pane_create", "post_pane_create", "pane_commands")
PROJECT_COMMAND_FIELDS = (
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


def _commands(commands: list[str]) -> list[str]:
    # Decoding escapes again, so emit commands as they were written
    return [unescape_command(command) for command in commands]


def _add_commands(data: dict[str, Any], model: Any, fields: tuple[str, ...]) -> None:
    for field in fields:
        commands = getattr(model, field)
        if commands:
            data[field] = _commands(commands)


def compact_pane(pane: Pane) -> Any:
    """
    Collapse a pane to null, a single command string or a map of its non-default fields.
    """
    attributes = pane.model_dump(exclude={"commands"})
    if len(pane.commands) <= 1 and attributes == Pane().model_dump(exclude={"commands"}):
        if not pane.commands:
            return None
        return unescape_command(pane.commands[0])

    data: dict[str, Any] = {}
    if pane.name is not None:
        data["name"] = pane.name
    if pane.working_dir is not None:
        data["working_dir"] = serialize_working_dir(pane.working_dir)
    if pane.split is not None:
        data["split"] = pane.split.value
    if pane.split_from is not None:
        data["split_from"] = pane.split_from
    if pane.split_size is not None:
        data["split_size"] = pane.split_size
    if pane.clear:
        data["clear"] = True
    _add_commands(data, pane, PANE_COMMAND_FIELDS)
    return data


def compact_window(window: Window) -> dict[str, Any]:
    """Serialize a window as a map; ``name`` is always present, even when null."""
    data: dict[str, Any] = {"name": window.name}
    if window.working_dir is not None:
        data["working_dir"] = serialize_working_dir(window.working_dir)
    if window.layout is not None:
        data["layout"] = window.layout
    _add_commands(data, window, WINDOW_COMMAND_FIELDS)
    if window.panes != default_panes():
        data["panes"] = [compact_pane(pane) for pane in window.panes]
    return data


def compact_template(template: ProjectTemplate) -> Any:
    if template.file is not None:
        return {"file": serialize_working_dir(template.file)}
    return template.raw


def compact_project(project: Project) -> dict[str, Any]:
    """Build the plain-data compact form of a project, omitting every default value."""
    data: dict[str, Any] = {}
    for field in ("session_name", "tmux_command", "tmux_options", "tmux_socket"):
        value = getattr(project, field)
        if value is not None:
            data[field] = value
    if project.working_dir is not None:
        data["working_dir"] = serialize_working_dir(project.working_dir)
    if project.window_base_index != DEFAULT_BASE_INDEX:
        data["window_base_index"] = project.window_base_index
    if project.pane_base_index != DEFAULT_BASE_INDEX:
        data["pane_base_index"] = project.pane_base_index
    if project.startup_window is not None:
        data["startup_window"] = project.startup_window
    if project.startup_pane is not None:
        data["startup_pane"] = project.startup_pane
    _add_commands(data, project, PROJECT_COMMAND_FIELDS)
    if not project.attach:
        data["attach"] = False
    if not project.template.is_default:
        data["template"] = compact_template(project.template)
    if project.windows != [Window()]:
        data["windows"] = [compact_window(window) for window in project.windows]
    return data


def serialize_compact(project: Project, as_json: bool = False) -> str:
    """
    Serialize a project to its most terse YAML (or pretty JSON) form.

    Args:
        project: Project to serialize
        as_json: Emit JSON instead of YAML

    Returns:
        Text that :func:`airmux.core.decoder.decode` turns back into ``project``
    """
    data = compact_project(project)
    if as_json:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return yaml.safe_dump(data, sort_keys=False, default_flow_style=False, allow_unicode=True)
