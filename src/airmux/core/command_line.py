"""Helpers that turn a project's launch settings into a tmux command line."""

import os
import shlex
from collections.abc import Sequence
from pathlib import Path

from airmux.schemas.project import Project


def parse_command(command: str, args: Sequence[str] = ()) -> list[str]:
    """
    Split a shell-style command string and append extra arguments.

    Args:
        command: Command string, e.g. ``"tmux -2"``
        args: Arguments appended after the split command

    Returns:
        Argument vector, program first

    Raises:
        ValueError: If the command is empty or its quoting is unbalanced
    """
    if not command:
        raise ValueError("Command cannot be empty")
    parts = shlex.split(command)
    if not parts:
        raise ValueError("Command cannot be empty")
    return parts + list(args)


def tmux_command(project: Project, args: Sequence[str] = ()) -> list[str]:
    """
    Build the tmux argument vector for a prepared project.

    The socket (``-L``) and ``tmux_options`` come before ``args``.

    Raises:
        ValueError: If the project has no launch command (it was not prepared)
    """
    if project.tmux_command is None:
        raise ValueError("tmux command not set")

    full_args: list[str] = []
    if project.tmux_socket is not None:
        full_args.extend(["-L", project.tmux_socket])
    if project.tmux_options is not None:
        full_args.extend(shlex.split(project.tmux_options))
    full_args.extend(args)

    return parse_command(project.tmux_command, full_args)


def tmux(project: Project, args: Sequence[str] = ()) -> str:
    """Shell-quoted form of :func:`tmux_command`, for use inside generated scripts."""
    return shlex.join(tmux_command(project, args))


def get_project_namespace(project_name: str) -> Path:
    """
    Return the namespace part of a project name (``my/space/project`` -> ``my/space``).

    Raises:
        ValueError: If the name ends with a separator or is an absolute path
    """
    if project_name.endswith(os.sep):
        raise ValueError("Project name should not have a trailing slash")

    path = Path(project_name)
    if path.is_absolute() or path.anchor:
        raise ValueError("Project name should not be an absolute path")

    return path.parent
