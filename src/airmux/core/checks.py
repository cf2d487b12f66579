"""Structural validation of a decoded project tree."""

import os
import stat
from pathlib import Path
from typing import Optional

from airmux.core.errors import CheckError
from airmux.core.logging import get_logger
from airmux.schemas.fields import quote
from airmux.schemas.pane import Pane
from airmux.schemas.project import Project
from airmux.schemas.window import Window

# Separators tmux reserves in target names (session:window.pane)
ILLEGAL_IDENTIFIER_CHARACTERS = ".:"


def check_identifier(name: str) -> None:
    """Reject names containing characters tmux uses as target separators."""
    if any(char in name for char in ILLEGAL_IDENTIFIER_CHARACTERS):
        raise CheckError(
            f"name {quote(name)} cannot contain the following characters: "
            f"{ILLEGAL_IDENTIFIER_CHARACTERS}"
        )


def is_directory(path: Path) -> bool:
    """
    True when ``path`` exists and is a directory.

    Raises:
        OSError: For failures other than a missing path (e.g. permissions)
    """
    try:
        return stat.S_ISDIR(os.stat(path).st_mode)
    except (FileNotFoundError, NotADirectoryError):
        return False


def check_working_dir(level: str, path: Optional[Path]) -> None:
    if path is not None and not is_directory(path):
        raise CheckError(f"{level} working_dir {quote(path)} is not a directory or does not exist")


def check_startup_window(project: Project) -> None:
    startup_window = project.startup_window
    if startup_window is None:
        return

    if isinstance(startup_window, int):
        first = project.window_base_index
        if not first <= startup_window < first + len(project.windows):
            raise CheckError(f"startup_window: there is no window with index {startup_window}")
        return

    if not any(window.name == startup_window for window in project.windows):
        raise CheckError(f"startup_window: there is no window with name {quote(startup_window)}")


def check_pane(pane: Pane, pane_count: int) -> None:
    check_working_dir("pane", pane.working_dir)

    # Positions are zero-based whatever pane_base_index says
    if pane.split_from is not None and pane.split_from >= pane_count:
        raise CheckError(
            f"split_from: there is no pane with index {pane.split_from} "
            "(pane indexes always start at 0)"
        )


def check_window(window: Window) -> None:
    if window.name is not None:
        check_identifier(window.name)

    check_working_dir("window", window.working_dir)

    if window.layout is not None and any(
        pane.split is not None or pane.split_size is not None for pane in window.panes
    ):
        raise CheckError("layout: cannot use layout when sub-panes use split or split_size")

    for pane in window.panes:
        check_pane(pane, len(window.panes))


def check(project: Project) -> None:
    """
    Validate a decoded (and usually prepared) project, top-down.

    Stops at the first problem found.

    Raises:
        CheckError: If a name, index reference, working_dir or layout is invalid
        OSError: If a working_dir cannot be inspected for another reason
    """
    logger = get_logger()
    try:
        if project.session_name is not None:
            check_identifier(project.session_name)
        check_startup_window(project)
        check_working_dir("project", project.working_dir)
        for window in project.windows:
            check_window(window)
    except CheckError as e:
        logger.log_stage("check", "failed", error=str(e))
        raise

    logger.log_stage("check", "completed", session_name=project.session_name)
