"""Inheritance cascade: a fully-resolved, read-only view of a project.

Working directories and pane hooks set at the project or window level flow
down to every window and pane. The decoded ``Project`` is left untouched so
that it still serializes back to what was written.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from airmux.schemas.pane import Pane
from airmux.schemas.project import Project
from airmux.schemas.split import PaneSplit
from airmux.schemas.window import Window


class ResolvedPane(BaseModel):
    """A pane with everything it inherits applied."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(description="Position within the window, counted from pane_base_index")
    name: Optional[str] = None
    working_dir: Optional[Path] = None
    split: Optional[PaneSplit] = None
    split_from: Optional[int] = None
    split_size: Optional[str] = None
    clear: bool = False
    on_create: list[str] = Field(default_factory=list)
    post_create: list[str] = Field(default_factory=list)
    pre_commands: list[str] = Field(
        default_factory=list, description="Project then window pane_commands, run before commands"
    )
    commands: list[str] = Field(default_factory=list)


class ResolvedWindow(BaseModel):
    """A window with project-level pane hooks merged into its own."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(description="Position within the session, counted from window_base_index")
    name: Optional[str] = None
    working_dir: Optional[Path] = None
    layout: Optional[str] = None
    on_create: list[str] = Field(default_factory=list)
    post_create: list[str] = Field(default_factory=list)
    on_pane_create: list[str] = Field(default_factory=list)
    post_pane_create: list[str] = Field(default_factory=list)
    pane_commands: list[str] = Field(default_factory=list)
    panes: list[ResolvedPane] = Field(default_factory=list)


class ResolvedProject(BaseModel):
    """The project as a launcher sees it: every inherited value already applied."""

    model_config = ConfigDict(frozen=True)

    project: Project = Field(description="The decoded project this view was built from")
    windows: list[ResolvedWindow] = Field(default_factory=list)

    @property
    def startup_window_index(self) -> int:
        """Position of the window to select after start."""
        startup_window = self.project.startup_window
        if isinstance(startup_window, int):
            return startup_window
        if isinstance(startup_window, str):
            for window in self.windows:
                if window.name == startup_window:
                    return window.index
        return self.project.window_base_index


def resolve_pane(resolved_window: ResolvedWindow, pane: Pane, index: int) -> ResolvedPane:
    return ResolvedPane(
        index=index,
        name=pane.name,
        working_dir=pane.working_dir or resolved_window.working_dir,
        split=pane.split,
        split_from=pane.split_from,
        split_size=pane.split_size,
        clear=pane.clear,
        on_create=resolved_window.on_pane_create + pane.on_create,
        post_create=resolved_window.post_pane_create + pane.post_create,
        pre_commands=resolved_window.pane_commands,
        commands=pane.commands,
    )


def resolve_window(project: Project, window: Window, index: int) -> ResolvedWindow:
    resolved = ResolvedWindow(
        index=index,
        name=window.name,
        working_dir=window.working_dir or project.working_dir,
        layout=window.layout,
        on_create=window.on_create,
        post_create=window.post_create,
        on_pane_create=project.on_pane_create + window.on_pane_create,
        post_pane_create=project.post_pane_create + window.post_pane_create,
        pane_commands=project.pane_commands + window.pane_commands,
    )
    panes = [
        resolve_pane(resolved, pane, project.pane_base_index + position)
        for position, pane in enumerate(window.panes)
    ]
    return resolved.model_copy(update={"panes": panes})


def resolve(project: Project) -> ResolvedProject:
    """Build the resolved view of ``project``; the project itself is not modified."""
    windows = [
        resolve_window(project, window, project.window_base_index + position)
        for position, window in enumerate(project.windows)
    ]
    return ResolvedProject(project=project, windows=windows)
