"""airmux: decode, validate and re-serialize tmux session definitions."""

from airmux.core.checks import check
from airmux.core.decoder import decode, load_project, prepare
from airmux.core.errors import AirmuxError, CheckError, ConfigError, DecodeError
from airmux.core.serializer import serialize_compact
from airmux.schemas import Pane, PaneSplit, PrepareContext, Project, ProjectTemplate, Window

__all__ = [
    "decode",
    "prepare",
    "load_project",
    "check",
    "serialize_compact",
    "Project",
    "Window",
    "Pane",
    "PaneSplit",
    "ProjectTemplate",
    "PrepareContext",
    "AirmuxError",
    "DecodeError",
    "CheckError",
    "ConfigError",
]
