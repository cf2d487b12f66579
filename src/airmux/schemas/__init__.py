"""Project, Window and Pane models and their field normalizers."""

from airmux.schemas.pane import Pane
from airmux.schemas.project import PrepareContext, Project
from airmux.schemas.split import PaneSplit
from airmux.schemas.template import ProjectTemplate
from airmux.schemas.window import Window

__all__ = ["Project", "Window", "Pane", "PaneSplit", "ProjectTemplate", "PrepareContext"]
