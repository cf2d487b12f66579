"""Schema for the project's template selection."""

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, model_validator

from airmux.schemas.fields import is_decoding, render
from airmux.schemas.working_dir import process_working_dir


class ProjectTemplate(BaseModel):
    """Which template renders the project: the built-in one, inline text, or a file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    raw: Optional[str] = Field(default=None, description="Inline template text")
    file: Optional[Path] = Field(default=None, description="Path to a template file")

    @property
    def is_default(self) -> bool:
        return self.raw is None and self.file is None

    @model_validator(mode="before")
    @classmethod
    def decode_shape(cls, data: Any, info: ValidationInfo) -> Any:
        if not is_decoding(info) or isinstance(data, ProjectTemplate):
            return data
        if data is None:
            return {}
        if isinstance(data, str):
            return {"raw": data}
        if isinstance(data, dict):
            if "file" not in data:
                raise ValueError("missing 'file' field")
            file = data["file"]
            if not isinstance(file, str):
                raise ValueError("expected file to be a string")
            return {"file": process_working_dir(file)}
        raise ValueError(f"invalid value for field 'template': {render(data)}")
