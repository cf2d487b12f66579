"""Decode project text into a Project tree and prepare it for use."""

import time
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from airmux.core.errors import DecodeError
from airmux.core.logging import get_logger
from airmux.schemas.fields import DECODE_CONTEXT
from airmux.schemas.project import PrepareContext, Project


def _first_error_message(error: ValidationError) -> str:
    """
    Extract the user-facing message of the first validation error.

    Messages raised by the decoders themselves are returned verbatim; any
    other pydantic error is prefixed with the field location.
    """
    errors = error.errors()
    if not errors:
        return str(error)

    first = errors[0]
    cause = (first.get("ctx") or {}).get("error")
    if isinstance(cause, ValueError):
        return str(cause)

    loc = ".".join(str(x) for x in first["loc"])
    return f"{loc}: {first['msg']}" if loc else first["msg"]


def decode(text: str) -> Project:
    """
    Decode a YAML (or JSON) project definition.

    Args:
        text: Raw project text

    Returns:
        Decoded Project

    Raises:
        DecodeError: If the text is not valid markup or does not describe a project
    """
    logger = get_logger()
    start = time.time()
    logger.log_stage("decode", "started", size=len(text))

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        logger.log_stage("decode", "failed", error=str(e))
        raise DecodeError(str(e)) from e

    try:
        project = Project.model_validate(data, context=DECODE_CONTEXT)
    except ValidationError as e:
        message = _first_error_message(e)
        logger.log_stage("decode", "failed", error=message)
        raise DecodeError(message) from e

    duration_ms = (time.time() - start) * 1000
    logger.log_stage(
        "decode",
        "completed",
        duration_ms=duration_ms,
        windows=len(project.windows),
        panes=sum(len(window.panes) for window in project.windows),
    )
    return project


def prepare(
    project: Project,
    context: PrepareContext,
    force_attach: Optional[bool] = None,
) -> Project:
    """Apply the invoking environment to a decoded project (see :meth:`Project.prepare`)."""
    prepared = project.prepare(context, force_attach=force_attach)
    get_logger().log_stage(
        "prepare",
        "completed",
        session_name=prepared.session_name,
        attach=prepared.attach,
    )
    return prepared


def load_project(
    path: Path,
    context: PrepareContext,
    force_attach: Optional[bool] = None,
) -> Project:
    """Read, decode and prepare the project stored at ``path``."""
    text = path.read_text(encoding="utf-8")
    return prepare(decode(text), context, force_attach=force_attach)
