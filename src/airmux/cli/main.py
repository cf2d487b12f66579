"""CLI interface for airmux."""

import sys
from pathlib import Path
from typing import Optional

import click

from airmux.cli.formatters import OutputFormatter
from airmux.core.checks import check as check_project
from airmux.core.config import Config
from airmux.core.decoder import decode, load_project
from airmux.core.errors import AirmuxError
from airmux.core.logging import configure_logging, get_logger
from airmux.core.serializer import serialize_compact


@click.group()
@click.version_option(package_name="airmux")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="WARNING",
    help="Logging level (default: WARNING)",
)
@click.option(
    "--json-logging",
    is_flag=True,
    default=False,
    help="Emit logs as JSON",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write logs to this file",
)
@click.option(
    "--config-dir",
    type=click.Path(file_okay=True),
    default=None,
    help="Configuration directory (default: $AIRMUX_CONFIG or ~/.config/airmux)",
)
@click.pass_context
def main(ctx: click.Context, log_level: str, json_logging: bool, log_file: Optional[str], config_dir: Optional[str]):
    """
    airmux - decode and validate tmux session definitions.

    Project files are YAML (or JSON) documents describing a session's
    windows, panes and the commands they run.
    """
    configure_logging(level=log_level, json_output=json_logging, log_file=log_file)
    ctx.obj = {"config_dir": config_dir}


def _load_config(ctx: click.Context, **cli_args) -> Config:
    return Config.load(cli_args={"config_dir": ctx.obj.get("config_dir"), **cli_args}).check()


@main.command()
@click.argument("project_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--name",
    "-n",
    default=None,
    help="Session name to use when the project sets none (default: the file name)",
)
@click.option(
    "--attach/--no-attach",
    default=None,
    help="Override the project's attach setting",
)
@click.option(
    "--command",
    "-c",
    "tmux_command",
    default=None,
    help="tmux command to launch (default: $AIRMUX_COMMAND or the project's own)",
)
@click.option(
    "--no-check",
    is_flag=True,
    default=False,
    help="Skip the structural and filesystem checks",
)
@click.pass_context
def check(
    ctx: click.Context,
    project_file: Path,
    name: Optional[str],
    attach: Optional[bool],
    tmux_command: Optional[str],
    no_check: bool,
):
    """Decode, prepare and validate PROJECT_FILE."""
    formatter = OutputFormatter()
    logger = get_logger()

    try:
        config = _load_config(ctx, tmux_command=tmux_command)
        context = config.prepare_context(name or project_file.stem)
        project = load_project(project_file, context, force_attach=attach)
        if no_check:
            logger.info("Skipping checks", project_file=str(project_file))
        else:
            check_project(project)
    except (AirmuxError, OSError, UnicodeError) as e:
        formatter.print_error(e)
        sys.exit(1)

    formatter.print_summary(project)


@main.command()
@click.argument("project_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Output JSON instead of YAML",
)
def compact(project_file: Path, as_json: bool):
    """Print the most compact equivalent form of PROJECT_FILE."""
    formatter = OutputFormatter()

    try:
        project = decode(project_file.read_text(encoding="utf-8"))
    except (AirmuxError, OSError, UnicodeError) as e:
        formatter.print_error(e)
        sys.exit(1)

    output = serialize_compact(project, as_json=as_json)
    formatter.print_text(output if output.endswith("\n") else output + "\n")


if __name__ == "__main__":
    main()
