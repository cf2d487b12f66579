"""Configuration management for airmux."""

import json
import os
from pathlib import Path
from typing import Any, Optional

import yaml

from airmux.core.errors import ConfigError
from airmux.schemas.fields import quote
from airmux.schemas.project import PrepareContext

APP_NAME = "airmux"
PROJECTS_SUBDIR = "projects"

ENV_COMMAND = "AIRMUX_COMMAND"
ENV_CONFIG = "AIRMUX_CONFIG"

CONFIG_FILENAMES = ("config.yaml", "config.yml", "config.json")


def default_config_dir() -> Path:
    """Per-user configuration directory (``$XDG_CONFIG_HOME/airmux``)."""
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / APP_NAME


class Config:
    """Configuration manager with hierarchy: CLI args > environment > user config > defaults."""

    def __init__(self):
        """Initialize configuration with default values."""
        self.tmux_command: Optional[str] = None
        self.config_dir: Optional[str] = None
        self.verbose: bool = False

    @classmethod
    def load(cls, cli_args: Optional[dict[str, Any]] = None) -> "Config":
        """
        Load configuration from hierarchy: CLI args > environment > user config > defaults.

        Args:
            cli_args: Dictionary of CLI arguments to override config

        Returns:
            Config instance with loaded values

        Raises:
            ConfigError: If the user config file cannot be parsed
        """
        config = cls()
        cli_args = {k: v for k, v in (cli_args or {}).items() if v is not None}

        # The config dir decides where the user config file lives
        config_dir = cli_args.get("config_dir") or os.environ.get(ENV_CONFIG)
        if config_dir:
            config.config_dir = config_dir

        for filename in CONFIG_FILENAMES:
            user_config_path = config.base_config_dir() / filename
            if user_config_path.is_file():
                config._load_file(user_config_path)
                break

        env_command = os.environ.get(ENV_COMMAND)
        if env_command is not None:
            config.tmux_command = env_command
        if config_dir:
            config.config_dir = config_dir

        for key, value in cli_args.items():
            setattr(config, key, value)

        return config

    def _load_file(self, config_path: Path) -> None:
        """Load configuration values from a YAML or JSON file."""
        content = config_path.read_text(encoding="utf-8")
        try:
            if config_path.suffix == ".json":
                data = json.loads(content)
            else:
                data = yaml.safe_load(content)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigError(f"cannot read config file {quote(config_path)}: {e}") from e

        if data is None:
            return
        if not isinstance(data, dict):
            raise ConfigError(f"config file {quote(config_path)} should contain a map")

        for key, value in data.items():
            if hasattr(self, key) and value is not None:
                setattr(self, key, value)

    def check(self) -> "Config":
        """
        Validate the configuration and create the config dir if one is set.

        Raises:
            ConfigError: If the tmux command is empty or the config dir is a file
        """
        if self.tmux_command is not None and not self.tmux_command.strip():
            raise ConfigError("tmux command cannot be empty")

        if self.config_dir:
            path = Path(self.config_dir)
            if path.is_file():
                raise ConfigError(f"config-dir {quote(path)} should be a directory")
            path.mkdir(parents=True, exist_ok=True)

        return self

    def base_config_dir(self) -> Path:
        if self.config_dir:
            return Path(self.config_dir).expanduser()
        return default_config_dir()

    def get_config_dir(self, sub_path: str = "") -> Path:
        """Get a directory inside the config dir, creating it if needed."""
        dir_path = self.base_config_dir() / sub_path
        dir_path.mkdir(parents=True, exist_ok=True)
        return dir_path

    def get_projects_dir(self, sub_path: str = "") -> Path:
        """Get a directory inside the projects dir, creating it if needed."""
        return self.get_config_dir(str(Path(PROJECTS_SUBDIR) / sub_path))

    def prepare_context(self, project_name: str) -> PrepareContext:
        """Build what :meth:`Project.prepare` needs to know about this environment."""
        return PrepareContext(
            default_name=project_name,
            configured_launch_command=self.tmux_command,
        )
