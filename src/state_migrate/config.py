"""Configuration management for the state-migrate command line tool."""

from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field
import tomli

from .runner import DEFAULT_KEY

DEFAULT_CONFIG_PATHS = [
    "state_migrate.toml",
    ".state_migrate.toml",
]


class Config(BaseModel):
    """Main configuration model."""
    key: str = Field(
        default=DEFAULT_KEY,
        min_length=1,
        description="Field of the state object that holds its version"
    )
    chain: Optional[str] = Field(
        default=None,
        description="Migration chain reference: 'path/to/file.py:attr' or 'package.module:attr'"
    )
    indent: int = Field(
        default=2,
        ge=0,
        description="Indentation used when writing JSON state files"
    )

    @classmethod
    def from_file(cls, config_path: str) -> "Config":
        """Load configuration from TOML file."""
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path, 'rb') as f:
            data = tomli.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Load configuration from dictionary.

        Settings may be given at the top level or under a ``[state_migrate]`` table.
        """
        if isinstance(data.get('state_migrate'), dict):
            data = data['state_migrate']
        return cls(**data)


def load_config(config_path: Optional[str] = None) -> Config:
    """Load configuration from file or use defaults.

    Args:
        config_path: Path to config file (optional, will search default locations if not provided)

    Returns:
        Config object
    """
    if config_path:
        return Config.from_file(config_path)

    for default_path in DEFAULT_CONFIG_PATHS:
        if Path(default_path).exists():
            return Config.from_file(default_path)

    return Config()
