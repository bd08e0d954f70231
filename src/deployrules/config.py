"""Configuration management for deployrules using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from deployrules.constants import CONFIG_FILE_NAME


class OutputFormat(str, Enum):
    """CLI output format types."""
    TABLE = "table"
    JSON = "json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class ParserConfig(BaseModel):
    """Parser configuration section."""
    ignore_namespaces: bool = Field(alias="ignoreNamespaces", default=True)

    model_config = ConfigDict(populate_by_name=True)


class NetworkConfig(BaseModel):
    """Host resolution configuration section."""
    resolve_hostnames: bool = Field(alias="resolveHostnames", default=True)

    model_config = ConfigDict(populate_by_name=True)


class OutputConfig(BaseModel):
    """Output configuration section."""
    format: OutputFormat = OutputFormat.TABLE

    model_config = ConfigDict(use_enum_values=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True)


class DeployRulesConfig(BaseModel):
    """Complete deployrules configuration model."""
    parser: ParserConfig = Field(default_factory=ParserConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> DeployRulesConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .deployrules.json

    Returns:
        DeployRulesConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path is None or not config_path.exists():
        return DeployRulesConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = json.load(f)
        return DeployRulesConfig(**config_data)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {config_path}: {e}")
    except Exception as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}")


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .deployrules.json by searching up the directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None
