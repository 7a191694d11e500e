"""
Configuration loading and validation for Page Request Map.

This module handles configuration file parsing, validation, and provides
sensible defaults for all configuration options.
"""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class ProjectConfig(BaseModel):
    """Layout of the analyzed front-end project."""

    src_root: Optional[Path] = Field(
        default=None,
        description="Source tree root (e.g. <project>/src); relative paths are taken from the config file directory.",
    )
    alias: str = Field(
        default="@",
        description="Token that stands for the source root in rooted specifiers.",
    )
    services_dir: str = Field(
        default="services",
        description="Directory under the source root holding service groups.",
    )
    pages_dir: str = Field(
        default="pages",
        description="Directory under the source root holding page entries.",
    )


class ResolverConfig(BaseModel):
    """Configuration for import resolution and graph traversal."""

    extensions: list[str] = Field(
        default=[".jsx", ".js", ".tsx", ".ts"],
        description="Recognized module extensions, in lookup order.",
    )
    page_extensions: list[str] = Field(
        default=[".tsx", ".jsx"],
        description="Extensions that mark a file under the pages directory as an entry.",
    )
    follow_dynamic_imports: bool = Field(
        default=False,
        description="Traverse dynamic import() targets as well as static imports.",
    )
    follow_reexports: bool = Field(
        default=False,
        description="Traverse `export ... from` re-exports as well as imports.",
    )
    refresh_services: bool = Field(
        default=True,
        description="Re-extract service descriptors at the start of every pass.",
    )


class OutputConfig(BaseModel):
    """Configuration for output formatting."""

    format: str = Field(
        default="json",
        description="Default output format.",
    )
    indent: Optional[int] = Field(
        default=None,
        description="Indentation for JSON output (None for compact output).",
    )
    omit_empty: bool = Field(
        default=True,
        description="Leave pages without any API requests out of readable output.",
    )


class Config(BaseModel):
    """Root configuration model for Page Request Map."""

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    class Config:
        """Pydantic model configuration."""

        extra = "forbid"


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the configuration file. If None, returns defaults.

    Returns:
        Config object with loaded or default values.

    Raises:
        FileNotFoundError: If the specified config file doesn't exist.
        ValueError: If the config file is invalid.
    """
    if config_path is None:
        return Config()

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        config = Config(**data)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in configuration file: {e}") from e
    except Exception as e:
        raise ValueError(f"Failed to load configuration: {e}") from e

    # A relative src_root is relative to the file, not the working directory
    src_root = config.project.src_root
    if src_root is not None and not src_root.is_absolute():
        config.project.src_root = config_path.absolute().parent / src_root

    return config


def find_config_file(start_path: Path) -> Optional[Path]:
    """
    Search for a configuration file starting from the given path.

    Searches for `.page-request.yaml` or `.page-request.yml` in the start
    path and parent directories.

    Args:
        start_path: Directory to start searching from.

    Returns:
        Path to the config file if found, None otherwise.
    """
    config_names = [".page-request.yaml", ".page-request.yml"]

    current = start_path.resolve()
    while current != current.parent:
        for name in config_names:
            config_path = current / name
            if config_path.exists():
                return config_path
        current = current.parent

    return None
