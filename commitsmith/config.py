"""Layered configuration for commitsmith.

Configuration is resolved from several YAML documents, in ascending
precedence:

1. Built-in defaults (DEFAULT_CONFIG)
2. User config: <user config dir>/commitsmith/config.yaml
3. Repository-local config: <workdir>/.commitsmith.yaml
4. An explicit path passed with --config
5. Command-line overrides (--emoji, --no-sign, ...)

Each document may omit any key. Scalars are last-write-wins; the commit type
list is taken whole from the last document that declares a non-empty one.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ValidationError

from commitsmith.commit_types import (
    DEFAULT_COMMIT_TYPES,
    CommitType,
    CommitTypeRegistry,
    build_registry,
)


class ConfigError(Exception):
    """Raised when configuration cannot be loaded or resolved."""

    pass


APP_NAME = "commitsmith"
USER_CONFIG_FILE = "config.yaml"
LOCAL_CONFIG_FILE = ".commitsmith.yaml"

SCALAR_KEYS = ("autocomplete", "breaking_changes", "emoji", "issues", "sign")

# Default configuration values
DEFAULT_CONFIG = {
    "autocomplete": False,
    "breaking_changes": True,
    "emoji": False,
    "issues": True,
    "sign": False,
    "commit_types": [commit_type.model_dump() for commit_type in DEFAULT_COMMIT_TYPES],
}


class ConfigLayer(BaseModel):
    """One configuration document. Unset keys stay None."""

    autocomplete: Optional[bool] = None
    breaking_changes: Optional[bool] = None
    emoji: Optional[bool] = None
    issues: Optional[bool] = None
    sign: Optional[bool] = None
    commit_types: Optional[list[CommitType]] = None


@dataclass
class ConfigOverrides:
    """Per-invocation overrides, typically from command-line flags."""

    path: Optional[Path] = None
    autocomplete: Optional[bool] = None
    breaking_changes: Optional[bool] = None
    emoji: Optional[bool] = None
    issues: Optional[bool] = None
    sign: Optional[bool] = None

    def as_layer(self) -> ConfigLayer:
        """Return the scalar overrides as a ConfigLayer."""
        return ConfigLayer(**{key: getattr(self, key) for key in SCALAR_KEYS})


@dataclass(frozen=True)
class ConfigContext:
    """Environment lookups used while locating configuration documents."""

    workdir: Path
    user_config_dir: Path

    @classmethod
    def from_environment(cls, workdir: Optional[Path] = None) -> "ConfigContext":
        """Build a context from the process environment.

        Args:
            workdir: Working directory to use instead of the current one.

        Returns:
            The configuration context.

        Raises:
            ConfigError: If the working directory cannot be determined.
        """
        if workdir is None:
            try:
                workdir = Path.cwd()
            except OSError as e:
                raise ConfigError(f"Could not determine the working directory: {e}")

        xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config_home:
            user_config_dir = Path(xdg_config_home)
        else:
            user_config_dir = Path.home() / ".config"

        return cls(workdir=Path(workdir), user_config_dir=user_config_dir)

    def user_config_path(self) -> Path:
        """Path to the user-level config file."""
        return self.user_config_dir / APP_NAME / USER_CONFIG_FILE

    def local_config_path(self) -> Path:
        """Path to the repository-local config file."""
        return self.workdir / LOCAL_CONFIG_FILE


@dataclass(frozen=True)
class ResolvedConfig:
    """Fully resolved configuration. Every flag is a plain bool."""

    autocomplete: bool
    breaking_changes: bool
    emoji: bool
    issues: bool
    sign: bool
    workdir: Path
    commit_types: CommitTypeRegistry = field(
        default_factory=lambda: CommitTypeRegistry(DEFAULT_COMMIT_TYPES))


def parse_layer(data: Any, source: str = "<config>") -> ConfigLayer:
    """Validate a parsed document into a ConfigLayer.

    Args:
        data: The result of parsing a YAML document.
        source: Description of the document, used in error messages.

    Returns:
        The configuration layer.

    Raises:
        ConfigError: If the document is not a mapping or has invalid values.
    """
    if data is None:
        return ConfigLayer()
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config in {source}: expected a mapping at the top level")

    try:
        return ConfigLayer.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {source}:\n{e}")


def load_layer(path: Path) -> Optional[ConfigLayer]:
    """Load one configuration document.

    Args:
        path: Path to a YAML config file.

    Returns:
        The parsed layer, or None if the file does not exist.

    Raises:
        ConfigError: If the file exists but cannot be read or parsed.
    """
    if not path.is_file():
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}")

    return parse_layer(data, str(path))


DEFAULT_LAYER = parse_layer(DEFAULT_CONFIG, "built-in defaults")


def resolve(
    sources: list[Optional[ConfigLayer]],
    overrides: Optional[ConfigOverrides] = None,
    workdir: Optional[Path] = None,
) -> ResolvedConfig:
    """Merge configuration layers into a ResolvedConfig.

    Args:
        sources: Layers in ascending precedence. None entries are skipped.
            The built-in defaults are always applied underneath them.
        overrides: Per-invocation overrides, applied last.
        workdir: The working directory recorded in the result.

    Returns:
        The resolved configuration.
    """
    layers = [DEFAULT_LAYER] + [layer for layer in sources if layer is not None]
    if overrides is not None:
        layers.append(overrides.as_layer())

    resolved = {}
    for key in SCALAR_KEYS:
        for layer in layers:
            value = getattr(layer, key)
            if value is not None:
                resolved[key] = value

    # Built-ins are the fallback; the last non-empty declaration replaces them.
    declared = None
    for layer in layers[1:]:
        if layer.commit_types:
            declared = layer.commit_types

    return ResolvedConfig(
        workdir=Path(workdir) if workdir is not None else Path("."),
        commit_types=build_registry(DEFAULT_LAYER.commit_types, declared),
        **resolved,
    )


def load_config(
    overrides: Optional[ConfigOverrides] = None,
    context: Optional[ConfigContext] = None,
) -> ResolvedConfig:
    """Locate, load and resolve every configuration source.

    Args:
        overrides: Per-invocation overrides, including an explicit path.
        context: Environment lookups; defaults to the process environment.

    Returns:
        The resolved configuration.

    Raises:
        ConfigError: If a present document is invalid or the working
            directory cannot be determined.
    """
    if overrides is None:
        overrides = ConfigOverrides()
    if context is None:
        context = ConfigContext.from_environment()

    paths = [context.user_config_path(), context.local_config_path()]
    if overrides.path is not None:
        path = Path(overrides.path)
        if not path.is_absolute():
            path = context.workdir / path
        paths.append(path)

    sources = [load_layer(path) for path in paths]
    return resolve(sources, overrides, workdir=context.workdir)
