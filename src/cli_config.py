"""User configuration file and runtime settings resolution.

Settings come from three layers, highest precedence first: command-line
flags, the YAML file at ``~/.sling.yml`` and built-in defaults. Values given
on the command line are remembered in the file when it has none yet.
"""

from __future__ import annotations

import copy
import logging
import sys
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Callable, Optional, Union

import yaml

from constants import Constants
from errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass
class RuntimeConfig:
    """Settings a single install or publish run needs."""

    bucket: Optional[str] = None
    pip_args: Optional[str] = None
    python: Optional[str] = None

    @classmethod
    def defaults(cls) -> "RuntimeConfig":
        return cls(bucket=None, pip_args="", python=sys.executable or "python")

    @classmethod
    def from_args(cls, args: Any) -> "RuntimeConfig":
        return cls(
            bucket=getattr(args, "BUCKET", None),
            pip_args=getattr(args, "PIP_ARGS", None),
            python=getattr(args, "PYTHON", None),
        )

    @classmethod
    def resolve(
        cls,
        supplied: "RuntimeConfig",
        stored: "RuntimeConfig",
        defaults: "RuntimeConfig",
    ) -> "RuntimeConfig":
        """First non-None value per field, in the given order."""
        resolved = {}
        for f in fields(cls):
            for layer in (supplied, stored, defaults):
                value = getattr(layer, f.name)
                if value is not None:
                    resolved[f.name] = value
                    break
            else:
                resolved[f.name] = None
        return cls(**resolved)


@dataclass
class Config:
    """Contents of the YAML config file."""

    default_bucket_name: Optional[str] = None
    default_pip_args: Optional[str] = None
    default_python_interpreter: Optional[str] = None

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Config":
        """Read ``path``; a missing file yields an empty config.

        Unknown keys are ignored.

        Raises:
            ConfigError: The file exists but is unreadable or not a mapping.
        """
        path = Path(path)
        if not path.exists():
            return cls()
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"failed to read config file {path}: {e}") from e
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"config file {path} must contain a mapping")
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    def save(self, path: Union[str, Path]) -> None:
        try:
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump(asdict(self), f, default_flow_style=False)
        except OSError as e:
            raise ConfigError(f"failed to write config file {path}: {e}") from e

    def as_runtime_config(self) -> RuntimeConfig:
        return RuntimeConfig(
            bucket=self.default_bucket_name,
            pip_args=self.default_pip_args,
            python=self.default_python_interpreter,
        )


class ActiveConfig:
    """Config wrapper that only writes back when a mutation changed it."""

    def __init__(self, config: Config):
        self._config = config
        self._dirty = False

    def get(self) -> Config:
        return self._config

    @property
    def dirty(self) -> bool:
        return self._dirty

    def mutate(self, fn: Callable[[Config], None]) -> bool:
        previous = copy.copy(self._config)
        fn(self._config)
        self._dirty = self._dirty or self._config != previous
        return self._dirty

    def save(self, path: Union[str, Path]) -> None:
        if self._dirty:
            self._config.save(path)
            logger.debug("Saved config to %s", path)


def default_config_path() -> Path:
    return Path.home() / Constants.CONFIG_FILE_NAME


def remember_supplied_values(active: ActiveConfig, supplied: RuntimeConfig) -> bool:
    """Store CLI-supplied values for settings the config file does not set yet."""
    def _fill(config: Config) -> None:
        if config.default_python_interpreter is None and supplied.python is not None:
            config.default_python_interpreter = supplied.python
        if config.default_pip_args is None and supplied.pip_args is not None:
            config.default_pip_args = supplied.pip_args
        if config.default_bucket_name is None and supplied.bucket is not None:
            config.default_bucket_name = supplied.bucket

    return active.mutate(_fill)


def load_runtime_config(args: Any, config_path: Optional[Union[str, Path]] = None) -> RuntimeConfig:
    """Load the config file, remember new CLI values and resolve settings."""
    path = Path(config_path) if config_path else default_config_path()
    active = ActiveConfig(Config.load(path))
    supplied = RuntimeConfig.from_args(args)
    remember_supplied_values(active, supplied)
    active.save(path)
    return RuntimeConfig.resolve(
        supplied, active.get().as_runtime_config(), RuntimeConfig.defaults()
    )
