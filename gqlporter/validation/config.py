"""
GQLPorter Configuration - Settings loading and validation.

Settings come from three places, highest precedence first:
- command-line options
- environment variables (GRAPHQL_URL, GRAPHQL_TOKEN)
- an optional YAML settings file (``--config``)
"""

import os
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Optional

import yaml
from pydantic import BaseModel, ValidationError


class ConfigError(Exception):
    """Raised when there's a configuration error."""

    pass


class BridgeConfig(BaseModel):
    """Complete GQLPorter configuration schema."""

    graphql_url: Optional[str] = None
    token: Optional[str] = None
    query_prefix: str = ""
    mutation_prefix: str = ""
    transport: Literal["stdio", "http"] = "stdio"
    host: str = "0.0.0.0"
    port: int = 3000
    exposed_path: Path = Path("exposed.yaml")
    timeout: Optional[float] = 30.0
    log_level: str = "INFO"


class Config:
    """
    GQLPorter configuration manager.

    Example:
        >>> config = Config(overrides={"graphql_url": "https://api.example.com/graphql"})
        >>> config.validated().port
        3000
    """

    ENV_VARS = {
        "graphql_url": "GRAPHQL_URL",
        "token": "GRAPHQL_TOKEN",
    }

    def __init__(
        self,
        file_config: Optional[Dict[str, Any]] = None,
        overrides: Optional[Dict[str, Any]] = None,
        env: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize Config.

        Args:
            file_config: Settings loaded from a YAML file.
            overrides: Explicit settings (command-line options); ``None``
                values are ignored.
            env: Environment mapping, defaults to ``os.environ``.
        """
        self._file_config = file_config or {}
        self._overrides = {k: v for k, v in (overrides or {}).items() if v is not None}
        self._env = os.environ if env is None else env
        self._merged: Optional[BridgeConfig] = None

    @classmethod
    def load(
        cls,
        overrides: Optional[Dict[str, Any]] = None,
        config_path: Optional[Path] = None,
    ) -> "Config":
        """
        Load configuration from an optional settings file plus overrides.

        Returns:
            Config instance with loaded configuration.
        """
        file_config = cls._load_yaml(config_path)
        return cls(file_config=file_config, overrides=overrides)

    @classmethod
    def _load_yaml(cls, path: Optional[Path]) -> Dict[str, Any]:
        """Load YAML file if given."""
        if path is None:
            return {}
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except Exception as e:
            raise ConfigError(f"Failed to load config from {path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return data

    def get_merged_config(self) -> Dict[str, Any]:
        """Get the merged configuration as a dictionary."""
        merged = dict(self._file_config)
        for key, var in self.ENV_VARS.items():
            value = self._env.get(var)
            if value:
                merged[key] = value
        merged.update(self._overrides)
        return merged

    @property
    def merged(self) -> BridgeConfig:
        """Get the validated merged configuration."""
        if self._merged is None:
            try:
                self._merged = BridgeConfig(**self.get_merged_config())
            except ValidationError as e:
                raise ConfigError(f"Invalid configuration: {e}")
        return self._merged

    def validated(self) -> BridgeConfig:
        """Return the merged configuration, checking what startup requires."""
        config = self.merged
        if not config.graphql_url:
            raise ConfigError(
                "GraphQL URL is required. Provide via --graphql-url argument "
                "or GRAPHQL_URL environment variable"
            )
        return config
