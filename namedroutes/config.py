"""
Router configuration - an explicit value handed to the Router.

Loads and merges configuration with precedence:
overrides > environment variables > config files > defaults

The route table uses the same shape as the named-routes JSON export::

    {
        "url": "https://example.com/app",
        "routes": {
            "user.profile": {"uri": "users/{id}[/{action}]", "methods": ["GET"]}
        }
    }
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from .compiler.parser import OptionalPolicy

logger = logging.getLogger("namedroutes.config")


class ConfigError(Exception):
    """Raised when configuration validation fails."""
    pass


@dataclass(frozen=True)
class RouteDefinition:
    """Pattern and methods of one named route."""
    uri: str
    methods: Tuple[str, ...] = ("GET",)

    @classmethod
    def from_value(cls, name: str, value: Any) -> "RouteDefinition":
        """Accept either a bare uri string or a {"uri", "methods"} mapping."""
        if isinstance(value, str):
            return cls(uri=value)
        if not isinstance(value, Mapping):
            raise ConfigError(f"Route '{name}' must be a string or a mapping, got {type(value).__name__}")
        if "uri" not in value:
            raise ConfigError(f"Route '{name}' has no 'uri'")

        methods = value.get("methods")
        if methods is None:
            methods = ("GET",)
        if isinstance(methods, str):
            methods = [methods]
        return cls(
            uri=str(value["uri"]),
            methods=tuple(str(m).upper() for m in methods),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"uri": self.uri, "methods": list(self.methods)}


@dataclass(frozen=True)
class RouterConfig:
    """Everything a Router needs."""
    url: str = ""
    routes: Dict[str, RouteDefinition] = field(default_factory=dict)
    optional_policy: OptionalPolicy = OptionalPolicy.NESTED
    cache_size: int = 256

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RouterConfig":
        """Build and validate a config from plain data."""
        if not isinstance(data, Mapping):
            raise ConfigError("Configuration must be a mapping")

        raw_routes = data.get("routes") or {}
        if not isinstance(raw_routes, Mapping):
            raise ConfigError("'routes' must be a mapping of name to route")
        routes = {
            str(name): RouteDefinition.from_value(str(name), value)
            for name, value in raw_routes.items()
        }

        try:
            policy = OptionalPolicy(data.get("optional_policy", OptionalPolicy.NESTED))
        except ValueError:
            choices = ", ".join(p.value for p in OptionalPolicy)
            raise ConfigError(
                f"Unknown optional_policy {data.get('optional_policy')!r} (expected one of: {choices})"
            )

        cache_size = data.get("cache_size", 256)
        if isinstance(cache_size, bool) or not isinstance(cache_size, int) or cache_size < 0:
            raise ConfigError(f"cache_size must be a non-negative integer, got {cache_size!r}")

        url = data.get("url") or ""
        if not isinstance(url, str):
            raise ConfigError(f"url must be a string, got {type(url).__name__}")

        return cls(
            url=url.rstrip("/"),
            routes=routes,
            optional_policy=policy,
            cache_size=cache_size,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "routes": {name: route.to_dict() for name, route in self.routes.items()},
            "optional_policy": self.optional_policy.value,
            "cache_size": self.cache_size,
        }


class ConfigLoader:
    """
    Loads and merges configuration from multiple sources with precedence:
    overrides > environment variables > config files > defaults
    """

    def __init__(self, env_prefix: str = "NAMEDROUTES_"):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        paths: Optional[Iterable[Union[str, Path]]] = None,
        env_prefix: str = "NAMEDROUTES_",
        overrides: Optional[Dict[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> RouterConfig:
        """
        Load configuration from multiple sources.

        Merge order (later overrides earlier):
        1. Config files, in the order given (JSON or YAML)
        2. Environment variables ({env_prefix}* , "__" separates nested keys)
        3. Manual overrides

        Args:
            paths: Config file paths
            env_prefix: Prefix for environment variables
            overrides: Manual overrides (highest precedence)
            environ: Environment mapping (defaults to os.environ)

        Returns:
            Validated RouterConfig
        """
        loader = cls(env_prefix=env_prefix)

        for path in paths or ():
            loader._load_file(Path(path))

        loader._load_from_env(os.environ if environ is None else environ)

        if overrides:
            loader._merge_dict(loader.config_data, overrides)

        return RouterConfig.from_dict(loader.config_data)

    def _load_file(self, path: Path):
        """Load config from a JSON or YAML file."""
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        if path.suffix in (".yaml", ".yml"):
            data = self._read_yaml(path)
        elif path.suffix == ".json":
            data = self._read_json(path)
        else:
            raise ConfigError(f"Unsupported config file type: {path.suffix or path.name}")

        if data is None:
            logger.warning(f"Config file {path} is empty")
            return
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        logger.debug(f"Loaded config from {path}")
        self._merge_dict(self.config_data, data)

    def _read_json(self, path: Path) -> Any:
        with open(path) as f:
            try:
                return json.load(f)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc

    def _read_yaml(self, path: Path) -> Any:
        import yaml
        with open(path) as f:
            try:
                return yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    def _load_from_env(self, environ: Mapping[str, str]):
        """Load config from environment variables."""
        for key, value in environ.items():
            if key.startswith(self.env_prefix):
                self._set_nested(key, value)

    def _set_nested(self, key: str, value: str):
        """Convert NAMEDROUTES_ROUTES__HOME__URI to nested dict."""
        key = key[len(self.env_prefix):]

        parts = key.lower().split("__")

        current = self.config_data
        for part in parts[:-1]:
            if not isinstance(current.get(part), dict):
                current[part] = {}
            current = current[part]

        current[parts[-1]] = self._parse_value(value)

    def _parse_value(self, value: str) -> Any:
        """Parse string value to appropriate type."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        if value.startswith(("{", "[")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def _merge_dict(self, target: dict, source: Mapping):
        """Deep merge source into target."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, Mapping):
                self._merge_dict(target[key], value)
            else:
                target[key] = dict(value) if isinstance(value, Mapping) else value
