"""Nested configuration tree with merge, validation and dotted-path access"""

import copy
import json
import runpy
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from pydantic import AnyUrl, TypeAdapter, ValidationError

from wallet_gateway.domain.exceptions import (
    ConfigFormatError,
    ConfigNotFoundError,
    ConfigValidationError,
)

_url_adapter = TypeAdapter(AnyUrl)

DEFAULT_CONFIG: Dict[str, Any] = {
    "timeout": 30,
    "retries": 3,
    "debug": False,
    "providers": {
        "ovo": {
            "enabled": True,
            "base_url": "https://api.ovo.id",
            "timeout": 30,
            "device_id": None,
        },
        "gopay": {
            "enabled": True,
            "base_url": "https://api.gojekapi.com",
            "timeout": 30,
        },
    },
}


def merge_config(default: Mapping[str, Any], custom: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge custom values onto defaults.

    Mappings on both sides are merged key by key; anything else in custom
    replaces the default outright. Neither input is modified.
    """
    result = copy.deepcopy(dict(default))

    for key, value in custom.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), Mapping):
            result[key] = merge_config(result[key], value)
        else:
            result[key] = copy.deepcopy(value)

    return result


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_valid_url(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        _url_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigFormatError(f"Unable to read configuration file {path}: {e}") from e


class Configuration:
    """
    Gateway configuration tree.

    Built from the built-in defaults merged with caller overrides and
    validated on construction and on every set(). Values are addressed with
    dotted paths such as "providers.ovo.timeout".
    """

    def __init__(self, overrides: Optional[Mapping[str, Any]] = None):
        self._config = merge_config(DEFAULT_CONFIG, overrides or {})
        self._validate()

    def _validate(self) -> None:
        timeout = self._config.get("timeout")
        if timeout is not None and (not _is_int(timeout) or timeout <= 0):
            raise ConfigValidationError("Timeout must be a positive integer")

        retries = self._config.get("retries")
        if retries is not None and (not _is_int(retries) or retries < 0):
            raise ConfigValidationError("Retries must be a non-negative integer")

        providers = self._config.get("providers")
        if providers is None:
            return
        if not isinstance(providers, Mapping):
            raise ConfigValidationError("Providers must be a mapping")

        for name, settings in providers.items():
            self._validate_provider(name, settings)

    @staticmethod
    def _validate_provider(name: str, settings: Any) -> None:
        if not isinstance(settings, Mapping):
            raise ConfigValidationError(f"Configuration for provider {name} must be a mapping", provider=name)

        base_url = settings.get("base_url")
        if base_url is not None and not _is_valid_url(base_url):
            raise ConfigValidationError(f"Invalid base_url for provider {name}", provider=name)

        timeout = settings.get("timeout")
        if timeout is not None and (not _is_int(timeout) or timeout <= 0):
            raise ConfigValidationError(f"Invalid timeout for provider {name}", provider=name)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted path, returning default as soon as a segment is missing"""
        current: Any = self._config
        for segment in key.split("."):
            if not isinstance(current, Mapping) or current.get(segment) is None:
                return default
            current = current[segment]
        return current

    def set(self, key: str, value: Any) -> "Configuration":
        """
        Write a value at a dotted path, creating intermediate mappings.

        The whole tree is validated afterwards. If validation fails the tree
        is restored and ConfigValidationError propagates.
        """
        previous = copy.deepcopy(self._config)
        segments = key.split(".")
        current = self._config
        for segment in segments[:-1]:
            if not isinstance(current.get(segment), dict):
                current[segment] = {}
            current = current[segment]
        current[segments[-1]] = value

        try:
            self._validate()
        except ConfigValidationError:
            self._config = previous
            raise
        return self

    def all(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)

    def get_provider_config(self, provider: str) -> Dict[str, Any]:
        """
        Return the providers.<name> section.

        An empty section is treated the same as a missing one.
        """
        provider_config = self.get(f"providers.{provider}", {})
        if not provider_config:
            raise ConfigNotFoundError(f"Provider '{provider}' configuration not found", provider=provider)
        return copy.deepcopy(dict(provider_config))

    def is_provider_enabled(self, provider: str) -> bool:
        return bool(self.get(f"providers.{provider}.enabled", False))

    def get_enabled_providers(self) -> List[str]:
        providers = self.get("providers", {})
        return [
            name
            for name, settings in providers.items()
            if isinstance(settings, Mapping) and settings.get("enabled")
        ]

    def reset(self) -> "Configuration":
        """Drop all overrides and go back to the built-in defaults"""
        self._config = copy.deepcopy(DEFAULT_CONFIG)
        return self

    @classmethod
    def load_from_file(cls, file_path: str | Path) -> "Configuration":
        """
        Build a Configuration from a .py, .json, .yaml or .yml file.

        A .py file must define a module-level CONFIG mapping.

        Raises:
            ConfigNotFoundError: File does not exist
            ConfigFormatError: Unsupported extension or malformed content
            ConfigValidationError: Content violates a constraint
        """
        path = Path(file_path)
        if not path.is_file():
            raise ConfigNotFoundError(f"Configuration file not found: {path}")

        extension = path.suffix.lower().lstrip(".")

        if extension == "py":
            try:
                namespace = runpy.run_path(str(path))
            except Exception as e:
                raise ConfigFormatError(f"Invalid Python configuration file: {e}") from e
            if "CONFIG" not in namespace:
                raise ConfigFormatError(f"Configuration file {path} does not define CONFIG")
            data = namespace["CONFIG"]
        elif extension == "json":
            try:
                data = json.loads(_read_text(path))
            except json.JSONDecodeError as e:
                raise ConfigFormatError(f"Invalid JSON configuration file: {e}") from e
        elif extension in ("yaml", "yml"):
            try:
                data = yaml.safe_load(_read_text(path))
            except yaml.YAMLError as e:
                raise ConfigFormatError(f"Invalid YAML configuration file: {e}") from e
        else:
            raise ConfigFormatError(f"Unsupported configuration file format: {extension}")

        if not isinstance(data, Mapping):
            raise ConfigFormatError("Configuration must be a mapping")

        return cls(data)
