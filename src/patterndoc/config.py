"""Parser configuration.

Configuration can be built directly, from a mapping, from a YAML or JSON
file, or from environment variables:

    PATTERNDOC_STRICT=false
    PATTERNDOC_ACCUMULATE_KEYS=todo,changelog
    PATTERNDOC_ENCODING=latin-1

Usage:
    >>> from patterndoc.config import ParserConfig
    >>> config = ParserConfig.from_file("patterndoc.yaml")
    >>> config.strict
    True
"""

from __future__ import annotations

import codecs
import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from patterndoc.errors import ConfigError

DEFAULT_ACCUMULATE_KEYS: frozenset[str] = frozenset({"todo"})

ENV_VARS = {
    "strict": "PATTERNDOC_STRICT",
    "accumulate_meta_keys": "PATTERNDOC_ACCUMULATE_KEYS",
    "encoding": "PATTERNDOC_ENCODING",
}

_TRUE_VALUES = ("true", "yes", "1", "on")
_FALSE_VALUES = ("false", "no", "0", "off")


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for ``PatternDocParser``.

    Attributes:
        strict: Raise on malformed ``@param`` lines instead of skipping them
        accumulate_meta_keys: ``@meta`` keys whose values collect into a list
        encoding: Encoding used when reading source files
    """

    strict: bool = True
    accumulate_meta_keys: frozenset[str] = DEFAULT_ACCUMULATE_KEYS
    encoding: str = "utf-8"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParserConfig":
        """Build a configuration from a mapping of field names to values.

        Raises:
            ConfigError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        kwargs: dict[str, Any] = {}
        if "strict" in data:
            kwargs["strict"] = _to_bool(data["strict"], "strict")
        if "accumulate_meta_keys" in data:
            kwargs["accumulate_meta_keys"] = _to_key_set(data["accumulate_meta_keys"])
        if "encoding" in data:
            kwargs["encoding"] = _to_encoding(data["encoding"])
        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: str | Path) -> "ParserConfig":
        """Load configuration from a ``.yaml``, ``.yml`` or ``.json`` file.

        Settings may sit at the top level or under a ``patterndoc`` section.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        text = path.read_text(encoding="utf-8")
        suffix = path.suffix.lower()
        try:
            if suffix in (".yaml", ".yml"):
                data = yaml.safe_load(text)
            elif suffix == ".json":
                data = json.loads(text)
            else:
                raise ConfigError(f"Unsupported configuration format: {path.suffix}")
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigError(f"Failed to parse {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration in {path} must be a mapping")
        if isinstance(data.get("patterndoc"), dict):
            data = data["patterndoc"]

        return cls.from_dict(data)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ParserConfig":
        """Load configuration from ``PATTERNDOC_*`` environment variables."""
        env = os.environ if environ is None else environ
        data = {
            key: env[var]
            for key, var in ENV_VARS.items()
            if env.get(var) is not None
        }
        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "strict": self.strict,
            "accumulate_meta_keys": sorted(self.accumulate_meta_keys),
            "encoding": self.encoding,
        }


def _to_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ConfigError(f"Invalid boolean for '{name}': {value!r}")


def _to_key_set(value: Any) -> frozenset[str]:
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = list(value)
    else:
        raise ConfigError(f"Invalid value for 'accumulate_meta_keys': {value!r}")
    return frozenset(str(item).strip() for item in items if str(item).strip())


def _to_encoding(value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"Invalid encoding: {value!r}")
    try:
        codecs.lookup(value)
    except LookupError as e:
        raise ConfigError(f"Unknown encoding: {value}") from e
    return value
