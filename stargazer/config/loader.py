"""YAML config loader with runtime get/set."""

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from stargazer.config.defaults import DEFAULT_SITE
from stargazer.config.schema import StargazerConfig


def load_config(path: str | Path) -> StargazerConfig:
    """Load and validate config from a YAML file.

    If no site is specified in the YAML, injects DEFAULT_SITE.
    """
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if not raw.get("site"):
        raw["site"] = DEFAULT_SITE.model_dump()

    return StargazerConfig(**raw)


def default_config() -> StargazerConfig:
    return StargazerConfig(site=DEFAULT_SITE)


def config_hash(config: StargazerConfig) -> str:
    """Compute a deterministic SHA256 hash of the config."""
    data = config.model_dump_json(indent=None)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def get_config_value(config: StargazerConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'forecast.horizon_days'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, BaseModel) and part in type(obj).model_fields:
            obj = getattr(obj, part)
        elif isinstance(obj, dict) and part in obj:
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(
    config: StargazerConfig, dotted_key: str, value: Any
) -> StargazerConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new StargazerConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        if not isinstance(target.get(part), dict):
            raise KeyError(f"Config key not found: {dotted_key}")
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    # Attempt type coercion for common cases
    old_value = target.get(parts[-1])
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return StargazerConfig(**data)


def save_config(config: StargazerConfig, path: str | Path) -> None:
    """Write config back to a YAML file that load_config reads."""
    with open(path, "w") as f:
        yaml.safe_dump(config.model_dump(mode="json"), f, sort_keys=False)
