from __future__ import annotations

import json
import os
from dataclasses import replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import PipelineConfig

"""Config loader.

Responsibilities:
- Load YAML (default: config/prf_bulk.yml)
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults for absent keys (PipelineConfig)
- Apply environment overrides (PRF_OUTPUT_DIR, PRF_START_SEQ); the CLI loads
  .env into the environment before calling load_config
"""

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ENV_OUTPUT_DIR",
    "ENV_START_SEQ",
    "SCHEMA_PATH",
    "ConfigError",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/prf_bulk.yml")

ENV_OUTPUT_DIR = "PRF_OUTPUT_DIR"
ENV_START_SEQ = "PRF_START_SEQ"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing / not JSON, or the data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _apply_env_overrides(cfg: PipelineConfig) -> PipelineConfig:
    out_dir = os.getenv(ENV_OUTPUT_DIR)
    if out_dir:
        cfg = replace(cfg, output_directory=out_dir)
    start_seq = os.getenv(ENV_START_SEQ)
    if start_seq:
        start_seq = start_seq.strip()
        if not start_seq.isdigit():
            raise ConfigError(f"{ENV_START_SEQ} must contain digits only: {start_seq!r}")
        cfg = replace(cfg, start_seq=start_seq)
    return cfg


def load_config(path: Path | None = None) -> PipelineConfig:
    """Load a PipelineConfig.

    With ``path=None`` the defaults are used (plus environment overrides).
    An explicit path that does not exist is an error.
    """
    if path is None:
        return _apply_env_overrides(PipelineConfig())

    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    cfg = PipelineConfig(**data)
    return _apply_env_overrides(cfg)
