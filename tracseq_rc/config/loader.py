from __future__ import annotations

import json
import os
from dataclasses import replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    CanonicalColumn,
    ClassifierThresholds,
    MissingDelimiterPolicy,
    RcConfig,
)

"""Config loader.

Responsibilities:
- Load an optional YAML config file
- Validate it against config_schema.json (unknown keys rejected)
- Apply defaults for every missing key
- Apply environment overrides (TRACSEQ_RC_CONFIG / TRACSEQ_RC_TABLE)

Without any file the tool runs on the built-in defaults, which reproduce the
legacy constants (SampleBatchItems table, ``_RC`` suffix, 10-row sample).
"""

__all__ = [
    "ConfigError",
    "SCHEMA_PATH",
    "ENV_CONFIG_PATH",
    "ENV_TABLE_NAME",
    "load_config",
    "resolve_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")

ENV_CONFIG_PATH = "TRACSEQ_RC_CONFIG"
ENV_TABLE_NAME = "TRACSEQ_RC_TABLE"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing/invalid, or data violates the schema
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


def _build_config(data: dict[str, Any]) -> RcConfig:
    defaults = RcConfig()
    thresholds_raw = data.get("classifier", {})
    thresholds = ClassifierThresholds(
        sample_rows=thresholds_raw.get("sample_rows", defaults.thresholds.sample_rows),
        min_suffix_length=thresholds_raw.get("min_suffix_length", defaults.thresholds.min_suffix_length),
        suffix_ratio=float(thresholds_raw.get("suffix_ratio", defaults.thresholds.suffix_ratio)),
        min_sequence_length=thresholds_raw.get("min_sequence_length", defaults.thresholds.min_sequence_length),
    )
    if "canonical_columns" in data:
        canonical = tuple(CanonicalColumn(c["name"], c["delimiter"]) for c in data["canonical_columns"])
    else:
        canonical = defaults.canonical_columns
    return RcConfig(
        table_name=data.get("table_name", defaults.table_name),
        output_suffix=data.get("output_suffix", defaults.output_suffix),
        header_sentinel=data.get("header_sentinel", defaults.header_sentinel),
        missing_delimiter=MissingDelimiterPolicy(
            data.get("missing_delimiter", defaults.missing_delimiter.value)
        ),
        canonical_columns=canonical,
        identifier_columns=tuple(data.get("identifier_columns", defaults.identifier_columns)),
        thresholds=thresholds,
    )


def load_config(path: Path) -> RcConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)
    return _build_config(data)


def resolve_config(path: Path | None = None) -> RcConfig:
    """Resolve the effective configuration.

    Priority (highest first):
        1. TRACSEQ_RC_TABLE environment variable (table name only)
        2. ``path`` argument, else the file named by TRACSEQ_RC_CONFIG
        3. built-in defaults
    """
    if path is None and os.getenv(ENV_CONFIG_PATH):
        path = Path(os.environ[ENV_CONFIG_PATH])
    cfg = load_config(path) if path is not None else RcConfig()

    table_env = os.getenv(ENV_TABLE_NAME)
    if table_env:
        _validate_config_schema({"table_name": table_env})
        cfg = replace(cfg, table_name=table_env)
    return cfg
