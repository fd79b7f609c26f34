from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_ENCODING,
    DEFAULT_PREVIEW_LIMIT,
    ImportConfig,
    ImportProfile,
)
from .validation import InvalidConfigError, resolve_delimiter

"""Import profile loader.

Responsibilities:
- Load a YAML import profile (default: config/import.yml)
- Validate it against the bundled JSON schema
- Resolve the symbolic delimiter and apply defaults

Cross-field invariants (data start after header, distinct characters) are checked
by the session's validate step, not here.
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/import.yml")
SCHEMA_PATH = Path(__file__).with_name("import_profile_schema.json")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: Any) -> None:
    """Validate profile data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the data
            fails validation (missing delimiter, wrong types, unknown keys)
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


def load_config(path: Path) -> ImportProfile:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    try:
        delimiter = resolve_delimiter(data["delimiter"])
    except InvalidConfigError as e:
        raise ConfigError(f"config validation failed: {e}") from e

    header = data.get("header_row_index", 0)
    default_start = 0 if header is None else header + 1
    config = ImportConfig(
        delimiter=delimiter,
        quote_character=data.get("quote_character", '"'),
        escape_character=data.get("escape_character", "\\"),
        header_row_index=header,
        data_start_row_index=data.get("data_start_row_index", default_start),
        encoding=data.get("encoding", DEFAULT_ENCODING),
        skip_blank_rows=data.get("skip_blank_rows", True),
    )
    return ImportProfile(
        config=config,
        preview_limit=data.get("preview_limit", DEFAULT_PREVIEW_LIMIT),
    )
