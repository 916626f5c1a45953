from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.catalog import DEFAULT_CATALOGS, NominaCatalogs
from ..models.inputs import HeaderInput

"""Batch configuration loader.

Responsibilities:
- Load the YAML config (default config/nomina.yml)
- Validate it against the packaged JSON schema
- Apply defaults (output_directory=./out, grouped=False, built-in catalogs)
"""

__all__ = [
    "ConfigError",
    "NominaConfig",
    "SCHEMA_PATH",
    "DEFAULT_CONFIG_PATH",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/nomina.yml")
DEFAULT_OUTPUT_DIRECTORY = "./out"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class NominaConfig:
    source_directory: str  # Directorio con los .csv/.xlsx de entrada
    output_directory: str
    header: HeaderInput
    grouped: bool
    catalogs: NominaCatalogs


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing / not JSON, or data violating it.
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


def _coerce_dates(data: dict[str, Any]) -> dict[str, Any]:
    # YAML convierte 2026-02-27 sin comillas en datetime.date
    header = data.get("header")
    if isinstance(header, dict) and isinstance(header.get("process_date"), date):
        header = dict(header, process_date=header["process_date"].isoformat())
        data = dict(data, header=header)
    return data


def load_config(path: Path) -> NominaConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top-level mapping expected")

    data = _coerce_dates(data)
    _validate_config_schema(data)

    catalog_data = dict(data.get("catalogs") or {})
    if data.get("house_bank"):
        catalog_data["house_bank"] = data["house_bank"]
    catalogs = NominaCatalogs.from_mapping(catalog_data) if catalog_data else DEFAULT_CATALOGS

    return NominaConfig(
        source_directory=data["source_directory"],
        output_directory=data.get("output_directory", DEFAULT_OUTPUT_DIRECTORY),
        header=HeaderInput.from_mapping(data["header"]),
        grouped=bool(data.get("grouped", False)),
        catalogs=catalogs,
    )
