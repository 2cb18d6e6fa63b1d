from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.booking_record import COUNTER_FIELDS
from ..models.config_models import (
    AnalyticsConfig,
    AnomalySettings,
    BreakdownConfig,
    CategorySpec,
    ExportConfig,
    PgFloorRule,
)

"""Config loader.

Responsibilities:
- Load the YAML config (config/analytics.yml by default)
- Validate it against the packaged JSON schema
- Apply defaults for every omitted key
- Check cross-field rules the schema cannot express (counter fields, z ordering)
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/analytics.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the config data
            violates it (unknown keys, wrong types, out of range values).
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


def _categories(raw: list[dict[str, str]] | None, fallback: tuple[CategorySpec, ...], dimension: str) -> tuple[CategorySpec, ...]:
    if raw is None:
        return fallback
    specs = []
    for item in raw:
        if item["field"] not in COUNTER_FIELDS:
            raise ConfigError(
                f"breakdowns.{dimension}: unknown counter field '{item['field']}' "
                f"(expected one of {sorted(COUNTER_FIELDS)})"
            )
        specs.append(CategorySpec(name=item["name"], field=item["field"]))
    return tuple(specs)


def _build_anomaly(raw: dict[str, Any]) -> AnomalySettings:
    defaults = AnomalySettings()
    floor_raw = raw.get("pg_success_floor", {})
    floor_defaults = PgFloorRule()
    floor = PgFloorRule(
        enabled=floor_raw.get("enabled", floor_defaults.enabled),
        warning=float(floor_raw.get("warning", floor_defaults.warning)),
        critical=float(floor_raw.get("critical", floor_defaults.critical)),
    )
    if floor.critical > floor.warning:
        raise ConfigError(
            f"anomaly.pg_success_floor: critical ({floor.critical}) must not exceed warning ({floor.warning})"
        )
    settings = AnomalySettings(
        metrics=tuple(raw.get("metrics", defaults.metrics)),
        z_threshold=float(raw.get("z_threshold", defaults.z_threshold)),
        medium_z=float(raw.get("medium_z", defaults.medium_z)),
        high_z=float(raw.get("high_z", defaults.high_z)),
        pg_success_floor=floor,
    )
    if not settings.z_threshold <= settings.medium_z <= settings.high_z:
        raise ConfigError(
            "anomaly: expected z_threshold <= medium_z <= high_z, got "
            f"{settings.z_threshold} / {settings.medium_z} / {settings.high_z}"
        )
    return settings


def build_config(data: dict[str, Any]) -> AnalyticsConfig:
    """Validate a config mapping and turn it into an AnalyticsConfig."""
    _validate_config_schema(data)

    defaults = BreakdownConfig()
    bd_raw = data.get("breakdowns", {})
    breakdowns = BreakdownConfig(
        channels=_categories(bd_raw.get("channels"), defaults.channels, "channels"),
        tickets=_categories(bd_raw.get("tickets"), defaults.tickets, "tickets"),
        cities=_categories(bd_raw.get("cities"), defaults.cities, "cities"),
    )

    export_defaults = ExportConfig()
    export_raw = data.get("export", {})
    export = ExportConfig(
        output_directory=export_raw.get("output_directory", export_defaults.output_directory),
        formats=tuple(export_raw.get("formats", export_defaults.formats)),
    )

    return AnalyticsConfig(
        sheet=data.get("sheet", 0),
        breakdowns=breakdowns,
        anomaly=_build_anomaly(data.get("anomaly", {})),
        export=export,
    )


def default_config() -> AnalyticsConfig:
    return AnalyticsConfig()


def load_config(path: Path) -> AnalyticsConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")
    return build_config(data)
