from __future__ import annotations
import pytest
from pathlib import Path
from booking_analytics.config.loader import ConfigError, build_config, default_config, load_config
from booking_analytics.models.config_models import AnalyticsConfig, CategorySpec
from conftest import PROJECT_ROOT


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.sheet == 0
    assert cfg.breakdowns.channels == (
        CategorySpec("Website", "website_booking"),
        CategorySpec("App", "app_booking"),
    )
    # omitted dimensions keep the defaults
    assert [c.name for c in cfg.breakdowns.cities] == ["Delhi", "Chennai", "Kolkata", "Mumbai"]
    assert cfg.anomaly.pg_success_floor.enabled is True
    assert cfg.export.output_directory == "./out"
    assert cfg.export.formats == ("json", "txt")


def test_empty_file_gives_defaults(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "analytics.yml"
    cfg_path.write_text("", encoding="utf-8")
    assert load_config(cfg_path) == default_config() == AnalyticsConfig()


def test_load_config_missing_file(temp_workdir: Path):
    missing = temp_workdir / "config" / "not_exists.yml"
    with pytest.raises(ConfigError) as e:
        load_config(missing)
    assert "config file not found" in str(e.value)


def test_load_config_invalid_yaml(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "analytics.yml"
    cfg_path.write_text("anomaly: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(cfg_path)
    assert "invalid yaml" in str(e.value)


def test_load_config_root_must_be_mapping(temp_workdir: Path):
    cfg_path = temp_workdir / "config" / "analytics.yml"
    cfg_path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(cfg_path)


def test_load_config_extra_field(write_config: Path):
    text = write_config.read_text(encoding="utf-8") + "\nextra_field: not_allowed\n"
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


@pytest.mark.parametrize(
    "data",
    [
        {"sheet": -1},
        {"sheet": True},
        {"anomaly": {"metrics": ["settled"]}},
        {"anomaly": {"z_threshold": 0}},
        {"anomaly": {"pg_success_floor": {"warning": 120}}},
        {"export": {"formats": ["pdf"]}},
        {"breakdowns": {"channels": [{"name": "Web"}]}},
        {"breakdowns": {"cities": []}},
    ],
)
def test_schema_violations(data):
    with pytest.raises(ConfigError) as e:
        build_config(data)
    assert "config validation failed" in str(e.value)


def test_unknown_counter_field_rejected():
    with pytest.raises(ConfigError) as e:
        build_config({"breakdowns": {"channels": [{"name": "Web", "field": "pg_success_rate"}]}})
    assert "unknown counter field" in str(e.value)


def test_z_cut_offs_must_be_non_decreasing():
    with pytest.raises(ConfigError) as e:
        build_config({"anomaly": {"z_threshold": 3.0, "medium_z": 2.5}})
    assert "z_threshold <= medium_z <= high_z" in str(e.value)


def test_floor_critical_above_warning_rejected():
    with pytest.raises(ConfigError):
        build_config({"anomaly": {"pg_success_floor": {"warning": 20, "critical": 30}}})


def test_sheet_by_name():
    assert build_config({"sheet": "Bookings"}).sheet == "Bookings"


def test_repository_sample_config_is_valid():
    sample = PROJECT_ROOT / "config" / "analytics.yml"
    assert load_config(sample) == default_config()
