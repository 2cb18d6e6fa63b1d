from __future__ import annotations

import json

import jsonschema
import pytest
import yaml
from jsonschema.exceptions import ValidationError

from booking_analytics.config.loader import SCHEMA_PATH
from conftest import PROJECT_ROOT

"""Config schema contract: the packaged schema and the sample config agree."""


@pytest.fixture(scope="module")
def schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_schema_is_valid_draft_2020_12(schema):
    jsonschema.Draft202012Validator.check_schema(schema)


def test_sample_config_matches_schema(schema):
    data = yaml.safe_load((PROJECT_ROOT / "config" / "analytics.yml").read_text(encoding="utf-8"))
    jsonschema.validate(data, schema)


def test_empty_config_is_valid(schema):
    jsonschema.validate({}, schema)


@pytest.mark.parametrize(
    "data",
    [
        {"unknown": 1},
        {"anomaly": {"pg_success_floor": {"enabled": "yes"}}},
        {"export": {"formats": ["json", "json"]}},
        {"breakdowns": {"tickets": [{"name": "Tatkal", "field": "tatkal", "extra": 1}]}},
    ],
)
def test_schema_rejects(schema, data):
    with pytest.raises(ValidationError):
        jsonschema.validate(data, schema)
