"""Pytest configuration and fixtures for test suite."""

import json

import pytest

from sensordata.core.config import settings
from sensordata.sensors.kinds import Humidity, LightIntensity, Temperature


@pytest.fixture(autouse=True)
def restore_settings():
    """Tests may tweak the settings singleton; put it back afterwards."""
    saved = settings.model_dump()
    yield
    for key, value in saved.items():
        setattr(settings, key, value)


@pytest.fixture
def temperature():
    return Temperature()


@pytest.fixture
def humidity():
    return Humidity()


@pytest.fixture
def light():
    return LightIntensity()


@pytest.fixture
def kinds_file(tmp_path):
    """A kind file defining pressure and wind speed."""
    path = tmp_path / "kinds.json"
    path.write_text(json.dumps({
        "kinds": [
            {
                "name": "pressure",
                "storage_type": "uint32",
                "physical_type": "float64",
                "min_value": 30000.0,
                "max_value": 110000.0,
                "resolution": 0.5,
                "unit": "pascal",
            },
            {
                "name": "wind_speed",
                "storage_type": "uint16",
                "min_value": 0.0,
                "max_value": 60.0,
                "resolution": 0.01,
                "unit": "meter_per_second",
            },
        ]
    }))
    return path
