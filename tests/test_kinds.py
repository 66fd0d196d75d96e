"""
Scenario tests for the built-in sensor kinds
"""
import pytest

from sensordata.domain.units import Unit
from sensordata.sensors.kinds import Humidity, LightIntensity, Temperature


class TestTemperatureScenarios:
    def test_default_is_undefined(self) -> None:
        t = Temperature()
        assert t.value() is None
        assert t.raw_scaled_value() is None

    def test_construct_from_physical(self) -> None:
        t = Temperature(25.3)
        assert t.raw_scaled_value() == 253
        assert t.value() == pytest.approx(25.3, abs=1e-5)

    def test_set_value_far_above_range(self) -> None:
        t = Temperature()
        assert t.set_value(999.0) is False
        assert t.value() == 50.0
        assert t.raw_scaled_value() == 500

    def test_raw_just_above_max_is_rejected(self) -> None:
        t = Temperature()
        assert t.set_raw_scaled_value(501) is False
        assert t.value() is None
        assert t.raw_scaled_value() is None

    def test_negative_values_use_signed_storage(self) -> None:
        t = Temperature(-12.3)
        assert t.raw_scaled_value() == -123


class TestHumidityScenarios:
    def test_quantizes_to_nearest_half_percent(self) -> None:
        h = Humidity(50.25)
        assert h.raw_scaled_value() == 100
        assert h.value() == pytest.approx(50.0)

    def test_range(self) -> None:
        assert Humidity.unit() is Unit.PERCENT
        assert Humidity.unit_string() == "%"
        assert Humidity.max_scaled_storage_value() == 200
        assert Humidity(-3.0).value() == 0.0


class TestLightIntensityScenarios:
    def test_full_storage_range(self) -> None:
        assert LightIntensity(70000.0).raw_scaled_value() == 65535
        assert LightIntensity(-3.0).raw_scaled_value() == 0

    def test_whole_lux_steps(self) -> None:
        assert LightIntensity(123.4).raw_scaled_value() == 123
        assert LightIntensity(123.5).raw_scaled_value() == 124
        assert LightIntensity(124.5).raw_scaled_value() == 124

    def test_unit(self) -> None:
        assert LightIntensity.unit_string() == "lx"
