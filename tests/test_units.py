"""
Tests for unit tags and their display text
"""
import pytest

from sensordata.domain.units import Unit, text_of


@pytest.mark.parametrize("unit,text", [
    (Unit.CELSIUS, "°C"),
    (Unit.PERCENT, "%"),
    (Unit.LUX, "lx"),
    (Unit.PASCAL, "Pa"),
    (Unit.VOLT, "V"),
    (Unit.AMPERE, "A"),
    (Unit.METER_PER_SECOND, "m/s"),
])
def test_text_of_known_units(unit, text) -> None:
    assert text_of(unit) == text
    assert unit.text == text


@pytest.mark.parametrize("bogus", [7, -1, 255, "celsius", None, True, 1.0])
def test_text_of_unknown_is_empty(bogus) -> None:
    assert text_of(bogus) == ""


def test_ordinals_follow_declaration_order() -> None:
    assert [u.value for u in Unit] == list(range(7))


def test_parse_by_name() -> None:
    assert Unit.parse("meter_per_second") is Unit.METER_PER_SECOND
    assert Unit.parse(" Lux ") is Unit.LUX
    with pytest.raises(ValueError):
        Unit.parse("kelvin")
