from __future__ import annotations
from enum import IntEnum


class Unit(IntEnum):
    CELSIUS = 0
    PERCENT = 1
    LUX = 2
    PASCAL = 3
    VOLT = 4
    AMPERE = 5
    METER_PER_SECOND = 6

    @classmethod
    def parse(cls, name: str) -> "Unit":
        """Look up a unit by its lower-case name, e.g. ``"celsius"``."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown unit: {name!r}") from None

    @property
    def text(self) -> str:
        return text_of(self)


# Indexed by Unit ordinal
_TEXT = (
    "°C",   # celsius
    "%",    # percent
    "lx",   # lux
    "Pa",   # pascal
    "V",    # volt
    "A",    # ampere
    "m/s",  # meter_per_second
)


def text_of(unit) -> str:
    """Display symbol for a unit, or "" if it is not a recognized unit."""
    if isinstance(unit, bool) or not isinstance(unit, int):
        return ""
    if 0 <= unit < len(_TEXT):
        return _TEXT[unit]
    return ""
