from __future__ import annotations

import logging
from typing import ClassVar, Optional

from ..core.config import settings
from .descriptor import Descriptor, PhysicalType, StorageType
from .units import Unit, text_of

logger = logging.getLogger(__name__)


class QuantizedValue:
    """
    A physical reading held as a range-checked scaled integer, or nothing.

    The descriptor is bound per kind at the type level (see
    ``quantized_kind``); instances carry only their scaled integer. While
    present, that integer is always within
    ``[descriptor.min_scaled, descriptor.max_scaled]``.
    """

    __slots__ = ("_scaled",)

    descriptor: ClassVar[Optional[Descriptor]] = None

    def __init__(self, initial_value: Optional[float] = None) -> None:
        d = self._bound()
        self._scaled: Optional[int] = None
        if initial_value is not None:
            self._scaled = d.convert_to_scaled(d.clamp(initial_value))

    @classmethod
    def _bound(cls) -> Descriptor:
        if cls.descriptor is None:
            raise TypeError(f"{cls.__name__} has no descriptor; create a kind with quantized_kind()")
        return cls.descriptor

    # --- state ---

    @property
    def is_defined(self) -> bool:
        return self._scaled is not None

    def __bool__(self) -> bool:
        return self._scaled is not None

    def value(self) -> Optional[float]:
        """Physical value, recomputed from the scaled integer on every call."""
        if self._scaled is None:
            return None
        return self._bound().convert_to_physical(self._scaled)

    def set_value(self, new_value: float) -> bool:
        """
        Clamp, quantize and store ``new_value``. The write always happens.

        Returns True if ``new_value`` was already within range, False if it
        had to be clamped (NaN counts as clamped).
        """
        d = self._bound()
        v = d.physical_type.narrow(new_value)
        clamped = d.clamp(v)
        self._scaled = d.convert_to_scaled(clamped)

        in_range = abs(v - clamped) < d.physical_type.epsilon * settings.clamp_epsilon_factor
        if not in_range:
            logger.debug("%s: clamped %r to %r", type(self).__name__, new_value, clamped)
        return in_range

    def raw_scaled_value(self) -> Optional[int]:
        return self._scaled

    def set_raw_scaled_value(self, raw_val: int) -> bool:
        """Store a raw scaled integer if it is in domain; otherwise change nothing."""
        d = self._bound()
        if not d.contains_scaled(raw_val):
            logger.debug(
                "%s: rejected raw value %r (valid [%d, %d])",
                type(self).__name__, raw_val, d.min_scaled, d.max_scaled,
            )
            return False
        self._scaled = int(raw_val)
        return True

    def clear(self) -> None:
        self._scaled = None

    # --- kind metadata ---

    @classmethod
    def min_value(cls) -> float:
        return cls._bound().min_value

    @classmethod
    def max_value(cls) -> float:
        return cls._bound().max_value

    @classmethod
    def resolution(cls) -> float:
        return cls._bound().resolution

    @classmethod
    def unit(cls) -> Unit:
        return cls._bound().unit

    @classmethod
    def unit_string(cls) -> str:
        return text_of(cls._bound().unit)

    @classmethod
    def min_scaled_storage_value(cls) -> int:
        return cls._bound().min_scaled

    @classmethod
    def max_scaled_storage_value(cls) -> int:
        return cls._bound().max_scaled

    @classmethod
    def storage_type(cls) -> StorageType:
        return cls._bound().storage_type

    @classmethod
    def physical_type(cls) -> PhysicalType:
        return cls._bound().physical_type

    # --- value semantics ---

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._scaled == other._scaled

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        if self._scaled is None:
            return f"{type(self).__name__}()"
        return f"{type(self).__name__}(raw={self._scaled}, value={self.value()!r})"


def quantized_kind(name: str, descriptor: Descriptor, module: Optional[str] = None) -> type[QuantizedValue]:
    """Build the concrete value type for one sensor kind."""
    if not isinstance(descriptor, Descriptor):
        raise TypeError(f"{name}: expected a Descriptor, got {type(descriptor).__name__}")

    ns = {
        "__slots__": (),
        "descriptor": descriptor,
        "__doc__": (
            f"{name}: {descriptor.min_value:g} to {descriptor.max_value:g} {descriptor.unit.text}, "
            f"resolution {descriptor.resolution:g}, stored as {descriptor.storage_type.name.lower()}."
        ),
    }
    if module is not None:
        ns["__module__"] = module
    return type(name, (QuantizedValue,), ns)
