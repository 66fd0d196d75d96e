from __future__ import annotations

import math
import operator
import struct
import sys
from dataclasses import dataclass, field
from enum import Enum

from .units import Unit


class DescriptorError(ValueError):
    """A sensor kind was defined with parameters that can never hold a value."""


class StorageType(Enum):
    # name = (struct code, bits, signed)
    INT8 = ("b", 8, True)
    UINT8 = ("B", 8, False)
    INT16 = ("h", 16, True)
    UINT16 = ("H", 16, False)
    INT32 = ("i", 32, True)
    UINT32 = ("I", 32, False)
    INT64 = ("q", 64, True)
    UINT64 = ("Q", 64, False)

    @classmethod
    def parse(cls, name: str) -> "StorageType":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown storage type: {name!r}") from None

    @property
    def struct_code(self) -> str:
        return self.value[0]

    @property
    def bits(self) -> int:
        return self.value[1]

    @property
    def signed(self) -> bool:
        return self.value[2]

    @property
    def size(self) -> int:
        return self.bits // 8

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def contains(self, n: int) -> bool:
        return self.min <= n <= self.max


class PhysicalType(Enum):
    FLOAT32 = "float32"
    FLOAT64 = "float64"

    @classmethod
    def parse(cls, name: str) -> "PhysicalType":
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown physical type: {name!r}") from None

    @property
    def epsilon(self) -> float:
        if self is PhysicalType.FLOAT32:
            return 2.0 ** -23
        return sys.float_info.epsilon

    def narrow(self, x: float) -> float:
        """Round ``x`` to the nearest value this type can represent; too large becomes ±inf."""
        try:
            y = float(x)
            if self is PhysicalType.FLOAT32:
                y = struct.unpack("<f", struct.pack("<f", y))[0]
        except OverflowError:
            # huge ints overflow float(), huge floats overflow float32
            return math.inf if x > 0 else -math.inf
        return y


@dataclass(frozen=True)
class Descriptor:
    """
    Immutable parameter set describing one sensor kind.

    Base parameters are narrowed to ``physical_type`` on definition and the
    scale factor and scaled bounds are derived once. Any parameter set that
    could not hold a valid value raises ``DescriptorError`` here, before a
    single instance of the kind exists.
    """

    storage_type: StorageType
    physical_type: PhysicalType
    min_value: float
    max_value: float
    resolution: float
    unit: Unit
    name: str = ""

    scale_factor: float = field(init=False, repr=False)
    min_scaled: int = field(init=False, repr=False)
    max_scaled: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        label = self.name or "descriptor"

        if not isinstance(self.storage_type, StorageType):
            raise DescriptorError(f"{label}: storage_type must be a StorageType, got {self.storage_type!r}")
        if not isinstance(self.physical_type, PhysicalType):
            raise DescriptorError(f"{label}: physical_type must be a PhysicalType, got {self.physical_type!r}")
        if not isinstance(self.unit, Unit):
            raise DescriptorError(f"{label}: unit must be a Unit, got {self.unit!r}")

        narrow = self.physical_type.narrow
        try:
            lo = narrow(self.min_value)
            hi = narrow(self.max_value)
            res = narrow(self.resolution)
        except (TypeError, ValueError) as e:
            raise DescriptorError(f"{label}: non-numeric parameter ({e})") from None

        if not (res > 0.0) or math.isinf(res):
            raise DescriptorError(f"{label}: resolution must be positive, got {self.resolution!r}")
        if not (math.isfinite(lo) and math.isfinite(hi)):
            raise DescriptorError(f"{label}: bounds must be finite, got [{self.min_value!r}, {self.max_value!r}]")
        if lo > hi:
            raise DescriptorError(f"{label}: min_value {lo} exceeds max_value {hi}")

        scale = narrow(1.0 / res)
        if not math.isfinite(scale):
            raise DescriptorError(f"{label}: resolution {self.resolution!r} is too small to scale")

        object.__setattr__(self, "min_value", lo)
        object.__setattr__(self, "max_value", hi)
        object.__setattr__(self, "resolution", res)
        object.__setattr__(self, "scale_factor", scale)

        for bound in (lo, hi):
            if not math.isfinite(narrow(bound * scale)):
                raise DescriptorError(f"{label}: scaled bound of {bound} overflows {self.physical_type.value}")

        min_scaled = self.convert_to_scaled(lo)
        max_scaled = self.convert_to_scaled(hi)
        for s in (min_scaled, max_scaled):
            if not self.storage_type.contains(s):
                raise DescriptorError(
                    f"{label}: scaled bound {s} does not fit {self.storage_type.name.lower()} "
                    f"[{self.storage_type.min}, {self.storage_type.max}]"
                )

        object.__setattr__(self, "min_scaled", min_scaled)
        object.__setattr__(self, "max_scaled", max_scaled)

    def clamp(self, v: float) -> float:
        v = self.physical_type.narrow(v)
        if math.isnan(v):
            return self.min_value
        return min(max(v, self.min_value), self.max_value)

    def convert_to_scaled(self, v: float) -> int:
        """Quantize a pre-clamped physical value (round half to even)."""
        return round(self.physical_type.narrow(v * self.scale_factor))

    def convert_to_physical(self, s: int) -> float:
        return self.physical_type.narrow(float(s) / self.scale_factor)

    def contains_scaled(self, r) -> bool:
        if isinstance(r, bool):
            return False
        try:
            n = operator.index(r)
        except TypeError:
            return False
        return self.min_scaled <= n <= self.max_scaled
