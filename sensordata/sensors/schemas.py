from __future__ import annotations
from pydantic import BaseModel, Field
from typing import Optional, Literal, List

from ..domain.descriptor import Descriptor, PhysicalType, StorageType
from ..domain.quantized import QuantizedValue
from ..domain.units import Unit


class DescriptorIn(BaseModel):
    name: str = Field(min_length=1)
    storage_type: Literal["int8", "uint8", "int16", "uint16", "int32", "uint32", "int64", "uint64"]
    physical_type: Literal["float32", "float64"] = "float32"
    min_value: float
    max_value: float
    resolution: float = Field(gt=0)
    unit: Literal["celsius", "percent", "lux", "pascal", "volt", "ampere", "meter_per_second"]

    def to_descriptor(self) -> Descriptor:
        return Descriptor(
            storage_type=StorageType.parse(self.storage_type),
            physical_type=PhysicalType.parse(self.physical_type),
            min_value=self.min_value,
            max_value=self.max_value,
            resolution=self.resolution,
            unit=Unit.parse(self.unit),
            name=self.name,
        )


class KindFileIn(BaseModel):
    kinds: List[DescriptorIn]


class ValueSnapshot(BaseModel):
    kind: str
    unit: str
    unit_text: str
    defined: bool
    value: Optional[float] = None
    raw_scaled: Optional[int] = None

    @classmethod
    def of(cls, q: QuantizedValue) -> "ValueSnapshot":
        return cls(
            kind=type(q).__name__,
            unit=q.unit().name.lower(),
            unit_text=q.unit_string(),
            defined=q.is_defined,
            value=q.value(),
            raw_scaled=q.raw_scaled_value(),
        )
