from __future__ import annotations

from ..domain.descriptor import Descriptor, PhysicalType, StorageType
from ..domain.quantized import quantized_kind
from ..domain.units import Unit


# -50.0 .. +50.0 °C in 0.1 °C steps
TEMPERATURE = Descriptor(
    storage_type=StorageType.INT16,
    physical_type=PhysicalType.FLOAT32,
    min_value=-50.0,
    max_value=50.0,
    resolution=0.1,
    unit=Unit.CELSIUS,
    name="temperature",
)

# 0 .. 100 % in 0.5 % steps
HUMIDITY = Descriptor(
    storage_type=StorageType.UINT8,
    physical_type=PhysicalType.FLOAT32,
    min_value=0.0,
    max_value=100.0,
    resolution=0.5,
    unit=Unit.PERCENT,
    name="humidity",
)

# 0 .. 65535 lx in 1 lx steps
LIGHT_INTENSITY = Descriptor(
    storage_type=StorageType.UINT16,
    physical_type=PhysicalType.FLOAT32,
    min_value=0.0,
    max_value=65535.0,
    resolution=1.0,
    unit=Unit.LUX,
    name="light_intensity",
)

Temperature = quantized_kind("Temperature", TEMPERATURE, module=__name__)
Humidity = quantized_kind("Humidity", HUMIDITY, module=__name__)
LightIntensity = quantized_kind("LightIntensity", LIGHT_INTENSITY, module=__name__)
