from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator, Optional, Union

from ..core.config import settings
from ..domain.quantized import QuantizedValue, quantized_kind
from .kinds import Humidity, LightIntensity, Temperature
from .schemas import KindFileIn

logger = logging.getLogger(__name__)

KindType = type[QuantizedValue]


class KindRegistry:
    def __init__(self) -> None:
        self._kinds: dict[str, KindType] = {}

    def register(self, name: str, kind: KindType) -> None:
        if not (isinstance(kind, type) and issubclass(kind, QuantizedValue)) or kind.descriptor is None:
            raise TypeError(f"{name}: not a bound QuantizedValue kind: {kind!r}")
        if name in self._kinds:
            raise ValueError(f"Sensor kind already registered: {name}")
        self._kinds[name] = kind

    def get(self, name: str) -> KindType:
        try:
            return self._kinds[name]
        except KeyError:
            raise KeyError(f"Unknown sensor kind: {name}") from None

    def names(self) -> list[str]:
        return list(self._kinds)

    def __contains__(self, name: object) -> bool:
        return name in self._kinds

    def __iter__(self) -> Iterator[str]:
        return iter(self._kinds)

    def __len__(self) -> int:
        return len(self._kinds)


def default_registry() -> KindRegistry:
    reg = KindRegistry()
    reg.register("temperature", Temperature)
    reg.register("humidity", Humidity)
    reg.register("light_intensity", LightIntensity)
    return reg


def _type_name(kind_name: str) -> str:
    return "".join(part.capitalize() for part in kind_name.replace("-", "_").split("_") if part) or "Kind"


def load_kinds(path: Union[str, Path], registry: KindRegistry) -> list[str]:
    """
    Define and register the kinds listed in a JSON kind file.

    Every entry is built and checked before any is registered, so a bad
    file leaves the registry untouched. Raises pydantic.ValidationError for
    a malformed file, DescriptorError for a kind whose parameters cannot
    hold a value and ValueError for a duplicate name.
    """
    path = Path(path)
    data = KindFileIn.model_validate(json.loads(path.read_text(encoding="utf-8")))

    pending = []
    for entry in data.kinds:
        if entry.name in registry or any(name == entry.name for name, _ in pending):
            raise ValueError(f"{path}: sensor kind already registered: {entry.name}")
        kind = quantized_kind(_type_name(entry.name), entry.to_descriptor())
        pending.append((entry.name, kind))

    for name, kind in pending:
        registry.register(name, kind)
        logger.info(
            "Registered kind %s: [%g, %g] %s step %g as %s",
            name, kind.min_value(), kind.max_value(), kind.unit_string(),
            kind.resolution(), kind.storage_type().name.lower(),
        )
    return [name for name, _ in pending]


def build_registry(kinds_path: Optional[str] = None) -> KindRegistry:
    reg = default_registry()
    path = kinds_path if kinds_path is not None else settings.kinds_path
    if path:
        if Path(path).is_file():
            load_kinds(path, reg)
        else:
            logger.warning("Kind file %s not found, using built-in kinds only", path)
    return reg
