from __future__ import annotations

import logging
import struct
from typing import Mapping, Sequence, Tuple

from ..domain.quantized import QuantizedValue

logger = logging.getLogger(__name__)

# presence mask width by field count
_MASK_CODES = ((8, "B"), (16, "H"), (32, "I"), (64, "Q"))


class RecordError(ValueError):
    """A compact record could not be decoded."""


class RecordLayout:
    """
    Fixed-size little-endian record of several quantized values.

    Layout: presence bitmask (bit i set => field i defined), then each
    field's raw scaled value in its kind's storage type. Undefined fields
    are written as zero with their presence bit cleared.
    """

    def __init__(self, fields: Sequence[Tuple[str, type[QuantizedValue]]]) -> None:
        if not fields:
            raise ValueError("Record needs at least one field")
        if len(fields) > 64:
            raise ValueError(f"Record supports at most 64 fields, got {len(fields)}")

        names = [name for name, _ in fields]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate field names in record: {names}")

        for name, kind in fields:
            if not (isinstance(kind, type) and issubclass(kind, QuantizedValue)) or kind.descriptor is None:
                raise TypeError(f"Field {name}: not a bound QuantizedValue kind: {kind!r}")

        self._fields = list(fields)
        mask_code = next(code for bits, code in _MASK_CODES if len(fields) <= bits)
        self._struct = struct.Struct("<" + mask_code + "".join(k.storage_type().struct_code for _, k in fields))

    @property
    def size(self) -> int:
        return self._struct.size

    @property
    def field_names(self) -> list[str]:
        return [name for name, _ in self._fields]

    def pack(self, values: Mapping[str, QuantizedValue]) -> bytes:
        mask = 0
        raws = []
        for i, (name, kind) in enumerate(self._fields):
            q = values.get(name)
            if q is not None and type(q) is not kind:
                raise TypeError(f"Field {name}: expected {kind.__name__}, got {type(q).__name__}")
            raw = q.raw_scaled_value() if q is not None else None
            if raw is None:
                raws.append(0)
            else:
                mask |= 1 << i
                raws.append(raw)
        return self._struct.pack(mask, *raws)

    def unpack(self, data: bytes) -> dict[str, QuantizedValue]:
        if len(data) != self._struct.size:
            raise RecordError(f"Record must be {self._struct.size} bytes, got {len(data)}")

        mask, *raws = self._struct.unpack(data)
        if mask >> len(self._fields):
            raise RecordError(f"Presence mask {mask:#x} flags fields beyond {len(self._fields)}")

        out: dict[str, QuantizedValue] = {}
        for i, ((name, kind), raw) in enumerate(zip(self._fields, raws)):
            q = kind()
            if mask & (1 << i):
                if not q.set_raw_scaled_value(raw):
                    logger.warning("Record field %s: raw value %d out of domain", name, raw)
                    raise RecordError(
                        f"Field {name}: raw value {raw} outside "
                        f"[{kind.min_scaled_storage_value()}, {kind.max_scaled_storage_value()}]"
                    )
            out[name] = q
        return out
