"""
Quantized sensor value tool.

Converts physical readings to the compact scaled integers stored on the
wire and back, using the built-in sensor kinds plus any kinds listed in a
JSON kind file. ``pack``/``unpack`` do the same for a whole fixed-size
record (presence mask + one raw value per kind).

Usage:
    sensordata kinds
    sensordata encode temperature 25.3                   # -> 253
    sensordata decode humidity 100                       # -> 50 %
    sensordata --json encode temperature 999             # clamped, exit code 1
    sensordata pack temperature=25.3 humidity=50.25      # -> 03fd0064
    sensordata pack temperature=-4 humidity=             # humidity undefined
    sensordata unpack 03fd0064 temperature humidity
    sensordata --kinds-file kinds.json kinds
"""

from __future__ import annotations

import argparse
import json
import logging
from typing import Optional, Sequence

from .core.config import settings
from .core.log import configure_logging
from .sensors.record import RecordError, RecordLayout
from .sensors.registry import KindRegistry, build_registry
from .sensors.schemas import ValueSnapshot

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CLAMPED = 1
EXIT_REJECTED = 2
EXIT_CONFIG = 3


# ---------------------------------------------------------------------------
# Argument types
# ---------------------------------------------------------------------------

def _field(text: str) -> tuple[str, Optional[float]]:
    """KIND=VALUE, or KIND= / KIND=- for an undefined value."""
    kind, sep, value = text.partition("=")
    if not sep or not kind:
        raise argparse.ArgumentTypeError(f"expected KIND=VALUE, got {text!r}")
    if value in ("", "-"):
        return kind, None
    try:
        return kind, float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from None


def _hex(text: str) -> bytes:
    try:
        return bytes.fromhex(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a hex string: {text!r}") from None


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_kinds(reg: KindRegistry, args: argparse.Namespace) -> int:
    for name in reg.names():
        k = reg.get(name)
        print(
            f"{name:<16} [{k.min_value():g}, {k.max_value():g}] {k.unit_string():<3} "
            f"step {k.resolution():g}  raw [{k.min_scaled_storage_value()}, {k.max_scaled_storage_value()}] "
            f"{k.storage_type().name.lower()}"
        )
    return EXIT_OK


def cmd_encode(reg: KindRegistry, args: argparse.Namespace) -> int:
    q = reg.get(args.kind)()
    in_range = q.set_value(args.value)
    if not in_range:
        logger.warning(
            "%s %g outside [%g, %g], clamped to %g",
            args.kind, args.value, q.min_value(), q.max_value(), q.value(),
        )

    if args.json:
        print(ValueSnapshot.of(q).model_dump_json())
    else:
        print(q.raw_scaled_value())
    return EXIT_OK if in_range else EXIT_CLAMPED


def cmd_decode(reg: KindRegistry, args: argparse.Namespace) -> int:
    q = reg.get(args.kind)()
    if not q.set_raw_scaled_value(args.raw):
        logger.error(
            "%s raw value %d outside [%d, %d]",
            args.kind, args.raw, q.min_scaled_storage_value(), q.max_scaled_storage_value(),
        )
        return EXIT_REJECTED

    if args.json:
        print(ValueSnapshot.of(q).model_dump_json())
    else:
        print(f"{q.value():g} {q.unit_string()}")
    return EXIT_OK


def cmd_pack(reg: KindRegistry, args: argparse.Namespace) -> int:
    try:
        layout = RecordLayout([(kind, reg.get(kind)) for kind, _ in args.fields])
    except ValueError as e:
        logger.error("Invalid record layout: %s", e)
        return EXIT_REJECTED

    values = {}
    clamped = False
    for kind, v in args.fields:
        q = reg.get(kind)()
        if v is not None and not q.set_value(v):
            logger.warning("%s %g outside [%g, %g], clamped to %g", kind, v, q.min_value(), q.max_value(), q.value())
            clamped = True
        values[kind] = q

    record = layout.pack(values)
    if args.json:
        print(json.dumps({
            "record": record.hex(),
            "values": [ValueSnapshot.of(q).model_dump() for q in values.values()],
        }))
    else:
        print(record.hex())
    return EXIT_CLAMPED if clamped else EXIT_OK


def cmd_unpack(reg: KindRegistry, args: argparse.Namespace) -> int:
    try:
        layout = RecordLayout([(kind, reg.get(kind)) for kind in args.kinds])
        values = layout.unpack(args.record)
    except (RecordError, ValueError) as e:
        logger.error("Cannot unpack record %s: %s", args.record.hex(), e)
        return EXIT_REJECTED

    if args.json:
        print(json.dumps({name: ValueSnapshot.of(q).model_dump() for name, q in values.items()}))
    else:
        for name, q in values.items():
            print(f"{name}={q.value():g} {q.unit_string()}" if q else f"{name}=-")
    return EXIT_OK


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="sensordata", description="Quantized sensor value tool")

    p.add_argument("--kinds-file", default=None, help="JSON file with extra sensor kinds")
    p.add_argument("--json", action="store_true", help="Print a JSON snapshot instead of plain text")
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("kinds", help="List sensor kinds")

    enc = sub.add_parser("encode", help="Physical value -> raw scaled value")
    enc.add_argument("kind")
    enc.add_argument("value", type=float)

    dec = sub.add_parser("decode", help="Raw scaled value -> physical value")
    dec.add_argument("kind")
    dec.add_argument("raw", type=int)

    pck = sub.add_parser("pack", help="KIND=VALUE ... -> hex record")
    pck.add_argument("fields", nargs="+", type=_field, metavar="KIND=VALUE")

    unp = sub.add_parser("unpack", help="Hex record -> physical values")
    unp.add_argument("record", type=_hex, metavar="HEX")
    unp.add_argument("kinds", nargs="+", metavar="KIND")

    return p


COMMANDS = {
    "kinds": cmd_kinds,
    "encode": cmd_encode,
    "decode": cmd_decode,
    "pack": cmd_pack,
    "unpack": cmd_unpack,
}


def _requested_kinds(args: argparse.Namespace) -> list[str]:
    if args.command == "pack":
        return [kind for kind, _ in args.fields]
    if args.command == "unpack":
        return list(args.kinds)
    kind = getattr(args, "kind", None)
    return [kind] if kind is not None else []


def main(argv: Optional[Sequence[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else settings.log_level)

    try:
        reg = build_registry(args.kinds_file)
    except (OSError, ValueError, KeyError) as e:
        logger.error("Cannot load sensor kinds from %s: %s", args.kinds_file or settings.kinds_path, e)
        return EXIT_CONFIG

    for kind in _requested_kinds(args):
        if kind not in reg:
            p.error(f"unknown kind {kind!r} (known: {', '.join(reg.names())})")

    return COMMANDS[args.command](reg, args)


if __name__ == "__main__":
    raise SystemExit(main())
