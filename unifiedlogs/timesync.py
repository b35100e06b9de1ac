"""Timesync files: boot records and the wall-clock anchors used for timestamps."""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass, field
from fractions import Fraction

from unifiedlogs.errors import ParseError

logger = logging.getLogger(__name__)

BOOT_SIGNATURE = 0xBBB0
RECORD_SIGNATURE = 0x207354

_BOOT = struct.Struct("<HHI16sIIqII")
_RECORD = struct.Struct("<IIQqII")
_BOOT_SIG = struct.Struct("<H")
_RECORD_SIG = struct.Struct("<I")

_ARM_TIMEBASE = 125.0 / 3.0


@dataclass
class Timesync:
    """A timesync record pairing a mach continuous time with a UTC wall time."""

    signature: int = 0
    unknown_flags: int = 0
    kernel_time: int = 0
    walltime: int = 0
    timezone: int = 0
    daylight_savings: int = 0


@dataclass
class TimesyncBoot:
    """A timesync boot header and the records that follow it."""

    signature: int = 0
    header_size: int = 0
    unknown: int = 0
    boot_uuid: str = ""
    timebase_numerator: int = 0
    timebase_denominator: int = 0
    boot_time: int = 0
    timezone_offset_mins: int = 0
    daylight_savings: int = 0
    timesync: list[Timesync] = field(default_factory=list)


def _read_boot(data: memoryview, offset: int) -> tuple[TimesyncBoot, int]:
    if len(data) - offset < _BOOT_SIG.size:
        raise ParseError("not enough data for a timesync boot signature")
    (signature,) = _BOOT_SIG.unpack_from(data, offset)
    if signature != BOOT_SIGNATURE:
        logger.error(
            "Incorrect Timesync boot header signature. Expected %d. Got: %d",
            BOOT_SIGNATURE,
            signature,
        )
        raise ParseError(
            f"incorrect timesync boot signature: expected {BOOT_SIGNATURE:#x}, "
            f"got {signature:#x}"
        )
    if len(data) - offset < _BOOT.size:
        raise ParseError(
            f"timesync boot header needs {_BOOT.size} bytes, got {len(data) - offset}"
        )
    (
        signature,
        header_size,
        unknown,
        boot_uuid,
        numerator,
        denominator,
        boot_time,
        timezone_offset,
        daylight_savings,
    ) = _BOOT.unpack_from(data, offset)
    boot = TimesyncBoot(
        signature=signature,
        header_size=header_size,
        unknown=unknown,
        boot_uuid=f"{int.from_bytes(boot_uuid, 'big'):X}",
        timebase_numerator=numerator,
        timebase_denominator=denominator,
        boot_time=boot_time,
        timezone_offset_mins=timezone_offset,
        daylight_savings=daylight_savings,
    )
    return boot, offset + _BOOT.size


def _read_record(data: memoryview, offset: int) -> tuple[Timesync, int]:
    if len(data) - offset < _RECORD_SIG.size:
        raise ParseError("not enough data for a timesync record signature")
    (signature,) = _RECORD_SIG.unpack_from(data, offset)
    if signature != RECORD_SIGNATURE:
        logger.error(
            "Incorrect Timesync record header signature. Expected %d. Got: %d",
            RECORD_SIGNATURE,
            signature,
        )
        raise ParseError(
            f"incorrect timesync record signature: expected {RECORD_SIGNATURE:#x}, "
            f"got {signature:#x}"
        )
    if len(data) - offset < _RECORD.size:
        raise ParseError(
            f"timesync record needs {_RECORD.size} bytes, got {len(data) - offset}"
        )
    fields = _RECORD.unpack_from(data, offset)
    return Timesync(*fields), offset + _RECORD.size


def parse_timesync_boot(data: bytes) -> tuple[TimesyncBoot, bytes]:
    """Parse a timesync boot header and return it with the bytes that follow."""
    view = memoryview(data)
    boot, offset = _read_boot(view, 0)
    return boot, bytes(view[offset:])


def parse_timesync(data: bytes) -> tuple[Timesync, bytes]:
    """Parse a timesync record and return it with the bytes that follow."""
    view = memoryview(data)
    record, offset = _read_record(view, 0)
    return record, bytes(view[offset:])


def _merge(boots: dict[str, TimesyncBoot], boot: TimesyncBoot) -> None:
    existing = boots.get(boot.boot_uuid)
    if existing is None:
        boots[boot.boot_uuid] = boot
    else:
        existing.timesync.extend(boot.timesync)


def parse_timesync_data(data: bytes) -> dict[str, TimesyncBoot]:
    """Parse a whole timesync file into boot records keyed by boot UUID.

    Boots that share a UUID have their records joined in file order.
    """
    view = memoryview(data)
    boots: dict[str, TimesyncBoot] = {}
    current = TimesyncBoot()
    offset = 0
    while offset < len(view):
        if len(view) - offset < _RECORD_SIG.size:
            raise ParseError("not enough data for a timesync signature")
        (signature,) = _RECORD_SIG.unpack_from(view, offset)
        if signature == RECORD_SIGNATURE:
            record, offset = _read_record(view, offset)
            current.timesync.append(record)
        else:
            if current.signature != 0:
                _merge(boots, current)
            current, offset = _read_boot(view, offset)
    _merge(boots, current)
    return boots


def _fused_multiply_add(a: float, b: float, c: float) -> float:
    """Compute ``a * b + c`` with a single rounding."""
    return float(Fraction(a) * Fraction(b) + Fraction(c))


def get_timestamp(
    timesync_data: dict[str, TimesyncBoot],
    boot_uuid: str,
    firehose_log_delta_time: int,
    firehose_preamble_time: int,
) -> float:
    """Return the UNIX epoch time in nanoseconds of a firehose log entry.

    The latest timesync record whose kernel time does not pass the entry's
    continuous time anchors it to wall-clock time. A preamble time of zero
    anchors it to the boot time instead. Apple silicon timebases (125/3)
    scale mach ticks to nanoseconds.
    """
    continuous_anchor = 0
    walltime_anchor = 0
    timebase_adjustment = 1.0

    boot = timesync_data.get(boot_uuid)
    if boot is not None:
        if boot.timebase_numerator == 125 and boot.timebase_denominator == 3:
            timebase_adjustment = _ARM_TIMEBASE

        if firehose_preamble_time == 0:
            continuous_anchor = 0
            walltime_anchor = boot.boot_time

        for record in boot.timesync:
            if record.kernel_time > firehose_log_delta_time:
                if continuous_anchor == 0 and walltime_anchor == 0:
                    continuous_anchor = record.kernel_time
                    walltime_anchor = record.walltime
                break
            continuous_anchor = record.kernel_time
            walltime_anchor = record.walltime

    continuous_time = _fused_multiply_add(
        float(firehose_log_delta_time),
        timebase_adjustment,
        -float(continuous_anchor) * timebase_adjustment,
    )
    return continuous_time + float(walltime_anchor)