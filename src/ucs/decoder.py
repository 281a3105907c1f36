"""Decode tab-separated UC lines into typed records."""

from __future__ import annotations

import math
import re

from ucs.config import MIN_UC_FIELDS, UCSOptions
from ucs.models import ABSENT, MapRecord, RecordType, Strand, UCRecord


IDENTIFIER_SEPARATOR = ";"

_UINT32_MAX = 0xFFFFFFFF

# Plain decimal or exponent notation only.
_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def normalize_identifier(identifier: str, enabled: bool = True) -> str:
    """Drop everything from the first ``;`` onward when ``enabled``.

    Sequence labels usually carry annotations such as ``;size=12`` after the
    first separator.
    """

    if not enabled:
        return identifier
    return identifier.split(IDENTIFIER_SEPARATOR, 1)[0]


def _parse_uint32(value: str) -> int:
    if not value.isascii() or not value.isdigit():
        return 0
    number = int(value)
    if number > _UINT32_MAX:
        return 0
    return number


def _parse_identity(value: str) -> float | None:
    if value == ABSENT or not _DECIMAL.fullmatch(value):
        return None
    identity = float(value)
    if not math.isfinite(identity):
        return None
    return identity


def _parse_strand(value: str) -> Strand | None:
    if not value or value == ABSENT:
        return None
    try:
        return Strand(value[0])
    except ValueError:
        return None


def _resolve(fields: list[str], split: bool) -> tuple[RecordType, str, str] | None:
    if len(fields) < MIN_UC_FIELDS:
        return None

    record_type = RecordType.parse(fields[0])
    if record_type is None or record_type.is_redundant:
        return None

    query = normalize_identifier(fields[8], split)
    if record_type is RecordType.HIT:
        target = record_type.resolve_target(query, normalize_identifier(fields[9], split))
    else:
        target = record_type.resolve_target(query, fields[9])
    return record_type, query, target


def decode_record(line: str, split_identifiers: bool = True) -> UCRecord | None:
    """Materialize every column of ``line``; ``None`` means skip the line."""

    fields = line.split("\t")
    resolved = _resolve(fields, split_identifiers)
    if resolved is None:
        return None

    record_type, query, target = resolved
    return UCRecord(
        record_type=record_type,
        cluster_number=_parse_uint32(fields[1]),
        size=_parse_uint32(fields[2]),
        identity=_parse_identity(fields[3]),
        strand=_parse_strand(fields[4]),
        unused_1=fields[5],
        unused_2=fields[6],
        cigar=fields[7],
        query=query,
        target=target,
    )


def decode_map_record(line: str, split_identifiers: bool = True) -> MapRecord | None:
    """Resolve only the record type, query and target of ``line``."""

    # Columns past the target are never needed here.
    fields = line.split("\t", MIN_UC_FIELDS - 1)
    if len(fields) == MIN_UC_FIELDS:
        fields[-1] = fields[-1].split("\t", 1)[0]
    resolved = _resolve(fields, split_identifiers)
    if resolved is None:
        return None

    record_type, query, target = resolved
    return MapRecord(record_type=record_type, query=query, target=target)


class UCRecordDecoder:
    """Pick the decode granularity once for a whole run."""

    def __init__(self, options: UCSOptions) -> None:
        self.split_identifiers = options.split_identifiers
        self.full = not options.map_only

    def decode(self, line: str) -> UCRecord | MapRecord | None:
        if self.full:
            return decode_record(line, self.split_identifiers)
        return decode_map_record(line, self.split_identifiers)
