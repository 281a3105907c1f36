"""Typed in-memory records decoded from UC lines."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


ABSENT = "*"


class RecordType(str, Enum):
    """UC record-type tag found in the first column of every line."""

    CLUSTER = "C"
    SEED = "S"
    HIT = "H"
    NO_HIT = "N"

    @property
    def is_redundant(self) -> bool:
        """Cluster summaries repeat what the seed line of the cluster already says."""

        return self is RecordType.CLUSTER

    def resolve_target(self, query: str, raw_target: str) -> str:
        """Return the effective target for a record of this type.

        Hits point at the centroid named in the target column. Seeds and
        unmatched queries represent themselves.
        """

        if self is RecordType.HIT:
            return raw_target
        if self in (RecordType.SEED, RecordType.NO_HIT):
            return query
        raise ValueError(f"Record type {self.value} has no effective target")

    @classmethod
    def parse(cls, tag: str) -> RecordType | None:
        try:
            return cls(tag)
        except ValueError:
            return None


class Strand(str, Enum):
    PLUS = "+"
    MINUS = "-"


@dataclass(frozen=True)
class MapRecord:
    """Minimal decode: record type plus the effective query and target."""

    record_type: RecordType
    query: str
    target: str

    def key(self) -> tuple[str, str]:
        return (self.query, self.target)

    def to_row(self) -> dict[str, Any]:
        return {"query": self.query, "target": self.target}

    def to_text_row(self) -> tuple[str, ...]:
        return (self.query, self.target)


@dataclass(frozen=True)
class UCRecord:
    """Full decode of one UC line with query and target already resolved.

    ``identity`` and ``strand`` are ``None`` when the line carries ``*`` or an
    unparsable value; integer columns fall back to zero.
    """

    record_type: RecordType
    cluster_number: int
    size: int
    identity: float | None
    strand: Strand | None
    unused_1: str
    unused_2: str
    cigar: str
    query: str
    target: str

    def key(self) -> tuple[str, str]:
        return (self.query, self.target)

    def to_row(self) -> dict[str, Any]:
        """Serialize into a plain dict for columnar writers."""

        return {
            "record_type": self.record_type.value,
            "cluster_number": self.cluster_number,
            "size": self.size,
            "identity": self.identity,
            "strand": self.strand.value if self.strand is not None else ABSENT,
            "unused_1": self.unused_1,
            "unused_2": self.unused_2,
            "cigar": self.cigar,
            "query": self.query,
            "target": self.target,
        }

    def to_text_row(self) -> tuple[str, ...]:
        identity = f"{self.identity:.2f}" if self.identity is not None else ABSENT
        return (
            self.record_type.value,
            str(self.cluster_number),
            str(self.size),
            identity,
            self.strand.value if self.strand is not None else ABSENT,
            self.unused_1,
            self.unused_2,
            self.cigar,
            self.query,
            self.target,
        )
