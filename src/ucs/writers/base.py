"""Base class for record serialization backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ucs.models import MapRecord, UCRecord


class RecordWriter(ABC):
    """Receives resolved records one at a time and serializes them."""

    name: str

    def __init__(self) -> None:
        self.rows_written = 0
        self.closed = False

    @abstractmethod
    def write(self, record: UCRecord | MapRecord) -> None:
        """Queue or write a single record."""

    @abstractmethod
    def close(self) -> None:
        """Flush pending rows and release backend resources."""

    def __enter__(self) -> "RecordWriter":
        return self

    def __exit__(self, exc_type: Any, exc: Any, traceback: Any) -> None:
        if not self.closed:
            self.close()
