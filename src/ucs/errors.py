"""Error types raised by the UC conversion pipeline."""

from __future__ import annotations


class UCSError(RuntimeError):
    """Fatal stream or setup failure, reported once at the top level."""

    def __init__(self, kind: str, message: str, cause: BaseException | None = None) -> None:
        self.kind = kind
        self.message = message
        self.cause = cause
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.kind}: {self.message}: {self.cause}"
        return f"{self.kind}: {self.message}"


class UCSConfigError(ValueError):
    """Run configuration could not be loaded or did not validate."""
