"""Input and output stream handling for the command line."""

from __future__ import annotations

import gzip
import io
import os
import sys
import zlib
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO, BinaryIO

from ucs.config import STDIO_PATH
from ucs.errors import UCSError


GZIP_MAGIC = b"\x1f\x8b"


def expand_path(path: str | Path) -> Path:
    """Expand ``~`` and environment variables in a user-supplied path."""

    return Path(os.path.expandvars(os.path.expanduser(str(path))))


def _is_gzip(buffered: io.BufferedReader, name: str) -> bool:
    if name.lower().endswith(".gz"):
        return True
    return buffered.peek(len(GZIP_MAGIC))[: len(GZIP_MAGIC)] == GZIP_MAGIC


@contextmanager
def open_input(path: str | Path = STDIO_PATH) -> Iterator[IO[str]]:
    """Open ``path`` (or stdin for ``-``) as UTF-8 text, decompressing gzip."""

    name = str(path)
    raw: BinaryIO
    if name == STDIO_PATH:
        raw = sys.stdin.buffer
        owns_raw = False
    else:
        try:
            raw = expand_path(name).open("rb")
        except OSError as exc:
            raise UCSError("IO", f"cannot open input file {name}", exc) from exc
        owns_raw = True

    buffered = raw if isinstance(raw, io.BufferedReader) else io.BufferedReader(raw)
    try:
        try:
            compressed = _is_gzip(buffered, name)
        except OSError as exc:
            raise UCSError("IO", f"cannot read input file {name}", exc) from exc

        binary: IO[bytes] = gzip.GzipFile(fileobj=buffered, mode="rb") if compressed else buffered
        text = io.TextIOWrapper(binary, encoding="utf-8", errors="replace", newline="\n")
        try:
            yield text
        finally:
            text.detach()
            if compressed:
                binary.close()
    finally:
        if owns_raw:
            raw.close()


def iter_lines(stream: IO[str], *, source: str = STDIO_PATH) -> Iterator[str]:
    """Yield lines without their terminators, wrapping read failures."""

    try:
        for line in stream:
            yield line.rstrip("\r\n")
    except (OSError, EOFError, zlib.error) as exc:
        raise UCSError("IO", f"failed to read input {source}", exc) from exc


@contextmanager
def open_output(path: str | Path = STDIO_PATH) -> Iterator[IO[str]]:
    """Open a text destination; stdout is flushed but never closed."""

    name = str(path)
    if name == STDIO_PATH:
        try:
            yield sys.stdout
        finally:
            sys.stdout.flush()
        return

    target = expand_path(name)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        stream = target.open("w", encoding="utf-8", newline="")
    except OSError as exc:
        raise UCSError("IO", f"cannot create output file {name}", exc) from exc

    with stream:
        yield stream
