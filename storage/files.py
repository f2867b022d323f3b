"""
storage/files.py
----------------
Blocking text and binary file access. Every handle is closed on all exit
paths; OS-level failures are logged and re-raised as IOFailure.
"""

import os
from typing import Iterable

from utils.errors import IOFailure
from utils.logger import get_logger

logger = get_logger(__name__)

ENCODING = "utf-8"


def _ensure_parent(path: str) -> None:
    parent = os.path.dirname(os.fspath(path))
    if parent:
        os.makedirs(parent, exist_ok=True)


def read_lines(path: str) -> list[str]:
    """
    Read a UTF-8 text file.

    Args:
        path: File to read.

    Lines end only at ``\\n`` (or ``\\r\\n``); other Unicode line
    boundaries such as ``\\u2028`` stay part of the line.

    Returns:
        The lines without their line terminators.

    Raises:
        IOFailure: If the file cannot be opened or decoded.
    """
    try:
        with open(path, "r", encoding=ENCODING, newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read {path}: {e}")
        raise IOFailure(f"Cannot read {path}: {e}") from e
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def write_text_file(path: str, lines: Iterable[str]) -> int:
    """
    Write one newline-terminated line per element, UTF-8 encoded.
    An existing file is overwritten.

    Returns:
        The number of lines written.
    """
    count = 0
    try:
        _ensure_parent(path)
        with open(path, "w", encoding=ENCODING, newline="\n") as f:
            for line in lines:
                f.write(f"{line}\n")
                count += 1
    except OSError as e:
        logger.error(f"Failed to write {path}: {e}")
        raise IOFailure(f"Cannot write {path}: {e}") from e
    logger.info(f"Wrote {count} lines to {path}")
    return count


def read_bytes(path: str) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        logger.error(f"Failed to read {path}: {e}")
        raise IOFailure(f"Cannot read {path}: {e}") from e


def write_bytes(path: str, data: bytes) -> None:
    try:
        _ensure_parent(path)
        with open(path, "wb") as f:
            f.write(data)
    except OSError as e:
        logger.error(f"Failed to write {path}: {e}")
        raise IOFailure(f"Cannot write {path}: {e}") from e
