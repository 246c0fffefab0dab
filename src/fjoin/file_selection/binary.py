"""Binary content detection."""

from __future__ import annotations

from pathlib import Path

SNIFF_BYTES = 8192


def is_binary_file(path: Path) -> bool:
    """
    True if the first few KiB of `path` contain a NUL byte.

    Files that can't be opened report False; reading them later surfaces the
    actual error for that one file.
    """
    try:
        with path.open("rb") as f:
            chunk = f.read(SNIFF_BYTES)
    except OSError:
        return False
    return b"\0" in chunk
