"""Cheap text/binary sniffing on a file's first bytes."""

from __future__ import annotations

import codecs
from pathlib import Path

PROBE_SIZE = 1024


def is_text_file(path: Path, *, encoding: str = "utf-8", probe_size: int = PROBE_SIZE) -> bool:
    """Return False for NUL bytes or an undecodable prefix. OSError propagates."""

    with path.open("rb") as handle:
        sample = handle.read(probe_size)

    if b"\x00" in sample:
        return False

    # Incremental decode so a multi-byte character cut at the boundary is not an error.
    decoder = codecs.getincrementaldecoder(encoding)()
    try:
        decoder.decode(sample, final=False)
    except (UnicodeDecodeError, LookupError):
        return False
    return True
