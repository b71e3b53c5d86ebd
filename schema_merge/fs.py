"""schema_merge.fs

Atomic filesystem writer for the merged schema.

The merged schema is written to a temp file next to the target and moved into
place with ``os.replace``. A reader therefore sees either the previous file or
the complete new one, never a truncated document.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def write_text_atomic(path: Path, text: str, *, encoding: str = "utf-8") -> None:
    """Write *text* to *path* atomically (temp file + ``os.replace``)."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f"{p.name}.", suffix=".tmp", dir=str(p.parent))
    tmp_path = Path(tmp_name)

    try:
        # newline="" keeps "\n" on every platform so output is byte-stable.
        with os.fdopen(fd, "w", encoding=encoding, newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())

        os.replace(tmp_path, p)
    finally:
        # Only left behind when os.replace failed.
        if tmp_path.exists():
            tmp_path.unlink()
