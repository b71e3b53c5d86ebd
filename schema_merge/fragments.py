"""schema_merge.fragments

Locate and read schema fragment files.

Fragment order is a fixed contract: files are sorted lexicographically by
name before reading. Field order in the merged output follows first-seen
order, so relying on OS directory order would make output depend on the
filesystem.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from .errors import FragmentDecodeError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".graphql"
MAX_READ_WORKERS = 8


@dataclass(frozen=True)
class SchemaFragment:
    source: str
    text: str


def discover_fragments(directory: Path, *, extension: str = DEFAULT_EXTENSION) -> List[Path]:
    """Return fragment files in *directory* whose name ends with *extension*, sorted by name.

    Raises ``FileNotFoundError`` / ``NotADirectoryError`` for a bad directory.
    """
    d = Path(directory)
    if not d.exists():
        raise FileNotFoundError(f"Fragment directory not found: {d}")
    if not d.is_dir():
        raise NotADirectoryError(f"Fragment path is not a directory: {d}")

    paths = [
        p
        for p in d.iterdir()
        if p.name and p.name.endswith(extension) and p.is_file()
    ]
    paths.sort(key=lambda p: p.name)
    return paths


def _read_one(path: Path) -> SchemaFragment:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise FragmentDecodeError(str(path), str(e)) from e
    return SchemaFragment(source=str(path), text=text)


def read_fragments(paths: Sequence[Path]) -> List[SchemaFragment]:
    """Read every path; results keep the order of *paths*.

    Reads run concurrently. The first ``OSError`` propagates and nothing is
    returned.
    """
    if not paths:
        return []

    workers = min(MAX_READ_WORKERS, len(paths))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        fragments = list(executor.map(_read_one, paths))

    logger.debug("read %d fragment(s)", len(fragments))
    return fragments


def load_fragments(directory: Path, *, extension: str = DEFAULT_EXTENSION) -> List[SchemaFragment]:
    return read_fragments(discover_fragments(directory, extension=extension))
