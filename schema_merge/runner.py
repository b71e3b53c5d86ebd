"""schema_merge.runner

Read-merge-write pipeline for a directory of fragments.

The steps run strictly in sequence and the output file is touched only by the
final atomic write, so any failure (unreadable file, syntax error, merge
conflict) leaves a previously generated schema untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from .fragments import DEFAULT_EXTENSION, discover_fragments, read_fragments
from .fs import write_text_atomic
from .merge import merge_fragments, print_schema_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeResult:
    output_path: Path
    sources: Tuple[str, ...]
    definition_count: int
    text: str


def merge_directory(
    input_dir: Path,
    output_path: Path,
    *,
    extension: str = DEFAULT_EXTENSION,
    use_schema_definition: bool = True,
    sort: bool = False,
) -> MergeResult:
    paths = discover_fragments(Path(input_dir), extension=extension)
    logger.debug("found %d fragment file(s) in %s", len(paths), input_dir)

    fragments = read_fragments(paths)
    document = merge_fragments(
        fragments,
        use_schema_definition=use_schema_definition,
        sort=sort,
    )
    text = print_schema_document(document)

    write_text_atomic(Path(output_path), text)
    logger.debug("wrote %d byte(s) to %s", len(text.encode("utf-8")), output_path)

    return MergeResult(
        output_path=Path(output_path),
        sources=tuple(f.source for f in fragments),
        definition_count=len(document.definitions),
        text=text,
    )
