"""schema_merge

Merge a directory of GraphQL SDL fragments into one schema document.

Design principle
----------------
Fragment order is part of the output contract: files are read in sorted
name order, and fields keep first-seen order, so the same input directory
always produces byte-identical output.
"""

from __future__ import annotations

from .errors import FragmentDecodeError, FragmentParseError, MergeConflict, SchemaMergeError
from .fragments import SchemaFragment, discover_fragments, load_fragments, read_fragments
from .merge import SchemaMerger, merge_fragments, merge_type_defs, print_schema_document
from .runner import MergeResult, merge_directory

__all__ = [
    "FragmentDecodeError",
    "FragmentParseError",
    "MergeConflict",
    "MergeResult",
    "SchemaFragment",
    "SchemaMergeError",
    "SchemaMerger",
    "discover_fragments",
    "load_fragments",
    "merge_directory",
    "merge_fragments",
    "merge_type_defs",
    "print_schema_document",
    "read_fragments",
]
