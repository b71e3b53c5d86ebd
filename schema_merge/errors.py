"""schema_merge.errors

Exceptions raised while merging schema fragments.

Filesystem problems are *not* wrapped: they surface as the usual ``OSError``
subclasses so callers can tell "could not read" apart from "could not merge".
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple


class SchemaMergeError(Exception):
    """Base class for schema merge failures."""


class FragmentParseError(SchemaMergeError):
    """A fragment is not valid GraphQL SDL."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"Unable to parse fragment {source}: {message}")


class FragmentDecodeError(SchemaMergeError):
    """A fragment file is not valid UTF-8."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"Fragment {source} is not valid UTF-8: {message}")


class MergeConflict(SchemaMergeError):
    """Two fragments define the same named entity incompatibly."""

    def __init__(
        self,
        name: str,
        reason: str,
        *,
        sources: Sequence[Optional[str]] = (),
    ) -> None:
        self.name = name
        self.reason = reason
        self.sources: Tuple[str, ...] = tuple(s for s in sources if s)
        msg = f'Unable to merge GraphQL type "{name}": {reason}'
        if self.sources:
            msg += f" (defined in {', '.join(self.sources)})"
        super().__init__(msg)
