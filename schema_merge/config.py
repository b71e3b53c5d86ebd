"""schema_merge.config

Environment-driven defaults for ``merge_schema.py``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .fragments import DEFAULT_EXTENSION


ENV_PATH = Path(".env")

DEFAULT_DEFINITIONS_DIR = Path("graphql-definitions")
DEFAULT_OUTPUT = Path("python.generated.graphql")


@dataclass(frozen=True)
class MergeSettings:
    definitions_dir: Path = DEFAULT_DEFINITIONS_DIR
    output: Path = DEFAULT_OUTPUT
    extension: str = DEFAULT_EXTENSION


def load_settings(
    *,
    env: Optional[Mapping[str, str]] = None,
    dotenv_path: Optional[Path] = ENV_PATH,
) -> MergeSettings:
    if env is None:
        if dotenv_path is not None and Path(dotenv_path).exists():
            load_dotenv(dotenv_path, override=False)
        env = os.environ

    return MergeSettings(
        definitions_dir=Path(env.get("GQLMERGE_DEFINITIONS_DIR") or DEFAULT_DEFINITIONS_DIR),
        output=Path(env.get("GQLMERGE_OUTPUT") or DEFAULT_OUTPUT),
        extension=env.get("GQLMERGE_EXTENSION") or DEFAULT_EXTENSION,
    )
