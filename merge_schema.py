#!/usr/bin/env python3
"""
Merge every *.graphql fragment in a directory into one schema file.

Usage:
  python merge_schema.py
  python merge_schema.py --input-dir graphql-definitions --output python.generated.graphql
  python merge_schema.py --sort --no-schema-definition

Defaults come from GQLMERGE_DEFINITIONS_DIR / GQLMERGE_OUTPUT /
GQLMERGE_EXTENSION (environment or .env).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from schema_merge.config import load_settings
from schema_merge.errors import SchemaMergeError
from schema_merge.runner import merge_directory


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Merge GraphQL schema fragments into one document.")
    parser.add_argument("--input-dir", help="Directory of fragment files (env: GQLMERGE_DEFINITIONS_DIR)")
    parser.add_argument("--output", help="Merged schema path (env: GQLMERGE_OUTPUT)")
    parser.add_argument("--extension", help="Fragment file extension (env: GQLMERGE_EXTENSION)")
    parser.add_argument("--sort", action="store_true", help="Order definitions by name")
    parser.add_argument(
        "--no-schema-definition",
        action="store_true",
        help="Do not synthesize a schema { ... } block for Query/Mutation/Subscription",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    settings = load_settings()
    input_dir = Path(args.input_dir) if args.input_dir else settings.definitions_dir
    output = Path(args.output) if args.output else settings.output
    extension = args.extension or settings.extension

    try:
        result = merge_directory(
            input_dir,
            output,
            extension=extension,
            use_schema_definition=not args.no_schema_definition,
            sort=args.sort,
        )
    except SchemaMergeError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"❌ Filesystem error: {e}", file=sys.stderr)
        return 1

    print(
        f"✅ Merged {len(result.sources)} fragment(s) into {result.definition_count} "
        f"definition(s): {result.output_path}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
