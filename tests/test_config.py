import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from benchmarks.config import load_settings as load_bench_settings
from schema_merge.config import load_settings as load_merge_settings


class TestBenchSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        s = load_bench_settings(env={})
        self.assertEqual("hyperfine", s.hyperfine_bin)
        self.assertEqual(Path("."), s.bench_root)

    def test_env_overrides(self) -> None:
        s = load_bench_settings(env={"HYPERFINE_BIN": "/opt/hf", "BENCH_ROOT": "benchmark"})
        self.assertEqual("/opt/hf", s.hyperfine_bin)
        self.assertEqual(Path("benchmark"), s.bench_root)

    def test_dotenv_does_not_override_environment(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            dotenv = Path(td) / ".env"
            dotenv.write_text("HYPERFINE_BIN=/from/dotenv\nBENCH_ROOT=from-dotenv\n", encoding="utf-8")

            with mock.patch.dict(os.environ, {"HYPERFINE_BIN": "/from/env"}, clear=False):
                os.environ.pop("BENCH_ROOT", None)
                s = load_bench_settings(dotenv_path=dotenv)

        self.assertEqual("/from/env", s.hyperfine_bin)
        self.assertEqual(Path("from-dotenv"), s.bench_root)


class TestMergeSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        s = load_merge_settings(env={})
        self.assertEqual(Path("graphql-definitions"), s.definitions_dir)
        self.assertEqual(Path("python.generated.graphql"), s.output)
        self.assertEqual(".graphql", s.extension)

    def test_env_overrides(self) -> None:
        s = load_merge_settings(
            env={
                "GQLMERGE_DEFINITIONS_DIR": "defs",
                "GQLMERGE_OUTPUT": "out/schema.graphql",
                "GQLMERGE_EXTENSION": ".gql",
            }
        )
        self.assertEqual(Path("defs"), s.definitions_dir)
        self.assertEqual(Path("out/schema.graphql"), s.output)
        self.assertEqual(".gql", s.extension)


if __name__ == "__main__":
    unittest.main()
