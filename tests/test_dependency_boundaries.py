import ast
import unittest
from pathlib import Path
from typing import Iterable, List, Tuple


REPO_ROOT = Path(__file__).resolve().parents[1]

# Dependency rules (kept intentionally small and explicit):
# - the schema merger and the benchmark driver are independent units
FORBIDDEN_IMPORTS = {
    "schema_merge": ("benchmarks",),
    "benchmarks": ("schema_merge",),
}


def iter_py_files(package_dir: Path) -> Iterable[Path]:
    for p in package_dir.rglob("*.py"):
        if "__pycache__" in p.parts:
            continue
        yield p


def find_forbidden_imports(py_file: Path, forbidden_roots: Tuple[str, ...]) -> List[str]:
    tree = ast.parse(py_file.read_text(encoding="utf-8"), filename=str(py_file))

    violations: List[str] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.name.split(".", 1)[0] in forbidden_roots:
                    violations.append(alias.name)
        elif isinstance(node, ast.ImportFrom):
            if node.level != 0 or not node.module:
                continue
            if node.module.split(".", 1)[0] in forbidden_roots:
                violations.append(node.module)
    return violations


class TestDependencyBoundaries(unittest.TestCase):
    def test_dependency_direction_is_enforced(self) -> None:
        problems: List[str] = []

        for pkg, forbidden in FORBIDDEN_IMPORTS.items():
            pkg_dir = REPO_ROOT / pkg
            self.assertTrue(pkg_dir.is_dir(), f"Missing package directory: {pkg_dir}")
            for py in iter_py_files(pkg_dir):
                for mod in find_forbidden_imports(py, forbidden):
                    problems.append(f"{py.relative_to(REPO_ROOT)} imports {mod}")

        self.assertEqual([], problems, "Forbidden imports found:\n" + "\n".join(problems))


if __name__ == "__main__":
    unittest.main()
