from __future__ import annotations

import argparse
import ast
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Sequence

# The domain stays importable without the application stack installed.
FORBIDDEN_MODULES = frozenset(
    {
        "pydantic",
        "opentelemetry",
        "prometheus_client",
        "invoicing.application",
        "invoicing.infrastructure",
        "invoicing.tools",
    }
)

DEFAULT_DOMAIN_PATH = Path(__file__).resolve().parents[1] / "src" / "invoicing" / "domain"


@dataclass(frozen=True)
class Violation:
    file_path: Path
    line: int
    module: str

    def __str__(self) -> str:
        return f"{self.file_path}:{self.line} -> {self.module}"


def _python_files(root: Path) -> Iterable[Path]:
    if root.is_file() and root.suffix == ".py":
        yield root
    elif root.is_dir():
        yield from sorted(root.rglob("*.py"))


def _imported_modules(tree: ast.AST) -> Iterator[tuple[int, str]]:
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield node.lineno, alias.name
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            yield node.lineno, node.module


def _is_forbidden(module: str, forbidden: frozenset[str]) -> bool:
    return any(module == name or module.startswith(f"{name}.") for name in forbidden)


def find_violations(
    paths: Sequence[Path],
    forbidden: frozenset[str] = FORBIDDEN_MODULES,
) -> list[Violation]:
    violations: list[Violation] = []
    for path in paths:
        for file_path in _python_files(path):
            tree = ast.parse(file_path.read_text(encoding="utf-8"), filename=str(file_path))
            violations.extend(
                Violation(file_path=file_path, line=line, module=module)
                for line, module in _imported_modules(tree)
                if _is_forbidden(module, forbidden)
            )
    return violations


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Check that the invoicing domain imports nothing from outer layers."
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        help="Path to scan (repeatable). Defaults to src/invoicing/domain.",
    )
    parser.add_argument(
        "--forbid",
        action="append",
        default=[],
        help="Additional module to forbid (repeatable).",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    scan_paths = [Path(item) for item in args.path] if args.path else [DEFAULT_DOMAIN_PATH]
    forbidden = FORBIDDEN_MODULES | frozenset(args.forbid)

    violations = find_violations(scan_paths, forbidden)
    if not violations:
        print("depcheck passed")
        return 0

    print("depcheck failed: forbidden imports detected")
    for violation in violations:
        print(violation)
    return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
