#!/usr/bin/env python3
"""
Validate architectural layering via import rules.

This script is intended to run as a local pre-commit hook.
It checks that imports inside `src/pcconfigmanager` follow the intended
dependency direction:
- cli -> application -> (infrastructure, domain) -> shared
- lower layers must not import higher layers
"""

from __future__ import annotations

import ast
import sys
from dataclasses import dataclass
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[1]
PACKAGE = "pcconfigmanager"
PACKAGE_ROOT = PROJECT_ROOT / "src" / PACKAGE


INTERNAL_LAYERS = {
    "cli",
    "application",
    "infrastructure",
    "domain",
    "shared",
}


SKIP_DIR_PARTS = {
    "__pycache__",
    ".mypy_cache",
    ".ruff_cache",
}


LAYER_FORBIDDEN: dict[str, set[str]] = {
    # Front end sits on top; nothing imports it.
    "cli": set(),
    "application": {"cli"},
    # Storage, config and export adapters must not reach the use-case layer.
    "infrastructure": {"cli", "application"},
    # Domain is pure: models and calculations only.
    "domain": {"cli", "application", "infrastructure"},
    "shared": {"cli", "application", "infrastructure", "domain"},
}


@dataclass(frozen=True)
class Violation:
    path: Path
    lineno: int
    layer: str
    imported: str
    message: str

    def format(self) -> str:
        return f"{self.path}:{self.lineno}: [{self.layer}] {self.message} ({self.imported!r})"


def _should_skip_path(path: Path) -> bool:
    return any(part in SKIP_DIR_PARTS for part in path.parts)


def _detect_layer(path: Path, package_root: Path) -> str | None:
    """
    Determine the layer of a file from its first path part under the package.
    Returns None for files outside known layers (e.g. `__init__.py`).
    """
    try:
        rel = path.relative_to(package_root)
    except ValueError:
        return None

    if not rel.parts:
        return None

    root = rel.parts[0]
    if root.endswith(".py"):
        root = root[: -len(".py")]
    if root in INTERNAL_LAYERS:
        return root
    return None


def _iter_python_files(package_root: Path) -> list[Path]:
    return sorted(
        path for path in package_root.rglob("*.py") if not _should_skip_path(path)
    )


def _extract_imports(tree: ast.AST) -> list[tuple[int, str]]:
    """
    Return a list of (lineno, module) for absolute imports.
    - `import x.y` -> "x.y"
    - `from x.y import z` -> "x.y"
    """
    found: list[tuple[int, str]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                name = str(alias.name or "")
                if name:
                    found.append((int(node.lineno), name))
        elif isinstance(node, ast.ImportFrom):
            # Relative imports stay within a package.
            if node.level and node.level > 0:
                continue
            module = str(node.module or "")
            if module:
                found.append((int(node.lineno), module))
    return found


def _imported_layer(module: str) -> str | None:
    parts = module.split(".")
    if len(parts) < 2 or parts[0] != PACKAGE:
        return None
    return parts[1] if parts[1] in INTERNAL_LAYERS else None


def check_file(path: Path, package_root: Path = PACKAGE_ROOT) -> list[Violation]:
    layer = _detect_layer(path, package_root)
    if not layer:
        return []

    forbidden = LAYER_FORBIDDEN.get(layer, set())
    if not forbidden:
        return []

    try:
        source = path.read_text(encoding="utf-8")
    except OSError as e:
        return [Violation(path, 0, layer, "", f"read failed: {e}")]

    try:
        tree = ast.parse(source, filename=str(path))
    except SyntaxError as e:
        lineno = int(getattr(e, "lineno", 0) or 0)
        return [Violation(path, lineno, layer, "", f"syntax error: {e}")]

    violations: list[Violation] = []
    for lineno, module in _extract_imports(tree):
        imported = _imported_layer(module)
        if imported in forbidden:
            violations.append(
                Violation(
                    path=path,
                    lineno=lineno,
                    layer=layer,
                    imported=module,
                    message=f"must not depend on layer: {imported}",
                )
            )
    return violations


def check_package(package_root: Path = PACKAGE_ROOT) -> list[Violation]:
    violations: list[Violation] = []
    for path in _iter_python_files(package_root):
        violations.extend(check_file(path, package_root))
    return violations


def main() -> int:
    violations = check_package()
    if violations:
        print("ERROR: layer dependency check failed: forbidden cross-layer imports.", file=sys.stderr)
        for v in violations:
            print(f"- {v.format()}", file=sys.stderr)
        print(
            "Hint: make higher layers depend on lower ones, or move glue code up into application/.",
            file=sys.stderr,
        )
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
