"""Architectural fitness functions to enforce clean architecture principles.

These tests ensure the codebase maintains its hexagonal layout: the core is
framework-free, services talk to the outside world only through ports, and
root-level modules are leaf entry points.
"""

import re
from pathlib import Path

ROOT = Path(__file__).parent.parent
PACKAGE_DIR = ROOT / "cookidoo_skill"


def _imports(directory: Path, module: str) -> list[Path]:
    name = re.escape(module)
    pattern = re.compile(rf"^\s*(from {name}[\s.]|import {name}\b)", re.MULTILINE)
    return [
        py_file.relative_to(directory)
        for py_file in directory.rglob("*.py")
        if pattern.search(py_file.read_text(encoding="utf-8"))
    ]


def test_no_python_modules_at_root():
    """Only entry points and config files are allowed at the repository root.

    main.py is a consumer of the package (nothing imports from it); anything
    else at the root would be a re-export shim pulling internals outward.
    """
    allowed = {"conftest.py", "main.py", "__main__.py"}
    violations = [f.name for f in ROOT.glob("*.py") if f.name not in allowed]

    assert not violations, (
        f"Unexpected Python modules at root: {violations}\n"
        "Only entry points and config files allowed at root."
    )


def test_root_files_are_not_imported():
    """Root-level .py files must be leaf nodes, never imported by the package."""
    violations = []
    for py_file in ROOT.glob("*.py"):
        if py_file.stem == "conftest":
            continue
        for src in _imports(PACKAGE_DIR, py_file.stem):
            violations.append(f"{src} imports from {py_file.name}")

    assert not violations, "Root-level files are being imported:\n" + "\n".join(violations)


def test_no_fastapi_in_core():
    """Core layer must not import FastAPI."""
    violations = _imports(PACKAGE_DIR / "core", "fastapi")
    assert not violations, f"Core layer imports FastAPI: {violations}"


def test_no_httpx_in_core_or_services():
    """HTTP access belongs to adapters; core and services use ports."""
    violations = _imports(PACKAGE_DIR / "core", "httpx") + _imports(
        PACKAGE_DIR / "services", "httpx"
    )
    assert not violations, f"httpx imported outside adapters: {violations}"


def test_services_do_not_import_adapters():
    """Services depend on ports only; adapters are wired in bootstrap."""
    violations = _imports(PACKAGE_DIR / "services", "cookidoo_skill.adapters")
    assert not violations, f"Services import adapters directly: {violations}"


def test_core_does_not_import_outer_layers():
    """Core must not depend on services, adapters or apps."""
    violations = []
    for layer in ("services", "adapters", "apps", "cli", "bootstrap"):
        violations += _imports(PACKAGE_DIR / "core", f"cookidoo_skill.{layer}")
    assert not violations, f"Core imports outer layers: {violations}"
