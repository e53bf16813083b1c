# tests/test_architecture_contracts.py
"""
Architecture contract tests for agencyops.

These tests enforce structural invariants that unit tests don't catch:
- Reusable apps never import the host project or each other
- Version consistency (__init__.py vs pyproject.toml)
- AUTH_USER_MODEL usage (not direct User imports)
- Lazy imports in __init__.py (prevent AppRegistryNotReady)
- Test/doc/migration file existence
- UniqueConstraint instead of unique_together
"""
from __future__ import annotations

import ast
import re
from pathlib import Path
from typing import List, Set

import pytest

ROOT_DIR = Path(__file__).parent.parent
PACKAGES_DIR = ROOT_DIR / "packages"
HOST_PACKAGE = "agencyops"

# Reusable apps are independent of each other; only the host combines them.
INDEPENDENT_APPS = {"django_worktime", "django_fxmoney"}


def get_package_dirs() -> List[Path]:
    """Get all django-* package directories."""
    return sorted([p for p in PACKAGES_DIR.iterdir() if p.is_dir() and p.name.startswith("django-")])


def src_dir_for(pkg_dir: Path) -> Path:
    return pkg_dir / "src" / pkg_dir.name.replace("-", "_")


def get_imports_from_file(path: Path) -> Set[str]:
    """Extract the top-level module names imported by a Python file."""
    if not path.exists():
        return set()

    try:
        tree = ast.parse(path.read_text())
    except (SyntaxError, UnicodeDecodeError):
        return set()

    imports = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                imports.add(alias.name.split('.')[0])
        elif isinstance(node, ast.ImportFrom):
            if node.module and node.level == 0:
                imports.add(node.module.split('.')[0])
    return imports


# -----------------------------
# 1) Layering
# -----------------------------

def test_apps_do_not_import_host_project():
    """Reusable apps must work without the dashboard project installed."""
    violations = []

    for pkg_dir in get_package_dirs():
        for py_file in src_dir_for(pkg_dir).rglob("*.py"):
            if HOST_PACKAGE in get_imports_from_file(py_file):
                violations.append(str(py_file.relative_to(ROOT_DIR)))

    assert not violations, (
        f"Apps importing {HOST_PACKAGE}:\n" + "\n".join(violations)
    )


def test_apps_are_independent():
    """The attendance and currency apps never import one another."""
    violations = []

    for pkg_dir in get_package_dirs():
        own = pkg_dir.name.replace("-", "_")
        for py_file in src_dir_for(pkg_dir).rglob("*.py"):
            for imp in get_imports_from_file(py_file) & INDEPENDENT_APPS - {own}:
                violations.append(f"{py_file.relative_to(ROOT_DIR)} imports {imp}")

    assert not violations, (
        "Cross-app imports detected:\n" + "\n".join(violations)
    )


# -----------------------------
# 2) Version consistency
# -----------------------------

def test_version_consistency():
    """
    Every app's __version__ must match the project version in pyproject.toml.
    """
    match = re.search(
        r'^version\s*=\s*["\']([^"\']+)["\']',
        (ROOT_DIR / "pyproject.toml").read_text(),
        re.MULTILINE,
    )
    assert match, "pyproject.toml has no version"
    project_version = match.group(1)

    mismatches = []
    for pkg_dir in get_package_dirs():
        init_text = (src_dir_for(pkg_dir) / "__init__.py").read_text()
        found = re.search(r'__version__\s*=\s*["\']([^"\']+)["\']', init_text)
        if not found:
            mismatches.append(f"{pkg_dir.name}: __init__.py missing __version__")
        elif found.group(1) != project_version:
            mismatches.append(
                f"{pkg_dir.name}: pyproject.toml={project_version}, __init__.py={found.group(1)}"
            )

    assert not mismatches, (
        "Version mismatches detected:\n" + "\n".join(mismatches)
    )


# -----------------------------
# 3) AUTH_USER_MODEL usage
# -----------------------------

def test_uses_auth_user_model_not_direct_import():
    """
    Apps should use settings.AUTH_USER_MODEL, not direct User imports.

    Direct imports break swappable user model support.
    """
    violations = []

    for pkg_dir in get_package_dirs():
        for py_file in src_dir_for(pkg_dir).rglob("*.py"):
            source = py_file.read_text()
            if re.search(r'from django\.contrib\.auth\.models import.*\bUser\b', source):
                violations.append(
                    f"{pkg_dir.name}/{py_file.name}: imports User directly. "
                    "Use settings.AUTH_USER_MODEL instead."
                )

    assert not violations, (
        "Direct User imports detected (breaks swappable user model):\n"
        + "\n".join(violations)
    )


# -----------------------------
# 4) Lazy imports in __init__.py
# -----------------------------

def test_init_uses_lazy_imports():
    """
    __init__.py must not import models at module level.

    Eager model imports in __init__.py cause AppRegistryNotReady errors.
    """
    violations = []

    for pkg_dir in get_package_dirs():
        module_name = pkg_dir.name.replace("-", "_")
        source = (src_dir_for(pkg_dir) / "__init__.py").read_text()

        pattern = rf'^from (\.|{module_name}\.)(models|services|selectors|aggregation) import'
        if re.search(pattern, source, re.MULTILINE):
            violations.append(f"{pkg_dir.name}/__init__.py imports ORM-backed modules eagerly")
        if "__getattr__" not in source:
            violations.append(f"{pkg_dir.name}/__init__.py has no lazy __getattr__")

    assert not violations, (
        "Eager imports in __init__.py (use lazy imports):\n" + "\n".join(violations)
    )


# -----------------------------
# 5) Tests, docs and migrations exist
# -----------------------------

def test_packages_have_tests():
    """All packages should have test files."""
    missing = []

    for pkg_dir in get_package_dirs():
        tests_dir = pkg_dir / "tests"
        if not list(tests_dir.glob("test_*.py")):
            missing.append(f"{pkg_dir.name}: no test_*.py files in tests/")

    assert not missing, (
        "Packages missing tests:\n" + "\n".join(missing)
    )


def test_packages_have_readme():
    """All packages should have README.md."""
    missing = [p.name for p in get_package_dirs() if not (p / "README.md").exists()]

    assert not missing, (
        f"Packages missing README.md: {', '.join(missing)}"
    )


def test_packages_with_models_have_migrations():
    missing = []

    for pkg_dir in get_package_dirs():
        src = src_dir_for(pkg_dir)
        if (src / "models.py").exists() and not list((src / "migrations").glob("0001_*.py")):
            missing.append(pkg_dir.name)

    assert not missing, (
        f"Packages with models but no initial migration: {', '.join(missing)}"
    )


# -----------------------------
# 6) unique_together vs UniqueConstraint
# -----------------------------

@pytest.mark.parametrize("pkg_dir", get_package_dirs(), ids=lambda p: p.name)
def test_prefer_unique_constraint_over_unique_together(pkg_dir):
    """Uniqueness is declared with UniqueConstraint, not legacy unique_together."""
    models_py = src_dir_for(pkg_dir) / "models.py"
    if not models_py.exists():
        pytest.skip("no models")

    assert "unique_together" not in models_py.read_text()
