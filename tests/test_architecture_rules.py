"""Architecture enforcement tests for the layered package layout.

This module provides lightweight, repository-local invariants to ensure that
the inner layers of ``cancellable`` stay independent of the outer ones. It
focuses on import boundaries only and is designed to fail fast if a forbidden
dependency is introduced.

Rules validated here:
1) ``runner_parts`` must not import the public facades (``cancellable.api`` or
   the package root).
2) ``errors_parts`` and ``config`` are leaf layers: they must not import the
   runner or the logging layer.
3) Only ``config/__init__.py`` reads configuration files (imports ``yaml``).

These tests are intentionally static-file scans to avoid import-time side
effects, and they emit clear failure messages for quick remediation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pytest

PACKAGE_ROOT = Path(__file__).resolve().parent.parent / "cancellable"


def _iter_python_files(root: Path) -> Iterable[Path]:
    """Yield all Python source files under a root directory, skipping caches."""

    for path in root.rglob("*.py"):
        if "__pycache__" in path.parts:
            continue
        yield path


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def _offenders(root: Path, forbidden: List[str]) -> List[str]:
    offenders: List[str] = []
    for py in _iter_python_files(root):
        src = _read_text(py)
        offenders.extend(f"{py}: contains '{m}'" for m in forbidden if m in src)
    return offenders


def test_runner_parts_do_not_import_facades() -> None:
    offenders = _offenders(
        PACKAGE_ROOT / "runner_parts",
        ["from ..api", "from cancellable.api", "from .. import", "from cancellable import"],
    )
    if offenders:
        pytest.fail("Runner parts must not import public facades.\n" + "\n".join(offenders))


@pytest.mark.parametrize("layer", ["errors_parts", "config"])
def test_leaf_layers_stay_leaves(layer: str) -> None:
    offenders = _offenders(
        PACKAGE_ROOT / layer,
        ["from ..runner", "from cancellable.runner", "from ..logging", "from cancellable.logging", "import logging"],
    )
    if offenders:
        pytest.fail(f"{layer} must not depend on runner or logging layers.\n" + "\n".join(offenders))


def test_only_config_reads_files() -> None:
    offenders = [
        str(py)
        for py in _iter_python_files(PACKAGE_ROOT)
        if "import yaml" in _read_text(py) and py != PACKAGE_ROOT / "config" / "__init__.py"
        and "tests" not in py.relative_to(PACKAGE_ROOT).parts
    ]
    if offenders:
        pytest.fail("Only cancellable/config/__init__.py may load config files.\n" + "\n".join(offenders))
