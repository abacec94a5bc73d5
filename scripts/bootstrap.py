"""Make the ``txroads`` package importable from scripts and the dashboard."""
from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path

PACKAGE_NAME = "txroads"


def _find_project_root(start: Path) -> Path:
    for candidate in (start, *start.parents):
        if (candidate / PACKAGE_NAME).is_dir() and (candidate / "pyproject.toml").exists():
            return candidate
    raise RuntimeError(f"No '{PACKAGE_NAME}' checkout found above {start}")


@lru_cache(maxsize=1)
def bootstrap_project() -> Path:
    """Put the checkout root on ``sys.path`` once and return it."""

    project_root = _find_project_root(Path(__file__).resolve().parent)
    root = str(project_root)
    if root not in sys.path:
        sys.path.insert(0, root)
    return project_root
