"""Bootstrap helpers shared across command-line entry points."""
from __future__ import annotations

import sys
from functools import lru_cache
from pathlib import Path


def _resolve_project_root() -> Path:
    """Return the repository root holding both ``src`` and ``configs``."""

    current = Path(__file__).resolve().parents[1]
    if not (current / "src").exists():
        raise RuntimeError(
            "Could not locate the project root. Expected a 'src' directory next to scripts/."
        )
    return current


@lru_cache(maxsize=1)
def bootstrap_project() -> Path:
    """Put the repository root on ``sys.path`` once and return it."""

    project_root = _resolve_project_root()
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))
    return project_root


def default_config_path() -> Path:
    return bootstrap_project() / "configs" / "config.yaml"
