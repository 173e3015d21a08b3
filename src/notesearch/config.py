"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3012
ROOT_ENV_VAR = "NOTESEARCH_ROOT"


def _get_default_root() -> Path:
    """Notes directory from the environment, else the working directory."""
    configured = os.environ.get(ROOT_ENV_VAR)
    if configured:
        return Path(configured).expanduser()
    return Path(".")


@dataclass(slots=True)
class AppConfig:
    root: Path | None = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    max_concurrent_queries: int = 8

    def __post_init__(self) -> None:
        if self.root is None:
            self.root = _get_default_root()
        if self.max_concurrent_queries < 1:
            raise ValueError("max_concurrent_queries must be at least 1")

    def resolve_root(self, base_dir: Path | None = None) -> Path:
        if self.root is None:
            self.root = _get_default_root()
        root = Path(self.root)
        if root.is_absolute() or base_dir is None:
            return root
        return base_dir / root
