"""Configuration loading from environment variables and pagetree.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_DEFAULT_DATA_DIR = Path.home() / ".pagetree" / "data"
_CONFIG_FILENAME = "pagetree.toml"

DEFAULT_COLLECTION = "gh_learning_knowledge_v1"
DEFAULT_KNOWN_COLLECTIONS = [
    "gh_self_obs_pages_v1",
    "gh_learning_knowledge_v1",
    "gh_learning_skills_v1",
]


@dataclass
class CollectionsConfig:
    """Which collection opens first and which keys a bulk export covers."""

    default: str = DEFAULT_COLLECTION
    known: list[str] = field(default_factory=lambda: list(DEFAULT_KNOWN_COLLECTIONS))


@dataclass
class PagetreeConfig:
    """Top-level configuration."""

    collections: CollectionsConfig = field(default_factory=CollectionsConfig)
    data_dir: Path = _DEFAULT_DATA_DIR
    log_level: str = "INFO"

    @property
    def export_keys(self) -> list[str]:
        """Known keys plus the default collection, without duplicates."""
        keys = list(self.collections.known)
        if self.collections.default not in keys:
            keys.append(self.collections.default)
        return keys


def load_config(config_path: Path | None = None) -> PagetreeConfig:
    """Load configuration from environment variables and optional pagetree.toml.

    Priority: environment variables > pagetree.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.pagetree/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, Path.home() / ".pagetree" / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    collections_data = file_data.get("collections", {})
    known = collections_data.get("known", DEFAULT_KNOWN_COLLECTIONS)
    if not isinstance(known, list):
        raise ValueError(f"collections.known must be a list of keys, got {known!r}")
    data_dir = file_data.get("data_dir", str(_DEFAULT_DATA_DIR))

    config = PagetreeConfig(
        collections=CollectionsConfig(
            default=os.getenv("PAGETREE_COLLECTION", collections_data.get("default", DEFAULT_COLLECTION)),
            known=list(known),
        ),
        data_dir=Path(os.getenv("PAGETREE_DATA_DIR", data_dir)).expanduser(),
        log_level=os.getenv("PAGETREE_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
    return config
