"""File-backed key-value store: one UTF-8 file per key.

Mirrors the browser storage the original app ran on: values are opaque
strings, the last write for a key wins, and reads of a missing key return
None.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

_SUFFIX = ".json"


class StorageKeyError(ValueError):
    """A key that cannot be mapped to a file name."""


class KeyValueStore:
    """Read/write access to raw string values under a data directory."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.root.mkdir(parents=True, exist_ok=True)

    def _slugify(self, key: str) -> str:
        """Return `key` as a file stem, refusing keys that would need rewriting.

        Two distinct keys therefore never share a file.
        """
        slug = re.sub(r'[<>:"/\\|?*\n\r\t]', "", key)
        slug = slug.strip().replace(" ", "-").lstrip(".")
        if not slug or slug != key:
            raise StorageKeyError(f"Invalid storage key: {key!r}")
        return slug

    def _path(self, key: str) -> Path:
        return self.root / f"{self._slugify(key)}{_SUFFIX}"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", path, e)
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)

    def keys(self) -> list[str]:
        """Keys currently present, sorted."""
        return sorted(p.name[: -len(_SUFFIX)] for p in self.root.glob(f"*{_SUFFIX}"))
