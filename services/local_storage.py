"""
On-device persistence.

LocalStorage is a small key-value text store: one file per key under a
base directory. AnnotationPersistence keeps the whole annotations map
under a single key and never raises; a missing, unreadable or corrupt
value loads as an empty map.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

import config
from models import AnnotationsMap

logger = logging.getLogger(__name__)


class LocalStorage:
    """
    Key-value text storage backed by files.

    Directory structure:
        <base_path>/
            translation-annotations
            translation-tool-auth
            ...
    """

    def __init__(self, base_path: Path = None):
        """
        Initialize storage

        Args:
            base_path: Directory holding one file per key
                (default: config.LOCAL_STORAGE_DIR)
        """
        if base_path is None:
            base_path = config.LOCAL_STORAGE_DIR
        self.base_path = Path(base_path)

    def _key_path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.base_path / key

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored text for `key`, or None if absent."""
        path = self._key_path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        """Store `value` under `key`, replacing any previous value atomically."""
        path = self._key_path(key)
        self.base_path.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.base_path, prefix=f".{key}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise

    def remove_item(self, key: str) -> None:
        path = self._key_path(key)
        if path.exists():
            path.unlink()

    def clear(self) -> None:
        """Remove every stored key."""
        if not self.base_path.exists():
            return
        for path in self.base_path.iterdir():
            if path.is_file():
                path.unlink()


class AnnotationPersistence:
    """Saves and loads the full annotations map under a fixed storage key."""

    def __init__(self, storage: LocalStorage, key: str = config.ANNOTATIONS_KEY):
        self.storage = storage
        self.key = key

    def save(self, annotations_map: AnnotationsMap) -> bool:
        """
        Write the whole map to storage.

        Returns:
            False if storage was unavailable; the failure is only logged
        """
        try:
            self.storage.set_item(self.key, json.dumps(annotations_map.to_dict(), ensure_ascii=False))
        except OSError as e:
            logger.warning(f"Could not save annotations to local storage: {e}")
            return False
        return True

    def load(self) -> AnnotationsMap:
        """Read the stored map; absent, corrupt or unreadable data gives an empty map."""
        try:
            raw = self.storage.get_item(self.key)
            if raw is None:
                return AnnotationsMap()
            return AnnotationsMap.from_dict(json.loads(raw))
        except OSError as e:
            logger.warning(f"Local storage unavailable: {e}")
            return AnnotationsMap()
        except (ValueError, RecursionError) as e:
            logger.warning(f"Ignoring corrupt annotations in local storage: {e}")
            return AnnotationsMap()
