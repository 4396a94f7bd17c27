"""Key-value blob stores backing the reservation store."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

from .errors import PersistenceError

logger = logging.getLogger(__name__)


class BlobStore(ABC):
    """A flat key-value store of serialized text blobs."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the blob stored under key, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a blob under key, replacing any previous value."""


class MemoryBlobStore(BlobStore):
    """Blob store held in a dict."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._blobs: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def set(self, key: str, value: str) -> None:
        self._blobs[key] = value


class DirectoryBlobStore(BlobStore):
    """Blob store keeping one <key>.json file per key in a directory."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            logger.debug("No blob at %s", path)
            return None
        try:
            with open(path, "r", encoding="utf-8") as fp:
                return fp.read()
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Cannot read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        """Write the blob via a temp file so a failed write keeps the old one."""
        path = self.path_for(key)
        tmp_path = path.with_name(path.name + ".tmp")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as fp:
                fp.write(value)
            tmp_path.replace(path)
        except OSError as e:
            raise PersistenceError(f"Cannot write {path}: {e}") from e
        logger.debug("Wrote %d bytes to %s", len(value), path)
