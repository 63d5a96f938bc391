# local persistent storage: json blobs keyed by name, one file per key
# no locking: two processes writing the same key race, last write wins

import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any

from hopeocd.config import settings

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9_.-]")


class LocalStorage:
    """key/value store with json-serialized values"""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{_UNSAFE.sub('_', key)}.json"

    def get(self, key: str, default: Any = None) -> Any:
        path = self._path(key)
        if not path.exists():
            return default
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.error(f"Corrupt local storage blob {key!r}: {e}")
            return default

    def set(self, key: str, value: Any):
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f)
            os.replace(tmp, self._path(key))
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def remove(self, key: str):
        self._path(key).unlink(missing_ok=True)

    def keys(self) -> list[str]:
        if not self.directory.exists():
            return []
        return sorted(p.stem for p in self.directory.glob("*.json"))


local_storage = LocalStorage(settings.LOCAL_STORAGE_DIR)
