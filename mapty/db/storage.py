"""Key-value storage slots for persisted snapshots.

Values are plain strings, keyed by name, with the semantics of a browser's
`localStorage`: reads of a missing key return None, writes replace the whole
value, and a write may fail when the storage quota is exceeded.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_PATH = "workouts.json"


class QuotaExceededError(OSError):
    """Raised when a write would exceed the storage quota."""


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


def _check_quota(key: str, value: str, quota_bytes: int | None) -> None:
    if quota_bytes is None:
        return
    size = len(value.encode("utf-8"))
    if size > quota_bytes:
        raise QuotaExceededError(
            f"Value for {key!r} is {size} bytes, over the {quota_bytes} byte quota"
        )


class InMemoryKeyValueStore:
    """A storage slot that lives only as long as the process."""

    def __init__(self, quota_bytes: int | None = None):
        self.quota_bytes = quota_bytes
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        _check_quota(key, value, self.quota_bytes)
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileKeyValueStore:
    """A storage slot backed by a single JSON object on disk.

    Every write rewrites the file through a temporary file and `os.replace`, so a
    failed write leaves the previous contents intact. A missing or corrupt file
    reads as empty.
    """

    def __init__(self, path: str | Path, quota_bytes: int | None = None):
        self.path = Path(path)
        self.quota_bytes = quota_bytes

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (ValueError, RecursionError) as e:
            # Covers undecodable bytes as well as malformed JSON.
            logger.warning(
                f"Storage file {self.path} is not readable JSON ({type(e).__name__}); "
                "treating as empty"
            )
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Storage file {self.path} is not a JSON object; treating as empty")
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f)
            os.replace(tmp_name, self.path)
        except BaseException:
            # Leave no stray temporary file behind.
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        _check_quota(key, value, self.quota_bytes)
        items = self._read_all()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key not in items:
            return
        del items[key]
        self._write_all(items)


def get_storage() -> KeyValueStore:
    """Build the storage backend configured by environment variables.

    STORAGE_BACKEND selects "file" (the default) or "memory". The file backend
    writes to STORAGE_PATH. STORAGE_QUOTA_BYTES optionally caps the size of a
    single stored value.
    """
    backend = os.environ.get("STORAGE_BACKEND", "file")
    quota = os.environ.get("STORAGE_QUOTA_BYTES")
    quota_bytes = int(quota) if quota else None
    match backend:
        case "memory":
            logger.info("Using in-memory workout storage")
            return InMemoryKeyValueStore(quota_bytes=quota_bytes)
        case "file":
            path = os.environ.get("STORAGE_PATH", DEFAULT_STORAGE_PATH)
            logger.info(f"Using file workout storage at {path}")
            return JsonFileKeyValueStore(path, quota_bytes=quota_bytes)
        case _:
            raise ValueError(
                f"Invalid STORAGE_BACKEND value: {backend}. Must be 'file' or 'memory'."
            )
