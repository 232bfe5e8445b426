# -*- coding: utf-8 -*-
"""Key-value store for opaque secrets such as the auth token."""

from __future__ import annotations

import base64
import binascii
import logging
import threading
from pathlib import Path
from typing import Protocol

from socialstudio.utils.file_utils import read_json_file, write_json_file

logger = logging.getLogger(__name__)

OWNER_ONLY = 0o600


class SecretStore(Protocol):
    def save(self, key: str, data: bytes) -> bool: ...

    def load(self, key: str) -> bytes | None: ...

    def delete(self, key: str) -> None: ...


class MemorySecretStore:
    """Process-local store, used in tests and for ephemeral sessions."""

    def __init__(self) -> None:
        self._items: dict[str, bytes] = {}

    def save(self, key: str, data: bytes) -> bool:
        self._items[key] = bytes(data)
        return True

    def load(self, key: str) -> bytes | None:
        return self._items.get(key)

    def delete(self, key: str) -> None:
        self._items.pop(key, None)


class FileSecretStore:
    """JSON file of base64 values, readable by the owner only.

    Saving a key replaces any previous entry for it.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            return {str(k): str(v) for k, v in read_json_file(self.path).items()}
        except ValueError as exc:
            logger.error("Secret store %s unreadable, starting empty: %s", self.path, exc)
            return {}

    def _write(self, items: dict[str, str]) -> None:
        write_json_file(self.path, items, mode=OWNER_ONLY)

    def save(self, key: str, data: bytes) -> bool:
        with self._lock:
            items = self._read()
            items[key] = base64.b64encode(bytes(data)).decode("ascii")
            try:
                self._write(items)
            except OSError as exc:
                logger.error("Saving secret %s failed: %s", key, exc)
                return False
            return True

    def load(self, key: str) -> bytes | None:
        with self._lock:
            encoded = self._read().get(key)
        if encoded is None:
            return None
        try:
            return base64.b64decode(encoded.encode("ascii"), validate=True)
        except (binascii.Error, ValueError):
            logger.error("Secret %s is corrupt", key)
            return None

    def delete(self, key: str) -> None:
        with self._lock:
            items = self._read()
            if items.pop(key, None) is not None:
                self._write(items)
