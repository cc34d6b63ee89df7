"""Objects kept as plain files below a root directory."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .base import ObjectNotFoundError, StorageBackend, StorageError, StorageObject


class LocalStorageBackend(StorageBackend):
    name = "local"

    def __init__(self, root: Path) -> None:
        self.root = root.resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    def _locate(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if path == self.root or self.root not in path.parents:
            raise StorageError(f"Object key escapes storage root: {key!r}")
        return path

    def _describe(self, path: Path, content_type: Optional[str] = None) -> StorageObject:
        return StorageObject(
            key=path.relative_to(self.root).as_posix(),
            size=path.stat().st_size,
            content_type=content_type,
        )

    def put_bytes(self, key: str, data: bytes, content_type: Optional[str] = None) -> StorageObject:
        path = self._locate(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return self._describe(path, content_type)

    def get_bytes(self, key: str) -> bytes:
        path = self._locate(key)
        try:
            return path.read_bytes()
        except (FileNotFoundError, IsADirectoryError) as exc:
            raise ObjectNotFoundError(f"Object not found: {key}") from exc

    def delete(self, key: str) -> None:
        self._locate(key).unlink(missing_ok=True)

    def list(self, prefix: str) -> List[StorageObject]:
        folder = prefix.strip("/")
        base = self._locate(folder) if folder else self.root
        if base.is_file():
            return [self._describe(base)]
        if not base.is_dir():
            return []
        return [self._describe(path) for path in sorted(base.rglob("*")) if path.is_file()]
