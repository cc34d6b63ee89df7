"""Supabase Storage backend speaking the storage REST API over httpx."""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional

import httpx

from .base import ObjectNotFoundError, StorageBackend, StorageError, StorageObject

# Supabase answers 400 rather than 404 for unknown objects on some deployments
_NOT_FOUND_STATUSES = (400, 404)
_PAGE_SIZE = 1000


class SupabaseStorageBackend(StorageBackend):
    """All objects live in one bucket and are accessed with the service role key."""

    name = "supabase"

    def __init__(self, *, url: str, bucket: str, service_role_key: str, timeout: float = 60.0) -> None:
        self.url = url.rstrip("/")
        self.bucket = bucket
        self._client = httpx.Client(
            base_url=f"{self.url}/storage/v1",
            headers={"Authorization": f"Bearer {service_role_key}", "apikey": service_role_key},
            timeout=timeout,
        )

    def _send(
        self,
        method: str,
        path: str,
        *,
        action: str,
        key: str,
        missing_is_not_found: bool = False,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise StorageError(f"Failed to {action} '{key}': {exc}") from exc
        if missing_is_not_found and response.status_code in _NOT_FOUND_STATUSES:
            raise ObjectNotFoundError(f"Object not found: {key}")
        if response.status_code >= 400:
            raise StorageError(f"Failed to {action} '{key}': {response.status_code} {response.text}")
        return response

    def _absolute(self, signed_path: Optional[str]) -> Optional[str]:
        if not signed_path:
            return None
        if signed_path.startswith(("http://", "https://")):
            return signed_path
        return f"{self.url}/storage/v1{signed_path}"

    def put_bytes(self, key: str, data: bytes, content_type: Optional[str] = None) -> StorageObject:
        self._send(
            "POST",
            f"/object/{self.bucket}/{key}",
            action="upload",
            key=key,
            content=data,
            headers={"content-type": content_type or "application/octet-stream", "x-upsert": "true"},
        )
        return StorageObject(key=key, size=len(data), content_type=content_type)

    def get_bytes(self, key: str) -> bytes:
        response = self._send(
            "GET", f"/object/{self.bucket}/{key}", action="download", key=key, missing_is_not_found=True
        )
        return response.content

    def delete(self, key: str) -> None:
        self._send("DELETE", f"/object/{self.bucket}", action="delete", key=key, json={"prefixes": [key]})

    def _folder_entries(self, folder: str) -> Iterator[Dict[str, Any]]:
        offset = 0
        while True:
            response = self._send(
                "POST",
                f"/object/list/{self.bucket}",
                action="list",
                key=folder,
                json={
                    "prefix": folder,
                    "limit": _PAGE_SIZE,
                    "offset": offset,
                    "sortBy": {"column": "name", "order": "asc"},
                },
            )
            entries = response.json() or []
            yield from entries
            if len(entries) < _PAGE_SIZE:
                return
            offset += _PAGE_SIZE

    def list(self, prefix: str) -> List[StorageObject]:
        folder = prefix.strip("/")
        objects: List[StorageObject] = []
        for entry in self._folder_entries(folder):
            name = entry.get("name")
            if not name:
                continue
            key = f"{folder}/{name}" if folder else name
            # Folders are listed without an id; descend into them
            if entry.get("id") is None:
                objects.extend(self.list(key))
                continue
            metadata = entry.get("metadata") or {}
            objects.append(StorageObject(key=key, size=metadata.get("size"), content_type=metadata.get("mimetype")))
        return objects

    def generate_signed_url(self, key: str, expires_in_seconds: int = 3600) -> Optional[str]:
        response = self._send(
            "POST",
            f"/object/sign/{self.bucket}/{key}",
            action="sign",
            key=key,
            missing_is_not_found=True,
            json={"expiresIn": expires_in_seconds},
        )
        body = response.json()
        return self._absolute(body.get("signedURL") or body.get("signedUrl"))

    def generate_upload_url(self, key: str) -> Optional[str]:
        response = self._send("POST", f"/object/upload/sign/{self.bucket}/{key}", action="sign upload for", key=key)
        body = response.json()
        return self._absolute(body.get("url") or body.get("signedURL"))
