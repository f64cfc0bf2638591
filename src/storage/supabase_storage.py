import logging
from typing import Protocol
from urllib.parse import quote, unquote

import httpx

from src.storage.base import AssetStorage, AssetStorageError

logger = logging.getLogger(__name__)


class StorageConfig(Protocol):
    supabase_url: str
    supabase_service_key: str
    storage_bucket: str


class SupabaseAssetStorage(AssetStorage):
    """Asset storage backed by the Supabase Storage HTTP API."""

    def __init__(
        self,
        config: StorageConfig,
        http_client_class: type[httpx.AsyncClient] = httpx.AsyncClient,
    ):
        self._config = config
        self._http_client_class = http_client_class

    @property
    def _base_url(self) -> str:
        return f"{self._config.supabase_url.rstrip('/')}/storage/v1"

    @property
    def _public_prefix(self) -> str:
        return f"{self._base_url}/object/public/{self._config.storage_bucket}/"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._config.supabase_service_key}",
            "apikey": self._config.supabase_service_key,
        }

    async def upload(self, path: str, content: bytes, content_type: str | None = None) -> None:
        headers = {
            **self._headers(),
            "Content-Type": content_type or "application/octet-stream",
            "x-upsert": "false",
        }
        try:
            async with self._http_client_class() as client:
                response = await client.post(
                    f"{self._base_url}/object/{self._config.storage_bucket}/{quote(path)}",
                    headers=headers,
                    content=content,
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise AssetStorageError("upload image", e) from e
        logger.info("Uploaded asset %s (%d bytes)", path, len(content))

    async def remove(self, paths: list[str]) -> None:
        if not paths:
            return
        try:
            async with self._http_client_class() as client:
                response = await client.request(
                    "DELETE",
                    f"{self._base_url}/object/{self._config.storage_bucket}",
                    headers={**self._headers(), "Content-Type": "application/json"},
                    json={"prefixes": paths},
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise AssetStorageError("remove image", e) from e
        logger.info("Removed assets %s", ", ".join(paths))

    def get_public_url(self, path: str) -> str:
        return f"{self._public_prefix}{quote(path)}"

    def path_from_public_url(self, url: str) -> str | None:
        # URLs outside this bucket never map to one of its objects
        if not url.startswith(self._public_prefix):
            return None
        return unquote(url[len(self._public_prefix):]) or None
