from typing import Any, Optional

from pydantic import BaseModel, Field

from ..exceptions import AppwriteError, FileNotFound
from .client import AppwriteClient


class FileList(BaseModel):
    total: int = 0
    files: list[dict[str, Any]] = Field(default_factory=list)


class Storage:
    """Blob storage operations."""

    def __init__(self, client: AppwriteClient) -> None:
        self.client = client

    async def create_file(
        self,
        bucket_id: str,
        file_id: str,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
        permissions: Optional[list[str]] = None,
    ) -> dict[str, Any]:
        """Uploads a file in a single multipart request.

        Returns the file metadata, `$id` holds the ID of the stored file.
        """
        data: dict[str, Any] = {"fileId": file_id}
        if permissions:
            data["permissions[]"] = permissions
        res = await self.client.request(
            "POST",
            f"/storage/buckets/{bucket_id}/files",
            data=data,
            files={"file": (filename, content, content_type)},
        )
        return res.json()

    async def delete_file(self, bucket_id: str, file_id: str) -> None:
        try:
            await self.client.request(
                "DELETE", f"/storage/buckets/{bucket_id}/files/{file_id}"
            )
        except AppwriteError as e:
            if e.upstream_status == 404:
                raise FileNotFound(bucket_id, file_id) from e
            raise

    async def get_file_view(self, bucket_id: str, file_id: str) -> bytes:
        """Downloads the raw contents of a file."""
        try:
            res = await self.client.request(
                "GET", f"/storage/buckets/{bucket_id}/files/{file_id}/view"
            )
        except AppwriteError as e:
            if e.upstream_status == 404:
                raise FileNotFound(bucket_id, file_id) from e
            raise
        return res.content

    async def list_files(
        self, bucket_id: str, queries: Optional[list[str]] = None
    ) -> FileList:
        params = [("queries[]", q) for q in queries or []]
        res = await self.client.request(
            "GET", f"/storage/buckets/{bucket_id}/files", params=params
        )
        return FileList.model_validate(res.json())

    async def get_bucket(self, bucket_id: str) -> dict[str, Any]:
        res = await self.client.request("GET", f"/storage/buckets/{bucket_id}")
        return res.json()
