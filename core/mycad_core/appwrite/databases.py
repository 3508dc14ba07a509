from typing import Any, Optional

from pydantic import BaseModel, Field

from ..exceptions import AppwriteError, DocumentNotFound
from .client import AppwriteClient


class DocumentList(BaseModel):
    total: int = 0
    documents: list[dict[str, Any]] = Field(default_factory=list)


class Databases:
    """Document database operations."""

    def __init__(self, client: AppwriteClient) -> None:
        self.client = client

    @staticmethod
    def _documents_path(database_id: str, collection_id: str) -> str:
        return f"/databases/{database_id}/collections/{collection_id}/documents"

    async def get_document(
        self, database_id: str, collection_id: str, document_id: str
    ) -> dict[str, Any]:
        """Fetches a single document.

        Raises
        ------
        `DocumentNotFound`
            If the document does not exist.
        """
        path = f"{self._documents_path(database_id, collection_id)}/{document_id}"
        try:
            res = await self.client.request("GET", path)
        except AppwriteError as e:
            if e.upstream_status == 404:
                raise DocumentNotFound(collection_id, document_id, str(e)) from e
            raise
        return res.json()

    async def list_documents(
        self,
        database_id: str,
        collection_id: str,
        queries: Optional[list[str]] = None,
    ) -> DocumentList:
        params = [("queries[]", q) for q in queries or []]
        res = await self.client.request(
            "GET", self._documents_path(database_id, collection_id), params=params
        )
        return DocumentList.model_validate(res.json())

    async def create_document(
        self,
        database_id: str,
        collection_id: str,
        document_id: str,
        data: dict[str, Any],
        permissions: Optional[list[str]] = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"documentId": document_id, "data": data}
        if permissions:
            body["permissions"] = permissions
        res = await self.client.request(
            "POST", self._documents_path(database_id, collection_id), json=body
        )
        return res.json()

    async def update_document(
        self,
        database_id: str,
        collection_id: str,
        document_id: str,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        path = f"{self._documents_path(database_id, collection_id)}/{document_id}"
        try:
            res = await self.client.request("PATCH", path, json={"data": data})
        except AppwriteError as e:
            if e.upstream_status == 404:
                raise DocumentNotFound(collection_id, document_id, str(e)) from e
            raise
        return res.json()
