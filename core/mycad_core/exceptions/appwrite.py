from typing import Optional

from .base import ClientError, ServerError


class DocumentNotFound(ClientError):
    """Exception raised when a document is not found.

    `upstream_message` holds the message returned by Appwrite, if any.
    """

    def __init__(
        self,
        collection_id: str,
        document_id: str,
        upstream_message: Optional[str] = None,
    ) -> None:
        self.collection_id = collection_id
        self.document_id = document_id
        self.upstream_message = upstream_message
        super().__init__(
            "Document with ID '{}' not found in collection '{}'.".format(
                document_id, collection_id
            ),
            status_code=404,
        )


class FileNotFound(ClientError):
    """Exception raised when a file is not found in a storage bucket."""

    def __init__(self, bucket_id: str, file_id: str) -> None:
        self.bucket_id = bucket_id
        self.file_id = file_id
        super().__init__(
            "File with ID '{}' not found in bucket '{}'.".format(file_id, bucket_id),
            status_code=404,
        )


class AppwriteError(ServerError):
    """Exception raised when the Appwrite API responds with an error.

    `upstream_status` holds the status code returned by Appwrite, while
    `status_code` is the code we respond with ourselves.
    """

    def __init__(
        self,
        message: str,
        upstream_status: Optional[int] = None,
        error_type: Optional[str] = None,
    ) -> None:
        self.upstream_status = upstream_status
        self.error_type = error_type
        super().__init__(message)
