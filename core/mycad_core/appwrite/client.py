from types import TracebackType
from typing import Any, Optional

import httpx
from loguru import logger

from ..exceptions import AppwriteError
from .env import AppwriteConfig


class AppwriteClient:
    """Async client for the Appwrite REST API authenticated with a server API key.

    Use as an async context manager so the underlying connection pool
    is closed when the request handler is done:

        async with AppwriteClient.from_config(config) as client:
            doc = await Databases(client).get_document(db, col, doc_id)
    """

    def __init__(
        self,
        endpoint: str,
        project_id: str,
        api_key: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.project_id = project_id
        self._http = httpx.AsyncClient(
            base_url=self.endpoint,
            headers={
                "X-Appwrite-Project": project_id,
                "X-Appwrite-Key": api_key,
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(
        cls,
        config: AppwriteConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "AppwriteClient":
        return cls(
            endpoint=config.appwrite_endpoint,
            project_id=config.appwrite_project_id,
            api_key=config.appwrite_api_key,
            timeout=config.appwrite_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "AppwriteClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Sends a request to the API.

        Raises
        ------
        `AppwriteError`
            If Appwrite responds with a non-2xx status code.
        `httpx.HTTPError`
            If the request could not be sent.
        """
        logger.debug(f"Appwrite {method} {path}")
        res = await self._http.request(method, path, **kwargs)
        if res.is_error:
            raise _error_from_response(res)
        return res


def _error_from_response(res: httpx.Response) -> AppwriteError:
    message = res.text
    error_type = None
    try:
        body = res.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("message") or message
        error_type = body.get("type")
    if not message:
        message = f"Appwrite responded with status {res.status_code}"
    return AppwriteError(
        message, upstream_status=res.status_code, error_type=error_type
    )
