"""Connection bridge speaking plain HTTP GET/PUT through httpx."""

from typing import Optional

import httpx

from ..identity.errors import StorageFailure
from .bridge import ConnectionBridge

DEFAULT_TIMEOUT = 30.0
PUT_OK_STATUSES = (200, 201, 204)


class HttpBridge(ConnectionBridge):
    """Fetches ``<base_url>/<key>`` with GET and replaces it with PUT.

    A 404 response to GET means the blob does not exist yet. Any other
    unexpected status, and every transport error, raises StorageFailure.

    Clients may be passed in for connection reuse (or testing with
    ``httpx.MockTransport``); otherwise a short-lived client is created for
    each request.
    """

    def __init__(
        self,
        base_url: str,
        client: Optional[httpx.Client] = None,
        async_client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = client
        self._async_client = async_client
        self._timeout = timeout

    def _url(self, key: str) -> str:
        return f"{self.base_url}/{key.lstrip('/')}"

    def get(self, key: str) -> Optional[bytes]:
        url = self._url(key)
        try:
            if self._client is not None:
                response = self._client.get(url)
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    response = client.get(url)
        except httpx.HTTPError as e:
            raise StorageFailure(f"IO failure on request to {url}: {e}") from e
        return self._read_get_response(url, response)

    def put(self, key: str, body: bytes) -> None:
        url = self._url(key)
        try:
            if self._client is not None:
                response = self._client.put(url, content=body)
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    response = client.put(url, content=body)
        except httpx.HTTPError as e:
            raise StorageFailure(f"IO failure on request to {url}: {e}") from e
        self._check_put_response(url, response)

    async def get_async(self, key: str) -> Optional[bytes]:
        url = self._url(key)
        try:
            if self._async_client is not None:
                response = await self._async_client.get(url)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(url)
        except httpx.HTTPError as e:
            raise StorageFailure(f"IO failure on request to {url}: {e}") from e
        return self._read_get_response(url, response)

    async def put_async(self, key: str, body: bytes) -> None:
        url = self._url(key)
        try:
            if self._async_client is not None:
                response = await self._async_client.put(url, content=body)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.put(url, content=body)
        except httpx.HTTPError as e:
            raise StorageFailure(f"IO failure on request to {url}: {e}") from e
        self._check_put_response(url, response)

    def _read_get_response(self, url: str, response: httpx.Response) -> Optional[bytes]:
        if response.status_code == 200:
            return response.content
        if response.status_code == 404:
            return None
        raise StorageFailure(
            f"Unexpected HTTP response on request to {url}: {response.status_code}"
        )

    def _check_put_response(self, url: str, response: httpx.Response) -> None:
        if response.status_code not in PUT_OK_STATUSES:
            raise StorageFailure(
                f"Unexpected HTTP response on request to {url}: {response.status_code}"
            )
