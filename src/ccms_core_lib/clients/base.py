"""Base client for the CCMS backend REST API."""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Iterable, Optional

import httpx

from ccms_core_lib.auth import RequestContext
from ccms_core_lib.clients.query_cache import QueryCache
from ccms_core_lib.utils import call_with_retry, create_read_retry

logger = logging.getLogger(__name__)


class BaseServiceClient:
    """Base class for CCMS backend HTTP clients.

    Reads go through a shared QueryCache and are retried on transport
    errors; writes are sent once and invalidate the cached reads they
    affect. HTTP errors propagate as ``httpx.HTTPStatusError``.

    Usage:
        class CaseClient(BaseServiceClient):
            async def list_cases(self) -> List[Case]:
                data = await self._get_json("/api/cases")
                return [Case.model_validate(item) for item in data]
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        *,
        max_retries: int = 3,
        retry_wait: float = 0.5,
        context: Optional[RequestContext] = None,
        cache: Optional[QueryCache] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize service client.

        Args:
            base_url: Backend base URL (e.g., http://localhost:5000)
            timeout: Request timeout in seconds (default: 30.0)
            max_retries: Attempts for read requests (default: 3)
            retry_wait: Initial backoff between read attempts in seconds
            context: User context sent as X-User-* headers
            cache: Shared read cache (default: a new QueryCache)
            client: Persistent AsyncClient to use instead of one per request;
                the caller keeps ownership and closes it
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.context = context or RequestContext.anonymous()
        self.cache = cache if cache is not None else QueryCache()
        self._client = client
        self._read_retry = create_read_retry(
            max_attempts=max_retries,
            min_wait=retry_wait,
            max_wait=max(retry_wait * 8, retry_wait),
            multiplier=retry_wait,
        )

        logger.info(f"Initialized {self.__class__.__name__} with base_url={base_url}")

    def _headers(
        self, context: Optional[RequestContext] = None, json_body: bool = True
    ) -> Dict[str, str]:
        """Generate request headers with user context.

        Args:
            context: Overrides the client's default context for one call
            json_body: Whether the request carries a JSON body

        Returns:
            Headers dict with X-User-* headers and correlation ID
        """
        headers = {"Accept": "application/json"}
        if json_body:
            headers["Content-Type"] = "application/json"
        headers.update((context or self.context).headers())
        return headers

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path if path.startswith('/') else '/' + path}"

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Yield the persistent client, or a per-request client with the configured timeout."""
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            yield client

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        return response.json()

    async def _fetch_json(self, path: str, context: Optional[RequestContext]) -> Any:
        async with self._get_client() as client:
            response = await client.get(
                self._url(path), headers=self._headers(context, json_body=False)
            )
            response.raise_for_status()
            return self._decode(response)

    async def _get_json(
        self,
        path: str,
        *,
        use_cache: bool = True,
        context: Optional[RequestContext] = None,
    ) -> Any:
        """GET ``path``, served from the cache while the entry is fresh.

        Raises:
            httpx.HTTPStatusError: On an error response
            httpx.TransportError: If every attempt failed to reach the backend
        """
        if use_cache:
            entry = self.cache.get(path)
            if entry is not None:
                return entry.data

        data = await call_with_retry(self._read_retry, self._fetch_json, path, context)
        self.cache.set(path, data)
        return data

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        invalidates: Iterable[str] = (),
        context: Optional[RequestContext] = None,
        decode: bool = True,
    ) -> Any:
        """Send a write request once and invalidate affected reads on success.

        Args:
            method: HTTP method (POST, PUT, PATCH, DELETE)
            path: Resource path
            json: JSON body
            data: Form fields for multipart requests
            files: Files for multipart requests
            invalidates: Paths whose cached reads become stale on success
            decode: Parse the response body as JSON (otherwise return None)

        Raises:
            httpx.HTTPStatusError: On an error response (nothing is invalidated)
        """
        async with self._get_client() as client:
            response = await client.request(
                method,
                self._url(path),
                json=json,
                data=data,
                files=files,
                headers=self._headers(context, json_body=files is None),
            )
            response.raise_for_status()

        for stale_path in invalidates:
            self.cache.invalidate(stale_path)
        if not decode:
            return None
        return self._decode(response)

    async def get_json(self, path: str, use_cache: bool = True) -> Any:
        """GET a JSON document, retried on transport errors."""
        return await self._get_json(path, use_cache=use_cache)

    async def post_json(self, path: str, payload: Any) -> Any:
        """POST a JSON payload without touching the cache."""
        return await self._send("POST", path, json=payload)

    async def close(self):
        """Close any persistent connections.

        Injected clients belong to the caller and are left open.
        """
        pass
