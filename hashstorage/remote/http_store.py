"""
HTTP remote store backed by httpx.

Routes:
    GET  {root}/version
    GET  {root}/groups/{owner}
    GET  {root}/keys/{owner}/{group}
    GET  {root}/info/{owner}/{group}/{key}
    GET  {root}/data/{owner}/{group}/{key}
    POST {root}/data/{owner}/{group}/{key}   body: {version, data, signature}
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from ..core.errors import NetworkError
from .store import RemoteStore, put_body

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def _segment(value: str) -> str:
    return quote(value, safe="")


def _error_detail(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return response.text or None
    if isinstance(body, dict) and body.get("detail") is not None:
        return str(body["detail"])
    return None


class HttpRemoteStore(RemoteStore):
    """
    RemoteStore over HTTP/JSON.

    Usage:
        async with HttpRemoteStore("http://localhost:8000") as remote:
            version = await remote.get_version()
    """

    def __init__(
        self,
        root: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initialize HTTP remote store.

        Args:
            root: Service root URL (trailing slash ignored)
            timeout: Request timeout in seconds
            client: Pre-built AsyncClient (tests inject one with a MockTransport)
        """
        self._root = root.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def root(self) -> str:
        return self._root

    async def __aenter__(self) -> "HttpRemoteStore":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _url(self, *segments: str) -> str:
        return "/".join([self._root] + [_segment(s) for s in segments])

    async def _request(self, method: str, url: str, body: Optional[Dict[str, Any]] = None) -> Any:
        headers = {"Accept": "application/json"}
        logger.debug("%s %s", method, url)
        try:
            response = await self._client.request(method, url, json=body, headers=headers)
        except httpx.HTTPError as ex:
            logger.warning("%s %s failed: %s", method, url, ex)
            raise NetworkError(0, str(ex) or type(ex).__name__) from ex

        if not response.is_success:
            detail = _error_detail(response)
            logger.warning("%s %s -> %d %s", method, url, response.status_code, detail or "")
            raise NetworkError(response.status_code, detail)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as ex:
            raise NetworkError(response.status_code, f"invalid JSON response: {ex}") from ex

    async def get_version(self) -> Any:
        return await self._request("GET", self._url("version"))

    async def get_groups(self, owner: str) -> List[str]:
        return await self._request("GET", self._url("groups", owner))

    async def get_keys(self, owner: str, group: str) -> List[str]:
        return await self._request("GET", self._url("keys", owner, group))

    async def get_info(self, owner: str, group: str, key: str) -> Dict[str, Any]:
        return await self._request("GET", self._url("info", owner, group, key))

    async def get_data(self, owner: str, group: str, key: str) -> Dict[str, Any]:
        return await self._request("GET", self._url("data", owner, group, key))

    async def put_data(
        self,
        owner: str,
        group: str,
        key: str,
        version: int,
        data: str,
        signature: str,
    ) -> Any:
        url = self._url("data", owner, group, key)
        return await self._request("POST", url, put_body(version, data, signature))
