"""
JSON-RPC transport over HTTP.

One ``JSONRPCTransport`` owns one ``aiohttp.ClientSession``, created on the
first call. Timeouts are enforced here; nothing is retried.
"""

import asyncio
import itertools
from typing import Any, List, Mapping, Optional

import aiohttp

from ..errors import RPCError, create_rpc_error
from ..logging import get_logger

logger = get_logger(__name__)


class JSONRPCTransport:
    """Generic JSON-RPC client used by the bridge."""

    def __init__(
        self,
        url: str,
        auth: Optional[aiohttp.BasicAuth] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: float = 30.0,
    ):
        self.url = url.rstrip("/")
        self.auth = auth
        self.headers = dict(headers or {})
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None
        self._ids = itertools.count(1)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers=self.headers, auth=self.auth, timeout=self.timeout
            )
        return self._session

    async def execute(self, endpoint: str, method: str, params: List[Any]) -> Any:
        """POST one JSON-RPC request and return its ``result``.

        Raises:
            RPCError: the daemon answered with an error object, the HTTP
                status was not 200, or the request never completed.
        """
        request_id = next(self._ids)
        payload = {
            "jsonrpc": "2.0",
            "id": request_id,
            "method": method,
            "params": params,
        }
        url = self.url + endpoint

        logger.debug(
            f"RPC request {method}",
            extra={"id": request_id, "params": params},
        )

        try:
            async with self._get_session().post(url, json=payload) as response:
                status = response.status
                try:
                    body = await response.json(content_type=None)
                except ValueError:
                    body = None
        except asyncio.TimeoutError as e:
            logger.error(f"RPC request {method} timed out")
            raise RPCError(
                f"RPC request '{method}' timed out",
                rpc_method=method,
                retryable=True,
                cause=e,
            ) from e
        except aiohttp.ClientError as e:
            logger.error(f"RPC request {method} failed: {e}")
            raise RPCError(
                f"RPC request '{method}' failed: {e}",
                rpc_method=method,
                retryable=True,
                cause=e,
            ) from e

        error = body.get("error") if isinstance(body, dict) else None
        if error:
            if not isinstance(error, dict):
                error = {"message": str(error)}
            logger.error(
                f"RPC error from {method}: {error.get('message')}",
                extra={"code": error.get("code")},
            )
            raise create_rpc_error(method, error, status)

        if status != 200 or not isinstance(body, dict):
            logger.error(f"RPC request {method} returned HTTP {status}")
            raise RPCError(
                f"HTTP error: {status}", rpc_method=method, status_code=status
            )

        return body.get("result")

    async def close(self) -> None:
        """Close the HTTP session."""
        self._closed = True
        if self._session is not None:
            session, self._session = self._session, None
            await session.close()
