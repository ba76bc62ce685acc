"""
HTTP transport adapter.

Thin wrapper over aiohttp: sends one POST or DELETE with basic auth and
returns status plus raw body. Connection pooling, TLS and redirects are
aiohttp's business; this layer performs no retries.
"""
import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import aiohttp

from .config import CloudinaryConfig
from ..exceptions import InvalidInputError, TransportError
from ..logging import get_logger

REQUEST_OPTION_KEYS = ('timeout', 'connect_timeout', 'read_timeout', 'max_redirects')


@dataclass(frozen=True)
class TransportResponse:
    """
    Raw HTTP response.

    Attributes:
        status: HTTP status code
        body: Raw response body
        headers: Response headers
    """
    status: int
    body: bytes = b''
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Only 200 counts as accepted by the upload API."""
        return self.status == 200


class AiohttpTransport:
    """
    aiohttp-backed transport.

    Reuses a single ClientSession for every request (created lazily).
    Pass ``session`` to share an existing one; it is then not closed here.
    """

    def __init__(
        self,
        config: CloudinaryConfig,
        session: Optional[aiohttp.ClientSession] = None
    ):
        self._config = config
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger('cloudexpy.api.transport')

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(**self._config.get_connector_kwargs()),
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close session if we own it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def post(
        self,
        url: str,
        data: Any,
        headers: Optional[Dict[str, str]] = None,
        request_options: Optional[Mapping[str, Any]] = None
    ) -> TransportResponse:
        """
        POST ``data`` to ``url``.

        Args:
            url: Target URL
            data: Request body (str, bytes or aiohttp payload/FormData)
            headers: Extra request headers
            request_options: Per-request timeouts and redirect limits

        Raises:
            TransportError: On connection failure or timeout
        """
        return await self._request('POST', url, data=data, headers=headers,
                                   request_options=request_options)

    async def delete(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        request_options: Optional[Mapping[str, Any]] = None
    ) -> TransportResponse:
        """DELETE ``url``. Raises TransportError like post()."""
        return await self._request('DELETE', url, headers=headers,
                                   request_options=request_options)

    async def _request(
        self,
        method: str,
        url: str,
        data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        request_options: Optional[Mapping[str, Any]] = None
    ) -> TransportResponse:
        kwargs = self.request_kwargs(request_options or {})
        session = await self._get_session()
        auth = aiohttp.BasicAuth(self._config.api_key, self._config.secret)
        proxy = self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None

        started = time.time()
        try:
            async with session.request(
                method,
                url,
                data=data,
                headers=headers or {},
                auth=auth,
                proxy=proxy,
                **kwargs
            ) as response:
                body = await response.read()
                elapsed = time.time() - started
                self._logger.debug(f"{method} {url} -> {response.status} in {elapsed:.2f}s")
                return TransportResponse(
                    status=response.status,
                    body=body,
                    headers=dict(response.headers)
                )
        except asyncio.TimeoutError as e:
            elapsed = time.time() - started
            self._logger.error(f"{method} {url} timed out after {elapsed:.2f}s")
            raise TransportError(f"Request timed out after {elapsed:.2f}s") from e
        except aiohttp.ClientError as e:
            self._logger.error(f"{method} {url} failed: {e}")
            raise TransportError(str(e) or e.__class__.__name__) from e

    @staticmethod
    def request_kwargs(request_options: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Translate ``request_options`` into aiohttp request kwargs.

        Keys: ``timeout``, ``connect_timeout``, ``read_timeout`` (seconds)
        and ``max_redirects`` (0 disables redirects).

        Raises:
            InvalidInputError: On an unknown key
        """
        unknown = [key for key in request_options if key not in REQUEST_OPTION_KEYS]
        if unknown:
            raise InvalidInputError(f"Unknown request_options: {', '.join(map(str, unknown))}")

        kwargs: Dict[str, Any] = {}
        if any(key in request_options for key in ('timeout', 'connect_timeout', 'read_timeout')):
            kwargs['timeout'] = aiohttp.ClientTimeout(
                total=request_options.get('timeout'),
                connect=request_options.get('connect_timeout'),
                sock_read=request_options.get('read_timeout')
            )
        if 'max_redirects' in request_options:
            max_redirects = int(request_options['max_redirects'])
            if max_redirects <= 0:
                kwargs['allow_redirects'] = False
            else:
                kwargs['max_redirects'] = max_redirects
        return kwargs
