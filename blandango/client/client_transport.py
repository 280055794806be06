"""Asynchronous HTTP transport for the ArangoDB REST API.

One :class:`Client` owns one pooled ``httpx.AsyncClient`` and a Basic auth
credential computed once at construction. Every verb method performs exactly
one round trip: build the request, attach auth, send it, and decode the
response into the caller's type, or raise one
:class:`~blandango.client.client_errors.ClientError` subclass.

Protocol note: ``http2=True`` only takes effect for HTTPS endpoints that
negotiate HTTP/2 via ALPN; cleartext ``http://`` hosts use HTTP/1.1.
"""

from __future__ import annotations

import base64
import copy
import logging
from functools import lru_cache
from typing import Any

import httpx
import orjson
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..logging import LogManager
from ..models.model_base import WireModel
from .client_config import Config
from .client_errors import (
    ApiError,
    ApiErrorBody,
    ConnectionBuildError,
    JsonEncodingError,
    TransportError,
    UriError,
)

_NO_BODY = object()


@lru_cache(maxsize=256)
def _adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


def _to_jsonable(data: Any) -> Any:
    if isinstance(data, WireModel):
        return data.to_wire()
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, (list, tuple)):
        return [_to_jsonable(item) for item in data]
    if isinstance(data, dict):
        return {key: _to_jsonable(value) for key, value in data.items()}
    return data


def encode_body(data: Any) -> bytes:
    """Serialize a request payload to JSON bytes.

    Raises:
        JsonEncodingError: If the payload is not JSON serializable.
    """
    try:
        return orjson.dumps(_to_jsonable(data))
    except (TypeError, ValueError) as exc:
        raise JsonEncodingError(f"Failed to encode request body: {exc}", source=exc) from exc


def decode_body(content: bytes, response_type: Any) -> Any:
    """Decode a JSON body as ``response_type``.

    Raises:
        JsonEncodingError: If the body is not JSON or does not match the type.
    """
    try:
        data = orjson.loads(content)
        return _adapter(response_type).validate_python(data)
    except orjson.JSONDecodeError as exc:
        raise JsonEncodingError(f"Response body is not valid JSON: {exc}", source=exc) from exc
    except PydanticValidationError as exc:
        raise JsonEncodingError(
            f"Response body does not match {getattr(response_type, '__name__', response_type)}: {exc}",
            source=exc,
        ) from exc


class Client:
    """Authenticated, pooled transport bound to one database.

    Cheap to :meth:`clone`; clones share the connection pool, which httpx
    makes safe for concurrent use across asyncio tasks.
    """

    def __init__(
        self,
        config: Config,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._base_url = config.base_url
        self._log = LogManager.get_logger("transport", database=config.database)

        credential = f"{config.user}:{config.password}".encode()
        self._secret = base64.b64encode(credential).decode("ascii")

        if transport is None:
            # Short keepalive expiry recycles idle connections before they
            # go stale; retries stay off so one call is one request.
            limits = httpx.Limits(
                max_connections=config.max_connections,
                max_keepalive_connections=config.max_keepalive_connections,
                keepalive_expiry=config.pool_idle_timeout,
            )
            transport = httpx.AsyncHTTPTransport(
                http2=config.http2,
                limits=limits,
                retries=0,
            )

        timeout = httpx.Timeout(
            connect=config.connect_timeout,
            read=config.read_timeout,
            write=config.write_timeout,
            pool=config.connect_timeout,
        )
        self._http = httpx.AsyncClient(transport=transport, timeout=timeout)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def config(self) -> Config:
        return self._config

    @property
    def base_url(self) -> str:
        return self._base_url

    def clone(self) -> Client:
        """Return a client sharing this client's pool and credential."""
        return copy.copy(self)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Verbs
    # ------------------------------------------------------------------
    async def head(self, endpoint: str, response_type: Any = None) -> Any:
        return await self._send("HEAD", endpoint, response_type=response_type)

    async def get(self, endpoint: str, response_type: Any = None) -> Any:
        return await self._send("GET", endpoint, response_type=response_type)

    async def post(self, endpoint: str, data: Any, response_type: Any = None) -> Any:
        return await self._send("POST", endpoint, data=data, response_type=response_type)

    async def put(self, endpoint: str, data: Any, response_type: Any = None) -> Any:
        return await self._send("PUT", endpoint, data=data, response_type=response_type)

    async def patch(self, endpoint: str, data: Any, response_type: Any = None) -> Any:
        return await self._send("PATCH", endpoint, data=data, response_type=response_type)

    async def delete(self, endpoint: str, response_type: Any = None) -> Any:
        return await self._send("DELETE", endpoint, response_type=response_type)

    async def delete_many(self, endpoint: str, data: Any, response_type: Any = None) -> Any:
        """DELETE with a JSON body, used by bulk document removal."""
        return await self._send("DELETE", endpoint, data=data, response_type=response_type)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _headers(self, has_body: bool) -> dict[str, str]:
        headers = {"Authorization": f"Basic {self._secret}"}
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _build_request(self, method: str, endpoint: str, data: Any) -> httpx.Request:
        url = f"{self._base_url}{endpoint}"
        content = None if data is _NO_BODY else encode_body(data)
        try:
            return self._http.build_request(
                method,
                url,
                headers=self._headers(content is not None),
                content=content,
            )
        except httpx.InvalidURL as exc:
            raise UriError(f"Invalid URL {url!r}: {exc}", source=exc) from exc
        except (TypeError, ValueError) as exc:
            raise ConnectionBuildError(f"Failed to build {method} request for {url!r}: {exc}", source=exc) from exc

    async def _send(
        self,
        method: str,
        endpoint: str,
        *,
        data: Any = _NO_BODY,
        response_type: Any = None,
    ) -> Any:
        request = self._build_request(method, endpoint, data)

        try:
            response = await self._http.send(request)
        except httpx.UnsupportedProtocol as exc:
            raise UriError(f"Unsupported URL {request.url}: {exc}", source=exc) from exc
        except httpx.InvalidURL as exc:
            raise UriError(f"Invalid URL {request.url}: {exc}", source=exc) from exc
        except httpx.TransportError as exc:
            raise TransportError(f"{method} {request.url} failed: {exc}", source=exc) from exc

        if self._log.isEnabledFor(logging.DEBUG):
            self._log.debug("request", method=method, url=str(request.url), status=response.status_code)
        return self._handle_response(response, response_type)

    def _handle_response(self, response: httpx.Response, response_type: Any) -> Any:
        if response.is_success:
            if response_type is None:
                return None
            return decode_body(response.content, response_type)

        if response.request.method == "HEAD":
            # HEAD responses never carry the error envelope.
            raise ApiError(
                response.status_code,
                True,
                response.reason_phrase,
                0,
                status_code=response.status_code,
            )

        body: ApiErrorBody = decode_body(response.content, ApiErrorBody)
        raise ApiError.from_body(body, response.status_code)


__all__ = [
    "Client",
    "decode_body",
    "encode_body",
]
