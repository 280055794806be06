"""Error taxonomy for the ArangoDB driver.

Every operation either returns its value or raises exactly one
:class:`ClientError` subclass:

- ``TransportError``: the server could not be reached (connect/read/timeout)
- ``ConnectionBuildError``: the HTTP request could not be constructed
- ``UriError``: host/database/endpoint do not form a usable URL
- ``ParamEncodingError``: typed parameters could not become a query string
- ``JsonEncodingError``: a body could not be serialized or decoded
- ``ApiError``: the server rejected the request with its error envelope
- ``ValidationError``: a client-side precondition failed before any request
- ``InsertionError``: a success response lacked the expected payload

Nothing in the driver retries or swallows these; callers decide.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

ERROR_ARANGO_CONFLICT = 1200
ERROR_ARANGO_DOCUMENT_NOT_FOUND = 1202
ERROR_ARANGO_DATA_SOURCE_NOT_FOUND = 1203
ERROR_ARANGO_UNIQUE_CONSTRAINT_VIOLATED = 1210
ERROR_CURSOR_NOT_FOUND = 1600


class ClientError(Exception):
    """Base class for every error raised by the driver."""

    def __init__(self, message: str, *, source: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source


class TransportError(ClientError):
    """Network or connection failure while talking to the server."""


class ConnectionBuildError(ClientError):
    """The request could not be built (invalid header value, bad body type)."""


class UriError(ClientError):
    """The assembled URL is malformed or uses an unsupported scheme."""


class ParamEncodingError(ClientError):
    """Query parameters could not be encoded into a query string."""


class JsonEncodingError(ClientError):
    """A request body could not be encoded or a response body decoded."""


class ValidationError(ClientError):
    """A client-local precondition failed; no request was sent."""


class InsertionError(ClientError):
    """The server reported success but omitted the expected snapshot."""


class ApiErrorBody(BaseModel):
    """Error envelope returned by ArangoDB on non-2xx responses."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    code: int
    error: bool
    error_message: str = Field(alias="errorMessage")
    error_num: int = Field(alias="errorNum")


class ApiError(ClientError):
    """Structured domain error reported by the server.

    This is the expected failure path for business-rule violations such as
    duplicate keys, missing documents or unique constraint violations.
    """

    def __init__(
        self,
        code: int,
        error: bool,
        error_message: str,
        error_num: int,
        *,
        status_code: int | None = None,
    ) -> None:
        super().__init__(f"ApiError({code}, {str(error).lower()}, {error_message}, {error_num})")
        self.code = code
        self.error = error
        self.error_message = error_message
        self.error_num = error_num
        self.status_code = status_code if status_code is not None else code

    @classmethod
    def from_body(cls, body: ApiErrorBody, status_code: int | None = None) -> ApiError:
        return cls(
            body.code,
            body.error,
            body.error_message,
            body.error_num,
            status_code=status_code,
        )

    @property
    def is_not_found(self) -> bool:
        return self.code == 404

    @property
    def is_conflict(self) -> bool:
        return self.code == 409

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "error": self.error,
            "errorMessage": self.error_message,
            "errorNum": self.error_num,
        }


__all__ = [
    "ERROR_ARANGO_CONFLICT",
    "ERROR_ARANGO_DATA_SOURCE_NOT_FOUND",
    "ERROR_ARANGO_DOCUMENT_NOT_FOUND",
    "ERROR_ARANGO_UNIQUE_CONSTRAINT_VIOLATED",
    "ERROR_CURSOR_NOT_FOUND",
    "ApiError",
    "ApiErrorBody",
    "ClientError",
    "ConnectionBuildError",
    "InsertionError",
    "JsonEncodingError",
    "ParamEncodingError",
    "TransportError",
    "UriError",
    "ValidationError",
]
