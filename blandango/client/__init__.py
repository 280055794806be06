"""
Transport, routing, configuration and the error taxonomy.
"""

from .client_config import Config, resolve_config
from .client_errors import (
    ApiError,
    ApiErrorBody,
    ClientError,
    ConnectionBuildError,
    InsertionError,
    JsonEncodingError,
    ParamEncodingError,
    TransportError,
    UriError,
    ValidationError,
)
from .client_router import CollectionOp, Router, encode_params
from .client_transport import Client

__all__ = [
    "ApiError",
    "ApiErrorBody",
    "Client",
    "ClientError",
    "CollectionOp",
    "Config",
    "ConnectionBuildError",
    "InsertionError",
    "JsonEncodingError",
    "ParamEncodingError",
    "Router",
    "TransportError",
    "UriError",
    "ValidationError",
    "encode_params",
    "resolve_config",
]
