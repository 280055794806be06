"""Typed asyncio driver for the ArangoDB HTTP API.

Usage:
    from blandango import Config, Document, Doc

    config = Config(host="http://localhost:8529", database="_system",
                    user="root", password="secret")
    document = Document.from_config(config)
    created: Doc[SampleData] = await document.insert(SampleData(body="hi"))
"""

from .api import (
    ArangoApi,
    BoundCursorRequest,
    CacheProperties,
    Collection,
    CursorRequest,
    CursorResponse,
    Database,
    Document,
    Explain,
    Index,
    NewCollection,
    NewDatabase,
    NewIdx,
    ParseQuery,
    Properties,
    PropertiesUpdate,
    Query,
)
from .client import (
    ApiError,
    Client,
    ClientError,
    CollectionOp,
    Config,
    ConnectionBuildError,
    InsertionError,
    JsonEncodingError,
    ParamEncodingError,
    Router,
    TransportError,
    UriError,
    ValidationError,
    resolve_config,
)
from .models import (
    ArangoEdgeKeys,
    ArangoKeys,
    BulkItemError,
    BulkResult,
    Doc,
    DocumentQueryParams,
    Edge,
    FlatResponse,
    Response,
    collection_name,
    name_of,
)

__version__ = "0.3.0"

__all__ = [
    "ApiError",
    "ArangoApi",
    "ArangoEdgeKeys",
    "ArangoKeys",
    "BoundCursorRequest",
    "BulkItemError",
    "BulkResult",
    "CacheProperties",
    "Client",
    "ClientError",
    "Collection",
    "CollectionOp",
    "Config",
    "ConnectionBuildError",
    "CursorRequest",
    "CursorResponse",
    "Database",
    "Doc",
    "Document",
    "DocumentQueryParams",
    "Edge",
    "Explain",
    "FlatResponse",
    "Index",
    "InsertionError",
    "JsonEncodingError",
    "NewCollection",
    "NewDatabase",
    "NewIdx",
    "ParamEncodingError",
    "ParseQuery",
    "Properties",
    "PropertiesUpdate",
    "Query",
    "Response",
    "Router",
    "TransportError",
    "UriError",
    "ValidationError",
    "collection_name",
    "name_of",
]
