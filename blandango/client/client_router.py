"""Endpoint routing for the ArangoDB REST API.

Maps logical operations to endpoint paths relative to
``{host}/_db/{database}/``. Everything here is pure string building: no I/O,
no state, and the only failure is :class:`ParamEncodingError` when typed
parameters cannot be encoded.

Example:
    >>> Router.extension("widgets", CollectionOp.PROPERTIES)
    '_api/collection/widgets/properties'
    >>> Router.cursor("42")
    '_api/cursor/42'
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .client_errors import ParamEncodingError

COLLECTION_API = "_api/collection"
DOCUMENT_API = "_api/document"
DATABASE_API = "_api/database"
INDEX_API = "_api/index"
CURSOR_API = "_api/cursor"
EXPLAIN_API = "_api/explain"
QUERY_API = "_api/query"
QUERY_CACHE_API = "_api/query-cache"
AQL_FUNCTION_API = "_api/aqlfunction"


class CollectionOp(StrEnum):
    """Per-collection operation suffixes under ``_api/collection/{name}``."""

    PROPERTIES = "properties"
    COUNT = "count"
    FIGURES = "figures"
    CHECKSUM = "checksum"
    TRUNCATE = "truncate"
    RENAME = "rename"
    COMPACT = "compact"
    REVISION = "revision"
    RECALCULATE_COUNT = "recalculateCount"
    LOAD_INDEXES = "loadIndexesIntoMemory"
    RESPONSIBLE_SHARD = "responsibleShard"
    SHARDS = "shards"


class DatabaseOp(StrEnum):
    CURRENT = "current"
    USER = "user"


class QueryOp(StrEnum):
    """Sub-paths of the query, query-cache and cursor APIs."""

    CURRENT = "current"
    SLOW = "slow"
    ENTRIES = "entries"
    PROPERTIES = "properties"
    RULES = "rules"


def encode_params(params: BaseModel | Mapping[str, Any]) -> str:
    """Encode parameters into a query string.

    ``None`` values are omitted, booleans render as ``true``/``false`` and
    keys keep field (or insertion) order.

    Raises:
        ParamEncodingError: If a value cannot be represented in a query string.
    """
    try:
        if isinstance(params, BaseModel):
            items = params.model_dump(mode="json", by_alias=True, exclude_none=True)
        else:
            items = {key: value for key, value in params.items() if value is not None}
        return str(httpx.QueryParams(items))
    except (TypeError, ValueError, PydanticValidationError) as exc:
        raise ParamEncodingError(f"Failed to encode query parameters: {exc}", source=exc) from exc


class Router:
    """Stateless endpoint builders, grouped by API area."""

    # Collections -------------------------------------------------------
    @staticmethod
    def base() -> str:
        return COLLECTION_API

    @staticmethod
    def base_collection(collection_name: str) -> str:
        return f"{COLLECTION_API}/{collection_name}"

    @staticmethod
    def base_with_params(params: BaseModel | Mapping[str, Any]) -> str:
        return f"{COLLECTION_API}?{encode_params(params)}"

    @staticmethod
    def extension(collection_name: str, op: CollectionOp) -> str:
        return f"{Router.base_collection(collection_name)}/{CollectionOp(op).value}"

    @staticmethod
    def extension_with_params(
        collection_name: str,
        op: CollectionOp,
        params: BaseModel | Mapping[str, Any],
    ) -> str:
        return f"{Router.extension(collection_name, op)}?{encode_params(params)}"

    # Documents ---------------------------------------------------------
    @staticmethod
    def document_base(collection_name: str) -> str:
        return f"{DOCUMENT_API}/{collection_name}"

    @staticmethod
    def document_base_with_params(collection_name: str, params: BaseModel | Mapping[str, Any]) -> str:
        return f"{Router.document_base(collection_name)}?{encode_params(params)}"

    @staticmethod
    def document_key(collection_name: str, key: str) -> str:
        return f"{Router.document_base(collection_name)}/{key}"

    @staticmethod
    def document_key_with_params(
        collection_name: str,
        key: str,
        params: BaseModel | Mapping[str, Any],
    ) -> str:
        return f"{Router.document_key(collection_name, key)}?{encode_params(params)}"

    # Databases ---------------------------------------------------------
    @staticmethod
    def database_base() -> str:
        return DATABASE_API

    @staticmethod
    def database_current() -> str:
        return f"{DATABASE_API}/{DatabaseOp.CURRENT.value}"

    @staticmethod
    def database_user() -> str:
        return f"{DATABASE_API}/{DatabaseOp.USER.value}"

    @staticmethod
    def database_name(name: str) -> str:
        return f"{DATABASE_API}/{name}"

    # Queries and cursors -----------------------------------------------
    @staticmethod
    def cursor(cursor_id: str | None = None) -> str:
        if cursor_id is None:
            return CURSOR_API
        return f"{CURSOR_API}/{cursor_id}"

    @staticmethod
    def cache() -> str:
        return QUERY_CACHE_API

    @staticmethod
    def cache_entries() -> str:
        return f"{QUERY_CACHE_API}/{QueryOp.ENTRIES.value}"

    @staticmethod
    def cache_properties() -> str:
        return f"{QUERY_CACHE_API}/{QueryOp.PROPERTIES.value}"

    @staticmethod
    def explain() -> str:
        return EXPLAIN_API

    @staticmethod
    def query() -> str:
        return QUERY_API

    @staticmethod
    def running() -> str:
        return f"{QUERY_API}/{QueryOp.CURRENT.value}"

    @staticmethod
    def slow() -> str:
        return f"{QUERY_API}/{QueryOp.SLOW.value}"

    @staticmethod
    def kill(query_id: str) -> str:
        return f"{QUERY_API}/{query_id}"

    @staticmethod
    def query_properties() -> str:
        return f"{QUERY_API}/{QueryOp.PROPERTIES.value}"

    @staticmethod
    def query_rules() -> str:
        return f"{QUERY_API}/{QueryOp.RULES.value}"

    @staticmethod
    def aql_function(name: str | None = None) -> str:
        if name is None:
            return AQL_FUNCTION_API
        return f"{AQL_FUNCTION_API}/{name}"

    @staticmethod
    def aql_function_with_params(name: str | None, params: BaseModel | Mapping[str, Any]) -> str:
        return f"{Router.aql_function(name)}?{encode_params(params)}"

    # Indexes -----------------------------------------------------------
    @staticmethod
    def index_base_as_query(collection_name: str) -> str:
        return f"{INDEX_API}?{encode_params({'collection': collection_name})}"

    @staticmethod
    def index_base_as_path(index_id: str) -> str:
        return f"{INDEX_API}/{index_id}"


__all__ = [
    "AQL_FUNCTION_API",
    "COLLECTION_API",
    "CURSOR_API",
    "DATABASE_API",
    "DOCUMENT_API",
    "EXPLAIN_API",
    "INDEX_API",
    "QUERY_API",
    "QUERY_CACHE_API",
    "CollectionOp",
    "DatabaseOp",
    "QueryOp",
    "Router",
    "encode_params",
]
