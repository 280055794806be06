"""Document and edge wrappers plus collection naming.

ArangoDB stores a record's own fields next to its identity triple
(``_id``/``_key``/``_rev``) and, for edges, the ``_from``/``_to`` pointers.
:class:`Doc` and :class:`Edge` keep those apart in Python while reading and
writing the flat shape on the wire::

    {"_id": "sample_data/1", "_key": "1", "_rev": "_gx1", "body": "hi"}
        <->  Doc[SampleData](id=..., key=..., rev=..., record=SampleData(body="hi"))

The collection a record lives in is derived from its type by
:func:`collection_name`. Wrappers are transparent to naming:
``collection_name(Doc[Edge[SampleData]]) == collection_name(SampleData)``.
"""

from __future__ import annotations

import re
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator

from ..client.client_errors import InsertionError

R = TypeVar("R")
D = TypeVar("D")

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")

DOC_IDENTITY_FIELDS = frozenset({"_id", "_key", "_rev"})
DOC_WIRE_FIELDS = DOC_IDENTITY_FIELDS | {"created_on", "modified_on"}
EDGE_WIRE_FIELDS = frozenset({"_from", "_to"})


def snake_case(name: str) -> str:
    """Convert ``SampleData`` style names to ``sample_data``."""
    name = _ACRONYM_BOUNDARY.sub(r"\1_\2", name)
    name = _WORD_BOUNDARY.sub(r"\1_\2", name)
    return name.replace("-", "_").lower()


def _split_flat(data: Any, own_fields: frozenset[str], identity: frozenset[str]) -> Any:
    # Wire shape is recognised by its underscore keys; a record may itself
    # carry a field called "record".
    if not isinstance(data, dict) or identity.isdisjoint(data):
        return data
    own: dict[str, Any] = {}
    record: dict[str, Any] = {}
    for field, value in data.items():
        if field in own_fields:
            own[field] = value
        else:
            record[field] = value
    own["record"] = record
    return own


def _merge_flat(data: dict[str, Any]) -> dict[str, Any]:
    record = data.pop("record", None)
    if isinstance(record, dict):
        data.update(record)
    elif record is not None:
        data["record"] = record
    return data


class ArangoKeys(BaseModel):
    """Identity triple assigned by the server."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    key: str = Field(alias="_key")
    rev: str = Field(alias="_rev")


class ArangoEdgeKeys(BaseModel):
    """Edge pointers; each is a ``{collection}/{key}`` document id."""

    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="_from")
    to: str = Field(alias="_to")


class Doc(BaseModel, Generic[R]):
    """A stored record with its identity triple and bookkeeping timestamps.

    ``created_on``/``modified_on`` are epoch milliseconds filled by the
    computed values of collections created with
    ``NewCollection.default_document_collection``; they stay ``None`` for
    collections without them.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    key: str = Field(alias="_key")
    rev: str = Field(alias="_rev")
    record: R
    created_on: int | None = None
    modified_on: int | None = None

    @model_validator(mode="before")
    @classmethod
    def _split_record(cls, data: Any) -> Any:
        return _split_flat(data, DOC_WIRE_FIELDS, DOC_IDENTITY_FIELDS)

    @model_serializer(mode="wrap")
    def _flatten_record(self, handler):
        return _merge_flat(handler(self))

    @property
    def keys(self) -> ArangoKeys:
        return ArangoKeys(id=self.id, key=self.key, rev=self.rev)

    @property
    def collection(self) -> str:
        """Collection part of ``_id``."""
        return self.id.split("/", 1)[0]

    @classmethod
    def name(cls) -> str:
        """Collection name of the wrapped record type."""
        return collection_name(cls)


class Edge(BaseModel, Generic[R]):
    """A record linking two documents through ``_from``/``_to``."""

    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(alias="_from")
    to: str = Field(alias="_to")
    record: R

    @model_validator(mode="before")
    @classmethod
    def _split_record(cls, data: Any) -> Any:
        return _split_flat(data, EDGE_WIRE_FIELDS, EDGE_WIRE_FIELDS)

    @model_serializer(mode="wrap")
    def _flatten_record(self, handler):
        return _merge_flat(handler(self))

    @classmethod
    def new(cls, from_: str, to: str, record: R) -> Edge[R]:
        return cls(from_=from_, to=to, record=record)

    @property
    def link(self) -> ArangoEdgeKeys:
        return ArangoEdgeKeys(from_=self.from_, to=self.to)

    @classmethod
    def name(cls) -> str:
        return collection_name(cls)


def _wrapped_type(tp: type) -> Any | None:
    """Return the record type a parametrized ``Doc``/``Edge`` wraps, if any."""
    for base in tp.__mro__:
        metadata = getattr(base, "__pydantic_generic_metadata__", None)
        if not metadata:
            continue
        if metadata.get("origin") in (Doc, Edge) and metadata.get("args"):
            return metadata["args"][0]
    return None


def collection_name(tp: Any) -> str:
    """Derive the collection name for a record type (or instance).

    Resolution order:

    1. an explicit ``__collection_name__`` attribute on the type;
    2. for ``Doc[...]``/``Edge[...]`` (and subclasses of them), the name of
       the wrapped type, recursively;
    3. the type name with generic arguments and dotted qualification
       stripped, converted to snake_case.
    """
    if isinstance(tp, str):
        return tp
    if not isinstance(tp, type):
        if isinstance(tp, (Doc, Edge)) and _wrapped_type(type(tp)) is None:
            return collection_name(tp.record)
        tp = type(tp)

    explicit = getattr(tp, "__collection_name__", None)
    if isinstance(explicit, str) and explicit:
        return explicit

    wrapped = _wrapped_type(tp)
    if wrapped is not None:
        return collection_name(wrapped)

    type_name = getattr(tp, "__qualname__", None) or tp.__name__
    type_name = type_name.split("[", 1)[0].split(".")[-1]
    return snake_case(type_name)


name_of = collection_name


class DocumentResponse(BaseModel, Generic[D]):
    """Snapshots returned by document writes (``returnNew``/``returnOld``)."""

    model_config = ConfigDict(extra="ignore")

    new: D | None = None
    old: D | None = None

    def require_new(self) -> D:
        if self.new is None:
            raise InsertionError("Server response did not include the new document snapshot")
        return self.new

    def require_old(self) -> D:
        if self.old is None:
            raise InsertionError("Server response did not include the old document snapshot")
        return self.old


class BulkItemError(BaseModel):
    """Per-item failure inside a bulk document response."""

    model_config = ConfigDict(populate_by_name=True)

    error: bool = True
    error_num: int = Field(alias="errorNum")
    error_message: str = Field(alias="errorMessage")


BulkResult = ArangoKeys | BulkItemError


__all__ = [
    "ArangoEdgeKeys",
    "ArangoKeys",
    "BulkItemError",
    "BulkResult",
    "Doc",
    "DocumentResponse",
    "Edge",
    "collection_name",
    "name_of",
    "snake_case",
]
