"""
Wire models: envelopes, document/edge wrappers and parameter sets.
"""

from .model_base import Empty, FlatResponse, IdResponse, NameResponse, Response, WireModel
from .model_document import (
    ArangoEdgeKeys,
    ArangoKeys,
    BulkItemError,
    BulkResult,
    Doc,
    DocumentResponse,
    Edge,
    collection_name,
    name_of,
)
from .model_params import CollectionQueryParams, DocumentQueryParams, OverwriteMode

__all__ = [
    "ArangoEdgeKeys",
    "ArangoKeys",
    "BulkItemError",
    "BulkResult",
    "CollectionQueryParams",
    "Doc",
    "DocumentQueryParams",
    "DocumentResponse",
    "Edge",
    "Empty",
    "FlatResponse",
    "IdResponse",
    "NameResponse",
    "OverwriteMode",
    "Response",
    "WireModel",
    "collection_name",
    "name_of",
]
