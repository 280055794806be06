"""
Domain facades built on the router and transport client.
"""

from .api_base import ArangoApi
from .api_collection import Collection, NewCollection, Properties, PropertiesUpdate
from .api_database import Database, NewDatabase
from .api_document import Document
from .api_index import Index, NewIdx
from .api_query import (
    BoundCursorRequest,
    CacheProperties,
    CursorRequest,
    CursorResponse,
    Explain,
    ParseQuery,
    Query,
)

__all__ = [
    "ArangoApi",
    "BoundCursorRequest",
    "CacheProperties",
    "Collection",
    "CursorRequest",
    "CursorResponse",
    "Database",
    "Document",
    "Explain",
    "Index",
    "NewCollection",
    "NewDatabase",
    "NewIdx",
    "ParseQuery",
    "Properties",
    "PropertiesUpdate",
    "Query",
]
