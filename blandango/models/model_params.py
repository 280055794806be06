"""Query-string parameter sets for document and collection endpoints.

Field order is the order parameters appear in the encoded query string.
Unset (``None``) parameters are left out entirely.
"""

from __future__ import annotations

from enum import StrEnum

from .model_base import WireModel


class OverwriteMode(StrEnum):
    IGNORE = "ignore"
    REPLACE = "replace"
    UPDATE = "update"
    CONFLICT = "conflict"


class DocumentQueryParams(WireModel):
    """Parameters accepted by the ``_api/document`` endpoints.

    The defaults ask the server to return the new snapshot, which is what
    ``Document.insert`` unwraps. Turning ``return_new`` off makes insert
    fail with ``InsertionError`` instead of inventing a record.
    """

    wait_for_sync: bool = True
    return_new: bool | None = True
    return_old: bool | None = None
    silent: bool | None = None
    overwrite: bool | None = None
    overwrite_mode: OverwriteMode | None = None
    keep_null: bool | None = None
    merge_objects: bool | None = None
    refill_index_caches: bool | None = None
    ignore_revs: bool | None = None

    @classmethod
    def returning_old(cls) -> DocumentQueryParams:
        return cls(return_new=None, return_old=True)

    @classmethod
    def silenced(cls) -> DocumentQueryParams:
        return cls(return_new=None, silent=True)

    @classmethod
    def bare(cls) -> DocumentQueryParams:
        """Only ``waitForSync``; the server returns identity triples."""
        return cls(return_new=None)


class CollectionQueryParams(WireModel):
    """Parameters for collection creation."""

    wait_for_sync_replication: bool | None = True
    enforce_replication_factor: bool | None = False


__all__ = [
    "CollectionQueryParams",
    "DocumentQueryParams",
    "OverwriteMode",
]
