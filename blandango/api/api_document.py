"""Typed document CRUD.

The collection for every call is derived from the record type with
:func:`~blandango.models.model_document.collection_name`, so call sites
never spell collection names::

    document = Document.from_config(config)
    created = await document.insert(SampleData(body="hi"))   # -> Doc[SampleData]
    fetched = await document.read(created.key, SampleData)

Bulk operations answer with one entry per input, either the identity triple
of the affected document or a :class:`BulkItemError`; both are returned so
partial failures stay visible.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import BaseModel

from ..client.client_errors import ValidationError
from ..client.client_router import Router
from ..logging import LogManager
from ..models.model_document import (
    BulkItemError,
    BulkResult,
    Doc,
    DocumentResponse,
    collection_name,
)
from ..models.model_params import DocumentQueryParams
from .api_base import ArangoApi

logger = LogManager.get_logger("document")

R = TypeVar("R")


class Document(ArangoApi):
    async def insert(self, record: R) -> Doc[R]:
        """Insert ``record`` and return the stored document.

        Raises:
            InsertionError: If the server omitted the new snapshot.
        """
        return await self.insert_with(record, DocumentQueryParams())

    async def insert_with(self, record: R, params: DocumentQueryParams) -> Doc[R]:
        """Insert with explicit parameters (overwrite modes, sync, ...)."""
        record_type = type(record)
        endpoint = Router.document_base_with_params(collection_name(record), params)
        response: DocumentResponse[Doc[record_type]] = await self.client.post(
            endpoint, record, DocumentResponse[Doc[record_type]]
        )
        return response.require_new()

    async def insert_many(self, records: Sequence[Any]) -> list[BulkResult]:
        if not records:
            return []
        name = collection_name(records[0])
        endpoint = Router.document_base_with_params(name, DocumentQueryParams.bare())
        return await self.client.post(endpoint, list(records), list[BulkResult])

    async def read(self, key: str, record_type: type[R]) -> Doc[R]:
        return await self.client.get(
            Router.document_key(collection_name(record_type), key), Doc[record_type]
        )

    async def read_many(self, keys: Sequence[str | dict[str, Any]], record_type: type[R]) -> list[Doc[R]]:
        """Fetch several documents in one request, in the order of ``keys``."""
        endpoint = Router.document_base_with_params(collection_name(record_type), {"onlyget": True})
        return await self.client.put(endpoint, list(keys), list[Doc[record_type]])

    async def read_header(self, key: str, record_type: type[Any]) -> None:
        """Check a document exists; raises ``ApiError`` (404) when it does not."""
        await self.client.head(Router.document_key(collection_name(record_type), key))

    async def delete(self, key: str, record_type: type[R]) -> Doc[R]:
        """Remove a document and return its last snapshot.

        Raises:
            InsertionError: If the server omitted the old snapshot.
        """
        endpoint = Router.document_key_with_params(
            collection_name(record_type), key, DocumentQueryParams.returning_old()
        )
        response: DocumentResponse[Doc[record_type]] = await self.client.delete(
            endpoint, DocumentResponse[Doc[record_type]]
        )
        return response.require_old()

    async def update(self, doc: Doc[Any]) -> None:
        """Patch the stored document with ``doc.record``."""
        endpoint = Router.document_key_with_params(
            collection_name(doc), doc.key, DocumentQueryParams.silenced()
        )
        await self.client.patch(endpoint, doc.record)

    async def replace(self, doc: Doc[Any]) -> None:
        """Replace the stored document with ``doc.record``."""
        endpoint = Router.document_key_with_params(
            collection_name(doc), doc.key, DocumentQueryParams.silenced()
        )
        await self.client.put(endpoint, doc.record)

    async def destroy(self, doc: Doc[Any]) -> None:
        endpoint = Router.document_key_with_params(
            collection_name(doc), doc.key, DocumentQueryParams()
        )
        await self.client.delete(endpoint)

    async def delete_many(self, keys: Sequence[str | dict[str, Any]], record_type: type[Any]) -> list[BulkResult]:
        endpoint = Router.document_base_with_params(
            collection_name(record_type), DocumentQueryParams.bare()
        )
        return await self.client.delete_many(endpoint, list(keys), list[BulkResult])

    async def update_many(self, docs: Sequence[Doc[Any]]) -> list[BulkResult]:
        return await self._write_many("PATCH", docs)

    async def replace_many(self, docs: Sequence[Doc[Any]]) -> list[BulkResult]:
        return await self._write_many("PUT", docs)

    async def _write_many(self, method: str, docs: Sequence[Doc[Any]]) -> list[BulkResult]:
        if not docs:
            return []
        names = {collection_name(doc) for doc in docs}
        if len(names) != 1:
            raise ValidationError(f"Bulk {method} spans several collections: {sorted(names)}")
        name = names.pop()
        endpoint = Router.document_base_with_params(name, DocumentQueryParams.bare())
        payload = [_bulk_item(doc) for doc in docs]
        if method == "PATCH":
            results = await self.client.patch(endpoint, payload, list[BulkResult])
        else:
            results = await self.client.put(endpoint, payload, list[BulkResult])
        failures = sum(1 for item in results if isinstance(item, BulkItemError))
        if failures:
            logger.debug(
                "bulk_write_failures",
                database=self.client.config.database,
                collection=name,
                method=method,
                failed=failures,
                total=len(results),
            )
        return results


def _bulk_item(doc: Doc[Any]) -> dict[str, Any]:
    """Record fields plus ``_key`` (and ``_rev`` for revision checks)."""
    record = doc.record
    if isinstance(record, BaseModel):
        body = record.model_dump(mode="json", by_alias=True)
    else:
        body = dict(record)
    body["_key"] = doc.key
    body["_rev"] = doc.rev
    return body


__all__ = ["Document"]
