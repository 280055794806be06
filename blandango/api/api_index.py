"""Secondary index facade."""

from __future__ import annotations

from pydantic import ConfigDict, Field

from ..client.client_router import Router
from ..models.model_base import IdResponse, WireModel
from .api_base import ArangoApi


class NewIdx(WireModel):
    """Index definition for ``POST _api/index?collection=...``.

    Supported ``type`` values: persistent, ttl, geo, fulltext, zkd.
    """

    collection: str = Field(exclude=True)
    name: str
    type: str = "persistent"
    fields: list[str] = Field(default_factory=list)
    in_background: bool = False
    unique: bool | None = None
    min_length: int | None = None
    geo_json: bool | None = None
    stored_values: list[str] | None = None
    sparse: bool | None = None
    deduplicate: bool | None = None
    estimates: bool | None = None
    cache_enabled: bool | None = None
    expires_after: int | None = None
    field_value_types: str | None = None


class Idx(WireModel):
    """An index as reported by the server."""

    model_config = ConfigDict(extra="ignore")

    fields: list[str]
    id: str
    name: str
    type: str
    selectivity_estimate: float | None = None
    unique: bool | None = None
    min_length: int | None = None
    geo_json: bool | None = None
    stored_values: list[str] | None = None
    sparse: bool | None = None
    deduplicate: bool | None = None
    estimates: bool | None = None
    cache_enabled: bool | None = None
    expires_after: int | None = None
    field_value_types: str | None = None


class IndexResponse(Idx):
    error: bool = False
    code: int
    is_newly_created: bool | None = None


class IndexesResponse(WireModel):
    error: bool = False
    code: int
    indexes: list[Idx]


class Index(ArangoApi):
    async def read(self, collection_name: str) -> list[Idx]:
        """All indexes of ``collection_name``."""
        response: IndexesResponse = await self.client.get(
            Router.index_base_as_query(collection_name), IndexesResponse
        )
        return response.indexes

    async def get(self, index_id: str) -> IndexResponse:
        """One index by its full id (``collection/number``)."""
        return await self.client.get(Router.index_base_as_path(index_id), IndexResponse)

    async def create(self, new_index: NewIdx) -> IndexResponse:
        return await self.client.post(
            Router.index_base_as_query(new_index.collection), new_index, IndexResponse
        )

    async def delete(self, index_id: str) -> IdResponse:
        return await self.client.delete(Router.index_base_as_path(index_id), IdResponse)


__all__ = [
    "Idx",
    "Index",
    "IndexResponse",
    "IndexesResponse",
    "NewIdx",
]
