"""Collection administration facade and its wire models."""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from pydantic import Field

from ..client.client_router import CollectionOp, Router
from ..client.client_transport import Client
from ..models.model_base import Empty, FlatResponse, IdResponse, Response, WireModel
from .api_base import ArangoApi


class CollectionType(IntEnum):
    DOCUMENT = 2
    EDGE = 3


class ComputedValue(WireModel):
    name: str
    expression: str
    overwrite: bool
    compute_on: list[str]
    keep_null: bool = False
    fail_on_warning: bool = True


class KeyOptions(WireModel):
    allow_user_keys: bool = True
    type: str = "traditional"
    increment: int | None = None
    offset: int | None = None
    last_value: int | None = None


class Information(WireModel):
    id: str
    name: str
    status: int | None = None
    type: int
    is_system: bool = False
    globally_unique_id: str | None = None


class Properties(Information):
    write_concern: int | None = None
    wait_for_sync: bool | None = None
    uses_revisions_as_document_ids: bool | None = None
    sync_by_revision: bool | None = None
    status_string: str | None = None
    internal_validator_type: int | None = None
    cache_enabled: bool | None = None
    is_smart_child: bool | None = None
    key_options: KeyOptions | None = None
    computed_values: list[ComputedValue] | None = None
    object_id: str | None = None


class Count(Properties):
    count: int


class IndexFigures(WireModel):
    count: int
    size: int


class Figures(WireModel):
    indexes: IndexFigures
    documents_size: int | None = None
    cache_in_use: bool | None = None
    cache_size: int | None = None
    cache_usage: int | None = None


class Summary(Count):
    figures: Figures


class Revision(Properties):
    revision: str


class Checksum(Information):
    revision: str
    checksum: str


class PropertiesUpdate(WireModel):
    wait_for_sync: bool | None = None
    cache_enabled: bool | None = None
    computed_values: list[ComputedValue] | None = None
    replication_factor: int | None = None
    write_concern: int | None = None


class Rename(WireModel):
    name: str


class ResponsibleShard(WireModel):
    shard_id: str


class NewCollection(WireModel):
    """Body for ``POST _api/collection``."""

    name: str
    cache_enabled: bool = False
    type: CollectionType = CollectionType.DOCUMENT
    is_system: bool = False
    write_concern: int = 1
    wait_for_sync: bool = True
    replication_factor: int = 1
    computed_values: list[ComputedValue] | None = None
    key_options: KeyOptions | None = None
    smart_join_attribute: str | None = None
    is_disjoint: bool | None = None
    is_smart: bool | None = None
    number_of_shards: int | None = None
    shard_keys: list[str] | None = None
    sharding_strategy: str | None = None
    distribute_shard_like: str | None = None

    @staticmethod
    def default_computed_values() -> list[ComputedValue]:
        """``created_on``/``modified_on`` stamped by the server in epoch ms."""
        return [
            ComputedValue(
                name="created_on",
                expression="RETURN DATE_NOW()",
                compute_on=["insert", "replace"],
                overwrite=True,
            ),
            ComputedValue(
                name="modified_on",
                expression="RETURN DATE_NOW()",
                compute_on=["insert", "update", "replace"],
                overwrite=True,
            ),
        ]

    @classmethod
    def default_document_collection(cls, name: str) -> NewCollection:
        return cls(name=name, computed_values=cls.default_computed_values())

    @classmethod
    def default_edge_collection(cls, name: str) -> NewCollection:
        return cls(
            name=name,
            type=CollectionType.EDGE,
            computed_values=cls.default_computed_values(),
        )


class Collection(ArangoApi):
    """Operations on one named collection.

    ``read`` lists every collection of the database and does not depend on
    ``name``.
    """

    def __init__(self, client: Client, name: str) -> None:
        super().__init__(client)
        self.name = name

    async def read(self) -> list[Information]:
        response: Response[list[Information]] = await self.client.get(
            Router.base(), Response[list[Information]]
        )
        return response.result

    async def drop(self) -> IdResponse:
        return await self.client.delete(Router.base_collection(self.name), IdResponse)

    async def information(self) -> Information:
        response: FlatResponse[Information] = await self.client.get(
            Router.base_collection(self.name), FlatResponse[Information]
        )
        return response.result

    async def checksum(self) -> Checksum:
        return await self._flat_get(CollectionOp.CHECKSUM, Checksum)

    async def compact(self) -> Information:
        return await self._flat_put(CollectionOp.COMPACT, Empty(), Information)

    async def count(self) -> Count:
        return await self._flat_get(CollectionOp.COUNT, Count)

    async def figures(self) -> Summary:
        return await self._flat_get(CollectionOp.FIGURES, Summary)

    async def properties(self) -> Properties:
        return await self._flat_get(CollectionOp.PROPERTIES, Properties)

    async def update_properties(self, properties: PropertiesUpdate) -> Properties:
        return await self._flat_put(CollectionOp.PROPERTIES, properties, Properties)

    async def load_indexes(self) -> bool:
        response: Response[bool] = await self.client.put(
            Router.extension(self.name, CollectionOp.LOAD_INDEXES), Empty(), Response[bool]
        )
        return response.result

    async def recalculate_count(self) -> bool:
        response: Response[bool] = await self.client.put(
            Router.extension(self.name, CollectionOp.RECALCULATE_COUNT), Empty(), Response[bool]
        )
        return response.result

    async def rename(self, new_name: str) -> Information:
        information = await self._flat_put(CollectionOp.RENAME, Rename(name=new_name), Information)
        self.name = new_name
        return information

    async def responsible_shard(self, document: dict[str, Any]) -> str:
        """Shard holding ``document`` (cluster coordinators only)."""
        response: FlatResponse[ResponsibleShard] = await self.client.put(
            Router.extension(self.name, CollectionOp.RESPONSIBLE_SHARD),
            document,
            FlatResponse[ResponsibleShard],
        )
        return response.result.shard_id

    async def shards(self) -> list[str]:
        """Shard ids of the collection (cluster coordinators only)."""
        response: FlatResponse[dict[str, Any]] = await self.client.get(
            Router.extension(self.name, CollectionOp.SHARDS), FlatResponse[dict[str, Any]]
        )
        return list(response.result.get("shards", []))

    async def revision(self) -> Revision:
        return await self._flat_get(CollectionOp.REVISION, Revision)

    async def truncate(self) -> Information:
        return await self._flat_put(CollectionOp.TRUNCATE, Empty(), Information)

    async def _flat_get(self, op: CollectionOp, result_type: Any) -> Any:
        response = await self.client.get(
            Router.extension(self.name, op), FlatResponse[result_type]
        )
        return response.result

    async def _flat_put(self, op: CollectionOp, body: Any, result_type: Any) -> Any:
        response = await self.client.put(
            Router.extension(self.name, op), body, FlatResponse[result_type]
        )
        return response.result


__all__ = [
    "Checksum",
    "Collection",
    "CollectionType",
    "ComputedValue",
    "Count",
    "Figures",
    "IndexFigures",
    "Information",
    "KeyOptions",
    "NewCollection",
    "Properties",
    "PropertiesUpdate",
    "Rename",
    "ResponsibleShard",
    "Revision",
    "Summary",
]
