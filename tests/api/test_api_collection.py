"""Tests for the collection, database and index facades."""

import pytest

from blandango.api.api_collection import (
    Collection,
    CollectionType,
    NewCollection,
    PropertiesUpdate,
)
from blandango.api.api_database import Database, DbOptions, NewDatabase, User
from blandango.api.api_index import Index, NewIdx


def collection_info(name: str = "widgets", **extra) -> dict:
    return {
        "error": False,
        "code": 200,
        "id": "1234",
        "name": name,
        "status": 3,
        "type": 2,
        "isSystem": False,
        "globallyUniqueId": "h1234",
        **extra,
    }


@pytest.fixture
def widgets(client) -> Collection:
    return Collection(client, "widgets")


class TestNewCollection:
    """Collection creation bodies."""

    def test_defaults(self) -> None:
        wire = NewCollection(name="widgets").to_wire()

        assert wire["name"] == "widgets"
        assert wire["type"] == 2
        assert wire["waitForSync"] is True
        assert "computedValues" not in wire

    def test_default_document_collection(self) -> None:
        wire = NewCollection.default_document_collection("widgets").to_wire()

        names = [value["name"] for value in wire["computedValues"]]
        assert names == ["created_on", "modified_on"]
        assert wire["computedValues"][1]["computeOn"] == ["insert", "update", "replace"]

    def test_default_edge_collection(self) -> None:
        new_collection = NewCollection.default_edge_collection("links")

        assert new_collection.type == CollectionType.EDGE
        assert new_collection.to_wire()["type"] == 3


class TestCollection:
    """Operations on one collection."""

    @pytest.mark.asyncio
    async def test_read_lists_collections(self, widgets: Collection, server) -> None:
        server.reply(
            200,
            {"error": False, "code": 200, "result": [{"id": "1", "name": "widgets", "type": 2}]},
        )

        collections = await widgets.read()

        assert server.last.url.path == "/_db/test_db/_api/collection"
        assert collections[0].name == "widgets"

    @pytest.mark.asyncio
    async def test_information(self, widgets: Collection, server) -> None:
        server.reply(200, collection_info())

        information = await widgets.information()

        assert server.last.url.path == "/_db/test_db/_api/collection/widgets"
        assert information.globally_unique_id == "h1234"

    @pytest.mark.asyncio
    async def test_count(self, widgets: Collection, server) -> None:
        server.reply(200, collection_info(count=42, waitForSync=True))

        count = await widgets.count()

        assert server.last.url.path == "/_db/test_db/_api/collection/widgets/count"
        assert count.count == 42
        assert count.wait_for_sync is True

    @pytest.mark.asyncio
    async def test_figures(self, widgets: Collection, server) -> None:
        server.reply(
            200,
            collection_info(count=1, figures={"indexes": {"count": 1, "size": 100}, "documentsSize": 64}),
        )

        summary = await widgets.figures()

        assert summary.figures.indexes.count == 1
        assert summary.figures.documents_size == 64

    @pytest.mark.asyncio
    async def test_update_properties(self, widgets: Collection, server) -> None:
        server.reply(200, collection_info(waitForSync=False, cacheEnabled=True))

        properties = await widgets.update_properties(PropertiesUpdate(cache_enabled=True))

        assert server.last.method == "PUT"
        assert server.body() == {"cacheEnabled": True}
        assert properties.cache_enabled is True

    @pytest.mark.asyncio
    async def test_rename_updates_name(self, widgets: Collection, server) -> None:
        server.reply(200, collection_info(name="gadgets"))

        information = await widgets.rename("gadgets")

        assert server.last.url.path == "/_db/test_db/_api/collection/widgets/rename"
        assert server.body() == {"name": "gadgets"}
        assert information.name == "gadgets"
        assert widgets.name == "gadgets"

    @pytest.mark.asyncio
    async def test_checksum_and_revision(self, widgets: Collection, server) -> None:
        server.reply(200, collection_info(revision="_r9", checksum="123"))
        server.reply(200, collection_info(revision="_r9"))

        checksum = await widgets.checksum()
        revision = await widgets.revision()

        assert checksum.checksum == "123"
        assert revision.revision == "_r9"

    @pytest.mark.asyncio
    async def test_maintenance_calls(self, widgets: Collection, server) -> None:
        server.reply(200, collection_info())
        server.reply(200, collection_info())
        server.reply(200, {"error": False, "code": 200, "result": True})
        server.reply(200, {"error": False, "code": 200, "result": True})

        await widgets.truncate()
        await widgets.compact()
        assert await widgets.load_indexes() is True
        assert await widgets.recalculate_count() is True

        assert [request.url.path.rsplit("/", 1)[-1] for request in server.requests] == [
            "truncate",
            "compact",
            "loadIndexesIntoMemory",
            "recalculateCount",
        ]
        assert {request.method for request in server.requests} == {"PUT"}

    @pytest.mark.asyncio
    async def test_shards(self, widgets: Collection, server) -> None:
        server.reply(200, collection_info(shards=["s1", "s2"]))
        server.reply(200, {"error": False, "code": 200, "shardId": "s2"})

        shards = await widgets.shards()
        shard = await widgets.responsible_shard({"_key": "1"})

        assert shards == ["s1", "s2"]
        assert shard == "s2"
        assert server.body() == {"_key": "1"}

    @pytest.mark.asyncio
    async def test_drop(self, widgets: Collection, server) -> None:
        server.reply(200, {"id": "1234", "error": False, "code": 200})

        response = await widgets.drop()

        assert server.last.method == "DELETE"
        assert response.id == "1234"


class TestDatabase:
    """Database administration."""

    @pytest.mark.asyncio
    async def test_list_and_current(self, client, server) -> None:
        server.reply(200, {"error": False, "code": 200, "result": ["_system", "test_db"]})
        server.reply(
            200,
            {
                "error": False,
                "code": 200,
                "result": {"name": "test_db", "id": "42", "path": "", "isSystem": False},
            },
        )
        database = Database(client)

        names = await database.list()
        current = await database.current()

        assert names == ["_system", "test_db"]
        assert current.name == "test_db"
        assert current.is_system is False
        assert server.last.url.path == "/_db/test_db/_api/database/current"

    @pytest.mark.asyncio
    async def test_create_and_drop(self, client, server) -> None:
        server.reply(201, {"error": False, "code": 201, "result": True})
        server.reply(200, {"error": False, "code": 200, "result": True})
        database = Database(client)

        created = await database.create(
            NewDatabase(
                name="scratch",
                options=DbOptions(write_concern=1),
                users=[User(username="admin", password="pw")],
            )
        )
        dropped = await database.drop("scratch")

        assert server.body(0) == {
            "name": "scratch",
            "options": {"writeConcern": 1},
            "users": [{"username": "admin", "passwd": "pw", "active": True}],
        }
        assert created is True
        assert dropped is True
        assert server.last.url.path == "/_db/test_db/_api/database/scratch"

    @pytest.mark.asyncio
    async def test_user_databases(self, client, server) -> None:
        server.reply(200, {"error": False, "code": 200, "result": ["test_db"]})

        assert await Database(client).user() == ["test_db"]
        assert server.last.url.path == "/_db/test_db/_api/database/user"

    @pytest.mark.asyncio
    async def test_new_collection(self, client, server) -> None:
        server.reply(200, collection_info(waitForSync=True))

        properties = await Database(client).new_collection(NewCollection(name="widgets"))

        assert server.last.url.params["waitForSyncReplication"] == "true"
        assert server.last.url.params["enforceReplicationFactor"] == "false"
        assert properties.name == "widgets"

    def test_collection_handle(self, client) -> None:
        handle = Database(client).collection("widgets")

        assert handle.name == "widgets"
        assert handle.client is not client
        assert handle.client._http is client._http


class TestIndex:
    """Secondary indexes."""

    @pytest.mark.asyncio
    async def test_create(self, client, server) -> None:
        server.reply(
            201,
            {
                "error": False,
                "code": 201,
                "id": "widgets/99",
                "name": "by_body",
                "type": "persistent",
                "fields": ["body"],
                "unique": True,
                "isNewlyCreated": True,
            },
        )

        created = await Index(client).create(
            NewIdx(collection="widgets", name="by_body", fields=["body"], unique=True)
        )

        assert server.last.url.params["collection"] == "widgets"
        assert server.body() == {
            "name": "by_body",
            "type": "persistent",
            "fields": ["body"],
            "inBackground": False,
            "unique": True,
        }
        assert created.is_newly_created is True

    @pytest.mark.asyncio
    async def test_read_get_delete(self, client, server) -> None:
        primary = {"id": "widgets/0", "name": "primary", "type": "primary", "fields": ["_key"]}
        server.reply(200, {"error": False, "code": 200, "indexes": [primary]})
        server.reply(200, {"error": False, "code": 200, **primary})
        server.reply(200, {"id": "widgets/0", "error": False, "code": 200})
        index = Index(client)

        indexes = await index.read("widgets")
        fetched = await index.get("widgets/0")
        deleted = await index.delete("widgets/0")

        assert indexes[0].type == "primary"
        assert fetched.name == "primary"
        assert deleted.id == "widgets/0"
        assert server.last.url.path == "/_db/test_db/_api/index/widgets/0"
