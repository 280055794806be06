"""Database administration facade."""

from __future__ import annotations

from pydantic import Field

from ..client.client_router import Router
from ..models.model_base import Response, WireModel
from ..models.model_params import CollectionQueryParams
from .api_base import ArangoApi
from .api_collection import Collection, NewCollection, Properties


class Db(WireModel):
    """The database the client is bound to."""

    name: str
    id: str
    path: str | None = None
    is_system: bool
    sharding: str | None = None
    replication_factor: int | str | None = None
    write_concern: int | None = None


class User(WireModel):
    username: str
    password: str = Field(alias="passwd")
    active: bool = True


class DbOptions(WireModel):
    """Cluster-only defaults for collections created in a new database."""

    sharding: str | None = None
    replication_factor: int | str | None = None
    write_concern: int | None = None


class NewDatabase(WireModel):
    """Body for ``POST _api/database``.

    Users listed here are granted administrate permissions on the new
    database; without any, ``root`` is used.
    """

    name: str
    options: DbOptions | None = None
    users: list[User] | None = None


class Database(ArangoApi):
    async def list(self) -> list[str]:
        """Names of all databases (``_system`` only)."""
        response: Response[list[str]] = await self.client.get(Router.database_base(), Response[list[str]])
        return response.result

    async def create(self, database: NewDatabase) -> bool:
        response: Response[bool] = await self.client.post(Router.database_base(), database, Response[bool])
        return response.result

    async def current(self) -> Db:
        response: Response[Db] = await self.client.get(Router.database_current(), Response[Db])
        return response.result

    async def user(self) -> list[str]:
        """Databases the current user can access."""
        response: Response[list[str]] = await self.client.get(Router.database_user(), Response[list[str]])
        return response.result

    async def drop(self, name: str) -> bool:
        response: Response[bool] = await self.client.delete(Router.database_name(name), Response[bool])
        return response.result

    async def new_collection(self, new_collection: NewCollection) -> Properties:
        endpoint = Router.base_with_params(CollectionQueryParams())
        return await self.client.post(endpoint, new_collection, Properties)

    def collection(self, name: str) -> Collection:
        return Collection(self.client.clone(), name)


__all__ = [
    "Database",
    "Db",
    "DbOptions",
    "NewDatabase",
    "User",
]
