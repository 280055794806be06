"""AQL query, cursor and query-cache facade.

Cursor lifecycle::

    cursor(request) -> Open(id) --next_batch--> Open(id) ... --> Exhausted
                          \\--delete_cursor--> Deleted

A response carries an ``id`` only while ``has_more`` is true; once a batch
arrives with ``has_more`` false the cursor is gone on the server and
:meth:`Query.next_batch` refuses to advance it. Advancing is strictly
sequential per cursor: never await two ``next_batch`` calls for the same id
concurrently.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from enum import StrEnum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from ..client.client_errors import ValidationError
from ..client.client_router import Router
from ..logging import LogManager
from ..models.model_base import Empty, FlatResponse, IdResponse, Response, WireModel
from .api_base import ArangoApi

logger = LogManager.get_logger("query")

B = TypeVar("B")
T = TypeVar("T")


_BIND_VARS = TypeAdapter(dict[str, Any])


def _dump_bind_vars(bind_vars: Any) -> Any:
    """Dump bind parameters keeping explicit ``None`` values.

    Model values nested in a plain mapping are dumped by alias as well.
    """
    if isinstance(bind_vars, BaseModel):
        return bind_vars.model_dump(mode="json", by_alias=True)
    return _BIND_VARS.dump_python(bind_vars, mode="json", by_alias=True)


# ── Request models ────────────────────────────────────────────────


class Optimizer(WireModel):
    """Optimizer rule selection, e.g. ``["-all", "+use-indexes"]``."""

    rules: list[str] = Field(default_factory=list)


class CursorOptions(WireModel):
    """Extra cursor options; anything left ``None`` uses the server default."""

    full_count: bool | None = None
    fill_block_cache: bool | None = None
    max_number_of_plans: int | None = None
    max_nodes_per_callstack: int | None = None
    max_warning_count: int | None = None
    fail_on_warning: bool | None = None
    stream: bool | None = None
    spill_over_threshold_memory_usage: int | None = None
    spill_over_threshold_num_rows: int | None = None
    optimizer: Optimizer | None = None
    profile: int | None = None
    satellite_sync_wait: float | None = None
    max_runtime: float | None = None
    max_transaction_size: int | None = None
    intermediate_commit_size: int | None = None
    intermediate_commit_count: int | None = None
    skip_inaccessible_collections: bool | None = None
    allow_dirty_reads: bool | None = None


class CursorRequest(WireModel):
    """Raw AQL cursor request with optional untyped bind parameters.

    ``id`` selects the cursor to advance and is part of the endpoint, not
    the body. ``batch_size``, ``ttl`` and ``memory_limit`` are server hints
    and are omitted when unset.
    """

    id: str | None = Field(default=None, exclude=True)
    query: str = ""
    count: bool = True
    batch_size: int | None = None
    ttl: int | None = None
    cache: bool = False
    memory_limit: int | None = None
    bind_vars: dict[str, Any] | None = None
    options: CursorOptions | None = None

    def to_wire(self) -> dict[str, Any]:
        data = super().to_wire()
        if self.bind_vars is not None:
            data["bindVars"] = _dump_bind_vars(self.bind_vars)
        return data


class BoundCursorRequest(WireModel, Generic[B]):
    """Cursor request whose bind parameters are a typed model.

    Collection bind parameters use the ``@@name`` form in the query and an
    ``@name`` key in the bindings (``Field(alias="@collection")``).
    """

    id: str | None = Field(default=None, exclude=True)
    query: str = ""
    count: bool = True
    batch_size: int | None = None
    ttl: int | None = None
    cache: bool = False
    memory_limit: int | None = None
    bind_vars: B
    options: CursorOptions | None = None

    def to_wire(self) -> dict[str, Any]:
        data = super().to_wire()
        data["bindVars"] = _dump_bind_vars(self.bind_vars)
        return data


class ExplainOptions(WireModel):
    all_plans: bool | None = None
    max_number_of_plans: int | None = None
    optimizer: Optimizer | None = None


class Explain(WireModel):
    query: str
    bind_vars: dict[str, Any] | None = None
    options: ExplainOptions | None = None

    def to_wire(self) -> dict[str, Any]:
        data = super().to_wire()
        if self.bind_vars is not None:
            data["bindVars"] = _dump_bind_vars(self.bind_vars)
        return data


class BoundExplain(WireModel, Generic[B]):
    query: str
    bind_vars: B
    options: ExplainOptions | None = None

    def to_wire(self) -> dict[str, Any]:
        data = super().to_wire()
        data["bindVars"] = _dump_bind_vars(self.bind_vars)
        return data


class ParseQuery(WireModel):
    query: str


class CacheMode(StrEnum):
    OFF = "off"
    ON = "on"
    DEMAND = "demand"


class CacheProperties(WireModel):
    """Global AQL query results cache settings."""

    model_config = ConfigDict(extra="ignore")

    mode: CacheMode
    max_results: int | None = None
    max_results_size: int | None = None
    max_entry_size: int | None = None
    include_system: bool | None = None


class QueryTrackingProperties(WireModel):
    model_config = ConfigDict(extra="ignore")

    enabled: bool | None = None
    track_slow_queries: bool | None = None
    track_bind_vars: bool | None = None
    max_slow_queries: int | None = None
    slow_query_threshold: float | None = None
    slow_streaming_query_threshold: float | None = None
    max_query_string_length: int | None = None


class NewAqlFunction(WireModel):
    name: str
    code: str
    is_deterministic: bool | None = None


# ── Response models ───────────────────────────────────────────────


class QueryWarning(WireModel):
    code: int
    message: str


class Node(WireModel):
    id: int | str
    calls: int = 0
    items: int = 0
    runtime: float = 0.0


class Stats(WireModel):
    writes_executed: int = 0
    writes_ignored: int = 0
    scanned_full: int = 0
    scanned_index: int = 0
    cursors_created: int | None = None
    cursors_rearmed: int | None = None
    cache_hits: int | None = None
    cache_misses: int | None = None
    filtered: int = 0
    http_requests: int = 0
    execution_time: float | None = None
    peak_memory_usage: float | None = None
    full_count: int | None = None
    nodes: list[Node] | None = None


class PlanCollection(WireModel):
    name: str
    type: str


class Plan(WireModel):
    nodes: list[dict[str, Any]] | None = None
    rules: list[str] = Field(default_factory=list)
    collections: list[PlanCollection] = Field(default_factory=list)
    variables: list[dict[str, Any]] | None = None
    estimated_cost: float = 0.0
    estimated_nr_items: int = 0
    is_modification_query: bool = False


class Extra(WireModel):
    warnings: list[QueryWarning] = Field(default_factory=list)
    stats: Stats | None = None
    profile: dict[str, Any] | None = None
    plan: Plan | None = None


class CursorResponse(WireModel, Generic[T]):
    """One batch of a cursor.

    ``id`` is present only while ``has_more`` is true.
    """

    id: str | None = None
    error: bool = False
    code: int
    result: T
    has_more: bool = False
    count: int | None = None
    extra: Extra | None = None
    cached: bool = False

    @property
    def is_exhausted(self) -> bool:
        return not self.has_more


class ExplainResponse(WireModel):
    """Execution plan(s) of a query; ``plans`` is filled with ``all_plans``."""

    plan: Plan | None = None
    plans: list[Plan] = Field(default_factory=list)
    warnings: list[QueryWarning] = Field(default_factory=list)
    stats: dict[str, Any] = Field(default_factory=dict)
    cacheable: bool | None = None


class ParseResponse(WireModel):
    error: bool = False
    code: int
    parsed: bool
    collections: list[str]
    bind_vars: list[str]
    ast: list[dict[str, Any]]


class CacheEntry(WireModel):
    hash: str
    query: str
    bind_vars: dict[str, Any] | None = None
    size: int
    results: int
    started: str
    hits: int
    run_time: float
    data_sources: list[str]


class RunningQuery(WireModel):
    """A query from the running or slow query lists.

    ``state`` is one of: initializing, parsing, optimizing ast, loading
    collections, instantiating plan, optimizing plan, executing, finalizing,
    finished, killed, invalid.
    """

    id: str
    database: str
    user: str
    query: str
    bind_vars: dict[str, Any] = Field(default_factory=dict)
    started: str
    run_time: float
    peak_memory_usage: int | None = None
    state: str
    stream: bool


class OptimizerRule(WireModel):
    name: str
    flags: dict[str, bool] = Field(default_factory=dict)


class AqlFunction(WireModel):
    name: str
    code: str
    is_deterministic: bool = False


class _FunctionCreated(WireModel):
    is_newly_created: bool


class _FunctionsDeleted(WireModel):
    deleted_count: int


# ── Facade ────────────────────────────────────────────────────────


class Query(ArangoApi):
    # Cursors -----------------------------------------------------------
    async def cursor(self, request: CursorRequest, item_type: Any = Any) -> CursorResponse[list[Any]]:
        """Submit a raw AQL query and return its first batch."""
        return await self._submit(request, item_type)

    async def bound_cursor(
        self,
        request: BoundCursorRequest[Any],
        item_type: Any = Any,
    ) -> CursorResponse[list[Any]]:
        """Submit an AQL query with typed bind parameters."""
        return await self._submit(request, item_type)

    async def next_batch(
        self,
        cursor: CursorResponse[Any] | str,
        item_type: Any = Any,
    ) -> CursorResponse[list[Any]]:
        """Fetch the batch after ``cursor``.

        Raises:
            ValidationError: If ``cursor`` is an exhausted response; no
                request is sent in that case.
        """
        if isinstance(cursor, CursorResponse):
            if cursor.is_exhausted or not cursor.id:
                raise ValidationError("Cursor is exhausted; there is no next batch to fetch")
            cursor_id = cursor.id
        else:
            cursor_id = cursor
        if not cursor_id:
            raise ValidationError("Cursor id must not be empty")

        return await self.client.post(
            Router.cursor(cursor_id), Empty(), CursorResponse[list[item_type]]
        )

    async def iter_batches(
        self,
        request: CursorRequest | BoundCursorRequest[Any],
        item_type: Any = Any,
    ) -> AsyncIterator[CursorResponse[list[Any]]]:
        """Yield every batch of a query until the cursor is exhausted."""
        response = await self._submit(request, item_type)
        yield response
        while not response.is_exhausted:
            response = await self.next_batch(response, item_type)
            yield response

    async def fetch_all(
        self,
        request: CursorRequest | BoundCursorRequest[Any],
        item_type: Any = Any,
    ) -> list[Any]:
        """Collect the items of every batch into one list."""
        items: list[Any] = []
        batches = 0
        async for batch in self.iter_batches(request, item_type):
            items.extend(batch.result)
            batches += 1
        logger.debug("cursor_drained", database=self.client.config.database, items=len(items), batches=batches)
        return items

    async def delete_cursor(self, cursor_id: str) -> IdResponse:
        return await self.client.delete(Router.cursor(cursor_id), IdResponse)

    async def _submit(
        self,
        request: CursorRequest | BoundCursorRequest[Any],
        item_type: Any,
    ) -> CursorResponse[list[Any]]:
        return await self.client.post(
            Router.cursor(request.id), request, CursorResponse[list[item_type]]
        )

    # Results cache -----------------------------------------------------
    async def clear_cache(self) -> None:
        await self.client.delete(Router.cache())

    async def cache_entries(self) -> list[CacheEntry]:
        return await self.client.get(Router.cache_entries(), list[CacheEntry])

    async def cache_properties(self) -> CacheProperties:
        return await self.client.get(Router.cache_properties(), CacheProperties)

    async def set_cache_properties(self, properties: CacheProperties) -> CacheProperties:
        """Change the global cache mode and limits; affects every database user."""
        return await self.client.put(Router.cache_properties(), properties, CacheProperties)

    # Introspection -----------------------------------------------------
    async def explain(self, query: Explain) -> ExplainResponse:
        response: FlatResponse[ExplainResponse] = await self.client.post(
            Router.explain(), query, FlatResponse[ExplainResponse]
        )
        return response.result

    async def bound_explain(self, query: BoundExplain[Any]) -> ExplainResponse:
        response: FlatResponse[ExplainResponse] = await self.client.post(
            Router.explain(), query, FlatResponse[ExplainResponse]
        )
        return response.result

    async def parse(self, query: ParseQuery) -> ParseResponse:
        """Syntax check only; the query is not executed."""
        return await self.client.post(Router.query(), query, ParseResponse)

    async def running(self) -> list[RunningQuery]:
        return await self.client.get(Router.running(), list[RunningQuery])

    async def slow(self) -> list[RunningQuery]:
        return await self.client.get(Router.slow(), list[RunningQuery])

    async def clear_slow(self) -> None:
        await self.client.delete(Router.slow())

    async def kill(self, query_id: str) -> None:
        await self.client.delete(Router.kill(query_id))

    async def tracking_properties(self) -> QueryTrackingProperties:
        return await self.client.get(Router.query_properties(), QueryTrackingProperties)

    async def set_tracking_properties(self, properties: QueryTrackingProperties) -> QueryTrackingProperties:
        return await self.client.put(Router.query_properties(), properties, QueryTrackingProperties)

    async def optimizer_rules(self) -> list[OptimizerRule]:
        return await self.client.get(Router.query_rules(), list[OptimizerRule])

    # User functions ----------------------------------------------------
    async def functions(self, namespace: str | None = None) -> list[AqlFunction]:
        endpoint = Router.aql_function()
        if namespace:
            endpoint = Router.aql_function_with_params(None, {"namespace": namespace})
        response: Response[list[AqlFunction]] = await self.client.get(endpoint, Response[list[AqlFunction]])
        return response.result

    async def create_function(self, function: NewAqlFunction) -> bool:
        """Register a user function; returns False when it replaced one."""
        response: _FunctionCreated = await self.client.post(Router.aql_function(), function, _FunctionCreated)
        return response.is_newly_created

    async def delete_function(self, name: str, *, group: bool = False) -> int:
        endpoint = Router.aql_function(name)
        if group:
            endpoint = Router.aql_function_with_params(name, {"group": True})
        response: _FunctionsDeleted = await self.client.delete(endpoint, _FunctionsDeleted)
        return response.deleted_count


__all__ = [
    "AqlFunction",
    "BoundCursorRequest",
    "BoundExplain",
    "CacheEntry",
    "CacheMode",
    "CacheProperties",
    "CursorOptions",
    "CursorRequest",
    "CursorResponse",
    "Explain",
    "ExplainOptions",
    "ExplainResponse",
    "Extra",
    "NewAqlFunction",
    "Node",
    "Optimizer",
    "OptimizerRule",
    "ParseQuery",
    "ParseResponse",
    "Plan",
    "PlanCollection",
    "Query",
    "QueryTrackingProperties",
    "QueryWarning",
    "RunningQuery",
    "Stats",
]
