"""Wire model base classes and response envelopes.

ArangoDB wraps payloads in one of two envelopes:

- nested:    ``{"error": false, "code": 200, "result": T}``
- flattened: ``{"error": false, "code": 200, ...fields of T...}``

:class:`Response` and :class:`FlatResponse` decode both into the same
``result`` attribute so call sites never care which shape an endpoint uses.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")

ENVELOPE_FIELDS = frozenset({"error", "code"})


class WireModel(BaseModel):
    """Base for request and response bodies.

    Field names are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump by alias, leaving unset optional fields off the payload."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Empty(BaseModel):
    """Placeholder for bodies whose content is irrelevant."""

    model_config = ConfigDict(extra="ignore")


class Response(BaseModel, Generic[T]):
    """Nested envelope: the payload lives under ``result``."""

    error: bool = False
    code: int
    result: T


class FlatResponse(BaseModel, Generic[T]):
    """Flattened envelope: payload fields sit next to ``error``/``code``."""

    error: bool = False
    code: int
    result: T

    @model_validator(mode="before")
    @classmethod
    def _gather_result(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if set(data) - ENVELOPE_FIELDS == {"result"}:
            return data
        return {
            "error": data.get("error", False),
            "code": data.get("code"),
            "result": {key: value for key, value in data.items() if key not in ENVELOPE_FIELDS},
        }


class IdResponse(BaseModel):
    id: str
    error: bool = False
    code: int


class NameResponse(BaseModel):
    name: str


__all__ = [
    "Empty",
    "FlatResponse",
    "IdResponse",
    "NameResponse",
    "Response",
    "WireModel",
]
