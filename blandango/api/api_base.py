"""Shared base for the domain facades."""

from __future__ import annotations

from typing import TypeVar

from ..client.client_config import Config
from ..client.client_transport import Client

A = TypeVar("A", bound="ArangoApi")


class ArangoApi:
    """A facade expressed purely through the router and a transport client."""

    def __init__(self, client: Client) -> None:
        self.client = client

    @classmethod
    def from_config(cls: type[A], config: Config) -> A:
        return cls(Client(config))
