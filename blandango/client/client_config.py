"""Connection configuration for the ArangoDB driver.

A :class:`Config` is immutable and is consumed once to build a
:class:`~blandango.client.client_transport.Client`. Loading it from files is
left to the application; :func:`resolve_config` only merges explicit
arguments with ``ARANGO_*`` environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

DEFAULT_HOST = "http://localhost:8529"
DEFAULT_DATABASE = "_system"
DEFAULT_USERNAME = "root"

# Idle pooled connections are recycled after this many seconds. Stale
# keep-alive connections have been seen to fail silently on some hosts.
DEFAULT_POOL_IDLE_TIMEOUT = 0.1


@dataclass(frozen=True, slots=True)
class Config:
    """Connection settings for one database on one server."""

    host: str
    database: str
    user: str
    password: str
    pool_idle_timeout: float = DEFAULT_POOL_IDLE_TIMEOUT
    connect_timeout: float = 5.0
    read_timeout: float = 30.0
    write_timeout: float = 30.0
    max_connections: int = 100
    max_keepalive_connections: int = 20
    http2: bool = True

    @property
    def base_url(self) -> str:
        return f"{self.host.rstrip('/')}/_db/{self.database}/"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Config:
        """Build a config from a ``database`` settings section."""
        return cls(
            host=str(data["host"]),
            database=str(data["database"]),
            user=str(data["user"]),
            password=str(data["password"]),
        )

    def __repr__(self) -> str:
        return (
            f"Config(host={self.host!r}, database={self.database!r}, "
            f"user={self.user!r}, password='***')"
        )


def _parse_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def resolve_config(
    *,
    host: str | None = None,
    database: str | None = None,
    user: str | None = None,
    password: str | None = None,
    pool_idle_timeout: float | None = None,
    connect_timeout: float | None = None,
    read_timeout: float | None = None,
    write_timeout: float | None = None,
) -> Config:
    """Resolve configuration using explicit parameters and environment values."""

    env = os.environ

    if password is None:
        password = env.get("ARANGO_PASSWORD")
        if not password:
            raise ValueError("ArangoDB password required (set ARANGO_PASSWORD env var)")

    host = host or env.get("ARANGO_HOST", DEFAULT_HOST)
    database = database or env.get("ARANGO_DATABASE", DEFAULT_DATABASE)
    user = user or env.get("ARANGO_USERNAME", DEFAULT_USERNAME)

    if pool_idle_timeout is None:
        pool_idle_timeout = _parse_float(env.get("ARANGO_POOL_IDLE_TIMEOUT"), DEFAULT_POOL_IDLE_TIMEOUT)
    if connect_timeout is None:
        connect_timeout = _parse_float(env.get("ARANGO_CONNECT_TIMEOUT"), 5.0)
    if read_timeout is None:
        read_timeout = _parse_float(env.get("ARANGO_READ_TIMEOUT"), 30.0)
    if write_timeout is None:
        write_timeout = _parse_float(env.get("ARANGO_WRITE_TIMEOUT"), 30.0)

    return Config(
        host=host,
        database=database,
        user=user,
        password=password,
        pool_idle_timeout=pool_idle_timeout,
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        write_timeout=write_timeout,
    )


__all__ = [
    "DEFAULT_DATABASE",
    "DEFAULT_HOST",
    "DEFAULT_POOL_IDLE_TIMEOUT",
    "DEFAULT_USERNAME",
    "Config",
    "resolve_config",
]
