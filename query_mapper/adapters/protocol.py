"""Database adapter protocol.

Every adapter module MUST implement this protocol. Cursors returned by
``execute`` and ``call_procedure`` yield positional rows.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from query_mapper.core.connection import ConnectionConfig
    from query_mapper.core.params import Parameter


@runtime_checkable
class SyncAdapter(Protocol):
    """Synchronous database adapter protocol."""

    @property
    def paramstyle(self) -> str:
        """Parameter binding style: 'named' (:name) or 'pyformat' (%(name)s)."""
        ...

    def connect(self, config: ConnectionConfig) -> Any:
        """Open and return a DB-API connection."""
        ...

    def close(self, connection: Any) -> None:
        """Close a connection returned by connect."""
        ...

    def execute(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Execute SQL and return a cursor-like object."""
        ...

    def call_procedure(
        self,
        connection: Any,
        name: str,
        parameters: list[Parameter],
    ) -> Any:
        """Call a stored procedure and return a cursor over its first result set.

        Output parameters receive their returned values where supported.
        """
        ...
