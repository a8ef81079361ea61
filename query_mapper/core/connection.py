"""Connection configuration and the borrowed connection handle.

ConnectionConfig is a Pydantic model for type-safe connection config.
Connection wraps a DB-API connection opened through a driver adapter.
Mappers borrow a Connection and never close it.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any

from pydantic import BaseModel

from query_mapper.core.command import Command
from query_mapper.core.enums import CommandType, DatabaseBackend
from query_mapper.core.exceptions import AdapterError, ConnectionError  # noqa: A004

logger = logging.getLogger(__name__)


class ConnectionConfig(BaseModel):
    """Configuration for database connections."""

    driver: str
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str
    timeout: float | None = None
    extra: dict[str, Any] = {}


# Adapter module mapping: backend → (module_path, class_name)
_ADAPTER_MAP: dict[DatabaseBackend, tuple[str, str]] = {
    DatabaseBackend.SQLITE: ("query_mapper.adapters.sqlite", "SqliteAdapter"),
    DatabaseBackend.POSTGRESQL: ("query_mapper.adapters.postgresql", "PostgresqlAdapter"),
    DatabaseBackend.MYSQL: ("query_mapper.adapters.mysql", "MysqlAdapter"),
    DatabaseBackend.ORACLE: ("query_mapper.adapters.oracle", "OracleAdapter"),
}


def _load_adapter(driver: str) -> Any:
    """Load an adapter by driver name."""
    try:
        backend = DatabaseBackend(driver.lower())
    except ValueError:
        raise AdapterError(f"Unsupported database driver: {driver}") from None

    module_path, cls_name = _ADAPTER_MAP[backend]

    try:
        module = importlib.import_module(module_path)
        return getattr(module, cls_name)()
    except (ImportError, AttributeError) as e:
        raise AdapterError(f"Failed to load adapter for '{driver}': {e}") from e


class Connection:
    """A database connection that commands are created from.

    Args:
        config: Connection settings; ``config.driver`` selects the adapter.
        adapter: Optional adapter instance overriding the driver lookup.
    """

    def __init__(self, config: ConnectionConfig, adapter: Any | None = None) -> None:
        self.config = config
        self._adapter = adapter if adapter is not None else _load_adapter(config.driver)
        self._raw: Any = None

    @property
    def adapter(self) -> Any:
        return self._adapter

    @property
    def raw(self) -> Any:
        """The underlying DB-API connection, or None while closed."""
        return self._raw

    @property
    def is_open(self) -> bool:
        return self._raw is not None

    def open(self) -> None:
        """Open the connection. Does nothing if it is already open."""
        if self._raw is not None:
            return
        try:
            self._raw = self._adapter.connect(self.config)
        except Exception as e:
            raise ConnectionError(
                f"Cannot open {self.config.driver} connection to '{self.config.database}': {e}"
            ) from e
        logger.debug("Opened %s connection to %s", self.config.driver, self.config.database)

    def close(self) -> None:
        """Close the connection if it is open."""
        if self._raw is None:
            return
        raw, self._raw = self._raw, None
        self._adapter.close(raw)
        logger.debug("Closed %s connection to %s", self.config.driver, self.config.database)

    def commit(self) -> None:
        self._require_open().commit()

    def rollback(self) -> None:
        self._require_open().rollback()

    def create_command(
        self,
        sql: str,
        command_type: CommandType = CommandType.TEXT,
    ) -> Command:
        """Create a command bound to this connection."""
        return Command(self, sql, command_type)

    def _require_open(self) -> Any:
        if self._raw is None:
            raise ConnectionError("Connection is not open")
        return self._raw

    def __enter__(self) -> Connection:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.close()
