"""QueryMapper exception hierarchy.

All exceptions are QueryMapper-specific. Driver exceptions are wrapped and
chained as ``__cause__``; nothing is retried or masked.
"""

from __future__ import annotations


class QueryMapperError(Exception):
    """Base exception for all QueryMapper errors."""


# --- State ---


class InvalidStateError(QueryMapperError):
    """Raised when an operation is not allowed in the mapper's current state."""


# --- Execution ---


class ExecutionError(QueryMapperError):
    """Raised when the data source rejects or fails a statement."""


class ParameterBindingError(ExecutionError):
    """Raised when a parameter set cannot be passed to the driver."""

    def __init__(self, parameter_name: str, detail: str) -> None:
        self.parameter_name = parameter_name
        super().__init__(f"Cannot bind parameter '{parameter_name}': {detail}")


# --- Mapping ---


class MappingError(QueryMapperError):
    """Base for mapping errors."""


class BindingError(MappingError):
    """Raised when a column value cannot be assigned to its target attribute."""

    def __init__(self, target_class: str, column: str, detail: str) -> None:
        self.target_class = target_class
        self.column = column
        super().__init__(f"Cannot assign column '{column}' on {target_class}: {detail}")


class TargetConstructionError(MappingError):
    """Raised when a target class cannot be constructed without arguments."""

    def __init__(self, target_class: str, detail: str) -> None:
        self.target_class = target_class
        super().__init__(
            f"{target_class} must support construction without arguments: {detail}"
        )


# --- Adapter ---


class AdapterError(QueryMapperError):
    """Base for adapter errors."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised when a connection cannot be opened."""
