"""Loosely-typed row record."""

from __future__ import annotations

from typing import Any


class Record(dict[str, Any]):
    """An ordered column name -> value mapping with attribute access.

    NULL cells are kept as ``None`` values rather than left out. Columns
    win over dict methods of the same name, so ``record.values`` is the
    ``values`` column when there is one; ``dict.values(record)`` still
    reaches the method.
    """

    __slots__ = ()

    def __getattribute__(self, name: str) -> Any:
        if not name.startswith("__") and dict.__contains__(self, name):
            return dict.__getitem__(self, name)
        return super().__getattribute__(name)

    def __getattr__(self, name: str) -> Any:
        raise AttributeError(f"Record has no column '{name}'")

    def __setattr__(self, name: str, value: Any) -> None:
        self[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self[name]
        except KeyError:
            raise AttributeError(f"Record has no column '{name}'") from None

    def __repr__(self) -> str:
        return f"Record({dict.__repr__(self)})"
