from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(slots=True, frozen=True, order=True)
class RowId:
    """Position of a row in the store that issued it."""

    id: int


@dataclass(slots=True, frozen=True)
class Indexed(Generic[T]):
    id: RowId
    value: T


__all__ = ["RowId", "Indexed"]
