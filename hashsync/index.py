from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Generic, Hashable, Iterator, TypeVar

from .row import Indexed, RowId

if TYPE_CHECKING:  # pragma: no cover
    from .hashsync import HashSync

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


@dataclass(eq=False, repr=False)
class Index(Generic[K, T]):
    """
    a secondary index over the rows of a :class:`HashSync`

    maps each key produced by ``key_fn`` to the ids of the rows
    that produced it, in insertion order; the rows themselves stay
    in the store and are looked up fresh on every query

    with ``multi`` set, ``key_fn`` returns an iterable of keys and
    the row is filed under each distinct one
    """
    key_fn: Callable[[T], object]
    store: "HashSync[T] | None" = None
    data: dict[K, list[RowId]] = field(default_factory=dict)
    multi: bool = False

    def _keys(self, row: T) -> tuple:
        if self.multi:
            # collapse repeats so a row lands in a bucket once per insert
            return tuple(dict.fromkeys(self.key_fn(row)))
        key = self.key_fn(row)
        hash(key)  # unhashable keys must fail before the row is committed
        return (key,)

    def _file(self, row_id: RowId, keys: tuple) -> None:
        for key in keys:
            bucket = self.data.get(key)
            if bucket is None:
                self.data[key] = bucket = []
            bucket.append(row_id)

    def get(self, key: K) -> list[Indexed[T]]:
        """rows for ``key`` along with the id of the insert that added them"""
        bucket = self.data.get(key)
        if not bucket:
            return []
        rows = self.store._rows
        return [Indexed(row_id, rows[row_id.id]) for row_id in bucket]

    def get_values(self, key: K) -> list[T]:
        """
        all rows whose key equals ``key``, in insertion order

        an unseen key gives an empty list; the list is new on every
        call so callers may mutate it freely
        """
        bucket = self.data.get(key)
        if not bucket:
            return []
        rows = self.store._rows
        return [rows[row_id.id] for row_id in bucket]

    def count(self, key: K) -> int:
        return len(self.data.get(key, ()))

    def keys(self):
        return self.data.keys()

    @property
    def attached(self) -> bool:
        return self.store is not None

    def __contains__(self, key: object) -> bool:
        return key in self.data

    def __iter__(self) -> Iterator[K]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __repr__(self):
        cn = self.__class__.__name__
        return '%s(%r, keys=%d)' % (cn, self.key_fn, len(self.data))


__all__ = ["Index"]
