from __future__ import annotations

import logging
from typing import Callable, Generic, Iterable, Iterator, TypeVar

from .index import Index
from .row import RowId

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HashSync(Generic[T]):
    """
    an append-only collection of rows with secondary hash indexes

    rows go in with :meth:`insert`; :meth:`index` builds a lookup
    from a key function over whatever rows are present and keeps
    it current as more rows arrive, so that::

        hs = HashSync()
        hs.insert((1, 2))
        by_first = hs.index(lambda row: row[0])
        hs.insert((1, 3))
        by_first.get_values(1)  # [(1, 2), (1, 3)]

    key functions must be deterministic and return hashable keys;
    each one is called once per row, and never again to revalidate
    (see :meth:`verify` for checking after the fact)

    not thread safe: callers sharing a store between threads must
    hold one lock around the store and all of its indexes
    """
    def __init__(self):
        self._rows: list[T] = []
        self._indexes: list[Index] = []

    def insert(self, row: T) -> RowId:
        """
        append ``row`` and file it in every registered index

        O(n) in the number of indexes; all keys are computed before
        anything changes, so a failing key function leaves the store
        and its indexes as they were
        """
        pending = [(idx, idx._keys(row)) for idx in self._indexes]
        row_id = RowId(len(self._rows))
        self._rows.append(row)
        for idx, keys in pending:
            idx._file(row_id, keys)
        return row_id

    def update(self, rows: Iterable[T]) -> list[RowId]:
        """insert each of ``rows`` in order"""
        return [self.insert(row) for row in rows]

    def index(self, key_fn: Callable[[T], object]) -> Index:
        """
        create an index keyed by ``key_fn``

        every row already in the store is scanned once to fill the
        index; later inserts are added as they happen
        """
        return self._register(Index(key_fn, self))

    def index_many(self, keys_fn: Callable[[T], Iterable[object]]) -> Index:
        """
        create an index where each row may have several keys

        ``keys_fn`` returns an iterable of keys; the row is filed
        under every distinct key, or nowhere if it is empty
        """
        return self._register(Index(keys_fn, self, multi=True))

    def _register(self, idx: Index) -> Index:
        if not callable(idx.key_fn):
            raise TypeError("key function must be callable, not {!r}".format(
                type(idx.key_fn)))
        idx.data = self._build(idx)
        self._indexes.append(idx)
        logger.debug("created index %r over %d rows", idx.key_fn, len(self._rows))
        return idx

    def _build(self, idx: Index) -> dict:
        built = Index(idx.key_fn, self, multi=idx.multi)
        for row_id, row in self.items():
            built._file(row_id, built._keys(row))
        return built.data

    def _check_registered(self, idx: Index) -> None:
        if idx not in self._indexes:
            raise KeyError("index is not registered with this store")

    def drop_index(self, index: Index) -> None:
        """
        stop maintaining ``index`` and release its buckets

        the handle stays usable but is detached; lookups on it
        come back empty
        """
        self._check_registered(index)
        self._indexes.remove(index)
        index.data = {}
        index.store = None
        logger.debug("dropped index %r", index.key_fn)

    @property
    def indexes(self) -> tuple[Index, ...]:
        return tuple(self._indexes)

    def verify(self) -> None:
        """
        recompute every index from scratch and compare

        raises AssertionError if any index has drifted from the
        rows, which only happens with a non-deterministic key function
        """
        for idx in self._indexes:
            if idx.data != self._build(idx):
                raise AssertionError("index out of sync")

    def rebuild(self, index: Index) -> None:
        self._check_registered(index)
        index.data = self._build(index)
        logger.debug("rebuilt index %r over %d rows", index.key_fn, len(self._rows))

    def rebuild_all(self) -> None:
        for idx in list(self._indexes):
            self.rebuild(idx)

    def items(self) -> Iterator[tuple[RowId, T]]:
        for i, row in enumerate(self._rows):
            yield RowId(i), row

    def __getitem__(self, row_id: RowId) -> T:
        if row_id not in self:
            raise KeyError(row_id)
        return self._rows[row_id.id]

    def __contains__(self, row_id: object) -> bool:
        return type(row_id) is RowId and 0 <= row_id.id < len(self._rows)

    def __iter__(self) -> Iterator[T]:
        return iter(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def __repr__(self):
        cn = self.__class__.__name__
        return '%s(%r)' % (cn, self._rows)


__all__ = ["HashSync"]
