import pytest

from hashsync import HashSync, RowId


def test_hashsync_basic():
    hs = HashSync()
    assert len(hs) == 0
    assert not hs
    first = hs.insert(('alice', 42))
    assert hs
    second = hs.insert(('bob', 42))
    assert len(hs) == 2
    assert first == RowId(0)
    assert second == RowId(1)
    assert first < second
    assert hs[first] == ('alice', 42)
    assert hs[second] == ('bob', 42)
    assert first in hs
    assert RowId(2) not in hs
    assert 0 not in hs
    with pytest.raises(KeyError):
        hs[RowId(2)]
    assert hs.update([('carol', 7), ('dave', 7)]) == [RowId(2), RowId(3)]
    assert list(hs) == [('alice', 42), ('bob', 42), ('carol', 7), ('dave', 7)]
    assert list(hs.items())[2] == (RowId(2), ('carol', 7))
    assert repr(HashSync()) == 'HashSync([])'


def test_duplicates_kept():
    hs = HashSync()
    a = hs.insert('x')
    b = hs.insert('x')
    assert a != b
    assert len(hs) == 2
    assert list(hs) == ['x', 'x']


def test_iteration_restartable():
    hs = HashSync()
    hs.update(range(5))
    assert list(hs) == list(hs) == [0, 1, 2, 3, 4]
    hs.insert(5)
    assert sum(1 for _ in hs) == 6


def test_unhashable_rows():
    hs = HashSync()
    hs.insert({'name': 'alice', 'team': 'red'})
    hs.insert({'name': 'bob', 'team': 'red'})
    by_team = hs.index(lambda row: row['team'])
    assert [r['name'] for r in by_team.get_values('red')] == ['alice', 'bob']
