from .hashsync import HashSync
from .index import Index
from .row import RowId, Indexed

__all__ = [
    "HashSync",
    "Index",
    "RowId",
    "Indexed",
]
