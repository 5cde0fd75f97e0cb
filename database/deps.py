"""FastAPI dependencies that expose read/write DB sessions.

`get_db_write` is used by the batch endpoint, which inserts into the meal
pool; every other route reads through `get_db_read`. Tests override both.
"""

from .database import get_read_session, get_write_session


def get_db_write():
    """Yield a write-capable DB session for FastAPI dependency injection."""
    yield from get_write_session()


def get_db_read():
    """Yield a read-only DB session for FastAPI dependency injection."""
    yield from get_read_session()
