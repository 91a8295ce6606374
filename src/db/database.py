# manages the local sqlite file that persists the login between runs
import asyncio
import os.path
from contextlib import asynccontextmanager
from sqlite3 import Row
from typing import AsyncIterator, Optional, Set

import aiosqlite

from utils.config import DEFAULT_SESSION_DB
from utils.logger import get_logger

_logger = get_logger(__name__)

DB_PATH = DEFAULT_SESSION_DB

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key        TEXT PRIMARY KEY,
    value      TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""

_initialized: Set[str] = set()
_init_lock = asyncio.Lock()


async def _init_db(conn: aiosqlite.Connection) -> None:
    await conn.executescript(SCHEMA)
    await conn.commit()


@asynccontextmanager
async def connect(path: Optional[str] = None) -> AsyncIterator[aiosqlite.Connection]:
    """Async context manager yielding an aiosqlite connection.

    Creates the parent directory and the kv_store table on first use of a path.
    """
    path = path or DB_PATH
    if path not in _initialized:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)

    conn = await aiosqlite.connect(path)
    conn.row_factory = Row

    if path not in _initialized:
        async with _init_lock:
            if path not in _initialized:
                _logger.info(f"Initializing session store at {path}...")
                await _init_db(conn)
                _initialized.add(path)
    try:
        yield conn
    finally:
        await conn.close()
