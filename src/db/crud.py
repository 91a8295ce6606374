# src/db/crud.py
# key/value access to the local session store
from __future__ import annotations

from typing import Dict, Iterable, Optional

from db.database import connect


async def get_value(key: str, db_path: Optional[str] = None) -> Optional[str]:
    """Return the stored value for key, or None."""
    async with connect(db_path) as conn:
        cur = await conn.execute("SELECT value FROM kv_store WHERE key = ?;", (key,))
        row = await cur.fetchone()
        await cur.close()
    return row[0] if row else None


async def get_values(
    keys: Iterable[str], db_path: Optional[str] = None
) -> Dict[str, Optional[str]]:
    """Return {key: value or None} for every requested key."""
    keys = list(keys)
    result: Dict[str, Optional[str]] = {k: None for k in keys}
    if not keys:
        return result
    placeholders = ", ".join("?" for _ in keys)
    async with connect(db_path) as conn:
        cur = await conn.execute(
            f"SELECT key, value FROM kv_store WHERE key IN ({placeholders});",
            tuple(keys),
        )
        rows = await cur.fetchall()
        await cur.close()
    for row in rows:
        result[row[0]] = row[1]
    return result


async def set_values(values: Dict[str, str], db_path: Optional[str] = None) -> None:
    """Insert or replace several keys in one transaction."""
    async with connect(db_path) as conn:
        await conn.executemany(
            """
            INSERT INTO kv_store(key, value, updated_at)
            VALUES (?, ?, datetime('now'))
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = excluded.updated_at;
            """,
            list(values.items()),
        )
        await conn.commit()


async def set_value(key: str, value: str, db_path: Optional[str] = None) -> None:
    await set_values({key: value}, db_path)


async def delete_values(keys: Iterable[str], db_path: Optional[str] = None) -> None:
    keys = list(keys)
    if not keys:
        return
    placeholders = ", ".join("?" for _ in keys)
    async with connect(db_path) as conn:
        await conn.execute(
            f"DELETE FROM kv_store WHERE key IN ({placeholders});", tuple(keys)
        )
        await conn.commit()
