# manages connection to db, provides helper methods internal to db package
import asyncio
import os.path
from contextlib import asynccontextmanager
from sqlite3 import Row

import aiosqlite

from utils.errors import ResourceUnavailable
from utils.logger import get_logger

_logger = get_logger(__name__)

_HERE = os.path.dirname(os.path.abspath(__file__))

DB_PATH = os.getenv("FOODORDER_DB", "data/food.sqlite")
DB_INIT_SCRIPTS = [
    os.path.join(_HERE, "schema.sql"),
    os.path.join(_HERE, "menu-data.sql"),
]

_initialized = False
_init_lock = asyncio.Lock()


async def _init_db(conn: aiosqlite.Connection) -> None:
    for script in DB_INIT_SCRIPTS:
        if not os.path.exists(script) or os.path.getsize(script) == 0:
            continue
        _logger.info(f"Initializing database with script {script}...")
        with open(script, "r", encoding="utf-8") as f:
            await conn.executescript(f.read())
    await conn.commit()


async def _table_exists(conn: aiosqlite.Connection, table_name: str) -> bool:
    cur = await conn.execute(
        """
        SELECT name
        FROM sqlite_master
        WHERE type = 'table'
          AND name = ?;
        """,
        (table_name,),
    )
    row = await cur.fetchone()
    await cur.close()
    return row is not None


async def _open() -> aiosqlite.Connection:
    try:
        folder = os.path.dirname(DB_PATH)
        if folder:
            os.makedirs(folder, exist_ok=True)
        conn = await aiosqlite.connect(DB_PATH)
    except (OSError, aiosqlite.Error) as e:
        _logger.error(f"Cannot open database at {DB_PATH}: {e}")
        raise ResourceUnavailable(f"cannot open database at {DB_PATH}", e) from e
    conn.row_factory = Row
    return conn


async def close_quietly(conn: aiosqlite.Connection) -> None:
    """Close conn, logging instead of raising so the caller's own error wins."""
    try:
        await conn.close()
    except Exception:
        _logger.exception("Error closing database connection.")


@asynccontextmanager
async def connect() -> aiosqlite.Connection:
    """Async context manager yielding an aiosqlite connection with FK enabled.

    Ensures the database is initialized (tables and menu data) on first use.
    Raises ResourceUnavailable if the database file cannot be opened.
    """
    global _initialized
    conn = await _open()
    try:
        await conn.execute("PRAGMA foreign_keys = ON;")
        if not _initialized:
            async with _init_lock:
                if not _initialized:
                    if not await _table_exists(conn, "categories"):
                        _logger.info("Initializing database...")
                        await _init_db(conn)
                    _initialized = True
    except (OSError, aiosqlite.Error) as e:
        _logger.error(f"Cannot prepare database at {DB_PATH}: {e}")
        await close_quietly(conn)
        raise ResourceUnavailable(f"cannot prepare database at {DB_PATH}", e) from e
    except BaseException:
        await close_quietly(conn)
        raise

    try:
        yield conn
    finally:
        await close_quietly(conn)
