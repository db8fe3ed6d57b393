"""SQLite database connection management and schema initialization.

Provides a single-file database at ~/.kondate/kondate.db.  Every table is
scoped by household_id; the app never reads across households.
Public functions that need a connection should use connect(), which closes
the connection and converts sqlite3 errors into PersistenceError.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path

from kondate.errors import PersistenceError

logger = logging.getLogger(__name__)

_db_path_override: ContextVar["Path | None"] = ContextVar("_db_path_override", default=None)


@contextmanager
def override_db_path(path: "Path"):
    """Context manager to override the DB path for the current async task/thread.

    Example:
        with override_db_path(tmp_path / "test.db"):
            init_db()
            items = inventory.get_all("household-1")
    """
    token = _db_path_override.set(path)
    try:
        yield
    finally:
        _db_path_override.reset(token)


def get_db_path() -> Path:
    """Return the active DB path.

    Priority order:
    1. ContextVar override (used by tests)
    2. DB_PATH environment variable (used by Docker / local dev)
    3. Default ~/.kondate/kondate.db
    """
    override = _db_path_override.get()
    if override is not None:
        return override
    env_url = os.environ.get("DB_PATH")
    if env_url:
        p = Path(env_url)
        p.parent.mkdir(parents=True, exist_ok=True)
        return p
    db_dir = Path.home() / ".kondate"
    db_dir.mkdir(exist_ok=True)
    return db_dir / "kondate.db"


def get_connection(db_path: Path = None) -> sqlite3.Connection:
    """Return a new SQLite connection with Row factory and foreign keys enabled.

    Callers are responsible for closing the connection when done.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def connect(db_path: Path = None):
    """Yield a connection, always closing it.

    Any sqlite3.Error raised inside the block is logged and re-raised as
    PersistenceError.  Nothing is rolled back beyond what SQLite itself
    discards for an uncommitted transaction.
    """
    try:
        conn = get_connection(db_path)
    except sqlite3.Error as e:
        logger.exception("Could not open database")
        raise PersistenceError(str(e)) from e
    try:
        yield conn
    except sqlite3.Error as e:
        logger.exception("Database operation failed")
        raise PersistenceError(str(e)) from e
    finally:
        conn.close()


def init_db(db_path: Path = None) -> None:
    """Create all tables if they don't already exist.

    Called once at application startup from app/main.py.
    """
    with connect(db_path) as conn:
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS household_settings (
                household_id    TEXT PRIMARY KEY,
                family_mode     TEXT NOT NULL DEFAULT 'normal',
                preferred_types TEXT NOT NULL DEFAULT '[]',
                updated_at      TEXT DEFAULT CURRENT_TIMESTAMP
            );

            CREATE TABLE IF NOT EXISTS family_members (
                id             INTEGER PRIMARY KEY AUTOINCREMENT,
                household_id   TEXT NOT NULL,
                name           TEXT NOT NULL,
                birth_date     TEXT,
                gender         TEXT,
                appetite_level INTEGER DEFAULT 3,
                likes          TEXT DEFAULT '',
                dislikes       TEXT DEFAULT '',
                created_at     TEXT DEFAULT CURRENT_TIMESTAMP
            );

            CREATE TABLE IF NOT EXISTS weekly_menus (
                id            INTEGER PRIMARY KEY AUTOINCREMENT,
                household_id  TEXT NOT NULL,
                week_start    TEXT NOT NULL,
                menu_data     TEXT NOT NULL,
                shopping_list TEXT NOT NULL,
                updated_at    TEXT DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (household_id, week_start)
            );

            CREATE TABLE IF NOT EXISTS daily_menus (
                id           INTEGER PRIMARY KEY AUTOINCREMENT,
                household_id TEXT NOT NULL,
                menu_date    TEXT NOT NULL,
                dish         TEXT NOT NULL,
                menu_kind    TEXT NOT NULL DEFAULT 'structured',
                menu_json    TEXT NOT NULL,
                updated_at   TEXT DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (household_id, menu_date)
            );

            CREATE TABLE IF NOT EXISTS inventory (
                id           INTEGER PRIMARY KEY AUTOINCREMENT,
                household_id TEXT NOT NULL,
                name         TEXT NOT NULL,
                unit         TEXT NOT NULL,
                qty          REAL NOT NULL,
                updated_at   TEXT DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (household_id, name, unit)
            );

            CREATE TABLE IF NOT EXISTS favorite_dishes (
                id           INTEGER PRIMARY KEY AUTOINCREMENT,
                household_id TEXT NOT NULL,
                dish_name    TEXT NOT NULL,
                created_at   TEXT DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (household_id, dish_name)
            );

            CREATE TABLE IF NOT EXISTS cooking_history (
                id            INTEGER PRIMARY KEY AUTOINCREMENT,
                household_id  TEXT NOT NULL,
                dish_name     TEXT NOT NULL,
                cooked_date   TEXT NOT NULL,
                taste_rating  INTEGER,
                time_rating   INTEGER,
                repeat_desire INTEGER,
                overall_score REAL,
                rank          TEXT,
                notes         TEXT DEFAULT '',
                UNIQUE (household_id, dish_name, cooked_date)
            );

            CREATE TABLE IF NOT EXISTS shopping_list_checks (
                id              INTEGER PRIMARY KEY AUTOINCREMENT,
                household_id    TEXT NOT NULL,
                week_identifier TEXT NOT NULL,
                item_name       TEXT NOT NULL,
                unit            TEXT NOT NULL DEFAULT '',
                is_checked      INTEGER NOT NULL DEFAULT 0,
                updated_at      TEXT DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (household_id, week_identifier, item_name, unit)
            );
        """)
        conn.commit()
