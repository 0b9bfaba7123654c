"""Database connection management.

Simple SQLite connection handling with schema initialization.
"""

import logging
import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)

# Default database path
DEFAULT_DB_PATH = Path("./footyrater.db")

# Schema file location
SCHEMA_PATH = Path(__file__).parent / "schema.sql"


def get_connection(db_path: Path | str | None = None) -> sqlite3.Connection:
    """Get a database connection.

    Args:
        db_path: Path to database file. Uses DEFAULT_DB_PATH if not specified.

    Returns:
        SQLite connection with row factory set to sqlite3.Row
    """
    path = Path(db_path) if db_path else DEFAULT_DB_PATH
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_db(db_path: Path | str | None = None) -> Generator[sqlite3.Connection, None, None]:
    """Context manager for database connections.

    Usage:
        with get_db() as conn:
            matches = get_all_matches(conn)
    """
    conn = get_connection(db_path)
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_path: Path | str | None = None, seed_sample: bool = False) -> None:
    """Initialize database with schema.

    Creates tables if they don't exist. Safe to call multiple times.

    Args:
        db_path: Path to database file. Uses DEFAULT_DB_PATH if not specified.
        seed_sample: Insert the bundled sample matches if the store is empty.
    """
    path = Path(db_path) if db_path else DEFAULT_DB_PATH
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)

    schema_sql = SCHEMA_PATH.read_text()

    with get_db(path) as conn:
        conn.executescript(schema_sql)
        _run_migrations(conn)
        if seed_sample:
            _seed_sample_if_needed(conn)

    logger.info("[STORE] Database ready at %s", path)


def _seed_sample_if_needed(conn: sqlite3.Connection) -> None:
    """Seed sample matches if the store is empty."""
    from footyrater.database.seed import seed_if_needed

    result = seed_if_needed(conn)
    if result.get("seeded"):
        logger.info("[SEED] Seeded %d sample matches", result.get("matches_added", 0))


def _run_migrations(conn: sqlite3.Connection) -> None:
    """Run database migrations for existing databases.

    Adds columns that may not exist in older database versions.
    Safe to call multiple times - checks for column existence first.
    """
    # Older stores only kept the category on the match row
    _add_column_if_not_exists(conn, "ratings", "rating_category", "TEXT")


def _add_column_if_not_exists(
    conn: sqlite3.Connection, table: str, column: str, column_def: str
) -> None:
    """Add a column to a table if it doesn't exist.

    Args:
        conn: Database connection
        table: Table name
        column: Column name to add
        column_def: Column definition (type and default)
    """
    cursor = conn.execute(f"PRAGMA table_info({table})")
    columns = {row["name"] for row in cursor.fetchall()}
    if column not in columns:
        conn.execute(f"ALTER TABLE {table} ADD COLUMN {column} {column_def}")
        logger.info("[STORE] Added column %s.%s", table, column)
