"""
Shared fixtures for integration tests.

Integration tests run against a real PostgreSQL configured through the
usual DB_* environment variables. When the database cannot be reached the
whole directory is skipped.
"""

from collections.abc import Callable, Generator

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.repository.postgres import PostgresMemberRepository, run_migrations
from src.config.settings import get_settings


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool and apply migrations once per session."""
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.conninfo,
        min_size=1,
        max_size=10,
        open=False,
    )
    try:
        pool.open(wait=True, timeout=3.0)
    except PoolTimeout:
        pool.close()
        pytest.skip("PostgreSQL is not available")

    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def repository(pool: ConnectionPool) -> PostgresMemberRepository:
    """Create repository instance for each test."""
    return PostgresMemberRepository(pool, acquire_timeout=5.0)


@pytest.fixture(autouse=True)
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Empty both tables and restart ids before each test."""
    with pool.connection() as conn:
        conn.execute("TRUNCATE members, member_ministries RESTART IDENTITY CASCADE")
    yield


@pytest.fixture
def count_rows(pool: ConnectionPool) -> Callable[..., int]:
    """Count rows in members or member_ministries, optionally for one email."""

    def count(table: str, email: str | None = None) -> int:
        with pool.connection() as conn, conn.cursor() as cursor:
            if table == "members" and email is not None:
                cursor.execute("SELECT COUNT(*) FROM members WHERE email = %s", (email,))
            elif table == "members":
                cursor.execute("SELECT COUNT(*) FROM members")
            else:
                cursor.execute("SELECT COUNT(*) FROM member_ministries")
            return cursor.fetchone()[0]

    return count
