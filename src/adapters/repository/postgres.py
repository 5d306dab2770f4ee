"""
PostgreSQL repository adapter - Implements MemberRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Unit of Work:
-------------
Each signup borrows exactly one connection from the pool. The pool's
context manager hands it back on every exit path, so a connection is
never leaked or returned twice even when a statement raises mid-way.

Inside that connection the member insert and the batched ministry insert
run in a single transaction. Any exception before commit triggers an
explicit rollback, so a member without its ministries is never visible.

Error classification uses the SQLSTATE carried by psycopg exceptions:
- 23505 (UniqueViolation) -> DuplicateEmail. The email constraint is the
  only unique constraint a signup can hit.
- anything else, including PoolTimeout and statement timeouts -> SignupFailed
"""

import logging
from pathlib import Path

import psycopg
from psycopg.rows import class_row
from psycopg_pool import ConnectionPool

from src.domain.exceptions import DuplicateEmail, MemberNotFound, MemberQueryFailed, SignupFailed
from src.domain.ports import MemberRecord, MemberSignup

logger = logging.getLogger(__name__)

_MEMBER_COLUMNS = """
    m.id, m.first_name, m.last_name, m.email, m.phone, m.birth_date,
    m.address, m.city, m.state, m.zip_code, m.membership_type,
    m.attendance_preference, m.baptized, m.salvation,
    m.emergency_contact_name, m.emergency_contact_phone,
    m.prayer_request, m.how_did_you_hear, m.created_at, m.updated_at,
    string_agg(mm.ministry_name, ',' ORDER BY mm.id) AS ministries
"""


class PostgresMemberRepository:
    """
    Implements MemberRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool, acquire_timeout: float | None = None) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
            acquire_timeout: Seconds to wait for a free connection
                (None uses the pool's own default)
        """
        self._pool = pool
        self._acquire_timeout = acquire_timeout

    def create_member(self, signup: MemberSignup) -> int:
        """
        Insert a member and its ministry interests in one transaction.

        Args:
            signup: Signup payload with all required fields present

        Returns:
            Generated member id

        Raises:
            DuplicateEmail: email already registered
            SignupFailed: any other database failure; nothing was written
        """
        insert_member_sql = """
            INSERT INTO members (
                first_name, last_name, email, phone, address, city, state, zip_code,
                birth_date, membership_type, attendance_preference, baptized, salvation,
                emergency_contact_name, emergency_contact_phone, prayer_request,
                how_did_you_hear
            ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
            RETURNING id
        """

        insert_ministry_sql = """
            INSERT INTO member_ministries (member_id, ministry_name)
            VALUES (%s, %s)
        """

        params = (
            signup.first_name,
            signup.last_name,
            signup.email,
            signup.phone,
            signup.address,
            signup.city,
            signup.state,
            signup.zip_code,
            signup.birth_date,
            signup.membership_type.value,
            signup.attendance_preference,
            signup.baptized,
            signup.salvation,
            signup.emergency_contact_name,
            signup.emergency_contact_phone,
            signup.prayer_request,
            signup.how_did_you_hear,
        )

        try:
            with self._pool.connection(timeout=self._acquire_timeout) as conn:
                try:
                    with conn.cursor() as cursor:
                        cursor.execute(insert_member_sql, params)
                        member_id = cursor.fetchone()[0]

                        if signup.ministries:
                            cursor.executemany(
                                insert_ministry_sql,
                                [(member_id, name) for name in signup.ministries],
                            )
                    conn.commit()
                except BaseException:
                    conn.rollback()
                    raise
        except psycopg.errors.UniqueViolation as e:
            logger.info("Signup rejected, email already registered")
            raise DuplicateEmail(signup.email) from e
        except psycopg.Error as e:
            logger.exception("Signup transaction rolled back")
            raise SignupFailed("Signup transaction rolled back") from e

        return member_id

    def list_members(self) -> list[MemberRecord]:
        """Return every member with ministries, newest first."""
        sql = f"""
            SELECT {_MEMBER_COLUMNS}
            FROM members m
            LEFT JOIN member_ministries mm ON m.id = mm.member_id
            GROUP BY m.id
            ORDER BY m.created_at DESC, m.id DESC
        """

        try:
            with self._pool.connection(timeout=self._acquire_timeout) as conn, conn.cursor(
                row_factory=class_row(MemberRecord)
            ) as cursor:
                cursor.execute(sql)
                return cursor.fetchall()
        except psycopg.Error as e:
            logger.exception("Fetching members failed")
            raise MemberQueryFailed("Failed to fetch members") from e

    def get_member(self, member_id: int) -> MemberRecord:
        """Return one member with ministries, or raise MemberNotFound."""
        sql = f"""
            SELECT {_MEMBER_COLUMNS}
            FROM members m
            LEFT JOIN member_ministries mm ON m.id = mm.member_id
            WHERE m.id = %s
            GROUP BY m.id
        """

        try:
            with self._pool.connection(timeout=self._acquire_timeout) as conn, conn.cursor(
                row_factory=class_row(MemberRecord)
            ) as cursor:
                cursor.execute(sql, (member_id,))
                row = cursor.fetchone()
        except psycopg.Error as e:
            logger.exception("Fetching member %s failed", member_id)
            raise MemberQueryFailed("Failed to fetch member") from e

        if row is None:
            raise MemberNotFound(member_id)
        return row


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
