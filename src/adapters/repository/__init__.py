"""Repository adapters - Database implementations."""

from .postgres import PostgresMemberRepository, run_migrations

__all__ = ["PostgresMemberRepository", "run_migrations"]
