"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from functools import lru_cache

from fastapi import Depends, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresMemberRepository
from src.adapters.smtp.console import ConsoleEmailSender
from src.adapters.smtp.smtp import SmtpEmailSender
from src.config.settings import Settings, get_settings
from src.domain.ports import EmailSender
from src.domain.signup import SignupService


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(
    request: Request, settings: Settings = Depends(get_settings)
) -> PostgresMemberRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresMemberRepository(pool, acquire_timeout=settings.acquire_timeout_seconds)


@lru_cache
def get_email_sender() -> EmailSender:
    """
    Get the email sender (singleton).

    SMTP when credentials are configured, console logging otherwise.
    """
    settings = get_settings()
    if not settings.email_configured:
        return ConsoleEmailSender()
    return SmtpEmailSender(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.email_user,
        password=settings.email_password,
        staff_email=settings.staff_email,
        timeout=settings.email_timeout_seconds,
    )


def get_signup_service(
    repository: PostgresMemberRepository = Depends(get_repository),
    email_sender: EmailSender = Depends(get_email_sender),
) -> SignupService:
    """
    Create signup service with injected dependencies.

    Wires together the repository and email sender for the domain service.
    """
    return SignupService(repository=repository, email_sender=email_sender)
