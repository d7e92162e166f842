"""
FastAPI Dependencies
Current user, authentication, rate limiting, request transaction
"""
from typing import Optional

from fastapi import BackgroundTasks, Depends, HTTPException, status, Header
from sqlalchemy.ext.asyncio import AsyncSession
from slowapi import Limiter
from slowapi.util import get_remote_address

from core.config import settings
from core.database import get_db, commit_session
from core.exceptions import AuthenticationException
from domain.entities import User, Actor
from application.services.auth.interfaces import IAuthService
from application.services.notifications import NotificationDispatcher
from .container import get_auth_service, get_notification_dispatcher


# Rate limiter
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    authorization: Optional[str] = Header(None),
    auth_service: IAuthService = Depends(get_auth_service)
) -> User:
    """
    Get current authenticated user from JWT token

    Usage:
        @router.get("/protected")
        async def protected_route(user: User = Depends(get_current_user)):
            ...
    """
    if not authorization:
        raise _unauthorized("Missing authorization header")

    # Extract token from "Bearer <token>"
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise _unauthorized("Invalid authorization header format")

    try:
        user = await auth_service.verify_access_token(parts[1])
    except AuthenticationException:
        raise _unauthorized("Invalid or expired token")

    if not user:
        raise _unauthorized("Invalid or expired token")

    return user


async def get_current_actor(
    current_user: User = Depends(get_current_user)
) -> Actor:
    """Role-tagged view of the current user"""
    return Actor.from_user(current_user)


class RequestTransaction:
    """
    The request's unit of work

    Writing endpoints call commit() before returning. A failed commit is
    raised to the client as a 500, and the e-mails queued by the services
    are only handed to a background task once the commit went through.
    """

    def __init__(
        self,
        session: AsyncSession,
        notifier: NotificationDispatcher,
        background_tasks: BackgroundTasks,
    ):
        self.session = session
        self.notifier = notifier
        self.background_tasks = background_tasks

    async def commit(self) -> None:
        await commit_session(self.session)
        if self.notifier.pending:
            self.background_tasks.add_task(self.notifier.flush)


def get_transaction(
    background_tasks: BackgroundTasks,
    session: AsyncSession = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> RequestTransaction:
    return RequestTransaction(session, notifier, background_tasks)
