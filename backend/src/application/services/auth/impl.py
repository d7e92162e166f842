"""
Authentication Service Implementation
Concrete implementation of IAuthService
"""
import secrets
from dataclasses import replace
from typing import Tuple, Optional
from uuid import UUID, uuid4
from datetime import datetime, timedelta, timezone

from loguru import logger

from core.config import settings
from domain.entities import User
from domain.enums import UserRole
from domain.value_objects import Email
from core.exceptions import (
    AuthenticationException,
    AuthorizationException,
    DuplicateResourceException,
    ValidationException,
)
from application.repositories.interfaces import IUserRepository
from application.services.notifications import NotificationDispatcher
from .interfaces import IAuthService, IPasswordHasher, IJwtService


MIN_PASSWORD_LENGTH = 8

# Roles a visitor may pick for themselves
SELF_SERVICE_ROLES = {UserRole.APPLICANT, UserRole.EMPLOYER}


class AuthService(IAuthService):
    """Authentication service implementation"""

    def __init__(
        self,
        user_repository: IUserRepository,
        password_hasher: IPasswordHasher,
        jwt_service: IJwtService,
        notifier: Optional[NotificationDispatcher] = None,
    ):
        self.user_repo = user_repository
        self.password_hasher = password_hasher
        self.jwt_service = jwt_service
        self.notifier = notifier

    async def register(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        role: UserRole = UserRole.APPLICANT,
        age: Optional[int] = None,
    ) -> Tuple[User, str]:
        """Register a new user"""

        logger.info(f"Registering new user: {email}")

        email_vo = Email(email)

        if role not in SELF_SERVICE_ROLES:
            raise AuthorizationException(f"Cannot self-register as {role.value}")

        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationException("password", f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        # Check if user already exists
        if await self.user_repo.exists_by_email(str(email_vo)):
            raise DuplicateResourceException("User", "email", str(email_vo))

        now = datetime.now(timezone.utc)
        user = User(
            id=uuid4(),
            email=email_vo,
            password_hash=self.password_hasher.hash_password(password),
            first_name=first_name.strip() if first_name else first_name,
            last_name=last_name.strip() if last_name else last_name,
            role=role,
            age=age,
            created_at=now,
            updated_at=now,
        )
        if self.notifier is not None:
            user = replace(user, **self._new_verification_code(now))

        created_user = await self.user_repo.create(user)

        logger.info(f"User registered successfully: {email_vo} ({role.value})")

        if self.notifier is not None:
            await self.notifier.email_verification_code(created_user, created_user.email_verification_code)

        return created_user, self.jwt_service.create_access_token(created_user.id, created_user.role)

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """Authenticate user"""

        logger.info(f"Login attempt: {email}")

        user = await self.user_repo.get_by_email(email)
        if not user:
            logger.warning(f"Login failed: User not found - {email}")
            raise AuthenticationException("Invalid email or password")

        if not user.password_hash or not self.password_hasher.verify_password(password, user.password_hash):
            logger.warning(f"Login failed: Invalid password - {email}")
            raise AuthenticationException("Invalid email or password")

        logger.info(f"User logged in successfully: {email}")

        return user, self.jwt_service.create_access_token(user.id, user.role)

    async def verify_access_token(self, token: str) -> Optional[User]:
        """Resolve a bearer token to its user"""
        payload = self.jwt_service.verify_token(token)

        if payload.get("type") != "access":
            raise AuthenticationException("Invalid token type")

        try:
            user_id = UUID(payload["sub"])
        except (KeyError, ValueError):
            raise AuthenticationException("Invalid token subject")

        return await self.user_repo.get_by_id(user_id)

    async def change_password(self, user: User, current_password: str, new_password: str) -> User:
        """Replace the password after checking the current one"""
        if not user.password_hash or not self.password_hasher.verify_password(current_password, user.password_hash):
            logger.warning(f"Password change refused for {user.id}: wrong current password")
            raise ValidationException("currentPassword", "Current password is incorrect")

        if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationException("newPassword", f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        updated = await self.user_repo.update(
            replace(user, password_hash=self.password_hasher.hash_password(new_password))
        )
        logger.info(f"Password changed for {user.id}")
        return updated

    async def send_email_verification(self, user: User) -> bool:
        """Store a fresh code on the user and e-mail it"""
        if user.email_verified:
            return False

        updated = await self.user_repo.update(
            replace(user, **self._new_verification_code(datetime.now(timezone.utc)))
        )
        if self.notifier is not None:
            await self.notifier.email_verification_code(updated, updated.email_verification_code)

        logger.info(f"Email verification code issued for {user.id}")
        return True

    async def verify_email(self, user: User, code: str) -> User:
        """Mark the address verified when the code matches and has not expired"""
        if user.email_verified:
            return user

        if not user.email_verification_code or user.email_verification_expiry is None:
            raise ValidationException("code", "No verification code sent")

        expiry = user.email_verification_expiry
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)
        if expiry < datetime.now(timezone.utc):
            raise ValidationException("code", "Verification code has expired")

        if not secrets.compare_digest(user.email_verification_code, (code or "").strip()):
            logger.warning(f"Wrong email verification code for {user.id}")
            raise ValidationException("code", "Invalid verification code")

        verified = await self.user_repo.update(
            replace(
                user,
                email_verified=True,
                email_verification_code=None,
                email_verification_expiry=None,
            )
        )
        logger.info(f"Email verified for {user.id}")
        return verified

    def _new_verification_code(self, now: datetime) -> dict:
        return {
            "email_verification_code": f"{secrets.randbelow(1_000_000):06d}",
            "email_verification_expiry": now + timedelta(minutes=settings.EMAIL_VERIFICATION_CODE_TTL_MINUTES),
        }
