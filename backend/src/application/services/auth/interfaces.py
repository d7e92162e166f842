"""
Authentication Service Interfaces
Abstract base classes for authentication services
"""
from abc import ABC, abstractmethod
from typing import Optional, Tuple
from uuid import UUID

from domain.entities import User
from domain.enums import UserRole


class IPasswordHasher(ABC):
    """Password hashing interface"""

    @abstractmethod
    def hash_password(self, password: str) -> str:
        """Hash a plain password"""
        pass

    @abstractmethod
    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify password against hash"""
        pass


class IJwtService(ABC):
    """JWT token service interface"""

    @abstractmethod
    def create_access_token(self, user_id: UUID, role: UserRole) -> str:
        """Create access token"""
        pass

    @abstractmethod
    def verify_token(self, token: str) -> dict:
        """
        Verify and decode token

        Raises:
            AuthenticationException: If the token is malformed, tampered or expired
        """
        pass


class IAuthService(ABC):
    """Authentication service interface"""

    @abstractmethod
    async def register(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        role: UserRole = UserRole.APPLICANT,
        age: Optional[int] = None,
    ) -> Tuple[User, str]:
        """
        Register a new user

        Returns:
            Tuple of (User, access token)
        """
        pass

    @abstractmethod
    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Authenticate user

        Returns:
            Tuple of (User, access token)
        """
        pass

    @abstractmethod
    async def verify_access_token(self, token: str) -> Optional[User]:
        """Resolve a bearer token to its user"""
        pass

    @abstractmethod
    async def change_password(self, user: User, current_password: str, new_password: str) -> User:
        """
        Replace the user's password

        Raises:
            ValidationException: If the current password does not match
        """
        pass

    @abstractmethod
    async def send_email_verification(self, user: User) -> bool:
        """
        Issue a fresh e-mail verification code

        Returns:
            False when the address is already verified and nothing was sent
        """
        pass

    @abstractmethod
    async def verify_email(self, user: User, code: str) -> User:
        """Confirm the e-mail address with the last code sent"""
        pass
