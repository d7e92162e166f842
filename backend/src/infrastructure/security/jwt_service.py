"""
JWT Service Implementation
HS256 access tokens signed with the configured secret
"""
from datetime import datetime, timedelta, timezone
from typing import Dict
from uuid import UUID

from jose import jwt, JWTError
from loguru import logger

from core.config import settings
from core.exceptions import AuthenticationException
from domain.enums import UserRole
from application.services.auth.interfaces import IJwtService


class JwtService(IJwtService):
    """JWT service using a symmetric key"""

    def __init__(self, secret_key: str = None, algorithm: str = None):
        self.secret_key = secret_key or settings.JWT_SECRET_KEY
        self.algorithm = algorithm or settings.JWT_ALGORITHM

        if settings.is_production and self.secret_key == "your-secret-key-change-in-production":
            logger.warning("JWT_SECRET_KEY is the default value. Set a real secret in production!")

    def create_access_token(self, user_id: UUID, role: UserRole) -> str:
        """Create access token"""
        now = datetime.now(timezone.utc)
        expire = now + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)

        payload = {
            "sub": str(user_id),
            "role": role.value,
            "exp": expire,
            "iat": now,
            "type": "access",
        }

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Dict:
        """Verify and decode token"""
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])

        except JWTError as e:
            logger.warning(f"JWT verification failed: {str(e)}")
            raise AuthenticationException("Invalid or expired token")
