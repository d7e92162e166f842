"""
Authentication Request/Response Schemas
Pydantic v2 models with strict validation
"""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field

from domain.entities import User
from domain.enums import UserRole, SubscriptionTier
from .common import CamelModel


class RegisterRequest(CamelModel):
    """Sign-up form"""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = UserRole.APPLICANT
    age: Optional[int] = Field(None, ge=1, le=129)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=128)


class VerifyEmailRequest(CamelModel):
    code: str = Field(..., min_length=6, max_length=6)


class MessageResponse(CamelModel):
    message: str


class UserResponse(CamelModel):
    """Public view of a user (never includes the password hash)"""

    id: UUID
    email: str
    first_name: str
    last_name: str
    role: UserRole
    is_verified: bool
    email_verified: bool
    subscription_tier: SubscriptionTier
    subscription_end_date: Optional[datetime] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None
    cv_url: Optional[str] = None
    profile_image_url: Optional[str] = None
    expected_salary_min: Optional[int] = None
    expected_salary_max: Optional[int] = None
    company_name: Optional[str] = None
    company_description: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=str(user.email),
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
            is_verified=user.is_verified,
            email_verified=user.email_verified,
            subscription_tier=user.subscription_tier,
            subscription_end_date=user.subscription_end_date,
            age=user.age,
            gender=user.gender,
            bio=user.bio,
            location=user.location,
            phone=user.phone,
            cv_url=user.cv_url,
            profile_image_url=user.profile_image_url,
            expected_salary_min=user.expected_salary_min,
            expected_salary_max=user.expected_salary_max,
            company_name=user.company_name,
            company_description=user.company_description,
            created_at=user.created_at,
        )


class AuthResponse(CamelModel):
    """User plus bearer token"""

    user: UserResponse
    token: str
    token_type: str = "bearer"
