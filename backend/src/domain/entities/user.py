"""
User Domain Entity
Immutable user business object
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from core.exceptions import ValidationException
from ..enums import UserRole, SubscriptionTier, get_job_posting_limit
from ..value_objects import Email


@dataclass(frozen=True)
class User:
    """User domain entity - immutable"""

    id: UUID
    email: Email
    password_hash: Optional[str]
    first_name: str
    last_name: str

    role: UserRole = UserRole.APPLICANT
    is_verified: bool = False
    email_verified: bool = False
    email_verification_code: Optional[str] = None
    email_verification_expiry: Optional[datetime] = None

    # Subscription
    subscription_tier: SubscriptionTier = SubscriptionTier.FREE
    subscription_end_date: Optional[datetime] = None

    # Profile
    age: Optional[int] = None
    gender: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None
    cv_url: Optional[str] = None
    profile_image_url: Optional[str] = None
    expected_salary_min: Optional[int] = None
    expected_salary_max: Optional[int] = None

    # Employer profile
    company_name: Optional[str] = None
    company_description: Optional[str] = None

    # Timestamps
    created_at: datetime = None
    updated_at: datetime = None

    def __post_init__(self):
        """Validate user data"""
        if not self.first_name or len(self.first_name.strip()) == 0:
            raise ValidationException("firstName", "First name cannot be empty")

        if not self.last_name or len(self.last_name.strip()) == 0:
            raise ValidationException("lastName", "Last name cannot be empty")

        if self.age is not None and not (0 < self.age < 130):
            raise ValidationException("age", "Age must be between 1 and 129")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def is_old_enough(self, minimum_age: int) -> bool:
        """Unknown age never passes the age gate"""
        return self.age is not None and self.age >= minimum_age

    def active_tier(self, now: Optional[datetime] = None) -> SubscriptionTier:
        """Paid tiers fall back to free once the subscription end date has passed"""
        if self.subscription_end_date is None:
            return self.subscription_tier

        now = now or datetime.now(timezone.utc)
        end_date = self.subscription_end_date
        if end_date.tzinfo is None:
            end_date = end_date.replace(tzinfo=timezone.utc)
        if end_date < now:
            return SubscriptionTier.FREE
        return self.subscription_tier

    def job_posting_limit(self, now: Optional[datetime] = None) -> Optional[int]:
        """Active job limit for this user (None = unlimited)"""
        if self.role == UserRole.ADMIN:
            return None
        return get_job_posting_limit(self.active_tier(now))

    def __str__(self) -> str:
        return f"User({self.email}, {self.role.value})"
