"""
Admin and Subscription Schemas
"""
from datetime import datetime
from typing import Optional

from domain.enums import UserRole, SubscriptionTier
from .common import CamelModel


class StatsResponse(CamelModel):
    total_users: int
    total_jobs: int
    total_applications: int
    total_employers: int
    total_applicants: int
    premium_employers: int
    active_jobs: int
    pending_applications: int


class AdminUserUpdateRequest(CamelModel):
    role: Optional[UserRole] = None
    is_verified: Optional[bool] = None


class SubscriptionUpdateRequest(CamelModel):
    subscription_status: SubscriptionTier
    subscription_end_date: Optional[datetime] = None


class SubscriptionStatusResponse(CamelModel):
    tier: SubscriptionTier
    job_limit: Optional[int] = None
    active_jobs: int
    remaining: Optional[int] = None
    can_post: bool
    subscription_end_date: Optional[datetime] = None
