"""
Admin Service
Moderation and platform statistics. Every method requires an admin actor.
"""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from loguru import logger

from core.exceptions import ResourceNotFoundException
from domain.entities import Actor, Application, Job, User
from domain.enums import SubscriptionTier, UserRole
from domain.value_objects import ApplicationStatus
from application.repositories.interfaces import (
    IApplicationRepository,
    IJobRepository,
    IUserRepository,
)
from application.services import authorization as guard


PAID_TIERS = (SubscriptionTier.PREMIUM, SubscriptionTier.ENTERPRISE)


@dataclass(frozen=True)
class PlatformStats:
    total_users: int
    total_jobs: int
    total_applications: int
    total_employers: int
    total_applicants: int
    premium_employers: int
    active_jobs: int
    pending_applications: int


class AdminService:
    """Admin dashboard use cases"""

    def __init__(
        self,
        user_repository: IUserRepository,
        job_repository: IJobRepository,
        application_repository: IApplicationRepository,
    ):
        self.user_repo = user_repository
        self.job_repo = job_repository
        self.application_repo = application_repository

    async def stats(self, actor: Actor) -> PlatformStats:
        guard.require_admin(actor)
        return PlatformStats(
            total_users=await self.user_repo.count(),
            total_jobs=await self.job_repo.count(),
            total_applications=await self.application_repo.count(),
            total_employers=await self.user_repo.count(role=UserRole.EMPLOYER),
            total_applicants=await self.user_repo.count(role=UserRole.APPLICANT),
            premium_employers=await self.user_repo.count(role=UserRole.EMPLOYER, tiers=PAID_TIERS),
            active_jobs=await self.job_repo.count(active_only=True),
            pending_applications=await self.application_repo.count(ApplicationStatus.PENDING),
        )

    async def list_users(
        self, actor: Actor, role: Optional[UserRole] = None, search: Optional[str] = None
    ) -> List[User]:
        guard.require_admin(actor)
        return await self.user_repo.list_all(role=role, search=search.strip() if search else None)

    async def update_user(
        self,
        actor: Actor,
        user_id: UUID,
        role: Optional[UserRole] = None,
        is_verified: Optional[bool] = None,
    ) -> User:
        guard.require_admin(actor)
        user = await self._get_user(user_id)

        changes = {}
        if role is not None:
            changes["role"] = role
        if is_verified is not None:
            changes["is_verified"] = is_verified

        if not changes:
            return user

        updated = await self.user_repo.update(replace(user, **changes))
        logger.info(f"Admin {actor.id} updated user {user_id}: {changes}")
        return updated

    async def update_subscription(
        self,
        actor: Actor,
        user_id: UUID,
        tier: SubscriptionTier,
        end_date: Optional[datetime] = None,
    ) -> User:
        guard.require_admin(actor)
        user = await self._get_user(user_id)

        updated = await self.user_repo.update(
            replace(user, subscription_tier=tier, subscription_end_date=end_date)
        )
        logger.info(f"Admin {actor.id} set subscription of {user_id} to {tier.value} until {end_date}")
        return updated

    async def list_jobs(self, actor: Actor) -> List[Job]:
        guard.require_admin(actor)
        return await self.job_repo.list_all()

    async def list_applications(self, actor: Actor) -> List[Application]:
        guard.require_admin(actor)
        return await self.application_repo.list_all()

    async def _get_user(self, user_id: UUID) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("User", str(user_id))
        return user
