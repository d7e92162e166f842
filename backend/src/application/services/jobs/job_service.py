"""
Job Service
Job postings and the subscription limits that govern them
"""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, List, Optional

from loguru import logger

from core.exceptions import JobPostingLimitException, ResourceNotFoundException, ValidationException
from domain.entities import Actor, AdminActor, Job
from domain.enums import SubscriptionTier
from application.repositories.interfaces import IJobRepository, JobSearchCriteria
from application.services import authorization as guard


# Fields an owner may change after posting
EDITABLE_FIELDS = frozenset({
    "title",
    "description",
    "category",
    "job_type",
    "location",
    "salary_min",
    "salary_max",
    "wage",
    "gender",
    "age_min",
    "age_max",
    "is_active",
})

# Columns that cannot be cleared, keyed to the name clients send
REQUIRED_FIELDS = {
    "title": "title",
    "description": "description",
    "category": "category",
    "job_type": "jobType",
    "location": "location",
    "salary_min": "salaryMin",
    "salary_max": "salaryMax",
    "gender": "gender",
    "is_active": "isActive",
}


@dataclass(frozen=True)
class PostingAllowance:
    """Where an employer stands against their plan"""
    tier: SubscriptionTier
    job_limit: Optional[int]
    active_jobs: int
    subscription_end_date: Optional[datetime] = None

    @property
    def can_post(self) -> bool:
        return self.job_limit is None or self.active_jobs < self.job_limit

    @property
    def remaining(self) -> Optional[int]:
        if self.job_limit is None:
            return None
        return max(self.job_limit - self.active_jobs, 0)


class JobService:
    """Job posting use cases"""

    def __init__(self, job_repository: IJobRepository):
        self.job_repo = job_repository

    async def list_jobs(self, criteria: JobSearchCriteria) -> List[Job]:
        """Public listing: active jobs only"""
        return await self.job_repo.list_active(criteria)

    async def get_job(self, job_id: int) -> Job:
        job = await self.job_repo.get_by_id(job_id)
        if job is None:
            raise ResourceNotFoundException("Job", str(job_id))
        return job

    async def list_employer_jobs(self, actor: Actor) -> List[Job]:
        guard.require_job_poster(actor)
        return await self.job_repo.list_by_employer(actor.id)

    async def posting_allowance(self, actor: Actor) -> PostingAllowance:
        user = actor.user
        return PostingAllowance(
            tier=user.active_tier(),
            job_limit=user.job_posting_limit(),
            active_jobs=await self.job_repo.count_active_by_employer(actor.id),
            subscription_end_date=user.subscription_end_date,
        )

    async def create_job(self, actor: Actor, fields: Dict[str, Any]) -> Job:
        """
        Post a new job owned by the actor

        Raises:
            AuthorizationException: Actor is an applicant
            ValidationException: A field is missing or inconsistent
            JobPostingLimitException: The plan's active job limit is reached
        """
        guard.require_job_poster(actor)

        job = Job(
            id=None,
            employer_id=actor.id,
            **{k: v for k, v in fields.items() if k in EDITABLE_FIELDS and k != "is_active"},
        )

        await self._check_posting_limit(actor)

        created = await self.job_repo.create(job)
        logger.info(f"Job {created.id} '{created.title}' posted by {actor.id}")
        return created

    async def update_job(self, actor: Actor, job_id: int, changes: Dict[str, Any]) -> Job:
        """Owner or admin edit. Reactivating a job counts against the plan again."""
        job = await self.get_job(job_id)
        guard.require_job_owner(actor, job)

        for name, value in changes.items():
            if value is None and name in REQUIRED_FIELDS:
                raise ValidationException(REQUIRED_FIELDS[name], f"{REQUIRED_FIELDS[name]} cannot be null")

        updated = replace(job, **{k: v for k, v in changes.items() if k in EDITABLE_FIELDS})

        if updated.is_active and not job.is_active and not isinstance(actor, AdminActor):
            await self._check_posting_limit(actor)

        saved = await self.job_repo.update(updated)
        logger.info(f"Job {job.id} updated by {actor.id}: {sorted(changes)}")
        return saved

    async def delete_job(self, actor: Actor, job_id: int) -> None:
        """Owner or admin delete. Applications and their offers and interviews go with it."""
        job = await self.get_job(job_id)
        guard.require_job_owner(actor, job)

        await self.job_repo.delete(job.id)
        logger.info(f"Job {job.id} deleted by {actor.id}")

    async def _check_posting_limit(self, actor: Actor) -> None:
        if isinstance(actor, AdminActor):
            return

        allowance = await self.posting_allowance(actor)
        if not allowance.can_post:
            logger.warning(
                f"Employer {actor.id} hit the {allowance.tier.value} limit "
                f"({allowance.active_jobs}/{allowance.job_limit})"
            )
            raise JobPostingLimitException(allowance.tier.value, allowance.job_limit)
