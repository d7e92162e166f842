"""
Job Repository Implementation
SQLAlchemy-based job posting repository
"""
from typing import Optional, List
from uuid import UUID

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import Job
from domain.enums import JobType, Gender
from application.repositories.interfaces import IJobRepository, JobSearchCriteria
from infrastructure.persistence.models.job import JobModel
from infrastructure.persistence.models.application import ApplicationModel
from infrastructure.persistence.models.application_transition import ApplicationTransitionModel
from infrastructure.persistence.models.offer import OfferModel
from infrastructure.persistence.models.interview import InterviewModel
from core.exceptions import RepositoryException


class SQLAlchemyJobRepository(IJobRepository):
    """SQLAlchemy implementation of job repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, job: Job) -> Job:
        """Create new job"""
        try:
            model = self._to_model(job)
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)

            logger.info(f"Created job {model.id} for employer {job.employer_id}")
            return self._to_entity(model)

        except Exception as e:
            logger.error(f"Failed to create job '{job.title}': {str(e)}")
            raise RepositoryException(f"Failed to create job: {str(e)}")

    async def get_by_id(self, job_id: int) -> Optional[Job]:
        """Get job by ID"""
        try:
            result = await self.session.execute(
                select(JobModel).where(JobModel.id == job_id)
            )
            model = result.scalar_one_or_none()

            if model:
                return self._to_entity(model)
            return None

        except Exception as e:
            logger.error(f"Failed to get job by ID {job_id}: {str(e)}")
            raise RepositoryException(f"Failed to get job: {str(e)}")

    async def list_active(self, criteria: JobSearchCriteria) -> List[Job]:
        """Active jobs matching all given filters, newest first"""
        try:
            conditions = [JobModel.is_active.is_(True)]

            if criteria.category:
                conditions.append(JobModel.category == criteria.category)
            if criteria.location:
                conditions.append(JobModel.location.ilike(f"%{criteria.location}%"))
            if criteria.job_type:
                conditions.append(JobModel.job_type == criteria.job_type.value)
            if criteria.min_salary is not None:
                conditions.append(JobModel.salary_min >= criteria.min_salary)
            if criteria.max_salary is not None:
                conditions.append(JobModel.salary_max <= criteria.max_salary)

            result = await self.session.execute(
                select(JobModel)
                .where(*conditions)
                .order_by(JobModel.created_at.desc(), JobModel.id.desc())
            )
            return [self._to_entity(model) for model in result.scalars().all()]

        except Exception as e:
            logger.error(f"Failed to list jobs with {criteria}: {str(e)}")
            raise RepositoryException(f"Failed to list jobs: {str(e)}")

    async def list_all(self) -> List[Job]:
        """All jobs, newest first"""
        try:
            result = await self.session.execute(
                select(JobModel).order_by(JobModel.created_at.desc(), JobModel.id.desc())
            )
            return [self._to_entity(model) for model in result.scalars().all()]

        except Exception as e:
            logger.error(f"Failed to list all jobs: {str(e)}")
            raise RepositoryException(f"Failed to list jobs: {str(e)}")

    async def list_by_employer(self, employer_id: UUID) -> List[Job]:
        """Jobs posted by an employer, newest first"""
        try:
            result = await self.session.execute(
                select(JobModel)
                .where(JobModel.employer_id == employer_id)
                .order_by(JobModel.created_at.desc(), JobModel.id.desc())
            )
            return [self._to_entity(model) for model in result.scalars().all()]

        except Exception as e:
            logger.error(f"Failed to list jobs for employer {employer_id}: {str(e)}")
            raise RepositoryException(f"Failed to list employer jobs: {str(e)}")

    async def count_active_by_employer(self, employer_id: UUID) -> int:
        """Number of active jobs an employer has"""
        try:
            result = await self.session.execute(
                select(func.count())
                .select_from(JobModel)
                .where(JobModel.employer_id == employer_id, JobModel.is_active.is_(True))
            )
            return result.scalar_one()

        except Exception as e:
            logger.error(f"Failed to count jobs for employer {employer_id}: {str(e)}")
            raise RepositoryException(f"Failed to count employer jobs: {str(e)}")

    async def count(self, active_only: bool = False) -> int:
        """Count jobs"""
        try:
            query = select(func.count()).select_from(JobModel)
            if active_only:
                query = query.where(JobModel.is_active.is_(True))
            result = await self.session.execute(query)
            return result.scalar_one()

        except Exception as e:
            logger.error(f"Failed to count jobs: {str(e)}")
            raise RepositoryException(f"Failed to count jobs: {str(e)}")

    async def update(self, job: Job) -> Job:
        """Update existing job (owner and creation time never change)"""
        try:
            result = await self.session.execute(
                select(JobModel).where(JobModel.id == job.id)
            )
            model = result.scalar_one_or_none()

            if not model:
                raise RepositoryException(f"Job not found: {job.id}")

            model.title = job.title
            model.description = job.description
            model.category = job.category
            model.job_type = job.job_type.value
            model.location = job.location
            model.salary_min = job.salary_min
            model.salary_max = job.salary_max
            model.wage = job.wage
            model.gender = job.gender.value
            model.age_min = job.age_min
            model.age_max = job.age_max
            model.is_active = job.is_active

            await self.session.flush()
            await self.session.refresh(model)

            return self._to_entity(model)

        except RepositoryException:
            raise
        except Exception as e:
            logger.error(f"Failed to update job {job.id}: {str(e)}")
            raise RepositoryException(f"Failed to update job: {str(e)}")

    async def delete(self, job_id: int) -> bool:
        """Delete job together with its applications, offers, interviews and history"""
        try:
            application_ids = select(ApplicationModel.id).where(ApplicationModel.job_id == job_id)

            await self.session.execute(
                delete(ApplicationTransitionModel).where(
                    ApplicationTransitionModel.application_id.in_(application_ids)
                )
            )
            await self.session.execute(delete(OfferModel).where(OfferModel.job_id == job_id))
            await self.session.execute(delete(InterviewModel).where(InterviewModel.job_id == job_id))
            await self.session.execute(delete(ApplicationModel).where(ApplicationModel.job_id == job_id))
            result = await self.session.execute(delete(JobModel).where(JobModel.id == job_id))

            deleted = result.rowcount > 0
            if deleted:
                logger.info(f"Deleted job {job_id} and its applications")
            return deleted

        except Exception as e:
            logger.error(f"Failed to delete job {job_id}: {str(e)}")
            raise RepositoryException(f"Failed to delete job: {str(e)}")

    def _to_entity(self, model: JobModel) -> Job:
        """Convert ORM model to domain entity"""
        return Job(
            id=model.id,
            employer_id=model.employer_id,
            title=model.title,
            description=model.description,
            category=model.category,
            location=model.location,
            job_type=JobType(model.job_type),
            salary_min=model.salary_min or 0,
            salary_max=model.salary_max or 0,
            wage=model.wage,
            gender=Gender(model.gender),
            age_min=model.age_min,
            age_max=model.age_max,
            is_active=model.is_active,
            created_at=model.created_at,
        )

    def _to_model(self, entity: Job) -> JobModel:
        """Convert domain entity to ORM model"""
        return JobModel(
            employer_id=entity.employer_id,
            title=entity.title,
            description=entity.description,
            category=entity.category,
            location=entity.location,
            job_type=entity.job_type.value,
            salary_min=entity.salary_min,
            salary_max=entity.salary_max,
            wage=entity.wage,
            gender=entity.gender.value,
            age_min=entity.age_min,
            age_max=entity.age_max,
            is_active=entity.is_active,
        )
