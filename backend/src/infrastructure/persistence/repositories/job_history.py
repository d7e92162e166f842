"""
Job History Repository Implementation
"""
from typing import Optional, List
from uuid import UUID

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import JobHistoryEntry
from application.repositories.interfaces import IJobHistoryRepository
from infrastructure.persistence.models.job_history import JobHistoryModel
from core.exceptions import RepositoryException


class SQLAlchemyJobHistoryRepository(IJobHistoryRepository):
    """SQLAlchemy implementation of job history repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: JobHistoryEntry) -> JobHistoryEntry:
        try:
            model = JobHistoryModel(
                user_id=entry.user_id,
                job_title=entry.job_title,
                company=entry.company,
                start_date=entry.start_date,
                end_date=entry.end_date,
                is_current=entry.is_current,
                description=entry.description,
            )
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)

            return self._to_entity(model)

        except Exception as e:
            logger.error(f"Failed to create job history entry for {entry.user_id}: {str(e)}")
            raise RepositoryException(f"Failed to create job history entry: {str(e)}")

    async def get_by_id(self, entry_id: int) -> Optional[JobHistoryEntry]:
        try:
            result = await self.session.execute(
                select(JobHistoryModel).where(JobHistoryModel.id == entry_id)
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to get job history entry {entry_id}: {str(e)}")
            raise RepositoryException(f"Failed to get job history entry: {str(e)}")

    async def list_for_user(self, user_id: UUID) -> List[JobHistoryEntry]:
        try:
            result = await self.session.execute(
                select(JobHistoryModel)
                .where(JobHistoryModel.user_id == user_id)
                .order_by(JobHistoryModel.created_at.desc(), JobHistoryModel.id.desc())
            )
            return [self._to_entity(model) for model in result.scalars().all()]

        except Exception as e:
            logger.error(f"Failed to list job history for {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to list job history: {str(e)}")

    async def delete(self, entry_id: int) -> bool:
        try:
            result = await self.session.execute(
                delete(JobHistoryModel).where(JobHistoryModel.id == entry_id)
            )
            return result.rowcount > 0

        except Exception as e:
            logger.error(f"Failed to delete job history entry {entry_id}: {str(e)}")
            raise RepositoryException(f"Failed to delete job history entry: {str(e)}")

    def _to_entity(self, model: JobHistoryModel) -> JobHistoryEntry:
        return JobHistoryEntry(
            id=model.id,
            user_id=model.user_id,
            job_title=model.job_title,
            company=model.company,
            start_date=model.start_date,
            end_date=model.end_date,
            is_current=model.is_current,
            description=model.description,
            created_at=model.created_at,
        )
