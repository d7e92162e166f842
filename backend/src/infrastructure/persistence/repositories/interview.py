"""
Interview Repository Implementation
"""
from typing import Optional, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import Interview
from domain.enums import InterviewType
from domain.value_objects import InterviewStatus
from application.repositories.interfaces import IInterviewRepository
from infrastructure.persistence.models.interview import InterviewModel
from core.exceptions import RepositoryException


class SQLAlchemyInterviewRepository(IInterviewRepository):
    """SQLAlchemy implementation of interview repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, interview: Interview) -> Interview:
        try:
            model = InterviewModel(
                application_id=interview.application_id,
                job_id=interview.job_id,
                employer_id=interview.employer_id,
                applicant_id=interview.applicant_id,
                interview_date=interview.interview_date,
                interview_time=interview.interview_time,
                interview_type=interview.interview_type.value,
                location=interview.location,
                meeting_link=interview.meeting_link,
                notes=interview.notes,
                status=interview.status.value,
            )
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)

            return self._to_entity(model)

        except Exception as e:
            logger.error(f"Failed to create interview for application {interview.application_id}: {str(e)}")
            raise RepositoryException(f"Failed to create interview: {str(e)}")

    async def get_by_id(self, interview_id: int) -> Optional[Interview]:
        try:
            result = await self.session.execute(
                select(InterviewModel).where(InterviewModel.id == interview_id)
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to get interview {interview_id}: {str(e)}")
            raise RepositoryException(f"Failed to get interview: {str(e)}")

    async def list_for_application(self, application_id: int) -> List[Interview]:
        try:
            result = await self.session.execute(
                select(InterviewModel)
                .where(InterviewModel.application_id == application_id)
                .order_by(InterviewModel.interview_date, InterviewModel.interview_time)
            )
            return [self._to_entity(model) for model in result.scalars().all()]

        except Exception as e:
            logger.error(f"Failed to list interviews for application {application_id}: {str(e)}")
            raise RepositoryException(f"Failed to list interviews: {str(e)}")

    async def get_scheduled_for_application(self, application_id: int) -> Optional[Interview]:
        try:
            result = await self.session.execute(
                select(InterviewModel)
                .where(
                    InterviewModel.application_id == application_id,
                    InterviewModel.status == InterviewStatus.SCHEDULED.value,
                )
                .limit(1)
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to get scheduled interview for application {application_id}: {str(e)}")
            raise RepositoryException(f"Failed to get interview: {str(e)}")

    async def update(self, interview: Interview) -> Interview:
        try:
            result = await self.session.execute(
                select(InterviewModel).where(InterviewModel.id == interview.id)
            )
            model = result.scalar_one_or_none()

            if not model:
                raise RepositoryException(f"Interview not found: {interview.id}")

            model.status = interview.status.value

            await self.session.flush()
            await self.session.refresh(model)

            return self._to_entity(model)

        except RepositoryException:
            raise
        except Exception as e:
            logger.error(f"Failed to update interview {interview.id}: {str(e)}")
            raise RepositoryException(f"Failed to update interview: {str(e)}")

    def _to_entity(self, model: InterviewModel) -> Interview:
        return Interview(
            id=model.id,
            application_id=model.application_id,
            job_id=model.job_id,
            employer_id=model.employer_id,
            applicant_id=model.applicant_id,
            interview_date=model.interview_date,
            interview_time=model.interview_time,
            interview_type=InterviewType(model.interview_type),
            location=model.location,
            meeting_link=model.meeting_link,
            notes=model.notes,
            status=InterviewStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
