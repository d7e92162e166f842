"""
Application Repository Implementation
SQLAlchemy-based job application repository with optimistic locking
"""
from typing import Optional, List
from uuid import UUID

from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import Application
from domain.entities.application import OPEN_STATUSES
from domain.value_objects import ApplicationStatus
from application.repositories.interfaces import IApplicationRepository
from infrastructure.persistence.models.application import ApplicationModel
from core.exceptions import RepositoryException, ConcurrentModificationException


class SQLAlchemyApplicationRepository(IApplicationRepository):
    """SQLAlchemy implementation of application repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, application: Application) -> Application:
        """Create new application"""
        try:
            model = ApplicationModel(
                job_id=application.job_id,
                applicant_id=application.applicant_id,
                status=application.status.value,
                message=application.message,
                version=application.version,
            )
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)

            return self._to_entity(model)

        except Exception as e:
            logger.error(
                f"Failed to create application for job {application.job_id} "
                f"by {application.applicant_id}: {str(e)}"
            )
            raise RepositoryException(f"Failed to create application: {str(e)}")

    async def get_by_id(self, application_id: int) -> Optional[Application]:
        """Get application by ID"""
        try:
            result = await self.session.execute(
                select(ApplicationModel).where(ApplicationModel.id == application_id)
            )
            model = result.scalar_one_or_none()

            if model:
                return self._to_entity(model)
            return None

        except Exception as e:
            logger.error(f"Failed to get application {application_id}: {str(e)}")
            raise RepositoryException(f"Failed to get application: {str(e)}")

    async def list_for_job(self, job_id: int) -> List[Application]:
        """Applications received by a job, newest first"""
        return await self._list(ApplicationModel.job_id == job_id)

    async def list_for_applicant(self, applicant_id: UUID) -> List[Application]:
        """Applications made by an applicant, newest first"""
        return await self._list(ApplicationModel.applicant_id == applicant_id)

    async def list_all(self) -> List[Application]:
        """All applications, newest first"""
        return await self._list()

    async def find_open(self, job_id: int, applicant_id: UUID) -> Optional[Application]:
        """Pending, offered or accepted application of an applicant for a job"""
        try:
            result = await self.session.execute(
                select(ApplicationModel)
                .where(
                    ApplicationModel.job_id == job_id,
                    ApplicationModel.applicant_id == applicant_id,
                    ApplicationModel.status.in_([status.value for status in OPEN_STATUSES]),
                )
                .limit(1)
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to look up open application for job {job_id}: {str(e)}")
            raise RepositoryException(f"Failed to check existing application: {str(e)}")

    async def update_status(self, application: Application, expected_version: int) -> Application:
        """Compare-and-set update of status and version"""
        try:
            result = await self.session.execute(
                update(ApplicationModel)
                .where(
                    ApplicationModel.id == application.id,
                    ApplicationModel.version == expected_version,
                )
                .values(
                    status=application.status.value,
                    version=application.version,
                    updated_at=func.now(),
                )
                .returning(ApplicationModel)
                .execution_options(populate_existing=True)
            )
            model = result.scalar_one_or_none()

            if model is None:
                logger.warning(
                    f"Stale write on application {application.id} (expected version {expected_version})"
                )
                raise ConcurrentModificationException("Application", str(application.id))

            return self._to_entity(model)

        except ConcurrentModificationException:
            raise
        except Exception as e:
            logger.error(f"Failed to update application {application.id}: {str(e)}")
            raise RepositoryException(f"Failed to update application: {str(e)}")

    async def count(self, status: Optional[ApplicationStatus] = None) -> int:
        """Count applications"""
        try:
            query = select(func.count()).select_from(ApplicationModel)
            if status:
                query = query.where(ApplicationModel.status == status.value)
            result = await self.session.execute(query)
            return result.scalar_one()

        except Exception as e:
            logger.error(f"Failed to count applications: {str(e)}")
            raise RepositoryException(f"Failed to count applications: {str(e)}")

    async def _list(self, *conditions) -> List[Application]:
        try:
            result = await self.session.execute(
                select(ApplicationModel)
                .where(*conditions)
                .order_by(ApplicationModel.created_at.desc(), ApplicationModel.id.desc())
            )
            return [self._to_entity(model) for model in result.scalars().all()]

        except Exception as e:
            logger.error(f"Failed to list applications: {str(e)}")
            raise RepositoryException(f"Failed to list applications: {str(e)}")

    def _to_entity(self, model: ApplicationModel) -> Application:
        """Convert ORM model to domain entity"""
        return Application(
            id=model.id,
            job_id=model.job_id,
            applicant_id=model.applicant_id,
            status=ApplicationStatus(model.status),
            message=model.message,
            version=model.version,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
