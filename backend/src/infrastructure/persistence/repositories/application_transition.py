"""
Application Transition Repository Implementation
"""
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import ApplicationTransition
from domain.value_objects import ApplicationStatus
from application.repositories.interfaces import ITransitionLogRepository
from infrastructure.persistence.models.application_transition import ApplicationTransitionModel
from core.exceptions import RepositoryException


class SQLAlchemyTransitionLogRepository(ITransitionLogRepository):
    """Append-only application history"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def record(self, transition: ApplicationTransition) -> ApplicationTransition:
        try:
            model = ApplicationTransitionModel(
                application_id=transition.application_id,
                actor_id=transition.actor_id,
                from_status=transition.from_status.value if transition.from_status else None,
                to_status=transition.to_status.value,
                reason=transition.reason,
            )
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)

            return self._to_entity(model)

        except Exception as e:
            logger.error(f"Failed to record transition for application {transition.application_id}: {str(e)}")
            raise RepositoryException(f"Failed to record transition: {str(e)}")

    async def list_for_application(self, application_id: int) -> List[ApplicationTransition]:
        try:
            result = await self.session.execute(
                select(ApplicationTransitionModel)
                .where(ApplicationTransitionModel.application_id == application_id)
                .order_by(ApplicationTransitionModel.created_at, ApplicationTransitionModel.id)
            )
            return [self._to_entity(model) for model in result.scalars().all()]

        except Exception as e:
            logger.error(f"Failed to list transitions for application {application_id}: {str(e)}")
            raise RepositoryException(f"Failed to list transitions: {str(e)}")

    def _to_entity(self, model: ApplicationTransitionModel) -> ApplicationTransition:
        return ApplicationTransition(
            id=model.id,
            application_id=model.application_id,
            actor_id=model.actor_id,
            from_status=ApplicationStatus(model.from_status) if model.from_status else None,
            to_status=ApplicationStatus(model.to_status),
            reason=model.reason,
            created_at=model.created_at,
        )
