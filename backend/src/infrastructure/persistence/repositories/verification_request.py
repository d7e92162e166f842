"""
Verification Request Repository Implementation
"""
from typing import Optional, List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import VerificationRequest
from domain.value_objects import VerificationStatus
from application.repositories.interfaces import IVerificationRepository
from infrastructure.persistence.models.verification_request import VerificationRequestModel
from core.exceptions import RepositoryException


class SQLAlchemyVerificationRepository(IVerificationRepository):
    """SQLAlchemy implementation of verification request repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, request: VerificationRequest) -> VerificationRequest:
        try:
            model = VerificationRequestModel(
                user_id=request.user_id,
                id_type=request.id_type,
                id_number=request.id_number,
                id_document_url=request.id_document_url,
                selfie_url=request.selfie_url,
                status=request.status.value,
            )
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)

            return self._to_entity(model)

        except Exception as e:
            logger.error(f"Failed to create verification request for {request.user_id}: {str(e)}")
            raise RepositoryException(f"Failed to create verification request: {str(e)}")

    async def get_by_id(self, request_id: int) -> Optional[VerificationRequest]:
        try:
            result = await self.session.execute(
                select(VerificationRequestModel).where(VerificationRequestModel.id == request_id)
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to get verification request {request_id}: {str(e)}")
            raise RepositoryException(f"Failed to get verification request: {str(e)}")

    async def get_latest_for_user(self, user_id: UUID) -> Optional[VerificationRequest]:
        try:
            result = await self.session.execute(
                select(VerificationRequestModel)
                .where(VerificationRequestModel.user_id == user_id)
                .order_by(VerificationRequestModel.created_at.desc(), VerificationRequestModel.id.desc())
                .limit(1)
            )
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to get verification request for {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to get verification request: {str(e)}")

    async def list_all(self, status: Optional[VerificationStatus] = None) -> List[VerificationRequest]:
        try:
            query = select(VerificationRequestModel)
            if status:
                query = query.where(VerificationRequestModel.status == status.value)
            query = query.order_by(VerificationRequestModel.created_at.desc(), VerificationRequestModel.id.desc())

            result = await self.session.execute(query)
            return [self._to_entity(model) for model in result.scalars().all()]

        except Exception as e:
            logger.error(f"Failed to list verification requests: {str(e)}")
            raise RepositoryException(f"Failed to list verification requests: {str(e)}")

    async def update(self, request: VerificationRequest) -> VerificationRequest:
        try:
            result = await self.session.execute(
                select(VerificationRequestModel).where(VerificationRequestModel.id == request.id)
            )
            model = result.scalar_one_or_none()

            if not model:
                raise RepositoryException(f"Verification request not found: {request.id}")

            model.status = request.status.value
            model.admin_notes = request.admin_notes
            model.reviewed_by = request.reviewed_by

            await self.session.flush()
            await self.session.refresh(model)

            return self._to_entity(model)

        except RepositoryException:
            raise
        except Exception as e:
            logger.error(f"Failed to update verification request {request.id}: {str(e)}")
            raise RepositoryException(f"Failed to update verification request: {str(e)}")

    def _to_entity(self, model: VerificationRequestModel) -> VerificationRequest:
        return VerificationRequest(
            id=model.id,
            user_id=model.user_id,
            id_type=model.id_type,
            id_number=model.id_number,
            id_document_url=model.id_document_url,
            selfie_url=model.selfie_url,
            status=VerificationStatus(model.status),
            admin_notes=model.admin_notes,
            reviewed_by=model.reviewed_by,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
