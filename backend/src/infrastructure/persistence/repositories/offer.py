"""
Offer Repository Implementation
"""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import Offer
from domain.value_objects import OfferStatus
from application.repositories.interfaces import IOfferRepository
from infrastructure.persistence.models.offer import OfferModel
from core.exceptions import RepositoryException


class SQLAlchemyOfferRepository(IOfferRepository):
    """SQLAlchemy implementation of offer repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, offer: Offer) -> Offer:
        try:
            model = OfferModel(
                application_id=offer.application_id,
                job_id=offer.job_id,
                employer_id=offer.employer_id,
                applicant_id=offer.applicant_id,
                salary=offer.salary,
                compensation=offer.compensation,
                note=offer.note,
                status=offer.status.value,
            )
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)

            return self._to_entity(model)

        except Exception as e:
            logger.error(f"Failed to create offer for application {offer.application_id}: {str(e)}")
            raise RepositoryException(f"Failed to create offer: {str(e)}")

    async def get_by_id(self, offer_id: int) -> Optional[Offer]:
        return await self._first(select(OfferModel).where(OfferModel.id == offer_id))

    async def get_latest_for_application(self, application_id: int) -> Optional[Offer]:
        return await self._first(
            select(OfferModel)
            .where(OfferModel.application_id == application_id)
            .order_by(OfferModel.created_at.desc(), OfferModel.id.desc())
            .limit(1)
        )

    async def get_active_for_application(self, application_id: int) -> Optional[Offer]:
        return await self._first(
            select(OfferModel)
            .where(
                OfferModel.application_id == application_id,
                OfferModel.status.in_([OfferStatus.PENDING.value, OfferStatus.ACCEPTED.value]),
            )
            .order_by(OfferModel.id.desc())
            .limit(1)
        )

    async def update(self, offer: Offer) -> Offer:
        """Offers only ever change status"""
        try:
            result = await self.session.execute(
                select(OfferModel).where(OfferModel.id == offer.id)
            )
            model = result.scalar_one_or_none()

            if not model:
                raise RepositoryException(f"Offer not found: {offer.id}")

            model.status = offer.status.value

            await self.session.flush()
            await self.session.refresh(model)

            return self._to_entity(model)

        except RepositoryException:
            raise
        except Exception as e:
            logger.error(f"Failed to update offer {offer.id}: {str(e)}")
            raise RepositoryException(f"Failed to update offer: {str(e)}")

    async def _first(self, query) -> Optional[Offer]:
        try:
            result = await self.session.execute(query)
            model = result.scalar_one_or_none()
            return self._to_entity(model) if model else None

        except Exception as e:
            logger.error(f"Failed to get offer: {str(e)}")
            raise RepositoryException(f"Failed to get offer: {str(e)}")

    def _to_entity(self, model: OfferModel) -> Offer:
        return Offer(
            id=model.id,
            application_id=model.application_id,
            job_id=model.job_id,
            employer_id=model.employer_id,
            applicant_id=model.applicant_id,
            salary=model.salary,
            compensation=model.compensation,
            note=model.note,
            status=OfferStatus(model.status),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
