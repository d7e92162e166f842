"""
Verification Service
Users submit identity documents; admins review them
"""
from dataclasses import replace
from typing import List, Optional

from loguru import logger

from core.exceptions import BusinessRuleException, ResourceNotFoundException
from domain.entities import Actor, VerificationRequest
from domain.value_objects import VerificationStatus
from application.repositories.interfaces import IUserRepository, IVerificationRepository
from application.services import authorization as guard
from application.services.notifications import NotificationDispatcher


class VerificationService:
    """Verification request use cases"""

    def __init__(
        self,
        verification_repository: IVerificationRepository,
        user_repository: IUserRepository,
        notifier: NotificationDispatcher,
    ):
        self.verification_repo = verification_repository
        self.user_repo = user_repository
        self.notifier = notifier

    async def submit(
        self,
        actor: Actor,
        id_type: str,
        id_number: str,
        id_document_url: Optional[str] = None,
        selfie_url: Optional[str] = None,
    ) -> VerificationRequest:
        """
        Open a verification request

        Raises:
            ValidationException: id_type or id_number missing
            BusinessRuleException: Already verified, or a request is still open
        """
        request = VerificationRequest(
            id=None,
            user_id=actor.id,
            id_type=id_type,
            id_number=id_number,
            id_document_url=id_document_url,
            selfie_url=selfie_url,
        )

        if actor.is_verified:
            raise BusinessRuleException("Your account is already verified")

        latest = await self.verification_repo.get_latest_for_user(actor.id)
        if latest is not None and latest.is_open():
            raise BusinessRuleException("You already have a verification request under review")

        created = await self.verification_repo.create(request)
        logger.info(f"Verification request {created.id} submitted by {actor.id}")
        return created

    async def latest_for(self, actor: Actor) -> Optional[VerificationRequest]:
        return await self.verification_repo.get_latest_for_user(actor.id)

    async def list_requests(
        self, actor: Actor, status: Optional[VerificationStatus] = None
    ) -> List[VerificationRequest]:
        guard.require_admin(actor)
        return await self.verification_repo.list_all(status)

    async def decide(
        self,
        actor: Actor,
        request_id: int,
        status: VerificationStatus,
        admin_notes: Optional[str] = None,
    ) -> VerificationRequest:
        """
        Admin review step

        Approval marks the user verified. Approve/reject notify the user.
        """
        guard.require_admin(actor)

        request = await self.verification_repo.get_by_id(request_id)
        if request is None:
            raise ResourceNotFoundException("VerificationRequest", str(request_id))

        decided = await self.verification_repo.update(request.decide(status, actor.id, admin_notes))

        user = await self.user_repo.get_by_id(request.user_id)
        if user is None:
            raise ResourceNotFoundException("User", str(request.user_id))

        if status == VerificationStatus.APPROVED and not user.is_verified:
            user = await self.user_repo.update(replace(user, is_verified=True))

        logger.info(f"Verification request {request.id} -> {status.value} by admin {actor.id}")

        if status in (VerificationStatus.APPROVED, VerificationStatus.REJECTED):
            await self.notifier.verification_decided(user, decided)

        return decided
