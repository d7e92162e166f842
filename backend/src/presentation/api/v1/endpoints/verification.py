"""
Verification Endpoints
"""
from fastapi import APIRouter, Depends, status

from domain.entities import Actor
from application.services.verification import VerificationService
from presentation.api.v1.container import get_verification_service
from presentation.api.v1.dependencies import RequestTransaction, get_current_actor, get_transaction
from presentation.api.v1.schemas.verification import (
    VerificationSubmitRequest,
    VerificationRequestResponse,
    VerificationStatusResponse,
)


router = APIRouter(prefix="/verification", tags=["verification"])


@router.post("/submit", response_model=VerificationRequestResponse, status_code=status.HTTP_201_CREATED)
async def submit_verification(
    body: VerificationSubmitRequest,
    actor: Actor = Depends(get_current_actor),
    transaction: RequestTransaction = Depends(get_transaction),
    verification_service: VerificationService = Depends(get_verification_service)
):
    request = await verification_service.submit(
        actor,
        id_type=body.id_type,
        id_number=body.id_number,
        id_document_url=body.id_document_url,
        selfie_url=body.selfie_url,
    )
    await transaction.commit()
    return request


@router.get("/status", response_model=VerificationStatusResponse)
async def verification_status(
    actor: Actor = Depends(get_current_actor),
    verification_service: VerificationService = Depends(get_verification_service)
):
    """Current verified flag and the most recent request, if any"""
    latest = await verification_service.latest_for(actor)
    return VerificationStatusResponse(
        is_verified=actor.is_verified,
        request=VerificationRequestResponse.model_validate(latest) if latest else None,
    )
