"""
Offer Endpoints
"""
from fastapi import APIRouter, Depends, status

from domain.entities import Actor
from application.services.applications import ApplicationLifecycleService
from presentation.api.v1.container import get_lifecycle_service
from presentation.api.v1.dependencies import RequestTransaction, get_current_actor, get_transaction
from presentation.api.v1.schemas.applications import (
    ApplicationResponse,
    OfferCreateRequest,
    OfferRespondRequest,
    OfferResponse,
    OfferDecisionResponse,
)


router = APIRouter(tags=["offers"])


@router.post(
    "/applications/{application_id}/offers",
    response_model=OfferResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_offer(
    application_id: int,
    body: OfferCreateRequest,
    actor: Actor = Depends(get_current_actor),
    transaction: RequestTransaction = Depends(get_transaction),
    lifecycle: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    """
    Make an offer on a pending or offered application.

    A pending offer already on the application is withdrawn.
    """
    offer = await lifecycle.send_offer(actor, application_id, body.salary, body.compensation, body.note)
    await transaction.commit()
    return offer


@router.get("/applications/{application_id}/offer", response_model=OfferResponse)
async def get_offer(
    application_id: int,
    actor: Actor = Depends(get_current_actor),
    lifecycle: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    return await lifecycle.get_offer(actor, application_id)


@router.post("/offers/{offer_id}/respond", response_model=OfferDecisionResponse)
async def respond_to_offer(
    offer_id: int,
    body: OfferRespondRequest,
    actor: Actor = Depends(get_current_actor),
    transaction: RequestTransaction = Depends(get_transaction),
    lifecycle: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    offer, application = await lifecycle.respond_to_offer(actor, offer_id, body.accept)
    await transaction.commit()
    return OfferDecisionResponse(
        offer=OfferResponse.model_validate(offer),
        application=ApplicationResponse.model_validate(application),
    )
