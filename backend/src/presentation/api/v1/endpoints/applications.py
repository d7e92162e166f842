"""
Application Endpoints
Apply, review, cancel and audit applications
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from domain.entities import Actor
from application.services.applications import ApplicationLifecycleService
from presentation.api.v1.container import get_lifecycle_service
from presentation.api.v1.dependencies import RequestTransaction, get_current_actor, get_transaction
from presentation.api.v1.schemas.applications import (
    ApplyRequest,
    StatusUpdateRequest,
    CancelRequest,
    ApplicationResponse,
    ApplicationDetailResponse,
    TransitionResponse,
)


router = APIRouter(tags=["applications"])


@router.post("/applications", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def apply(
    body: ApplyRequest,
    actor: Actor = Depends(get_current_actor),
    transaction: RequestTransaction = Depends(get_transaction),
    lifecycle: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    """
    Apply to a job.

    **Errors:**
    - 403: not an applicant, or below the minimum age
    - 404: job does not exist
    - 409: job closed, or an open application already exists
    """
    application = await lifecycle.apply(actor, body.job_id, body.message)
    await transaction.commit()
    return application


@router.get("/jobs/{job_id}/applications", response_model=List[ApplicationDetailResponse])
async def list_job_applications(
    job_id: int,
    actor: Actor = Depends(get_current_actor),
    lifecycle: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    details = await lifecycle.list_for_job(actor, job_id)
    return [ApplicationDetailResponse.from_details(d) for d in details]


@router.get("/my-applications", response_model=List[ApplicationDetailResponse])
async def list_my_applications(
    actor: Actor = Depends(get_current_actor),
    lifecycle: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    details = await lifecycle.list_for_applicant(actor)
    return [ApplicationDetailResponse.from_details(d) for d in details]


@router.get("/applications/{application_id}", response_model=ApplicationDetailResponse)
async def get_application(
    application_id: int,
    actor: Actor = Depends(get_current_actor),
    lifecycle: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    details = await lifecycle.get_application(actor, application_id)
    return ApplicationDetailResponse.from_details(details)


@router.patch("/applications/{application_id}", response_model=ApplicationResponse)
async def update_application_status(
    application_id: int,
    body: StatusUpdateRequest,
    actor: Actor = Depends(get_current_actor),
    transaction: RequestTransaction = Depends(get_transaction),
    lifecycle: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    """Employer rejects an application or resets it to pending"""
    application = await lifecycle.update_status(actor, application_id, body.status, body.reason)
    await transaction.commit()
    return application


@router.post("/applications/{application_id}/cancel", response_model=ApplicationResponse)
async def cancel_application(
    application_id: int,
    body: Optional[CancelRequest] = None,
    actor: Actor = Depends(get_current_actor),
    transaction: RequestTransaction = Depends(get_transaction),
    lifecycle: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    application = await lifecycle.cancel(actor, application_id, body.reason if body else None)
    await transaction.commit()
    return application


@router.get("/applications/{application_id}/history", response_model=List[TransitionResponse])
async def application_history(
    application_id: int,
    actor: Actor = Depends(get_current_actor),
    lifecycle: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    """Every status change of the application, oldest first"""
    return await lifecycle.history(actor, application_id)
