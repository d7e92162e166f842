"""
Interview Endpoints
"""
from typing import List

from fastapi import APIRouter, Depends, status

from domain.entities import Actor
from application.services.applications import ApplicationLifecycleService
from presentation.api.v1.container import get_lifecycle_service
from presentation.api.v1.dependencies import RequestTransaction, get_current_actor, get_transaction
from presentation.api.v1.schemas.applications import InterviewCreateRequest, InterviewResponse


router = APIRouter(tags=["interviews"])


@router.post(
    "/applications/{application_id}/interviews",
    response_model=InterviewResponse,
    status_code=status.HTTP_201_CREATED,
)
async def schedule_interview(
    application_id: int,
    body: InterviewCreateRequest,
    actor: Actor = Depends(get_current_actor),
    transaction: RequestTransaction = Depends(get_transaction),
    lifecycle: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    """
    Book an interview. In-person interviews need a location, video
    interviews a meeting link. One scheduled interview per application.
    """
    interview = await lifecycle.schedule_interview(
        actor,
        application_id,
        interview_date=body.interview_date,
        interview_time=body.interview_time,
        interview_type=body.interview_type,
        location=body.location,
        meeting_link=body.meeting_link,
        notes=body.notes,
    )
    await transaction.commit()
    return interview


@router.get("/applications/{application_id}/interviews", response_model=List[InterviewResponse])
async def list_interviews(
    application_id: int,
    actor: Actor = Depends(get_current_actor),
    lifecycle: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    return await lifecycle.list_interviews(actor, application_id)


@router.post("/interviews/{interview_id}/cancel", response_model=InterviewResponse)
async def cancel_interview(
    interview_id: int,
    actor: Actor = Depends(get_current_actor),
    transaction: RequestTransaction = Depends(get_transaction),
    lifecycle: ApplicationLifecycleService = Depends(get_lifecycle_service)
):
    interview = await lifecycle.cancel_interview(actor, interview_id)
    await transaction.commit()
    return interview
