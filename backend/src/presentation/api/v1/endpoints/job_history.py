"""
Job History Endpoints
/api/job-history routes
"""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from domain.entities import Actor
from application.services.users import JobHistoryService
from presentation.api.v1.container import get_job_history_service
from presentation.api.v1.dependencies import RequestTransaction, get_current_actor, get_transaction
from presentation.api.v1.schemas.users import JobHistoryCreateRequest, JobHistoryResponse


router = APIRouter(tags=["users"])


@router.get("/job-history", response_model=List[JobHistoryResponse])
async def list_job_history(
    actor: Actor = Depends(get_current_actor),
    job_history_service: JobHistoryService = Depends(get_job_history_service)
):
    return await job_history_service.list_entries(actor)


@router.post("/job-history", response_model=JobHistoryResponse, status_code=status.HTTP_201_CREATED)
async def add_job_history(
    body: JobHistoryCreateRequest,
    actor: Actor = Depends(get_current_actor),
    transaction: RequestTransaction = Depends(get_transaction),
    job_history_service: JobHistoryService = Depends(get_job_history_service)
):
    """Add a position to your work history"""
    entry = await job_history_service.add_entry(actor, body.model_dump())
    await transaction.commit()
    return entry


@router.delete("/job-history/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job_history(
    entry_id: int,
    actor: Actor = Depends(get_current_actor),
    transaction: RequestTransaction = Depends(get_transaction),
    job_history_service: JobHistoryService = Depends(get_job_history_service)
):
    await job_history_service.delete_entry(actor, entry_id)
    await transaction.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
