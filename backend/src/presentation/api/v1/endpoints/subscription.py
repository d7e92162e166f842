"""
Subscription Endpoints
"""
from fastapi import APIRouter, Depends

from domain.entities import Actor
from application.services.jobs import JobService
from presentation.api.v1.container import get_job_service
from presentation.api.v1.dependencies import get_current_actor
from presentation.api.v1.schemas.admin import SubscriptionStatusResponse


router = APIRouter(prefix="/subscription", tags=["subscription"])


@router.get("/status", response_model=SubscriptionStatusResponse)
async def subscription_status(
    actor: Actor = Depends(get_current_actor),
    job_service: JobService = Depends(get_job_service)
):
    """Effective tier, job limit and how many active jobs count against it"""
    allowance = await job_service.posting_allowance(actor)
    return SubscriptionStatusResponse(
        tier=allowance.tier,
        job_limit=allowance.job_limit,
        active_jobs=allowance.active_jobs,
        remaining=allowance.remaining,
        can_post=allowance.can_post,
        subscription_end_date=allowance.subscription_end_date,
    )
