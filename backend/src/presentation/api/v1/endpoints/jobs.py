"""
Job Endpoints
Public listing plus employer job management
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from domain.entities import Actor
from domain.enums import JobType
from application.repositories.interfaces import JobSearchCriteria
from application.services.jobs import JobService
from presentation.api.v1.container import get_job_service
from presentation.api.v1.dependencies import RequestTransaction, get_current_actor, get_transaction
from presentation.api.v1.schemas.jobs import JobCreateRequest, JobUpdateRequest, JobResponse


router = APIRouter(tags=["jobs"])


@router.get("/jobs", response_model=List[JobResponse])
async def list_jobs(
    category: Optional[str] = Query(None),
    location: Optional[str] = Query(None, description="Case-insensitive substring"),
    job_type: Optional[JobType] = Query(None, alias="jobType"),
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    max_salary: Optional[int] = Query(None, alias="maxSalary", ge=0),
    job_service: JobService = Depends(get_job_service)
):
    """
    Active jobs, newest first.

    All filters are optional and combine with AND.
    """
    criteria = JobSearchCriteria(
        category=category,
        location=location,
        job_type=job_type,
        min_salary=min_salary,
        max_salary=max_salary,
    )
    return await job_service.list_jobs(criteria)


@router.get("/jobs/{job_id}", response_model=JobResponse)
async def get_job(job_id: int, job_service: JobService = Depends(get_job_service)):
    return await job_service.get_job(job_id)


@router.post("/jobs", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    body: JobCreateRequest,
    actor: Actor = Depends(get_current_actor),
    transaction: RequestTransaction = Depends(get_transaction),
    job_service: JobService = Depends(get_job_service)
):
    """Post a job. Counts against the employer's subscription limit."""
    job = await job_service.create_job(actor, body.model_dump())
    await transaction.commit()
    return job


@router.patch("/jobs/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: int,
    body: JobUpdateRequest,
    actor: Actor = Depends(get_current_actor),
    transaction: RequestTransaction = Depends(get_transaction),
    job_service: JobService = Depends(get_job_service)
):
    job = await job_service.update_job(actor, job_id, body.model_dump(exclude_unset=True))
    await transaction.commit()
    return job


@router.delete("/jobs/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job(
    job_id: int,
    actor: Actor = Depends(get_current_actor),
    transaction: RequestTransaction = Depends(get_transaction),
    job_service: JobService = Depends(get_job_service)
):
    await job_service.delete_job(actor, job_id)
    await transaction.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/employer/jobs", response_model=List[JobResponse])
async def list_my_jobs(
    actor: Actor = Depends(get_current_actor),
    job_service: JobService = Depends(get_job_service)
):
    """Jobs posted by the current employer, active or not"""
    return await job_service.list_employer_jobs(actor)
