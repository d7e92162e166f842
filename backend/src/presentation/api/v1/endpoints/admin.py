"""
Admin Endpoints
/api/admin/* moderation routes. Every route requires an admin.
"""
from dataclasses import asdict
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from domain.entities import Actor
from domain.enums import UserRole
from domain.value_objects import VerificationStatus
from application.services.admin import AdminService
from application.services.verification import VerificationService
from presentation.api.v1.container import get_admin_service, get_verification_service
from presentation.api.v1.dependencies import RequestTransaction, get_current_actor, get_transaction
from presentation.api.v1.schemas.admin import (
    StatsResponse,
    AdminUserUpdateRequest,
    SubscriptionUpdateRequest,
)
from presentation.api.v1.schemas.applications import ApplicationResponse
from presentation.api.v1.schemas.auth import UserResponse
from presentation.api.v1.schemas.jobs import JobResponse
from presentation.api.v1.schemas.verification import (
    VerificationRequestResponse,
    VerificationDecisionRequest,
)


router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats", response_model=StatsResponse)
async def platform_stats(
    actor: Actor = Depends(get_current_actor),
    admin_service: AdminService = Depends(get_admin_service)
):
    stats = await admin_service.stats(actor)
    return StatsResponse(**asdict(stats))


@router.get("/users", response_model=List[UserResponse])
async def list_users(
    role: Optional[UserRole] = Query(None),
    search: Optional[str] = Query(None, description="Name or e-mail substring"),
    actor: Actor = Depends(get_current_actor),
    admin_service: AdminService = Depends(get_admin_service)
):
    users = await admin_service.list_users(actor, role=role, search=search)
    return [UserResponse.from_entity(u) for u in users]


@router.patch("/users/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    body: AdminUserUpdateRequest,
    actor: Actor = Depends(get_current_actor),
    transaction: RequestTransaction = Depends(get_transaction),
    admin_service: AdminService = Depends(get_admin_service)
):
    """Change a user's role or verified flag"""
    user = await admin_service.update_user(actor, user_id, role=body.role, is_verified=body.is_verified)
    await transaction.commit()
    return UserResponse.from_entity(user)


@router.patch("/subscriptions/{user_id}", response_model=UserResponse)
async def update_subscription(
    user_id: UUID,
    body: SubscriptionUpdateRequest,
    actor: Actor = Depends(get_current_actor),
    transaction: RequestTransaction = Depends(get_transaction),
    admin_service: AdminService = Depends(get_admin_service)
):
    user = await admin_service.update_subscription(
        actor, user_id, body.subscription_status, body.subscription_end_date
    )
    await transaction.commit()
    return UserResponse.from_entity(user)


@router.get("/jobs", response_model=List[JobResponse])
async def list_all_jobs(
    actor: Actor = Depends(get_current_actor),
    admin_service: AdminService = Depends(get_admin_service)
):
    return await admin_service.list_jobs(actor)


@router.get("/applications", response_model=List[ApplicationResponse])
async def list_all_applications(
    actor: Actor = Depends(get_current_actor),
    admin_service: AdminService = Depends(get_admin_service)
):
    return await admin_service.list_applications(actor)


@router.get("/verification-requests", response_model=List[VerificationRequestResponse])
async def list_verification_requests(
    status: Optional[VerificationStatus] = Query(None),
    actor: Actor = Depends(get_current_actor),
    verification_service: VerificationService = Depends(get_verification_service)
):
    return await verification_service.list_requests(actor, status)


@router.patch("/verification-requests/{request_id}", response_model=VerificationRequestResponse)
async def decide_verification_request(
    request_id: int,
    body: VerificationDecisionRequest,
    actor: Actor = Depends(get_current_actor),
    transaction: RequestTransaction = Depends(get_transaction),
    verification_service: VerificationService = Depends(get_verification_service)
):
    """Move a request to under_review, approved or rejected. Approval verifies the user."""
    request = await verification_service.decide(actor, request_id, body.status, body.admin_notes)
    await transaction.commit()
    return request
