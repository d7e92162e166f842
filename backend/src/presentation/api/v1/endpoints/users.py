"""
Profile Endpoints
"""
from fastapi import APIRouter, Depends

from domain.entities import Actor
from application.services.users import ProfileService
from presentation.api.v1.container import get_profile_service
from presentation.api.v1.dependencies import RequestTransaction, get_current_actor, get_transaction
from presentation.api.v1.schemas.auth import UserResponse
from presentation.api.v1.schemas.users import ProfileUpdateRequest


router = APIRouter(prefix="/users", tags=["users"])


@router.patch("/me", response_model=UserResponse)
async def update_my_profile(
    body: ProfileUpdateRequest,
    actor: Actor = Depends(get_current_actor),
    transaction: RequestTransaction = Depends(get_transaction),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Edit your own profile. Only fields present in the body change."""
    user = await profile_service.update_profile(actor, body.model_dump(exclude_unset=True))
    await transaction.commit()
    return UserResponse.from_entity(user)
