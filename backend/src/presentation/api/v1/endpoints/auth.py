"""
Authentication Endpoints
/api/auth/* routes
"""
from fastapi import APIRouter, Depends, Request, status
from loguru import logger

from core.config import settings
from domain.entities import User
from application.services.auth.interfaces import IAuthService
from presentation.api.v1.container import get_auth_service
from presentation.api.v1.dependencies import RequestTransaction, get_current_user, get_transaction, limiter
from presentation.api.v1.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    ChangePasswordRequest,
    VerifyEmailRequest,
    MessageResponse,
    UserResponse,
    AuthResponse,
)


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def register(
    request: Request,
    body: RegisterRequest,
    transaction: RequestTransaction = Depends(get_transaction),
    auth_service: IAuthService = Depends(get_auth_service)
):
    """
    Create an applicant or employer account.

    **Response:** the new user (never the password hash) and a bearer token
    """
    user, token = await auth_service.register(
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        role=body.role,
        age=body.age,
    )
    await transaction.commit()
    logger.info(f"Account created via API: {user.id}")
    return AuthResponse(user=UserResponse.from_entity(user), token=token)


@router.post("/login", response_model=AuthResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login(
    request: Request,
    body: LoginRequest,
    auth_service: IAuthService = Depends(get_auth_service)
):
    """Exchange e-mail and password for a bearer token"""
    user, token = await auth_service.login(body.email, body.password)
    return AuthResponse(user=UserResponse.from_entity(user), token=token)


@router.get("/user", response_model=UserResponse)
async def current_user(user: User = Depends(get_current_user)):
    return UserResponse.from_entity(user)


@router.post("/change-password", response_model=MessageResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def change_password(
    request: Request,
    body: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    transaction: RequestTransaction = Depends(get_transaction),
    auth_service: IAuthService = Depends(get_auth_service)
):
    """Replace your password. The current one must be supplied."""
    await auth_service.change_password(user, body.current_password, body.new_password)
    await transaction.commit()
    return MessageResponse(message="Password changed successfully")


@router.post("/send-verification", response_model=MessageResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def send_verification(
    request: Request,
    user: User = Depends(get_current_user),
    transaction: RequestTransaction = Depends(get_transaction),
    auth_service: IAuthService = Depends(get_auth_service)
):
    """E-mail a 6-digit code that confirms your address"""
    if not await auth_service.send_email_verification(user):
        return MessageResponse(message="Email already verified")
    await transaction.commit()
    return MessageResponse(message="Verification code sent")


@router.post("/verify-email", response_model=UserResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def verify_email(
    request: Request,
    body: VerifyEmailRequest,
    user: User = Depends(get_current_user),
    transaction: RequestTransaction = Depends(get_transaction),
    auth_service: IAuthService = Depends(get_auth_service)
):
    verified = await auth_service.verify_email(user, body.code)
    await transaction.commit()
    return UserResponse.from_entity(verified)
