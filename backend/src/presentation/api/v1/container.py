"""
Dependency Injection Container
Manages service and repository instances
"""
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import Depends

from core.database import get_db
from application.repositories.interfaces import (
    IUserRepository,
    IJobRepository,
    IApplicationRepository,
    IOfferRepository,
    IInterviewRepository,
    IVerificationRepository,
    ITransitionLogRepository,
    IJobHistoryRepository,
)
from application.services.auth.interfaces import IAuthService, IJwtService, IPasswordHasher
from application.services.notifications import IEmailSender, NotificationDispatcher
from application.services.applications import ApplicationLifecycleService
from application.services.jobs import JobService
from application.services.verification import VerificationService
from application.services.admin import AdminService
from application.services.users import ProfileService, JobHistoryService
from infrastructure.persistence.repositories.user import SQLAlchemyUserRepository
from infrastructure.persistence.repositories.job import SQLAlchemyJobRepository
from infrastructure.persistence.repositories.application import SQLAlchemyApplicationRepository
from infrastructure.persistence.repositories.offer import SQLAlchemyOfferRepository
from infrastructure.persistence.repositories.interview import SQLAlchemyInterviewRepository
from infrastructure.persistence.repositories.verification_request import SQLAlchemyVerificationRepository
from infrastructure.persistence.repositories.application_transition import SQLAlchemyTransitionLogRepository
from infrastructure.persistence.repositories.job_history import SQLAlchemyJobHistoryRepository
from infrastructure.security.password_hasher import BcryptPasswordHasher
from infrastructure.security.jwt_service import JwtService
from infrastructure.external.resend_email_service import ResendEmailService


# Singleton instances
_password_hasher: IPasswordHasher | None = None
_jwt_service: IJwtService | None = None
_email_sender: IEmailSender | None = None


def get_password_hasher() -> IPasswordHasher:
    """Get password hasher instance (singleton)"""
    global _password_hasher
    if _password_hasher is None:
        _password_hasher = BcryptPasswordHasher()
    return _password_hasher


def get_jwt_service() -> IJwtService:
    """Get JWT service instance (singleton)"""
    global _jwt_service
    if _jwt_service is None:
        _jwt_service = JwtService()
    return _jwt_service


def get_email_sender() -> IEmailSender:
    """Get e-mail transport (singleton)"""
    global _email_sender
    if _email_sender is None:
        _email_sender = ResendEmailService()
    return _email_sender


def get_notification_dispatcher() -> NotificationDispatcher:
    """Get notification dispatcher (per-request, queues until the transaction commits)"""
    return NotificationDispatcher(get_email_sender(), deferred=True)


# Repositories (per-request, sharing the request's session)

def get_user_repository(session: AsyncSession = Depends(get_db)) -> IUserRepository:
    return SQLAlchemyUserRepository(session)


def get_job_repository(session: AsyncSession = Depends(get_db)) -> IJobRepository:
    return SQLAlchemyJobRepository(session)


def get_application_repository(session: AsyncSession = Depends(get_db)) -> IApplicationRepository:
    return SQLAlchemyApplicationRepository(session)


def get_offer_repository(session: AsyncSession = Depends(get_db)) -> IOfferRepository:
    return SQLAlchemyOfferRepository(session)


def get_interview_repository(session: AsyncSession = Depends(get_db)) -> IInterviewRepository:
    return SQLAlchemyInterviewRepository(session)


def get_verification_repository(session: AsyncSession = Depends(get_db)) -> IVerificationRepository:
    return SQLAlchemyVerificationRepository(session)


def get_transition_repository(session: AsyncSession = Depends(get_db)) -> ITransitionLogRepository:
    return SQLAlchemyTransitionLogRepository(session)


def get_job_history_repository(session: AsyncSession = Depends(get_db)) -> IJobHistoryRepository:
    return SQLAlchemyJobHistoryRepository(session)


# Services (per-request)

def get_auth_service(
    user_repo: IUserRepository = Depends(get_user_repository),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
    jwt_service: IJwtService = Depends(get_jwt_service),
    notifier: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> IAuthService:
    """Get auth service instance (per-request)"""
    from application.services.auth.impl import AuthService
    return AuthService(user_repo, password_hasher, jwt_service, notifier)


def get_profile_service(
    user_repo: IUserRepository = Depends(get_user_repository),
) -> ProfileService:
    return ProfileService(user_repo)


def get_job_history_service(
    job_history_repo: IJobHistoryRepository = Depends(get_job_history_repository),
) -> JobHistoryService:
    return JobHistoryService(job_history_repo)


def get_job_service(
    job_repo: IJobRepository = Depends(get_job_repository),
) -> JobService:
    return JobService(job_repo)


def get_lifecycle_service(
    application_repo: IApplicationRepository = Depends(get_application_repository),
    job_repo: IJobRepository = Depends(get_job_repository),
    user_repo: IUserRepository = Depends(get_user_repository),
    offer_repo: IOfferRepository = Depends(get_offer_repository),
    interview_repo: IInterviewRepository = Depends(get_interview_repository),
    transition_repo: ITransitionLogRepository = Depends(get_transition_repository),
    notifier: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> ApplicationLifecycleService:
    return ApplicationLifecycleService(
        application_repo,
        job_repo,
        user_repo,
        offer_repo,
        interview_repo,
        transition_repo,
        notifier,
    )


def get_verification_service(
    verification_repo: IVerificationRepository = Depends(get_verification_repository),
    user_repo: IUserRepository = Depends(get_user_repository),
    notifier: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> VerificationService:
    return VerificationService(verification_repo, user_repo, notifier)


def get_admin_service(
    user_repo: IUserRepository = Depends(get_user_repository),
    job_repo: IJobRepository = Depends(get_job_repository),
    application_repo: IApplicationRepository = Depends(get_application_repository),
) -> AdminService:
    return AdminService(user_repo, job_repo, application_repo)
