"""
API Endpoints Package
Exports routers used by main app
"""
from .auth import router as auth_router
from .users import router as users_router
from .job_history import router as job_history_router
from .jobs import router as jobs_router
from .applications import router as applications_router
from .offers import router as offers_router
from .interviews import router as interviews_router
from .verification import router as verification_router
from .subscription import router as subscription_router
from .admin import router as admin_router

__all__ = [
    "auth_router",
    "users_router",
    "job_history_router",
    "jobs_router",
    "applications_router",
    "offers_router",
    "interviews_router",
    "verification_router",
    "subscription_router",
    "admin_router",
]
