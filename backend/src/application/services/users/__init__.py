"""User self-service"""

from .service import ProfileService
from .job_history import JobHistoryService

__all__ = ["ProfileService", "JobHistoryService"]
