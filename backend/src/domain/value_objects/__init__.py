"""Value Objects - Immutable objects defined by their attributes"""

from .email import Email
from .salary_range import SalaryRange
from .statuses import ApplicationStatus, OfferStatus, InterviewStatus, VerificationStatus
__all__ = [
    "Email",
    "SalaryRange",
    "ApplicationStatus",
    "OfferStatus",
    "InterviewStatus",
    "VerificationStatus",
]
