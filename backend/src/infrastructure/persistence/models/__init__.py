"""ORM Models Package"""

from .user import UserModel
from .job import JobModel
from .application import ApplicationModel
from .offer import OfferModel
from .interview import InterviewModel
from .verification_request import VerificationRequestModel
from .application_transition import ApplicationTransitionModel
from .job_history import JobHistoryModel

__all__ = [
    "UserModel",
    "JobModel",
    "ApplicationModel",
    "OfferModel",
    "InterviewModel",
    "VerificationRequestModel",
    "ApplicationTransitionModel",
    "JobHistoryModel",
]
