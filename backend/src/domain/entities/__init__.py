"""Domain Entities - Core business objects"""

from .user import User
from .actor import Actor, ApplicantActor, EmployerActor, AdminActor
from .job import Job
from .application import Application, ApplicationAction
from .offer import Offer
from .interview import Interview
from .verification_request import VerificationRequest
from .application_transition import ApplicationTransition
from .job_history import JobHistoryEntry

__all__ = [
    "User",
    "Actor",
    "ApplicantActor",
    "EmployerActor",
    "AdminActor",
    "Job",
    "Application",
    "ApplicationAction",
    "Offer",
    "Interview",
    "VerificationRequest",
    "ApplicationTransition",
    "JobHistoryEntry",
]
