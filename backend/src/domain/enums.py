"""
Domain Enums
Business enumerations for the marketplace
"""
from enum import Enum
from typing import Dict, Optional


class UserRole(str, Enum):
    """Account role"""
    APPLICANT = "applicant"
    EMPLOYER = "employer"
    ADMIN = "admin"


class SubscriptionTier(str, Enum):
    """Employer subscription plans"""
    FREE = "free"
    STANDARD = "standard"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"


# Active job postings allowed per plan (None = unlimited)
JOB_POSTING_LIMITS: Dict[SubscriptionTier, Optional[int]] = {
    SubscriptionTier.FREE: 0,
    SubscriptionTier.STANDARD: 3,
    SubscriptionTier.PREMIUM: 10,
    SubscriptionTier.ENTERPRISE: None,
}


def get_job_posting_limit(tier: SubscriptionTier) -> Optional[int]:
    """Get the active job limit for a plan"""
    return JOB_POSTING_LIMITS.get(tier, 0)


class JobType(str, Enum):
    """Job type classifications"""
    FULL_TIME = "Full-time"
    PART_TIME = "Part-time"
    CONTRACT = "Contract"


class Gender(str, Enum):
    """Gender, also used as a job audience constraint"""
    ANY = "Any"
    MALE = "Male"
    FEMALE = "Female"


class InterviewType(str, Enum):
    """How an interview takes place"""
    IN_PERSON = "in-person"
    PHONE = "phone"
    VIDEO = "video"
