"""
Status Enums
Lifecycle states for applications, offers, interviews and verification
"""
from enum import Enum


class ApplicationStatus(str, Enum):
    """Job application status"""
    PENDING = "pending"
    OFFERED = "offered"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class OfferStatus(str, Enum):
    """Offer status"""
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    WITHDRAWN = "withdrawn"


class InterviewStatus(str, Enum):
    """Interview status"""
    SCHEDULED = "scheduled"
    CANCELLED = "cancelled"


class VerificationStatus(str, Enum):
    """Identity verification request status"""
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"
