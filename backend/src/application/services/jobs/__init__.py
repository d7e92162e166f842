"""
Jobs Service Package
"""
from .job_service import JobService, PostingAllowance

__all__ = ["JobService", "PostingAllowance"]
