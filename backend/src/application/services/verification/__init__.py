"""Identity verification"""

from .service import VerificationService

__all__ = ["VerificationService"]
