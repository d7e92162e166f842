"""Admin moderation"""

from .service import AdminService, PlatformStats

__all__ = ["AdminService", "PlatformStats"]
