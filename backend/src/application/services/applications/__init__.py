"""Application lifecycle: applications, offers, interviews"""

from .lifecycle import ApplicationLifecycleService, ApplicationDetails

__all__ = ["ApplicationLifecycleService", "ApplicationDetails"]
