"""Best-effort user notifications"""

from .interfaces import IEmailSender
from .dispatcher import NotificationDispatcher

__all__ = ["IEmailSender", "NotificationDispatcher"]
