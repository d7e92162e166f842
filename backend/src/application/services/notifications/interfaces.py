"""
Notification Service Interfaces
"""
from abc import ABC, abstractmethod


class IEmailSender(ABC):
    """Outbound e-mail transport"""

    @abstractmethod
    async def send_email(self, to: str, subject: str, html: str) -> None:
        """
        Deliver one e-mail

        Raises:
            NotificationDeliveryException: If the provider rejected or never received the message
        """
        pass
