"""
Resend Email Service
Sends transactional e-mail through the Resend HTTP API
"""
from typing import Optional

import httpx
from loguru import logger

from core.config import settings
from core.exceptions import NotificationDeliveryException
from application.services.notifications.interfaces import IEmailSender


class ResendEmailService(IEmailSender):
    """IEmailSender backed by https://resend.com"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        sender: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.RESEND_API_KEY
        self.api_url = api_url or settings.RESEND_API_URL
        self.sender = sender or settings.EMAIL_FROM
        self.timeout = timeout or settings.NOTIFICATION_TIMEOUT_SECONDS

    async def send_email(self, to: str, subject: str, html: str) -> None:
        if not self.api_key:
            raise NotificationDeliveryException("Email service not configured", retryable=False)

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.api_url,
                    json={
                        "from": self.sender,
                        "to": [to],
                        "subject": subject,
                        "html": html,
                    },
                    headers={
                        "Authorization": f"Bearer {self.api_key}",
                        "Content-Type": "application/json",
                    },
                )
        except httpx.HTTPError as e:
            raise NotificationDeliveryException(f"Email request failed: {str(e)}")

        if response.status_code >= 400:
            logger.error(f"Resend rejected email to {to}: {response.status_code} {response.text}")
            # Client errors other than throttling will fail the same way again
            retryable = response.status_code == 429 or response.status_code >= 500
            raise NotificationDeliveryException(
                f"Failed to send email: {response.status_code}", retryable=retryable
            )

        logger.debug(f"Email '{subject}' sent to {to}")
