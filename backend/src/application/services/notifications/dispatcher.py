"""
Notification Dispatcher
Best-effort e-mails sent after lifecycle transitions.

Every public method returns normally whatever happens to the delivery:
failures are retried with exponential backoff, then logged and dropped.

A deferred dispatcher only queues the e-mails. They go out on flush(),
which the HTTP layer runs after the request's transaction has committed.
"""
import asyncio
from html import escape
from typing import List, Optional, Tuple

from loguru import logger

from core.config import settings
from core.exceptions import NotificationDeliveryException
from domain.entities import User, Job, Application, Offer, Interview, VerificationRequest
from domain.value_objects import VerificationStatus
from .interfaces import IEmailSender


EMAIL_TEMPLATE = """
<div style="font-family: Arial, sans-serif; max-width: 480px; margin: 0 auto; padding: 32px 24px;">
  <h2 style="color: #d4a017; margin-bottom: 8px;">Iseya</h2>
  <p>Hi {name},</p>
  {body}
  <hr style="border: none; border-top: 1px solid #eee; margin: 24px 0;" />
  <p style="color: #999; font-size: 12px;">Iseya - Nigeria's Job Marketplace</p>
</div>
"""


class NotificationDispatcher:
    """Turns marketplace events into e-mails"""

    def __init__(
        self,
        email_sender: IEmailSender,
        enabled: Optional[bool] = None,
        max_attempts: Optional[int] = None,
        backoff_seconds: Optional[float] = None,
        deferred: bool = False,
    ):
        self.email_sender = email_sender
        self.enabled = settings.NOTIFICATIONS_ENABLED if enabled is None else enabled
        self.max_attempts = max_attempts or settings.NOTIFICATION_MAX_ATTEMPTS
        self.backoff_seconds = settings.NOTIFICATION_BACKOFF_SECONDS if backoff_seconds is None else backoff_seconds
        self.deferred = deferred
        self._outbox: List[Tuple[str, str, str, str]] = []

    @property
    def pending(self) -> int:
        """Number of queued e-mails"""
        return len(self._outbox)

    async def flush(self) -> int:
        """Send everything queued so far. Returns how many went out."""
        queued, self._outbox = self._outbox, []
        sent = 0
        for event, to, subject, html in queued:
            if await self._deliver(event, to, subject, html):
                sent += 1
        return sent

    async def application_created(self, employer: User, applicant: User, job: Job) -> bool:
        return await self._dispatch(
            "application_created",
            employer,
            f"New application for {job.title}",
            f"<p>{escape(applicant.full_name)} applied to your job <b>{escape(job.title)}</b>.</p>",
        )

    async def application_status_changed(self, applicant: User, job: Job, application: Application) -> bool:
        return await self._dispatch(
            "application_status_changed",
            applicant,
            f"Your application for {job.title} was updated",
            f"<p>Your application for <b>{escape(job.title)}</b> is now "
            f"<b>{application.status.value}</b>.</p>",
        )

    async def application_cancelled(self, employer: User, applicant: User, job: Job) -> bool:
        return await self._dispatch(
            "application_cancelled",
            employer,
            f"Application withdrawn for {job.title}",
            f"<p>{escape(applicant.full_name)} withdrew their application to "
            f"<b>{escape(job.title)}</b>.</p>",
        )

    async def offer_sent(self, applicant: User, job: Job, offer: Offer) -> bool:
        return await self._dispatch(
            "offer_sent",
            applicant,
            f"You received an offer for {job.title}",
            f"<p>You have a new offer for <b>{escape(job.title)}</b>: "
            f"&#8358;{offer.salary:,}.</p><p>Sign in to accept or decline it.</p>",
        )

    async def offer_responded(self, employer: User, applicant: User, job: Job, offer: Offer) -> bool:
        return await self._dispatch(
            "offer_responded",
            employer,
            f"Offer {offer.status.value} for {job.title}",
            f"<p>{escape(applicant.full_name)} has <b>{offer.status.value}</b> your offer "
            f"for <b>{escape(job.title)}</b>.</p>",
        )

    async def interview_scheduled(self, applicant: User, job: Job, interview: Interview) -> bool:
        where = interview.location or interview.meeting_link or interview.interview_type.value
        return await self._dispatch(
            "interview_scheduled",
            applicant,
            f"Interview scheduled for {job.title}",
            f"<p>An interview for <b>{escape(job.title)}</b> is scheduled on "
            f"{interview.interview_date.isoformat()} at {escape(interview.interview_time)} "
            f"({escape(where)}).</p>",
        )

    async def interview_cancelled(self, applicant: User, job: Job, interview: Interview) -> bool:
        return await self._dispatch(
            "interview_cancelled",
            applicant,
            f"Interview cancelled for {job.title}",
            f"<p>Your interview for <b>{escape(job.title)}</b> on "
            f"{interview.interview_date.isoformat()} has been cancelled.</p>",
        )

    async def verification_decided(self, user: User, request: VerificationRequest) -> bool:
        if request.status == VerificationStatus.APPROVED:
            body = "<p>Your identity has been verified. You now carry the verified badge.</p>"
        else:
            body = "<p>Your verification request was not approved.</p>"
            if request.admin_notes:
                body += f"<p>Reviewer notes: {escape(request.admin_notes)}</p>"
            body += "<p>You can submit a new request at any time.</p>"

        return await self._dispatch("verification_decided", user, "Verification update", body)

    async def email_verification_code(self, user: User, code: str) -> bool:
        return await self._dispatch(
            "email_verification_code",
            user,
            "Verify your email",
            f"<p>Your email verification code is:</p>"
            f"<p style=\"font-size: 28px; font-weight: bold; letter-spacing: 6px;\">{code}</p>"
            f"<p>This code expires in {settings.EMAIL_VERIFICATION_CODE_TTL_MINUTES} minutes.</p>",
        )

    async def _dispatch(self, event: str, recipient: User, subject: str, body: str) -> bool:
        """Send now, or queue when deferred. Returns whether the e-mail went out or was queued."""
        if not self.enabled:
            logger.debug(f"Notifications disabled, dropping {event} for {recipient.email}")
            return False

        to = str(recipient.email)
        subject = f"{subject} - Iseya"
        html = EMAIL_TEMPLATE.format(name=escape(recipient.first_name), body=body)

        if self.deferred:
            self._outbox.append((event, to, subject, html))
            logger.debug(f"Notification {event} for {to} queued")
            return True

        return await self._deliver(event, to, subject, html)

    async def _deliver(self, event: str, to: str, subject: str, html: str) -> bool:
        """Send with retries. Returns whether the e-mail went out."""
        for attempt in range(1, self.max_attempts + 1):
            try:
                await self.email_sender.send_email(to, subject, html)
                logger.info(f"Notification {event} sent to {to}")
                return True

            except NotificationDeliveryException as e:
                if not e.retryable or attempt == self.max_attempts:
                    logger.error(
                        f"Notification {event} to {to} failed after {attempt} attempts: {str(e)}"
                    )
                    return False

                delay = self.backoff_seconds * (2 ** (attempt - 1))
                logger.warning(
                    f"Notification {event} attempt {attempt}/{self.max_attempts} failed ({str(e)}), "
                    f"retrying in {delay:.1f}s"
                )
                await asyncio.sleep(delay)

            except Exception as e:
                # Unknown sender errors are not retried
                logger.exception(f"Notification {event} to {to} crashed: {str(e)}")
                return False

        return False
