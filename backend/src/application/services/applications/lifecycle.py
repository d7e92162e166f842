"""
Application Lifecycle Service
Applications, offers and interviews, moved through the status machine in
domain.entities.application.

All writes of one call share the caller's database session, so a
transition and its side rows (offer, interview, history) commit or roll
back together. Notifications never raise. The HTTP layer hands in a
deferred dispatcher, so e-mails only leave once the transaction commits.
"""
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

from loguru import logger

from core.config import settings
from core.exceptions import (
    BusinessRuleException,
    DuplicateResourceException,
    ResourceNotFoundException,
    ValidationException,
)
from domain.entities import (
    Actor,
    Application,
    ApplicationAction,
    ApplicationTransition,
    Interview,
    Job,
    Offer,
    User,
)
from domain.enums import InterviewType
from domain.value_objects import ApplicationStatus
from application.repositories.interfaces import (
    IApplicationRepository,
    IInterviewRepository,
    IJobRepository,
    IOfferRepository,
    ITransitionLogRepository,
    IUserRepository,
)
from application.services import authorization as guard
from application.services.notifications import NotificationDispatcher


@dataclass(frozen=True)
class ApplicationDetails:
    """An application with the job and applicant it refers to"""
    application: Application
    job: Job
    applicant: Optional[User] = None


class ApplicationLifecycleService:
    """Application lifecycle controller"""

    def __init__(
        self,
        application_repository: IApplicationRepository,
        job_repository: IJobRepository,
        user_repository: IUserRepository,
        offer_repository: IOfferRepository,
        interview_repository: IInterviewRepository,
        transition_repository: ITransitionLogRepository,
        notifier: NotificationDispatcher,
        minimum_age: Optional[int] = None,
    ):
        self.application_repo = application_repository
        self.job_repo = job_repository
        self.user_repo = user_repository
        self.offer_repo = offer_repository
        self.interview_repo = interview_repository
        self.transition_repo = transition_repository
        self.notifier = notifier
        self.minimum_age = settings.MIN_APPLICANT_AGE if minimum_age is None else minimum_age

    # ------------------------------------------------------------------
    # Applications
    # ------------------------------------------------------------------

    async def apply(self, actor: Actor, job_id: int, message: Optional[str] = None) -> Application:
        """
        Apply to a job

        The age gate runs before the job or payload is looked at.

        Raises:
            AgeRequirementException: Applicant is too young or has no age on file
            AuthorizationException: Actor is not an applicant
            ResourceNotFoundException: Job does not exist
            BusinessRuleException: Job is closed or an open application exists
        """
        guard.require_applicant(actor)
        guard.require_minimum_age(actor, self.minimum_age)

        job = await self._get_job(job_id)
        if not job.is_active:
            raise BusinessRuleException("This job is no longer accepting applications")

        if await self.application_repo.find_open(job.id, actor.id):
            raise DuplicateResourceException("Application", "jobId", str(job.id))

        application = await self.application_repo.create(
            Application(
                id=None,
                job_id=job.id,
                applicant_id=actor.id,
                message=message.strip() if message else None,
            )
        )
        await self._record(actor, application, None, "applied")

        logger.info(f"Applicant {actor.id} applied to job {job.id} (application {application.id})")

        employer = await self.user_repo.get_by_id(job.employer_id)
        if employer:
            await self.notifier.application_created(employer, actor.user, job)

        return application

    async def list_for_job(self, actor: Actor, job_id: int) -> List[ApplicationDetails]:
        """Applications to a job with applicant profiles"""
        job = await self._get_job(job_id)
        guard.require_applications_viewer(actor, job)

        applications = await self.application_repo.list_for_job(job.id)
        applicants = await self.user_repo.get_many([a.applicant_id for a in applications])

        return [
            ApplicationDetails(application=a, job=job, applicant=applicants.get(a.applicant_id))
            for a in applications
        ]

    async def list_for_applicant(self, actor: Actor) -> List[ApplicationDetails]:
        """The actor's own applications with their jobs"""
        applications = await self.application_repo.list_for_applicant(actor.id)

        details = []
        jobs = {}
        for application in applications:
            if application.job_id not in jobs:
                jobs[application.job_id] = await self.job_repo.get_by_id(application.job_id)
            job = jobs[application.job_id]
            if job is None:
                logger.warning(f"Application {application.id} points at missing job {application.job_id}")
                continue
            details.append(ApplicationDetails(application=application, job=job, applicant=actor.user))
        return details

    async def get_application(self, actor: Actor, application_id: int) -> ApplicationDetails:
        application, job = await self._get_application_and_job(application_id)
        guard.require_application_viewer(actor, application, job)

        applicant = await self.user_repo.get_by_id(application.applicant_id)
        return ApplicationDetails(application=application, job=job, applicant=applicant)

    async def update_status(
        self,
        actor: Actor,
        application_id: int,
        status: ApplicationStatus,
        reason: Optional[str] = None,
    ) -> Application:
        """
        Employer status change: reject, or reset to pending

        Offers go through send_offer and acceptance through respond_to_offer,
        so an offered application always has an offer behind it. Rejecting
        also cancels scheduled interviews. A reset keeps them.
        """
        application, job = await self._get_application_and_job(application_id)
        guard.require_application_manager(actor, job)

        if status == ApplicationStatus.REJECTED:
            action = ApplicationAction.REJECT
        elif status == ApplicationStatus.PENDING:
            action = ApplicationAction.RESET
        elif status == ApplicationStatus.OFFERED:
            raise ValidationException("status", "Send an offer to move an application to offered")
        elif status == ApplicationStatus.ACCEPTED:
            raise ValidationException("status", "Applications are accepted when the applicant accepts an offer")
        else:
            raise ValidationException("status", "Only the applicant can cancel an application")

        updated = await self._transition(actor, application, action, reason)
        await self._withdraw_active_offer(application.id)
        if action == ApplicationAction.REJECT:
            await self._cancel_scheduled_interviews(application.id)

        applicant = await self.user_repo.get_by_id(application.applicant_id)
        if applicant:
            await self.notifier.application_status_changed(applicant, job, updated)

        return updated

    async def cancel(self, actor: Actor, application_id: int, reason: Optional[str] = None) -> Application:
        """
        Applicant withdraws an application

        Any live offer is withdrawn and scheduled interviews are cancelled.
        """
        application, job = await self._get_application_and_job(application_id)
        guard.require_can_cancel(actor, application)

        updated = await self._transition(actor, application, ApplicationAction.CANCEL, reason or "cancelled by applicant")
        await self._withdraw_active_offer(application.id)
        await self._cancel_scheduled_interviews(application.id)

        employer = await self.user_repo.get_by_id(job.employer_id)
        if employer:
            await self.notifier.application_cancelled(employer, actor.user, job)

        return updated

    async def history(self, actor: Actor, application_id: int) -> List[ApplicationTransition]:
        application, job = await self._get_application_and_job(application_id)
        guard.require_application_viewer(actor, application, job)
        return await self.transition_repo.list_for_application(application.id)

    # ------------------------------------------------------------------
    # Offers
    # ------------------------------------------------------------------

    async def send_offer(
        self,
        actor: Actor,
        application_id: int,
        salary: Optional[int],
        compensation: Optional[str] = None,
        note: Optional[str] = None,
    ) -> Offer:
        """
        Employer makes an offer

        A previous pending offer on the same application is withdrawn.

        Raises:
            ValidationException: salary missing or not positive
            InvalidTransitionException: application is not pending or offered
        """
        application, job = await self._get_application_and_job(application_id)
        guard.require_application_manager(actor, job)

        offer = Offer(
            id=None,
            application_id=application.id,
            job_id=job.id,
            employer_id=job.employer_id,
            applicant_id=application.applicant_id,
            salary=salary,
            compensation=compensation,
            note=note,
        )

        await self._transition(actor, application, ApplicationAction.SEND_OFFER, f"offer of {salary}")
        await self._withdraw_active_offer(application.id)
        created = await self.offer_repo.create(offer)

        logger.info(f"Offer {created.id} sent on application {application.id} (salary={salary})")

        applicant = await self.user_repo.get_by_id(application.applicant_id)
        if applicant:
            await self.notifier.offer_sent(applicant, job, created)

        return created

    async def get_offer(self, actor: Actor, application_id: int) -> Offer:
        """Latest offer made on an application"""
        application, job = await self._get_application_and_job(application_id)
        guard.require_application_viewer(actor, application, job)

        offer = await self.offer_repo.get_latest_for_application(application.id)
        if offer is None:
            raise ResourceNotFoundException("Offer", f"application {application.id}")
        return offer

    async def respond_to_offer(self, actor: Actor, offer_id: int, accept: bool) -> Tuple[Offer, Application]:
        """
        Applicant accepts or declines a pending offer

        Accepting moves both the offer and the application to accepted.
        Declining leaves the application offered so the employer can try again.
        """
        offer = await self.offer_repo.get_by_id(offer_id)
        if offer is None:
            raise ResourceNotFoundException("Offer", str(offer_id))
        guard.require_offer_recipient(actor, offer)

        application, job = await self._get_application_and_job(offer.application_id)

        responded = offer.respond(accept)
        action = ApplicationAction.ACCEPT_OFFER if accept else ApplicationAction.DECLINE_OFFER
        updated = await self._transition(actor, application, action, f"offer {offer.id} {responded.status.value}")
        saved_offer = await self.offer_repo.update(responded)

        logger.info(f"Offer {offer.id} {saved_offer.status.value} by applicant {actor.id}")

        employer = await self.user_repo.get_by_id(job.employer_id)
        if employer:
            await self.notifier.offer_responded(employer, actor.user, job, saved_offer)

        return saved_offer, updated

    # ------------------------------------------------------------------
    # Interviews
    # ------------------------------------------------------------------

    async def schedule_interview(
        self,
        actor: Actor,
        application_id: int,
        interview_date: date,
        interview_time: str,
        interview_type: InterviewType = InterviewType.IN_PERSON,
        location: Optional[str] = None,
        meeting_link: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Interview:
        """
        Employer books an interview

        Raises:
            ValidationException: date/time missing, or location/link missing for the type
            BusinessRuleException: application is closed or already has a scheduled interview
        """
        application, job = await self._get_application_and_job(application_id)
        guard.require_application_manager(actor, job)

        interview = Interview(
            id=None,
            application_id=application.id,
            job_id=job.id,
            employer_id=job.employer_id,
            applicant_id=application.applicant_id,
            interview_date=interview_date,
            interview_time=interview_time,
            interview_type=interview_type,
            location=location,
            meeting_link=meeting_link,
            notes=notes,
        )

        if not application.can_schedule_interview():
            raise BusinessRuleException(
                f"Interviews can only be scheduled for pending or offered applications "
                f"(application is {application.status.value})"
            )

        if await self.interview_repo.get_scheduled_for_application(application.id):
            raise BusinessRuleException("This application already has a scheduled interview")

        created = await self.interview_repo.create(interview)

        logger.info(f"Interview {created.id} scheduled for application {application.id} on {interview_date}")

        applicant = await self.user_repo.get_by_id(application.applicant_id)
        if applicant:
            await self.notifier.interview_scheduled(applicant, job, created)

        return created

    async def list_interviews(self, actor: Actor, application_id: int) -> List[Interview]:
        application, job = await self._get_application_and_job(application_id)
        guard.require_application_viewer(actor, application, job)
        return await self.interview_repo.list_for_application(application.id)

    async def cancel_interview(self, actor: Actor, interview_id: int) -> Interview:
        """Cancel a scheduled interview. The application is left as it is."""
        interview = await self.interview_repo.get_by_id(interview_id)
        if interview is None:
            raise ResourceNotFoundException("Interview", str(interview_id))

        job = await self._get_job(interview.job_id)
        guard.require_application_manager(actor, job)

        cancelled = await self.interview_repo.update(interview.cancel())

        logger.info(f"Interview {interview.id} cancelled by {actor.id}")

        applicant = await self.user_repo.get_by_id(interview.applicant_id)
        if applicant:
            await self.notifier.interview_cancelled(applicant, job, cancelled)

        return cancelled

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _get_job(self, job_id: int) -> Job:
        job = await self.job_repo.get_by_id(job_id)
        if job is None:
            raise ResourceNotFoundException("Job", str(job_id))
        return job

    async def _get_application_and_job(self, application_id: int) -> Tuple[Application, Job]:
        application = await self.application_repo.get_by_id(application_id)
        if application is None:
            raise ResourceNotFoundException("Application", str(application_id))
        return application, await self._get_job(application.job_id)

    async def _transition(
        self,
        actor: Actor,
        application: Application,
        action: ApplicationAction,
        reason: Optional[str] = None,
    ) -> Application:
        """Move along one edge, persist with a version check and log it"""
        moved = application.apply_action(action)
        saved = await self.application_repo.update_status(moved, expected_version=application.version)
        await self._record(actor, saved, application.status, reason or action.value)

        logger.info(
            f"Application {application.id}: {application.status.value} -> {saved.status.value} "
            f"({action.value} by {actor.id})"
        )
        return saved

    async def _record(
        self,
        actor: Actor,
        application: Application,
        from_status: Optional[ApplicationStatus],
        reason: Optional[str],
    ) -> None:
        await self.transition_repo.record(
            ApplicationTransition(
                id=None,
                application_id=application.id,
                actor_id=actor.id,
                from_status=from_status,
                to_status=application.status,
                reason=reason,
            )
        )

    async def _withdraw_active_offer(self, application_id: int) -> None:
        offer = await self.offer_repo.get_active_for_application(application_id)
        if offer is not None:
            await self.offer_repo.update(offer.withdraw())
            logger.info(f"Offer {offer.id} withdrawn from application {application_id}")

    async def _cancel_scheduled_interviews(self, application_id: int) -> None:
        for interview in await self.interview_repo.list_for_application(application_id):
            if interview.is_scheduled():
                await self.interview_repo.update(interview.cancel())
                logger.info(f"Interview {interview.id} cancelled with application {application_id}")
