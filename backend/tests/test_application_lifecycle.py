"""
Tests for applying, status changes, cancellation and history
"""
import pytest
import pytest_asyncio

from core.exceptions import (
    AgeRequirementException,
    AuthorizationException,
    BusinessRuleException,
    ConcurrentModificationException,
    DuplicateResourceException,
    InvalidTransitionException,
    ResourceNotFoundException,
    ValidationException,
)
from domain.entities import ApplicationAction
from domain.value_objects import ApplicationStatus, OfferStatus
from application.services.applications import ApplicationLifecycleService


class TestApply:

    @pytest.mark.asyncio
    async def test_apply_creates_pending_application(self, market, job_fields):
        employer = market.employer()
        applicant = market.applicant(age=20)
        job = await market.job_service.create_job(employer, job_fields)

        application = await market.lifecycle.apply(applicant, job.id, "  I can start Monday ")

        assert application.status == ApplicationStatus.PENDING
        assert application.message == "I can start Monday"
        history = await market.transitions.list_for_application(application.id)
        assert [(t.from_status, t.to_status) for t in history] == [(None, ApplicationStatus.PENDING)]
        assert market.mailer.recipients() == [str(employer.user.email)]

    @pytest.mark.asyncio
    async def test_underage_applicant_rejected_before_job_lookup(self, market):
        applicant = market.applicant(age=15)

        # Job 999 does not exist: the age gate must still win
        with pytest.raises(AgeRequirementException):
            await market.lifecycle.apply(applicant, 999)

        assert market.applications.applications == {}

    @pytest.mark.asyncio
    async def test_employer_cannot_apply(self, market, job_fields):
        employer = market.employer()
        job = await market.job_service.create_job(employer, job_fields)

        with pytest.raises(AuthorizationException):
            await market.lifecycle.apply(market.employer(), job.id)

    @pytest.mark.asyncio
    async def test_unknown_job(self, market):
        with pytest.raises(ResourceNotFoundException):
            await market.lifecycle.apply(market.applicant(), 404)

    @pytest.mark.asyncio
    async def test_closed_job(self, market, job_fields):
        employer = market.employer()
        job = await market.job_service.create_job(employer, job_fields)
        await market.job_service.update_job(employer, job.id, {"is_active": False})

        with pytest.raises(BusinessRuleException):
            await market.lifecycle.apply(market.applicant(), job.id)

    @pytest.mark.asyncio
    async def test_reapply_blocked_while_open_allowed_after_rejection(self, market, job_fields):
        employer = market.employer()
        applicant = market.applicant()
        job = await market.job_service.create_job(employer, job_fields)
        first = await market.lifecycle.apply(applicant, job.id)

        with pytest.raises(DuplicateResourceException):
            await market.lifecycle.apply(applicant, job.id)

        await market.lifecycle.update_status(employer, first.id, ApplicationStatus.REJECTED)
        second = await market.lifecycle.apply(applicant, job.id)
        assert second.id != first.id

    @pytest.mark.asyncio
    async def test_explicit_zero_minimum_age_is_kept(self, market, job_fields):
        lifecycle = ApplicationLifecycleService(
            market.applications, market.jobs, market.users, market.offers,
            market.interviews, market.transitions, market.notifier, minimum_age=0,
        )
        job = await market.job_service.create_job(market.employer(), job_fields)

        application = await lifecycle.apply(market.applicant(age=12), job.id)

        assert lifecycle.minimum_age == 0
        assert application.status == ApplicationStatus.PENDING


class TestStatusUpdates:

    @pytest_asyncio.fixture
    async def pending(self, market, job_fields):
        employer = market.employer()
        applicant = market.applicant(is_verified=True)
        job = await market.job_service.create_job(employer, job_fields)
        application = await market.lifecycle.apply(applicant, job.id)
        return employer, applicant, application

    @pytest.mark.asyncio
    async def test_owner_rejects(self, market, pending):
        employer, applicant, application = pending

        updated = await market.lifecycle.update_status(employer, application.id, ApplicationStatus.REJECTED, "Filled")

        assert updated.status == ApplicationStatus.REJECTED
        assert updated.version == application.version + 1
        assert str(applicant.user.email) in market.mailer.recipients()

    @pytest.mark.asyncio
    async def test_other_employer_forbidden_and_state_unchanged(self, market, pending):
        _, _, application = pending

        with pytest.raises(AuthorizationException):
            await market.lifecycle.update_status(market.employer(), application.id, ApplicationStatus.REJECTED)

        stored = await market.applications.get_by_id(application.id)
        assert stored.status == ApplicationStatus.PENDING
        assert stored.version == application.version

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [
        ApplicationStatus.OFFERED,
        ApplicationStatus.ACCEPTED,
        ApplicationStatus.CANCELLED,
    ])
    async def test_statuses_reached_through_other_routes(self, market, pending, status):
        employer, _, application = pending

        with pytest.raises(ValidationException) as exc_info:
            await market.lifecycle.update_status(employer, application.id, status)
        assert exc_info.value.field == "status"

    @pytest.mark.asyncio
    async def test_reset_from_pending_is_invalid(self, market, pending):
        employer, _, application = pending

        with pytest.raises(InvalidTransitionException):
            await market.lifecycle.update_status(employer, application.id, ApplicationStatus.PENDING)

    @pytest.mark.asyncio
    async def test_reset_withdraws_accepted_offer(self, market, pending):
        employer, applicant, application = pending
        offer = await market.lifecycle.send_offer(employer, application.id, 8000)
        await market.lifecycle.respond_to_offer(applicant, offer.id, accept=True)

        reset = await market.lifecycle.update_status(employer, application.id, ApplicationStatus.PENDING)

        assert reset.status == ApplicationStatus.PENDING
        assert (await market.offers.get_by_id(offer.id)).status == OfferStatus.WITHDRAWN

    @pytest.mark.asyncio
    async def test_stale_version_is_refused(self, market, pending):
        employer, _, application = pending
        await market.lifecycle.update_status(employer, application.id, ApplicationStatus.REJECTED)

        # A second writer still holding the pre-rejection row
        stale = application.apply_action(ApplicationAction.CANCEL)
        with pytest.raises(ConcurrentModificationException):
            await market.applications.update_status(stale, expected_version=application.version)

        stored = await market.applications.get_by_id(application.id)
        assert stored.status == ApplicationStatus.REJECTED


class TestCancel:

    @pytest.mark.asyncio
    async def test_verified_applicant_cancels(self, market, job_fields):
        employer = market.employer()
        applicant = market.applicant(is_verified=True)
        job = await market.job_service.create_job(employer, job_fields)
        application = await market.lifecycle.apply(applicant, job.id)
        offer = await market.lifecycle.send_offer(employer, application.id, 9000)

        cancelled = await market.lifecycle.cancel(applicant, application.id)

        assert cancelled.status == ApplicationStatus.CANCELLED
        assert (await market.offers.get_by_id(offer.id)).status == OfferStatus.WITHDRAWN
        history = await market.lifecycle.history(applicant, application.id)
        assert [t.to_status for t in history] == [
            ApplicationStatus.PENDING,
            ApplicationStatus.OFFERED,
            ApplicationStatus.CANCELLED,
        ]

    @pytest.mark.asyncio
    async def test_unverified_applicant_cannot_cancel(self, market, job_fields):
        employer = market.employer()
        applicant = market.applicant(is_verified=False)
        job = await market.job_service.create_job(employer, job_fields)
        application = await market.lifecycle.apply(applicant, job.id)

        with pytest.raises(AuthorizationException):
            await market.lifecycle.cancel(applicant, application.id)
        assert (await market.applications.get_by_id(application.id)).status == ApplicationStatus.PENDING

    @pytest.mark.asyncio
    async def test_accepted_application_cannot_be_cancelled(self, market, job_fields):
        employer = market.employer()
        applicant = market.applicant(is_verified=True)
        job = await market.job_service.create_job(employer, job_fields)
        application = await market.lifecycle.apply(applicant, job.id)
        offer = await market.lifecycle.send_offer(employer, application.id, 9000)
        await market.lifecycle.respond_to_offer(applicant, offer.id, accept=True)

        with pytest.raises(AuthorizationException):
            await market.lifecycle.cancel(applicant, application.id)
        assert (await market.applications.get_by_id(application.id)).status == ApplicationStatus.ACCEPTED


class TestListing:

    @pytest.mark.asyncio
    async def test_employer_sees_applicants_of_own_job_only(self, market, job_fields):
        employer = market.employer()
        job = await market.job_service.create_job(employer, job_fields)
        applicant = market.applicant(first_name="Chidi")
        await market.lifecycle.apply(applicant, job.id)

        details = await market.lifecycle.list_for_job(employer, job.id)
        assert [d.applicant.first_name for d in details] == ["Chidi"]

        with pytest.raises(AuthorizationException):
            await market.lifecycle.list_for_job(market.employer(), job.id)

    @pytest.mark.asyncio
    async def test_my_applications_include_job(self, market, job_fields):
        employer = market.employer()
        job = await market.job_service.create_job(employer, job_fields)
        applicant = market.applicant()
        await market.lifecycle.apply(applicant, job.id)

        details = await market.lifecycle.list_for_applicant(applicant)
        assert [d.job.title for d in details] == ["Office Cleaner"]


class TestScenarios:

    @pytest.mark.asyncio
    async def test_apply_offer_accept(self, market):
        """Employer posts a cleaning job, a 20 year old applies and accepts an 8000 offer"""
        employer = market.employer()
        job = await market.job_service.create_job(employer, {
            "title": "Cleaner",
            "description": "Daily cleaning",
            "category": "Cleaning",
            "location": "Ikeja",
            "salary_min": 5000,
            "salary_max": 10000,
        })
        applicant = market.applicant(age=20)

        application = await market.lifecycle.apply(applicant, job.id)
        assert application.status == ApplicationStatus.PENDING

        offer = await market.lifecycle.send_offer(employer, application.id, 8000)
        assert offer.status == OfferStatus.PENDING
        assert (await market.applications.get_by_id(application.id)).status == ApplicationStatus.OFFERED

        offer, application = await market.lifecycle.respond_to_offer(applicant, offer.id, accept=True)
        assert offer.status == OfferStatus.ACCEPTED
        assert application.status == ApplicationStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_fifteen_year_old_gets_no_application_row(self, market, job_fields):
        job = await market.job_service.create_job(market.employer(), job_fields)

        with pytest.raises(AgeRequirementException):
            await market.lifecycle.apply(market.applicant(age=15), job.id)
        assert await market.applications.count() == 0
