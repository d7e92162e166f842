"""
Tests for domain entities and value objects
"""
from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

import pytest

from core.exceptions import ValidationException, InvalidTransitionException
from domain.entities import Application, ApplicationAction, Offer, Interview, Job, VerificationRequest
from domain.enums import InterviewType, SubscriptionTier, UserRole
from domain.value_objects import (
    ApplicationStatus,
    Email,
    OfferStatus,
    SalaryRange,
    VerificationStatus,
)
from fakes import make_user


def _application(status=ApplicationStatus.PENDING):
    return Application(id=1, job_id=1, applicant_id=uuid4(), status=status)


class TestApplicationStatusMachine:
    """Every edge of the application status machine"""

    @pytest.mark.parametrize("action,source,target", [
        (ApplicationAction.SEND_OFFER, ApplicationStatus.PENDING, ApplicationStatus.OFFERED),
        (ApplicationAction.SEND_OFFER, ApplicationStatus.OFFERED, ApplicationStatus.OFFERED),
        (ApplicationAction.REJECT, ApplicationStatus.PENDING, ApplicationStatus.REJECTED),
        (ApplicationAction.REJECT, ApplicationStatus.OFFERED, ApplicationStatus.REJECTED),
        (ApplicationAction.ACCEPT_OFFER, ApplicationStatus.OFFERED, ApplicationStatus.ACCEPTED),
        (ApplicationAction.DECLINE_OFFER, ApplicationStatus.OFFERED, ApplicationStatus.OFFERED),
        (ApplicationAction.CANCEL, ApplicationStatus.PENDING, ApplicationStatus.CANCELLED),
        (ApplicationAction.CANCEL, ApplicationStatus.REJECTED, ApplicationStatus.CANCELLED),
        (ApplicationAction.RESET, ApplicationStatus.ACCEPTED, ApplicationStatus.PENDING),
        (ApplicationAction.RESET, ApplicationStatus.CANCELLED, ApplicationStatus.PENDING),
    ])
    def test_allowed_edges(self, action, source, target):
        moved = _application(source).apply_action(action)
        assert moved.status == target
        assert moved.version == 2

    @pytest.mark.parametrize("action,source", [
        (ApplicationAction.ACCEPT_OFFER, ApplicationStatus.PENDING),
        (ApplicationAction.CANCEL, ApplicationStatus.ACCEPTED),
        (ApplicationAction.CANCEL, ApplicationStatus.CANCELLED),
        (ApplicationAction.REJECT, ApplicationStatus.ACCEPTED),
        (ApplicationAction.RESET, ApplicationStatus.PENDING),
        (ApplicationAction.SEND_OFFER, ApplicationStatus.REJECTED),
    ])
    def test_undefined_edges_rejected(self, action, source):
        application = _application(source)
        with pytest.raises(InvalidTransitionException):
            application.apply_action(action)
        assert application.status == source
        assert application.version == 1

    def test_open_statuses(self):
        assert _application(ApplicationStatus.ACCEPTED).is_open()
        assert not _application(ApplicationStatus.REJECTED).is_open()
        assert not _application(ApplicationStatus.CANCELLED).is_open()


class TestOffer:

    def _offer(self, **kwargs):
        fields = dict(id=1, application_id=1, job_id=1, employer_id=uuid4(), applicant_id=uuid4(), salary=8000)
        fields.update(kwargs)
        return Offer(**fields)

    @pytest.mark.parametrize("salary", [None, 0, -100])
    def test_salary_required_and_positive(self, salary):
        with pytest.raises(ValidationException) as exc_info:
            self._offer(salary=salary)
        assert exc_info.value.field == "salary"

    def test_only_pending_offers_can_be_answered(self):
        accepted = self._offer().respond(accept=True)
        assert accepted.status == OfferStatus.ACCEPTED
        with pytest.raises(InvalidTransitionException):
            accepted.respond(accept=False)

    def test_withdraw_declined_offer_fails(self):
        declined = self._offer().respond(accept=False)
        with pytest.raises(InvalidTransitionException):
            declined.withdraw()


class TestInterview:

    def _interview(self, **kwargs):
        fields = dict(
            id=None, application_id=1, job_id=1, employer_id=uuid4(), applicant_id=uuid4(),
            interview_date=date(2026, 3, 2), interview_time="10:00", location="Yaba",
        )
        fields.update(kwargs)
        return Interview(**fields)

    def test_in_person_needs_location(self):
        with pytest.raises(ValidationException) as exc_info:
            self._interview(location=None)
        assert exc_info.value.field == "location"

    def test_video_needs_meeting_link(self):
        with pytest.raises(ValidationException) as exc_info:
            self._interview(interview_type=InterviewType.VIDEO, location=None)
        assert exc_info.value.field == "meetingLink"

    def test_phone_needs_neither(self):
        interview = self._interview(interview_type=InterviewType.PHONE, location=None)
        assert interview.is_scheduled()

    def test_cancel_twice_fails(self):
        cancelled = self._interview().cancel()
        with pytest.raises(InvalidTransitionException):
            cancelled.cancel()


class TestJobAndSalary:

    def test_inverted_salary_names_field(self):
        with pytest.raises(ValidationException) as exc_info:
            Job(id=None, employer_id=uuid4(), title="Driver", description="Drive", category="Driving",
                location="Abuja", salary_min=10000, salary_max=5000)
        assert exc_info.value.field == "salaryMax"

    def test_zero_max_means_not_stated(self):
        salary = SalaryRange(5000, 0)
        assert salary.max_salary == 0

    def test_negative_minimum_names_field(self):
        with pytest.raises(ValidationException) as exc_info:
            SalaryRange(-1, 0)
        assert exc_info.value.field == "salaryMin"

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationException) as exc_info:
            Job(id=None, employer_id=uuid4(), title="  ", description="x", category="x", location="x")
        assert exc_info.value.field == "title"


class TestUser:

    def test_email_is_normalized(self):
        assert str(Email("  Ada@Example.COM ")) == "ada@example.com"

    def test_invalid_email(self):
        with pytest.raises(ValidationException):
            Email("not-an-email")

    def test_unknown_age_fails_age_gate(self):
        assert not make_user(age=None).is_old_enough(16)
        assert make_user(age=16).is_old_enough(16)

    def test_expired_subscription_acts_as_free(self):
        yesterday = datetime.now(timezone.utc) - timedelta(days=1)
        user = make_user(role=UserRole.EMPLOYER, tier=SubscriptionTier.PREMIUM, subscription_end_date=yesterday)
        assert user.active_tier() == SubscriptionTier.FREE
        assert user.job_posting_limit() == 0

    def test_admin_has_no_posting_limit(self):
        assert make_user(role=UserRole.ADMIN).job_posting_limit() is None


class TestVerificationRequest:

    def test_decision_edges(self):
        request = VerificationRequest(id=1, user_id=uuid4(), id_type="NIN", id_number="123")
        reviewing = request.decide(VerificationStatus.UNDER_REVIEW, uuid4())
        approved = reviewing.decide(VerificationStatus.APPROVED, uuid4(), "ok")
        assert approved.admin_notes == "ok"
        with pytest.raises(InvalidTransitionException):
            approved.decide(VerificationStatus.REJECTED, uuid4())

    def test_id_number_required(self):
        with pytest.raises(ValidationException) as exc_info:
            VerificationRequest(id=None, user_id=uuid4(), id_type="NIN", id_number="")
        assert exc_info.value.field == "idNumber"
