"""
Tests for role and ownership checks
"""
from uuid import uuid4

import pytest

from core.exceptions import AuthorizationException, AgeRequirementException
from domain.entities import Actor, Application, Job
from domain.enums import UserRole
from domain.value_objects import ApplicationStatus
from application.services import authorization as guard
from fakes import make_user


def _actor(role, **kwargs):
    return Actor.from_user(make_user(role=role, **kwargs))


def _job(owner):
    return Job(id=7, employer_id=owner.id, title="Cook", description="Cook jollof",
               category="Catering", location="Ibadan")


class TestAuthorizationGuard:

    @pytest.fixture
    def employer(self):
        return _actor(UserRole.EMPLOYER)

    def test_actor_variant_follows_role(self, employer):
        assert type(employer).__name__ == "EmployerActor"
        assert type(_actor(UserRole.ADMIN)).__name__ == "AdminActor"

    def test_job_owner_and_admin_may_mutate(self, employer):
        job = _job(employer)
        guard.require_job_owner(employer, job)
        guard.require_job_owner(_actor(UserRole.ADMIN), job)

    def test_other_employer_may_not_mutate(self, employer):
        with pytest.raises(AuthorizationException):
            guard.require_job_owner(_actor(UserRole.EMPLOYER), _job(employer))

    def test_admin_cannot_manage_applications(self, employer):
        with pytest.raises(AuthorizationException):
            guard.require_application_manager(_actor(UserRole.ADMIN), _job(employer))

    def test_applicant_cannot_post_jobs(self):
        with pytest.raises(AuthorizationException):
            guard.require_job_poster(_actor(UserRole.APPLICANT))

    def test_application_viewer(self, employer):
        applicant = _actor(UserRole.APPLICANT)
        application = Application(id=1, job_id=7, applicant_id=applicant.id)
        job = _job(employer)

        guard.require_application_viewer(applicant, application, job)
        guard.require_application_viewer(employer, application, job)
        with pytest.raises(AuthorizationException):
            guard.require_application_viewer(_actor(UserRole.APPLICANT), application, job)

    def test_cancel_requires_verified_owner(self):
        unverified = _actor(UserRole.APPLICANT, is_verified=False)
        application = Application(id=1, job_id=7, applicant_id=unverified.id)
        with pytest.raises(AuthorizationException):
            guard.require_can_cancel(unverified, application)

    def test_cancel_refused_once_accepted(self):
        applicant = _actor(UserRole.APPLICANT, is_verified=True)
        application = Application(id=1, job_id=7, applicant_id=applicant.id, status=ApplicationStatus.ACCEPTED)
        with pytest.raises(AuthorizationException):
            guard.require_can_cancel(applicant, application)

    def test_offer_recipient_only(self):
        from domain.entities import Offer
        applicant = _actor(UserRole.APPLICANT)
        offer = Offer(id=1, application_id=1, job_id=7, employer_id=uuid4(),
                      applicant_id=applicant.id, salary=5000)
        guard.require_offer_recipient(applicant, offer)
        with pytest.raises(AuthorizationException):
            guard.require_offer_recipient(_actor(UserRole.APPLICANT), offer)

    @pytest.mark.parametrize("age", [None, 15])
    def test_minimum_age(self, age):
        with pytest.raises(AgeRequirementException) as exc_info:
            guard.require_minimum_age(_actor(UserRole.APPLICANT, age=age), 16)
        assert exc_info.value.minimum_age == 16
