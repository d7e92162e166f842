"""
Shared fixtures

Environment is set before any application module is imported so the
settings singleton picks it up.
"""
import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("LOG_JSON_FORMAT", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

from types import SimpleNamespace  # noqa: E402

import pytest  # noqa: E402

from domain.entities import Actor  # noqa: E402
from domain.enums import UserRole, SubscriptionTier  # noqa: E402
from application.services.applications import ApplicationLifecycleService  # noqa: E402
from application.services.jobs import JobService  # noqa: E402
from application.services.verification import VerificationService  # noqa: E402
from application.services.admin import AdminService  # noqa: E402
from application.services.users import ProfileService, JobHistoryService  # noqa: E402
from application.services.notifications import NotificationDispatcher  # noqa: E402

from fakes import (  # noqa: E402
    InMemoryUserRepository,
    InMemoryJobRepository,
    InMemoryApplicationRepository,
    InMemoryOfferRepository,
    InMemoryInterviewRepository,
    InMemoryVerificationRepository,
    InMemoryTransitionLogRepository,
    InMemoryJobHistoryRepository,
    FakeSession,
    RecordingEmailSender,
    make_user,
)


@pytest.fixture
def market():
    """A wired marketplace over in-memory storage"""
    users = InMemoryUserRepository()
    applications = InMemoryApplicationRepository()
    offers = InMemoryOfferRepository()
    interviews = InMemoryInterviewRepository()
    verifications = InMemoryVerificationRepository()
    transitions = InMemoryTransitionLogRepository()
    job_history = InMemoryJobHistoryRepository()
    jobs = InMemoryJobRepository(applications, offers, interviews, transitions)
    mailer = RecordingEmailSender()
    notifier = NotificationDispatcher(mailer, enabled=True, max_attempts=3, backoff_seconds=0)

    m = SimpleNamespace(
        users=users,
        jobs=jobs,
        applications=applications,
        offers=offers,
        interviews=interviews,
        verifications=verifications,
        transitions=transitions,
        job_history=job_history,
        session=FakeSession(),
        mailer=mailer,
        notifier=notifier,
        lifecycle=ApplicationLifecycleService(
            applications, jobs, users, offers, interviews, transitions, notifier, minimum_age=16
        ),
        job_service=JobService(jobs),
        verification_service=VerificationService(verifications, users, notifier),
        admin_service=AdminService(users, jobs, applications),
        profile_service=ProfileService(users),
        job_history_service=JobHistoryService(job_history),
    )

    def actor(role=UserRole.APPLICANT, **kwargs):
        return Actor.from_user(users.add(make_user(role=role, **kwargs)))

    m.applicant = lambda **kw: actor(UserRole.APPLICANT, **kw)
    m.employer = lambda **kw: actor(UserRole.EMPLOYER, **{"tier": SubscriptionTier.PREMIUM, **kw})
    m.admin = lambda **kw: actor(UserRole.ADMIN, **kw)
    return m


@pytest.fixture
def job_fields():
    return {
        "title": "Office Cleaner",
        "description": "Keep the Lekki office spotless",
        "category": "Cleaning",
        "location": "Lekki, Lagos",
        "salary_min": 5000,
        "salary_max": 10000,
    }
