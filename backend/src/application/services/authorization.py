"""
Authorization Guard
Pure role and ownership checks.

Each check returns None when the actor may proceed and raises
AuthorizationException otherwise. Nothing here touches the database:
callers load the job/application/offer first and pass it in.
"""
from loguru import logger

from core.exceptions import AuthorizationException, AgeRequirementException
from domain.entities import (
    Actor,
    ApplicantActor,
    EmployerActor,
    AdminActor,
    Job,
    Application,
    Offer,
)
from domain.value_objects import ApplicationStatus


def _deny(actor: Actor, message: str) -> AuthorizationException:
    logger.warning(f"Denied {type(actor).__name__} {actor.id}: {message}")
    return AuthorizationException(message)


def _check_known(actor: Actor) -> None:
    if not isinstance(actor, (ApplicantActor, EmployerActor, AdminActor)):
        raise AuthorizationException(f"Unknown actor type: {type(actor).__name__}")


def require_admin(actor: Actor) -> None:
    _check_known(actor)
    if not isinstance(actor, AdminActor):
        raise _deny(actor, "Admin access required")


def require_applicant(actor: Actor) -> None:
    _check_known(actor)
    if not isinstance(actor, ApplicantActor):
        raise _deny(actor, "Only applicants can apply for jobs")


def require_job_poster(actor: Actor) -> None:
    """Job creation: employers and admins"""
    _check_known(actor)
    if isinstance(actor, ApplicantActor):
        raise _deny(actor, "Only employers can post jobs")


def require_job_owner(actor: Actor, job: Job) -> None:
    """Job mutation: the posting employer or an admin"""
    _check_known(actor)
    if isinstance(actor, AdminActor):
        return
    if isinstance(actor, EmployerActor) and job.is_owned_by(actor.id):
        return
    raise _deny(actor, f"Not the owner of job {job.id}")


def require_application_manager(actor: Actor, job: Job) -> None:
    """Status changes, offers and interviews: only the employer who owns the job"""
    _check_known(actor)
    if isinstance(actor, EmployerActor) and job.is_owned_by(actor.id):
        return
    raise _deny(actor, f"Only the employer of job {job.id} can manage its applications")


def require_applications_viewer(actor: Actor, job: Job) -> None:
    """Listing a job's applications: the job owner or an admin"""
    require_job_owner(actor, job)


def require_application_viewer(actor: Actor, application: Application, job: Job) -> None:
    """Reading one application, its offer, interviews or history"""
    _check_known(actor)
    if isinstance(actor, AdminActor):
        return
    if isinstance(actor, ApplicantActor) and application.applicant_id == actor.id:
        return
    if isinstance(actor, EmployerActor) and job.is_owned_by(actor.id):
        return
    raise _deny(actor, f"Cannot view application {application.id}")


def require_can_cancel(actor: Actor, application: Application) -> None:
    """Cancelling: the verified applicant, while the application is not accepted"""
    _check_known(actor)
    if not isinstance(actor, ApplicantActor) or application.applicant_id != actor.id:
        raise _deny(actor, "Only the applicant can cancel this application")
    if not actor.is_verified:
        raise _deny(actor, "Only verified applicants can cancel applications")
    if application.status == ApplicationStatus.ACCEPTED:
        raise _deny(actor, "Accepted applications cannot be cancelled")


def require_offer_recipient(actor: Actor, offer: Offer) -> None:
    _check_known(actor)
    if not isinstance(actor, ApplicantActor) or offer.applicant_id != actor.id:
        raise _deny(actor, f"Offer {offer.id} was not made to you")


def require_minimum_age(actor: Actor, minimum_age: int) -> None:
    """Age gate for applying. Unknown age fails."""
    if not actor.user.is_old_enough(minimum_age):
        logger.warning(f"Applicant {actor.id} below minimum age {minimum_age} (age={actor.user.age})")
        raise AgeRequirementException(minimum_age)
