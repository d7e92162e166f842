"""
Profile Service
Self-service profile edits
"""
from dataclasses import replace
from typing import Any, Dict

from loguru import logger

from core.exceptions import ValidationException
from domain.entities import Actor, User
from application.repositories.interfaces import IUserRepository


# Role, verification and subscription are admin-only
SELF_EDITABLE_FIELDS = frozenset({
    "first_name",
    "last_name",
    "age",
    "gender",
    "bio",
    "location",
    "phone",
    "cv_url",
    "profile_image_url",
    "expected_salary_min",
    "expected_salary_max",
    "company_name",
    "company_description",
})


class ProfileService:

    def __init__(self, user_repository: IUserRepository):
        self.user_repo = user_repository

    async def update_profile(self, actor: Actor, changes: Dict[str, Any]) -> User:
        allowed = {k: v for k, v in changes.items() if k in SELF_EDITABLE_FIELDS}
        ignored = set(changes) - set(allowed)
        if ignored:
            logger.warning(f"User {actor.id} tried to change protected fields: {sorted(ignored)}")

        if not allowed:
            return actor.user

        candidate = replace(actor.user, **allowed)
        if (
            candidate.expected_salary_min is not None
            and candidate.expected_salary_max is not None
            and candidate.expected_salary_max < candidate.expected_salary_min
        ):
            raise ValidationException("expectedSalaryMax", "Maximum expected salary cannot be less than minimum")

        updated = await self.user_repo.update(candidate)
        logger.info(f"User {actor.id} updated profile fields {sorted(allowed)}")
        return updated
