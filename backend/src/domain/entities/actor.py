"""
Actor
Request-scoped, role-tagged view of the authenticated user.

Role checks dispatch on the actor class rather than on the role string,
so adding a role means adding a class that every guard must handle.
"""
from dataclasses import dataclass
from typing import Dict, Type
from uuid import UUID

from core.exceptions import AuthorizationException
from ..enums import UserRole
from .user import User


@dataclass(frozen=True)
class Actor:
    """Base actor - never instantiated directly"""

    user: User

    @property
    def id(self) -> UUID:
        return self.user.id

    @property
    def is_verified(self) -> bool:
        return self.user.is_verified

    @staticmethod
    def from_user(user: User) -> "Actor":
        """Build the actor variant matching the user's role"""
        actor_class = _ACTOR_BY_ROLE.get(user.role)
        if actor_class is None:
            raise AuthorizationException(f"Unsupported role: {user.role}")
        return actor_class(user)


@dataclass(frozen=True)
class ApplicantActor(Actor):
    """Job seeker"""


@dataclass(frozen=True)
class EmployerActor(Actor):
    """Job poster"""


@dataclass(frozen=True)
class AdminActor(Actor):
    """Platform administrator"""


_ACTOR_BY_ROLE: Dict[UserRole, Type[Actor]] = {
    UserRole.APPLICANT: ApplicantActor,
    UserRole.EMPLOYER: EmployerActor,
    UserRole.ADMIN: AdminActor,
}
