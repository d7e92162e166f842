"""
User Repository Implementation
SQLAlchemy-based user repository
"""
from typing import Optional, List, Dict, Sequence
from uuid import UUID

from sqlalchemy import select, func, or_
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from domain.entities import User
from domain.enums import UserRole, SubscriptionTier
from domain.value_objects import Email
from application.repositories.interfaces import IUserRepository
from infrastructure.persistence.models.user import UserModel
from core.exceptions import RepositoryException


# Columns copied between entity and model (everything except id/email/timestamps)
_PROFILE_FIELDS = (
    "password_hash",
    "first_name",
    "last_name",
    "is_verified",
    "email_verified",
    "email_verification_code",
    "email_verification_expiry",
    "subscription_end_date",
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
)


class SQLAlchemyUserRepository(IUserRepository):
    """SQLAlchemy implementation of user repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        try:
            result = await self.session.execute(
                select(UserModel).where(UserModel.id == user_id)
            )
            model = result.scalar_one_or_none()

            if model:
                return self._to_entity(model)
            return None

        except Exception as e:
            logger.error(f"Failed to get user by ID {user_id}: {str(e)}")
            raise RepositoryException(f"Failed to get user: {str(e)}")

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email"""
        try:
            result = await self.session.execute(
                select(UserModel).where(UserModel.email == email.strip().lower())
            )
            model = result.scalar_one_or_none()

            if model:
                return self._to_entity(model)
            return None

        except Exception as e:
            logger.error(f"Failed to get user by email {email}: {str(e)}")
            raise RepositoryException(f"Failed to get user: {str(e)}")

    async def exists_by_email(self, email: str) -> bool:
        """Check if user exists by email"""
        try:
            result = await self.session.execute(
                select(UserModel.id).where(UserModel.email == email.strip().lower())
            )
            return result.first() is not None

        except Exception as e:
            logger.error(f"Failed to check user existence {email}: {str(e)}")
            raise RepositoryException(f"Failed to check user: {str(e)}")

    async def create(self, user: User) -> User:
        """Create new user"""
        try:
            model = self._to_model(user)
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)

            return self._to_entity(model)

        except Exception as e:
            logger.error(f"Failed to create user {user.email}: {str(e)}")
            raise RepositoryException(f"Failed to create user: {str(e)}")

    async def upsert(self, user: User) -> User:
        """Insert user or overwrite the row with the same email"""
        try:
            values = self._to_values(user)
            stmt = insert(UserModel).values(id=user.id, email=str(user.email), **values)
            stmt = stmt.on_conflict_do_update(
                index_elements=[UserModel.email],
                set_={**values, "updated_at": func.now()},
            ).returning(UserModel)

            result = await self.session.execute(
                stmt, execution_options={"populate_existing": True}
            )
            return self._to_entity(result.scalar_one())

        except Exception as e:
            logger.error(f"Failed to upsert user {user.email}: {str(e)}")
            raise RepositoryException(f"Failed to upsert user: {str(e)}")

    async def update(self, user: User) -> User:
        """Update existing user"""
        try:
            result = await self.session.execute(
                select(UserModel).where(UserModel.id == user.id)
            )
            model = result.scalar_one_or_none()

            if not model:
                raise RepositoryException(f"User not found: {user.id}")

            for column, value in self._to_values(user).items():
                setattr(model, column, value)

            await self.session.flush()
            await self.session.refresh(model)

            return self._to_entity(model)

        except RepositoryException:
            raise
        except Exception as e:
            logger.error(f"Failed to update user {user.id}: {str(e)}")
            raise RepositoryException(f"Failed to update user: {str(e)}")

    async def get_many(self, user_ids: Sequence[UUID]) -> Dict[UUID, User]:
        """Get users keyed by ID"""
        if not user_ids:
            return {}
        try:
            result = await self.session.execute(
                select(UserModel).where(UserModel.id.in_(set(user_ids)))
            )
            return {model.id: self._to_entity(model) for model in result.scalars().all()}

        except Exception as e:
            logger.error(f"Failed to get users {list(user_ids)}: {str(e)}")
            raise RepositoryException(f"Failed to get users: {str(e)}")

    async def list_all(
        self,
        role: Optional[UserRole] = None,
        search: Optional[str] = None,
    ) -> List[User]:
        """List users, optionally by role and name/email substring"""
        try:
            query = select(UserModel)
            if role:
                query = query.where(UserModel.role == role.value)
            if search:
                pattern = f"%{search}%"
                query = query.where(
                    or_(
                        UserModel.first_name.ilike(pattern),
                        UserModel.last_name.ilike(pattern),
                        UserModel.email.ilike(pattern),
                    )
                )
            query = query.order_by(UserModel.created_at.desc())

            result = await self.session.execute(query)
            return [self._to_entity(model) for model in result.scalars().all()]

        except Exception as e:
            logger.error(f"Failed to list users (role={role}, search={search}): {str(e)}")
            raise RepositoryException(f"Failed to list users: {str(e)}")

    async def count(
        self,
        role: Optional[UserRole] = None,
        tiers: Optional[Sequence[SubscriptionTier]] = None,
    ) -> int:
        """Count users matching role and subscription tiers"""
        try:
            query = select(func.count()).select_from(UserModel)
            if role:
                query = query.where(UserModel.role == role.value)
            if tiers:
                query = query.where(UserModel.subscription_tier.in_([tier.value for tier in tiers]))

            result = await self.session.execute(query)
            return result.scalar_one()

        except Exception as e:
            logger.error(f"Failed to count users: {str(e)}")
            raise RepositoryException(f"Failed to count users: {str(e)}")

    def _to_values(self, entity: User) -> dict:
        values = {field: getattr(entity, field) for field in _PROFILE_FIELDS}
        values["role"] = entity.role.value
        values["subscription_tier"] = entity.subscription_tier.value
        return values

    def _to_entity(self, model: UserModel) -> User:
        """Convert ORM model to domain entity"""
        return User(
            id=model.id,
            email=Email(model.email),
            role=UserRole(model.role),
            subscription_tier=SubscriptionTier(model.subscription_tier),
            created_at=model.created_at,
            updated_at=model.updated_at,
            **{field: getattr(model, field) for field in _PROFILE_FIELDS},
        )

    def _to_model(self, entity: User) -> UserModel:
        """Convert domain entity to ORM model"""
        return UserModel(
            id=entity.id,
            email=str(entity.email),
            **self._to_values(entity),
        )
