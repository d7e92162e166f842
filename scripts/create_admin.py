"""
Create Admin Script
Admins cannot sign up through the API; this creates (or promotes) one.

Usage: python scripts/create_admin.py <email> <password> [first name] [last name]
"""
import asyncio
import sys
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

sys.path.insert(0, str(Path(__file__).parent.parent / "backend" / "src"))

from core.database import get_db_session, init_db  # noqa: E402
from domain.entities import User  # noqa: E402
from domain.enums import UserRole  # noqa: E402
from domain.value_objects import Email  # noqa: E402
from infrastructure.persistence.repositories.user import SQLAlchemyUserRepository  # noqa: E402
from infrastructure.security.password_hasher import BcryptPasswordHasher  # noqa: E402


async def create_admin(email: str, password: str, first_name: str, last_name: str):
    await init_db()

    now = datetime.now(timezone.utc)
    admin = User(
        id=uuid4(),
        email=Email(email),
        password_hash=BcryptPasswordHasher().hash_password(password),
        first_name=first_name,
        last_name=last_name,
        role=UserRole.ADMIN,
        is_verified=True,
        email_verified=True,
        created_at=now,
        updated_at=now,
    )

    async with get_db_session() as session:
        saved = await SQLAlchemyUserRepository(session).upsert(admin)

    print(f"Admin ready: {saved.email} (id={saved.id})")


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python scripts/create_admin.py <email> <password> [first name] [last name]")
        sys.exit(1)

    asyncio.run(create_admin(
        sys.argv[1],
        sys.argv[2],
        sys.argv[3] if len(sys.argv) > 3 else "Platform",
        sys.argv[4] if len(sys.argv) > 4 else "Admin",
    ))
