"""
NextHire Database Seeder

Creates a demo recruiter and a demo job seeker through the auth service,
so the stored passwords are hashed exactly as at registration.
"""

import asyncio
import sys
sys.path.insert(0, ".")

from app.db.session import SessionLocal, engine
from app.db.base import Base
from app.models import UserProfile  # noqa: F401
from app.api.v1.auth import get_password_hasher, get_token_codec
from app.services.auth_service import AuthService
from app.services.credential_store import SqlCredentialStore

DEMO_USERS = [
    {
        "name": "Sarah Chen",
        "email": "recruiter@nexthire.com",
        "password": "recruiter123",
        "role": "recruiter",
    },
    {
        "name": "John Doe",
        "email": "john.doe@example.com",
        "password": "seeker123",
        "role": "job-seeker",
    },
]


async def seed_database():
    """Seed the database with test data."""

    # Create all tables
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        service = AuthService(
            store=SqlCredentialStore(db),
            hasher=get_password_hasher(),
            codec=get_token_codec(),
        )

        print("Seeding database...")
        for user in DEMO_USERS:
            result = await service.register(**user)
            if result.success:
                print(f"  + {user['role']}: {user['email']} / {user['password']}")
            else:
                print(f"  - {user['email']}: {result.message}")
    finally:
        db.close()


if __name__ == "__main__":
    asyncio.run(seed_database())
