"""
Seed a SUPER_ADMIN account.

Usage:
    python scripts/create_admin.py --email admin@example.com --password 'change-me' [--name "Admin User"]
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fellowship.core.constants import ROLE_SUPER_ADMIN
from fellowship.core.security import hash_password
from fellowship.crud.user_crud import user_crud
from fellowship.database.session import AsyncSessionLocal, close_db, init_db
from fellowship.models.user import User

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("create_admin")


async def create_admin(name: str, email: str, password: str) -> bool:
    """Create the account unless the email is taken. Returns True when created."""
    await init_db()
    try:
        async with AsyncSessionLocal() as db:
            if await user_crud.get_by_email(db, email):
                logger.info(f"Admin user already exists: {email}")
                return False

            db.add(User(
                name=name,
                email=email.strip().lower(),
                password_hash=hash_password(password),
                role=ROLE_SUPER_ADMIN,
                fellowship_role="Administrator",
            ))
            await db.commit()
            logger.info(f"Admin user created: {email}")
            return True
    finally:
        await close_db()


def main():
    parser = argparse.ArgumentParser(description="Create a SUPER_ADMIN account")
    parser.add_argument("--name", default="Admin User")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    args = parser.parse_args()

    if len(args.password) < 6:
        parser.error("password must be at least 6 characters")
    asyncio.run(create_admin(args.name, args.email, args.password))


if __name__ == "__main__":
    main()
