"""
Seed the database with sample users.

    python -m auth_backend.auth_backend.auth_service.seed
"""
from typing import Iterable, List
import logging

from sqlalchemy.orm import Session

from .auth import hash_password
from .db import SessionLocal, init_db
from .store import UserStore

logger = logging.getLogger(__name__)

DEFAULT_USERS = [
    {
        "email": "john.doe@example.com",
        "phone_number": "+1234567890",
        "full_name": "John Doe",
        "password": "password123",
    },
    {
        "email": "jane.smith@example.com",
        "phone_number": "+1234567891",
        "full_name": "Jane Smith",
        "password": "password123",
    },
    {
        "email": "admin@example.com",
        "phone_number": "+1234567892",
        "full_name": "Admin User",
        "password": "admin123",
    },
]


def seed_users(db: Session, users: Iterable[dict] = DEFAULT_USERS) -> List[str]:
    """
    Create each user unless its email or phone number is taken.

    Returns:
        Emails of the users actually created
    """
    store = UserStore(db)
    created = []
    for data in users:
        if store.find_by_email_or_phone(email=data["email"], phone_number=data["phone_number"]):
            logger.info("User with email %s already exists, skipping", data["email"])
            continue
        user = store.create_user_with_profile(
            email=data["email"],
            phone_number=data["phone_number"],
            password_hash=hash_password(data["password"]),
            full_name=data["full_name"],
        )
        logger.info("Created user: %s (%s)", user.email, user.full_name)
        created.append(user.email)
    return created


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s:%(message)s")
    init_db()
    db = SessionLocal()
    try:
        created = seed_users(db)
    finally:
        db.close()
    logger.info("Seeding completed, %d user(s) created", len(created))


if __name__ == "__main__":
    main()
