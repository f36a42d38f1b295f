"""
User persistence on top of a SQLAlchemy session.
"""
from contextlib import contextmanager
from typing import Optional
import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import DuplicateUser, StoreUnavailable
from .models import User, UserDetails

logger = logging.getLogger(__name__)


class UserStore:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, operation: str):
        try:
            yield
        except SQLAlchemyError as e:
            logger.error("User store %s failed: %s", operation, e)
            self.db.rollback()
            raise StoreUnavailable() from e

    def find_by_email_or_phone(
        self, email: Optional[str] = None, phone_number: Optional[str] = None
    ) -> Optional[User]:
        """Return the first user matching either identifier, or None."""
        filters = []
        if email:
            filters.append(User.email == email)
        if phone_number:
            filters.append(User.phone_number == phone_number)
        if not filters:
            return None
        with self._guard("lookup"):
            return self.db.query(User).filter(or_(*filters)).first()

    def find_by_email(self, email: str) -> Optional[User]:
        with self._guard("lookup"):
            return self.db.query(User).filter(User.email == email).first()

    def find_by_phone(self, phone_number: str) -> Optional[User]:
        with self._guard("lookup"):
            return self.db.query(User).filter(User.phone_number == phone_number).first()

    def find_by_id(self, user_id: str) -> Optional[User]:
        with self._guard("lookup"):
            return self.db.query(User).filter(User.id == user_id).first()

    def create_user_with_profile(
        self, email: str, phone_number: str, password_hash: str, full_name: str
    ) -> User:
        """
        Insert a user and its details row in a single transaction.

        Raises:
            DuplicateUser: a unique constraint on email or phone fired
            StoreUnavailable: any other database failure; nothing is persisted
        """
        user = User(email=email, phone_number=phone_number, password=password_hash)
        user.details = UserDetails(full_name=full_name)
        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateUser() from e
        except SQLAlchemyError as e:
            logger.error("User store create failed: %s", e)
            self.db.rollback()
            raise StoreUnavailable("Failed to create user due to database connectivity issues") from e

        with self._guard("refresh"):
            self.db.refresh(user)
        return user
