"""Persistence for user records."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.exceptions import DuplicateEmailError, StoreError
from src.models.user import User
from src.services.auth import get_password_hash

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("display_name", "phone_number", "address")

# Upper bound of the Integer primary key (32-bit on PostgreSQL)
MAX_USER_ID = 2**31 - 1


class UserStore:
    """CRUD over the users table.

    The unique index on ``email`` is the authoritative duplicate guard;
    callers may check ``find_by_email`` first for a faster answer, but
    ``create`` still raises DuplicateEmailError if another request won the race.
    Any other database failure is rolled back and surfaces as StoreError.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> User | None:
        try:
            return self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            raise self._store_error("find_by_email", e) from e

    def find_by_id(self, user_id: int) -> User | None:
        """Look up a user by id. Ids outside the column's range cannot exist."""
        if not 0 < user_id <= MAX_USER_ID:
            return None
        try:
            return self.db.query(User).filter(User.id == user_id).first()
        except SQLAlchemyError as e:
            raise self._store_error("find_by_id", e) from e

    def list_all(self) -> list[User]:
        """Return every user, oldest first."""
        try:
            return self.db.query(User).order_by(User.id).all()
        except SQLAlchemyError as e:
            raise self._store_error("list_all", e) from e

    def create(
        self,
        email: str,
        password: str,
        display_name: str | None = None,
        phone_number: str | None = None,
        address: str | None = None,
    ) -> User:
        """Hash the password and insert a new user."""
        user = User(
            email=email,
            password_hash=get_password_hash(password),
            display_name=display_name,
            phone_number=phone_number,
            address=address,
        )
        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info(f"Duplicate registration rejected by unique constraint: {email}")
            raise DuplicateEmailError() from e
        except SQLAlchemyError as e:
            raise self._store_error("create", e) from e

        self.db.refresh(user)
        logger.info(f"Created user {user.id}")
        return user

    def update(self, user_id: int, fields: dict[str, Any]) -> User | None:
        """Apply the supplied fields to a user.

        Only UPDATABLE_FIELDS are considered. A value of None or "" leaves the
        stored value unchanged. Returns None if the user does not exist.
        """
        user = self.find_by_id(user_id)
        if user is None:
            return None

        for name in UPDATABLE_FIELDS:
            value = fields.get(name)
            if value:
                setattr(user, name, value)

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._store_error("update", e) from e

        self.db.refresh(user)
        return user

    def delete(self, user_id: int) -> bool:
        """Remove a user. Returns False if there was nothing to remove."""
        user = self.find_by_id(user_id)
        if user is None:
            return False

        try:
            self.db.delete(user)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._store_error("delete", e) from e

        logger.info(f"Deleted user {user_id}")
        return True

    def _store_error(self, operation: str, error: SQLAlchemyError) -> StoreError:
        self.db.rollback()
        logger.error(f"UserStore.{operation} failed: {error}")
        return StoreError()
