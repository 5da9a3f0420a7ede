"""
Data access for user accounts.

Credential and username lookups return ``None`` on any query failure, so a
missing row and a backend error look the same to the caller. ``find_by_id``
raises ``NotFoundError`` instead.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import Session

from blog import models
from blog.errors import NotFoundError
from blog.utils.tx import in_atomic, transactional

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository wrapper for ``User`` rows."""

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    def _reset_failed_transaction(self, e: SQLAlchemyError) -> None:
        # Driver errors can leave the transaction aborted (PostgreSQL); an
        # enclosing atomic block owns the transaction and rolls it back itself.
        if isinstance(e, DBAPIError) and not in_atomic(self._session) and self._session.in_transaction():
            self._session.rollback()

    def find_by_username_and_password(self, username: str, password: str) -> Optional[models.User]:
        """Login lookup. ``None`` means the login failed, whatever the cause."""
        try:
            return (
                self._session.query(models.User)
                .filter(
                    models.User.username == username,
                    models.User.password == password,
                )
                .one()
            )
        except SQLAlchemyError as e:
            logger.warning("Credential lookup failed for %s: %s", username, e.__class__.__name__)
            self._reset_failed_transaction(e)
            return None

    @transactional
    def save(self, user: models.User) -> models.User:
        logger.info("Saving user %s", user.username)
        self._session.add(user)
        self._session.flush()
        logger.info("Saved user %s with id %s", user.username, user.id)
        return user

    def find_by_username(self, username: str) -> Optional[models.User]:
        """Duplicate check before registration."""
        try:
            return (
                self._session.query(models.User)
                .filter(models.User.username == username)
                .one()
            )
        except SQLAlchemyError as e:
            logger.warning("Username lookup failed for %s: %s", username, e.__class__.__name__)
            self._reset_failed_transaction(e)
            return None

    def find_by_id(self, user_id: int) -> models.User:
        user = self._session.get(models.User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    @transactional
    def update_by_id(self, user_id: int, req) -> models.User:
        logger.info("Updating password for user %s", user_id)
        user = self.find_by_id(user_id)
        user.password = req.password
        self._session.flush()
        return user
