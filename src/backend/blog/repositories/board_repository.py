"""
Data access for board posts.

Two delete paths are kept on purpose:
- ``delete_by_id`` issues a bulk DELETE statement (no identity map, no ORM cascades)
- ``delete_by_id_safely`` loads the entity and removes it through the session
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.orm import Session

from blog import models
from blog.errors import NotFoundError
from blog.utils.tx import transactional

logger = logging.getLogger(__name__)


class BoardRepository:
    """Repository wrapper for ``Board`` rows."""

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    @transactional
    def update_by_id(self, board_id: int, req) -> models.Board:
        logger.info("Updating board %s", board_id)
        board = self.find_by_id(board_id)
        if board is None:
            raise NotFoundError("Board not found")
        board.title = req.title
        board.content = req.content
        self._session.flush()
        return board

    @transactional
    def delete_by_id(self, board_id: int) -> None:
        logger.info("Deleting board %s", board_id)
        res = self._session.execute(delete(models.Board).where(models.Board.id == board_id))
        if res.rowcount == 0:
            raise NotFoundError("No board to delete")
        logger.info("Deleted board %s, rows affected: %s", board_id, res.rowcount)

    @transactional
    def delete_by_id_safely(self, board_id: int) -> None:
        board = self._session.get(models.Board, board_id)
        if board is None:
            raise NotFoundError("No board to delete")
        self._session.delete(board)
        self._session.flush()
        logger.info("Removed board %s", board_id)

    @transactional
    def save(self, board: models.Board) -> models.Board:
        owner = board.user.username if board.user is not None else board.user_id
        logger.info("Saving board %r by %s", board.title, owner)
        self._session.add(board)
        self._session.flush()
        return board

    def find_by_all(self) -> list[models.Board]:
        logger.info("Listing all boards")
        return (
            self._session.query(models.Board)
            .order_by(models.Board.id.desc())
            .all()
        )

    def find_by_id(self, board_id: int) -> Optional[models.Board]:
        return self._session.get(models.Board, board_id)
