"""
Repository layer for the blog persistence core.

Each repository is bound to one SQLAlchemy Session passed in at
construction; write methods run inside ``blog.utils.tx.atomic``.
"""

from .user_repository import UserRepository  # noqa: F401
from .board_repository import BoardRepository  # noqa: F401

# Component names used by the controller layer
UserStore = UserRepository
BoardStore = BoardRepository
