from __future__ import annotations

import functools
from contextlib import contextmanager
from typing import Any, Callable, TypeVar

from sqlalchemy.orm import Session

from blog.errors import TransactionRolledBackError

_DEPTH_KEY = "blog.tx_depth"
_ROLLBACK_ONLY_KEY = "blog.tx_rollback_only"

F = TypeVar("F", bound=Callable[..., Any])


def in_atomic(session: Session) -> bool:
    return session.info.get(_DEPTH_KEY, 0) > 0


@contextmanager
def atomic(session: Session):
    """
    Scoped transaction on ``session``:
    - commits on normal exit
    - rolls back and re-raises on any exception
    Nested blocks on the same session join the outermost one; only the
    outermost block commits or rolls back. A nested block that fails marks
    the transaction rollback-only, so the outermost block rolls back and
    raises ``TransactionRolledBackError`` even if the caller caught the
    original error.
    """
    depth = session.info.get(_DEPTH_KEY, 0)
    session.info[_DEPTH_KEY] = depth + 1
    try:
        yield
        if depth == 0:
            if session.info.get(_ROLLBACK_ONLY_KEY):
                raise TransactionRolledBackError(
                    "Transaction marked rollback-only by a failed nested operation"
                )
            session.commit()
    except Exception:
        if depth == 0:
            session.rollback()
        else:
            session.info[_ROLLBACK_ONLY_KEY] = True
        raise
    finally:
        session.info[_DEPTH_KEY] = depth
        if depth == 0:
            session.info.pop(_ROLLBACK_ONLY_KEY, None)


def transactional(method: F) -> F:
    """Run a repository method inside ``atomic(self.session)``."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with atomic(self.session):
            return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]
