import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog import models
from blog.errors import NotFoundError
from blog.repositories import BoardRepository
from blog.schemas import BoardSaveRequest, BoardUpdateRequest


def _post(repo: BoardRepository, user: models.User, title: str, content: str = "body") -> models.Board:
    return repo.save(models.Board(title=title, content=content, user=user))


def test_save_assigns_id(db_session: Session, user_factory):
    user = user_factory()
    repo = BoardRepository(db_session)
    board = repo.save(BoardSaveRequest(title="hello", content="world").to_entity(user))
    assert board.id is not None
    assert board.user_id == user.id


def test_save_without_owner_fails_and_rolls_back(db_session: Session):
    repo = BoardRepository(db_session)
    with pytest.raises(IntegrityError):
        repo.save(models.Board(title="orphan", content="no owner"))
    assert repo.find_by_all() == []


def test_find_by_all_newest_first(db_session: Session, user_factory):
    user = user_factory()
    repo = BoardRepository(db_session)
    for i in range(5):
        _post(repo, user, f"post {i}")

    boards = repo.find_by_all()
    ids = [b.id for b in boards]
    assert len(ids) == 5
    assert all(a > b for a, b in zip(ids, ids[1:]))
    assert boards[0].title == "post 4"
    assert isinstance(boards, list)


def test_find_by_all_empty(db_session: Session):
    assert BoardRepository(db_session).find_by_all() == []


def test_find_by_id_missing_returns_none(db_session: Session):
    assert BoardRepository(db_session).find_by_id(4242) is None


def test_update_scenario(db_session: Session, user_factory):
    user = user_factory("alice", "p1")
    repo = BoardRepository(db_session)
    board = _post(repo, user, "T1", "C1")
    board_id, user_id = board.id, user.id

    repo.update_by_id(board_id, BoardUpdateRequest(title="T2", content="C2"))

    db_session.expunge_all()
    reloaded = repo.find_by_id(board_id)
    assert reloaded.title == "T2"
    assert reloaded.content == "C2"
    assert reloaded.user_id == user_id
    assert reloaded.user.username == "alice"


def test_update_missing_raises(db_session: Session):
    repo = BoardRepository(db_session)
    with pytest.raises(NotFoundError):
        repo.update_by_id(777, BoardUpdateRequest(title="T", content="C"))


def test_delete_by_id(db_session: Session, user_factory):
    user = user_factory()
    repo = BoardRepository(db_session)
    keep = _post(repo, user, "keep")
    gone = _post(repo, user, "gone")
    gone_id = gone.id

    repo.delete_by_id(gone_id)

    assert repo.find_by_id(gone_id) is None
    assert [b.id for b in repo.find_by_all()] == [keep.id]


def test_delete_by_id_missing_raises(db_session: Session, user_factory):
    user = user_factory()
    repo = BoardRepository(db_session)
    board = _post(repo, user, "untouched")

    with pytest.raises(NotFoundError):
        repo.delete_by_id(board.id + 100)
    assert repo.find_by_id(board.id) is not None


def test_delete_by_id_safely(db_session: Session, user_factory):
    user = user_factory()
    repo = BoardRepository(db_session)
    board = _post(repo, user, "bye")
    board_id = board.id

    repo.delete_by_id_safely(board_id)

    assert board not in db_session
    assert repo.find_by_id(board_id) is None
    assert db_session.get(models.User, user.id).boards == []


def test_delete_by_id_safely_missing_raises_before_removal(db_session: Session, user_factory, monkeypatch):
    repo = BoardRepository(db_session)
    deleted = []
    monkeypatch.setattr(db_session, "delete", lambda obj: deleted.append(obj))

    with pytest.raises(NotFoundError):
        repo.delete_by_id_safely(31337)
    assert deleted == []
