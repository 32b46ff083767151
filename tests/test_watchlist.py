import asyncio

import pytest

from errors import DuplicateResourceError, NotFoundError
from models.watchlist import Watchlist
from services.users import UserRepository


def test_add_to_watchlist(db_session, users):
    asyncio.run(UserRepository(db_session).add_to_watchlist("u1", "MSFT"))
    rows = db_session.query(Watchlist).filter_by(username="u1").all()
    assert [r.symbol for r in rows] == ["MSFT"]


def test_add_to_watchlist_unknown_user(db_session):
    with pytest.raises(NotFoundError):
        asyncio.run(UserRepository(db_session).add_to_watchlist("nope", "MSFT"))


def test_add_to_watchlist_duplicate(db_session, users):
    repo = UserRepository(db_session)
    asyncio.run(repo.add_to_watchlist("u1", "MSFT"))
    with pytest.raises(DuplicateResourceError):
        asyncio.run(repo.add_to_watchlist("u1", "MSFT"))
    assert db_session.query(Watchlist).count() == 1


def test_constraint_catches_race_past_precheck(db_session, users, monkeypatch):
    repo = UserRepository(db_session)
    asyncio.run(repo.add_to_watchlist("u1", "MSFT"))
    monkeypatch.setattr(UserRepository, "_watching", lambda self, *a, **kw: False)
    with pytest.raises(DuplicateResourceError):
        asyncio.run(repo.add_to_watchlist("u1", "MSFT"))
    assert db_session.query(Watchlist).count() == 1


def test_same_symbol_for_different_users(db_session, users):
    repo = UserRepository(db_session)
    asyncio.run(repo.add_to_watchlist("u1", "MSFT"))
    asyncio.run(repo.add_to_watchlist("u2", "MSFT"))
    assert db_session.query(Watchlist).count() == 2


def test_remove_from_watchlist_not_watched(db_session, users):
    repo = UserRepository(db_session)
    asyncio.run(repo.add_to_watchlist("u1", "AAPL"))
    with pytest.raises(NotFoundError) as exc:
        asyncio.run(repo.remove_from_watchlist("u1", "MSFT"))
    assert "not watched" in exc.value.message
    assert [r.symbol for r in db_session.query(Watchlist).all()] == ["AAPL"]


def test_remove_from_watchlist_unknown_user(db_session):
    with pytest.raises(NotFoundError):
        asyncio.run(UserRepository(db_session).remove_from_watchlist("nope", "MSFT"))


def test_readd_after_remove(db_session, users):
    repo = UserRepository(db_session)
    asyncio.run(repo.add_to_watchlist("u1", "MSFT"))
    asyncio.run(repo.remove_from_watchlist("u1", "MSFT"))
    assert asyncio.run(repo.get("u1")).watchlist == []
    asyncio.run(repo.add_to_watchlist("u1", "MSFT"))
    assert asyncio.run(repo.get("u1")).watchlist == ["MSFT"]
