"""HoldingRepository against in-memory SQLite."""

import asyncio
from unittest.mock import MagicMock

import pytest

from errors import BadRequestError, DuplicateResourceError, EmptyUpdateError, NotFoundError
from models.holding import Holding
from services.holdings import HoldingRepository
from services.portfolios import PortfolioRepository


@pytest.fixture()
def portfolio(db_session, users):
    return asyncio.run(PortfolioRepository(db_session).create(name="Ret", cash=1000, owner="u1"))


def make_holding(db, portfolio_id, symbol="AAPL", **kwargs):
    kwargs.setdefault("shares_owned", 10)
    return asyncio.run(HoldingRepository(db).create(symbol=symbol, portfolio_id=portfolio_id, **kwargs))


def test_create_then_get(db_session, portfolio):
    created = make_holding(db_session, portfolio.id, cost_basis=150.25, target_percentage=20, goal="growth")
    assert created.model_dump() == {
        "id": created.id,
        "symbol": "AAPL",
        "shares_owned": 10,
        "cost_basis": 150.25,
        "target_percentage": 20,
        "goal": "growth",
        "portfolio_id": portfolio.id,
    }
    assert asyncio.run(HoldingRepository(db_session).get(created.id)) == created


def test_create_minimal_fields(db_session, portfolio):
    created = make_holding(db_session, portfolio.id)
    assert created.cost_basis is None
    assert created.target_percentage is None
    assert created.goal is None


def test_create_bad_portfolio_writes_nothing(db_session, users):
    with pytest.raises(NotFoundError):
        make_holding(db_session, 9999)
    assert db_session.query(Holding).count() == 0


def test_create_duplicate(db_session, portfolio):
    make_holding(db_session, portfolio.id)
    with pytest.raises(DuplicateResourceError):
        make_holding(db_session, portfolio.id, shares_owned=3)
    rows = db_session.query(Holding).all()
    assert len(rows) == 1
    assert rows[0].shares_owned == 10


def test_constraint_catches_race_past_precheck(db_session, portfolio, monkeypatch):
    make_holding(db_session, portfolio.id)
    # a concurrent insert landed after the duplicate check passed
    monkeypatch.setattr(HoldingRepository, "_held", lambda self, *a, **kw: False)
    with pytest.raises(DuplicateResourceError):
        make_holding(db_session, portfolio.id, shares_owned=3)
    assert db_session.query(Holding).count() == 1


def test_same_symbol_in_two_portfolios(db_session, portfolio):
    other = asyncio.run(PortfolioRepository(db_session).create(name="Fun", cash=0, owner="u1"))
    make_holding(db_session, portfolio.id)
    make_holding(db_session, other.id)
    assert db_session.query(Holding).count() == 2


def test_get_not_found(db_session):
    with pytest.raises(NotFoundError):
        asyncio.run(HoldingRepository(db_session).get(0))


def test_get_owner_walks_through_portfolio(db_session, portfolio):
    h = make_holding(db_session, portfolio.id)
    assert asyncio.run(HoldingRepository(db_session).get_owner(h.id)) == "u1"


def test_update_changes_only_supplied_fields(db_session, portfolio):
    h = make_holding(db_session, portfolio.id, cost_basis=100, goal="hold")
    updated = asyncio.run(HoldingRepository(db_session).update(h.id, {"shares_owned": 12.5}))
    assert updated.shares_owned == 12.5
    assert updated.cost_basis == 100
    assert updated.goal == "hold"
    assert updated.symbol == "AAPL"


def test_update_idempotent(db_session, portfolio):
    h = make_holding(db_session, portfolio.id)
    repo = HoldingRepository(db_session)
    once = asyncio.run(repo.update(h.id, {"target_percentage": 30, "goal": "trim"}))
    twice = asyncio.run(repo.update(h.id, {"target_percentage": 30, "goal": "trim"}))
    assert once == twice


@pytest.mark.parametrize("field,value", [("symbol", "MSFT"), ("portfolio_id", 2), ("id", 5)])
def test_update_natural_key_rejected(db_session, portfolio, field, value):
    h = make_holding(db_session, portfolio.id)
    with pytest.raises(BadRequestError):
        asyncio.run(HoldingRepository(db_session).update(h.id, {field: value}))
    assert asyncio.run(HoldingRepository(db_session).get(h.id)) == h


def test_update_not_found(db_session):
    with pytest.raises(NotFoundError):
        asyncio.run(HoldingRepository(db_session).update(0, {"goal": "x"}))


def test_empty_update_makes_no_store_round_trip():
    db = MagicMock()
    with pytest.raises(EmptyUpdateError):
        asyncio.run(HoldingRepository(db).update(1, {}))
    db.execute.assert_not_called()


def test_remove(db_session, portfolio):
    h = make_holding(db_session, portfolio.id)
    asyncio.run(HoldingRepository(db_session).remove(h.id))
    with pytest.raises(NotFoundError):
        asyncio.run(HoldingRepository(db_session).get(h.id))
    # parent untouched
    assert asyncio.run(PortfolioRepository(db_session).get(portfolio.id)).holdings == []


def test_remove_not_found(db_session):
    with pytest.raises(NotFoundError):
        asyncio.run(HoldingRepository(db_session).remove(0))
