"""Ownership checks run before any resource-scoped request.

Ownership is hierarchical: User -> Portfolio -> Holding. A holding has no
owner column of its own; it belongs to whoever owns its portfolio.

Functions:
- ensure_correct_user(username, target_username)
- ensure_correct_portfolio(db, username, portfolio_id)
- ensure_correct_holding(db, username, holding_id)

Each raises NotFoundError when the resource is absent and ForbiddenError when
it exists but belongs to someone else; none of them writes.
"""
from sqlalchemy.orm import Session
from errors import ForbiddenError
from services.holdings import HoldingRepository
from services.portfolios import PortfolioRepository


def ensure_correct_user(username: str, target_username: str) -> None:
    if username != target_username:
        raise ForbiddenError(f"User {username} may not act on user {target_username}")


async def ensure_correct_portfolio(db: Session, username: str, portfolio_id: int) -> None:
    owner = await PortfolioRepository(db).get_owner(portfolio_id)
    if owner != username:
        raise ForbiddenError(f"Portfolio {portfolio_id} does not belong to {username}")


async def ensure_correct_holding(db: Session, username: str, holding_id: int) -> None:
    # one hop through the parent portfolio
    owner = await HoldingRepository(db).get_owner(holding_id)
    if owner != username:
        raise ForbiddenError(f"Holding {holding_id} does not belong to {username}")
