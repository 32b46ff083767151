from __future__ import annotations
import logging
from typing import Any, Dict, Optional
from models.portfolio import Portfolio
from schemas.portfolio import PortfolioDetail, PortfolioOut
from errors import DuplicateResourceError, NotFoundError
from services.holdings import HoldingRepository
from services.repository import BaseRepository
from services.sql import allowed_fields, sql_for_partial_update

logger = logging.getLogger(__name__)

# field name -> column name; the owner is fixed at creation
MUTABLE_FIELDS = {
    "name": "name",
    "cash": "cash",
    "notes": "notes",
}


class PortfolioRepository(BaseRepository):
    """Portfolios, unique by (name, owner)."""

    def _name_taken(self, name: str, owner: str, exclude_id: Optional[int] = None) -> bool:
        query = self.db.query(Portfolio.id).filter(Portfolio.name == name, Portfolio.owner == owner)
        if exclude_id is not None:
            query = query.filter(Portfolio.id != exclude_id)
        return query.first() is not None

    async def create(self, name: str, owner: str, cash: float = 0, notes: Optional[str] = None) -> PortfolioOut:
        """Create a portfolio for `owner`.

        Raises DuplicateResourceError if the owner already has a portfolio called `name`.
        """
        if self._name_taken(name, owner):
            logger.warning("Duplicate portfolio name %r for %s", name, owner)
            raise DuplicateResourceError(f"Duplicate name: {name}")

        portfolio = self._insert(
            Portfolio(name=name, cash=cash, notes=notes, owner=owner),
            f"Duplicate name: {name}",
        )
        logger.info("Created portfolio %s for %s", portfolio.id, owner)
        return PortfolioOut.model_validate(portfolio)

    async def get(self, portfolio_id: int) -> PortfolioDetail:
        """Return the portfolio with its holdings (store order)."""
        portfolio = self.db.query(Portfolio).filter(Portfolio.id == portfolio_id).first()
        if not portfolio:
            raise NotFoundError(f"No portfolio: {portfolio_id}")
        result = PortfolioDetail.model_validate(portfolio)
        result.holdings = await HoldingRepository(self.db).list_for_portfolio(portfolio_id)
        return result

    async def get_owner(self, portfolio_id: int) -> str:
        row = self.db.query(Portfolio.owner).filter(Portfolio.id == portfolio_id).first()
        if not row:
            raise NotFoundError(f"No portfolio: {portfolio_id}")
        return row[0]

    async def update(self, portfolio_id: int, data: Dict[str, Any], username: str) -> PortfolioOut:
        """Partial update of name/cash/notes.

        A new name is checked against `username`'s other portfolios before
        anything is written.
        """
        fields = allowed_fields("portfolio", data, MUTABLE_FIELDS)
        update = sql_for_partial_update(fields, MUTABLE_FIELDS)
        if fields.get("name") is not None and self._name_taken(fields["name"], username, exclude_id=portfolio_id):
            logger.warning("Rename of portfolio %s to %r collides for %s", portfolio_id, fields["name"], username)
            raise DuplicateResourceError(f"Duplicate name: {fields['name']}")

        matched = self._update("portfolios", "id", portfolio_id, update, f"Duplicate name: {fields.get('name')}")
        if not matched:
            raise NotFoundError(f"No portfolio: {portfolio_id}")
        portfolio = self.db.query(Portfolio).filter(Portfolio.id == portfolio_id).first()
        return PortfolioOut.model_validate(portfolio)

    async def remove(self, portfolio_id: int) -> None:
        # Holdings go with it through the store's ON DELETE CASCADE
        deleted = self.db.query(Portfolio).filter(Portfolio.id == portfolio_id).delete(synchronize_session=False)
        self.db.commit()
        if not deleted:
            raise NotFoundError(f"No portfolio: {portfolio_id}")
        logger.info("Removed portfolio %s", portfolio_id)
