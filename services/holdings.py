"""Holding repository.

Methods:
- create(symbol, shares_owned, portfolio_id, ...) -> HoldingOut (NotFound on bad portfolio, Duplicate on symbol clash)
- get(holding_id) -> HoldingOut
- update(holding_id, data) -> HoldingOut (only MUTABLE_FIELDS; symbol/portfolio_id are the natural key)
- remove(holding_id) -> None
"""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional
from models.holding import Holding
from models.portfolio import Portfolio
from schemas.holding import HoldingOut
from errors import DuplicateResourceError, NotFoundError
from services.repository import BaseRepository
from services.sql import allowed_fields, sql_for_partial_update

logger = logging.getLogger(__name__)

# field name -> column name
MUTABLE_FIELDS = {
    "shares_owned": "shares_owned",
    "cost_basis": "cost_basis",
    "target_percentage": "target_percentage",
    "goal": "goal",
}


class HoldingRepository(BaseRepository):

    def _held(self, symbol: str, portfolio_id: int) -> bool:
        return self.db.query(Holding.id).filter(
            Holding.symbol == symbol,
            Holding.portfolio_id == portfolio_id,
        ).first() is not None

    async def create(
        self,
        symbol: str,
        shares_owned: float,
        portfolio_id: int,
        cost_basis: Optional[float] = None,
        target_percentage: Optional[float] = None,
        goal: Optional[str] = None,
    ) -> HoldingOut:
        portfolio_check = self.db.query(Portfolio.id).filter(Portfolio.id == portfolio_id).first()
        if not portfolio_check:
            raise NotFoundError(f"Invalid portfolio: {portfolio_id}")

        if self._held(symbol, portfolio_id):
            logger.warning("Duplicate holding %s in portfolio %s", symbol, portfolio_id)
            raise DuplicateResourceError(f"Duplicate holding: {symbol}")

        holding = self._insert(
            Holding(
                symbol=symbol,
                shares_owned=shares_owned,
                cost_basis=cost_basis,
                target_percentage=target_percentage,
                goal=goal,
                portfolio_id=portfolio_id,
            ),
            f"Duplicate holding: {symbol}",
        )
        logger.info("Created holding %s (%s) in portfolio %s", holding.id, symbol, portfolio_id)
        return HoldingOut.model_validate(holding)

    async def get(self, holding_id: int) -> HoldingOut:
        holding = self.db.query(Holding).filter(Holding.id == holding_id).first()
        if not holding:
            raise NotFoundError(f"No holding: {holding_id}")
        return HoldingOut.model_validate(holding)

    async def list_for_portfolio(self, portfolio_id: int) -> List[HoldingOut]:
        holdings = self.db.query(Holding).filter(Holding.portfolio_id == portfolio_id).all()
        return [HoldingOut.model_validate(h) for h in holdings]

    async def get_owner(self, holding_id: int) -> str:
        """Resolve a holding's owner through its parent portfolio."""
        row = (
            self.db.query(Portfolio.owner)
            .join(Holding, Holding.portfolio_id == Portfolio.id)
            .filter(Holding.id == holding_id)
            .first()
        )
        if not row:
            raise NotFoundError(f"No holding: {holding_id}")
        return row[0]

    async def update(self, holding_id: int, data: Dict[str, Any]) -> HoldingOut:
        """Partial update: only the supplied fields change."""
        fields = allowed_fields("holding", data, MUTABLE_FIELDS)
        update = sql_for_partial_update(fields, MUTABLE_FIELDS)
        matched = self._update("holdings", "id", holding_id, update, f"Cannot update holding: {holding_id}")
        if not matched:
            raise NotFoundError(f"No holding: {holding_id}")
        return await self.get(holding_id)

    async def remove(self, holding_id: int) -> None:
        deleted = self.db.query(Holding).filter(Holding.id == holding_id).delete(synchronize_session=False)
        self.db.commit()
        if not deleted:
            raise NotFoundError(f"No holding: {holding_id}")
        logger.info("Removed holding %s", holding_id)
