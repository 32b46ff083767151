"""User repository: accounts, credentials and the per-user watchlist."""
from __future__ import annotations
import asyncio
import logging
from typing import Any, Dict, List
from models.user import User
from models.portfolio import Portfolio
from models.holding import Holding
from models.watchlist import Watchlist
from schemas.user import UserComplete, UserDetail, UserOut
from errors import BadRequestError, DuplicateResourceError, NotFoundError, UnauthorizedError
from security import get_password_hash, verify_password
from services.portfolios import PortfolioRepository
from services.repository import BaseRepository
from services.sql import allowed_fields, sql_for_partial_update

logger = logging.getLogger(__name__)

# field name -> column name; username is the identity key and never changes
MUTABLE_FIELDS = {
    "password": "password",
    "email": "email",
}


class UserRepository(BaseRepository):

    def _exists(self, username: str) -> bool:
        return self.db.query(User.username).filter(User.username == username).first() is not None

    def _watching(self, username: str, symbol: str) -> bool:
        return self.db.query(Watchlist.symbol).filter(
            Watchlist.username == username, Watchlist.symbol == symbol
        ).first() is not None

    def _watchlist(self, username: str) -> List[str]:
        rows = self.db.query(Watchlist.symbol).filter(Watchlist.username == username).all()
        return [r[0] for r in rows]

    async def authenticate(self, username: str, password: str) -> UserOut:
        """Return the user if the password matches.

        Unknown usernames and wrong passwords both raise UnauthorizedError so
        the error does not reveal which usernames exist.
        """
        user = self.db.query(User).filter(User.username == username).first()
        if user:
            try:
                valid = verify_password(password, user.password)
            except ValueError:
                # stored value is not a recognizable hash
                logger.warning("Unusable password hash stored for %s", username)
                valid = False
            if valid:
                return UserOut.model_validate(user)
        raise UnauthorizedError("Invalid username/password")

    async def register(self, username: str, password: str, email: str) -> UserOut:
        if self._exists(username):
            logger.warning("Duplicate username %s", username)
            raise DuplicateResourceError(f"Duplicate username: {username}")

        user = self._insert(
            User(username=username, password=get_password_hash(password), email=email),
            f"Duplicate username: {username}",
        )
        logger.info("Registered user %s", username)
        return UserOut.model_validate(user)

    async def find_all(self) -> List[UserOut]:
        users = self.db.query(User).order_by(User.username).all()
        return [UserOut.model_validate(u) for u in users]

    async def get(self, username: str) -> UserDetail:
        user = self.db.query(User).filter(User.username == username).first()
        if not user:
            raise NotFoundError(f"No user: {username}")
        return UserDetail(username=user.username, email=user.email, watchlist=self._watchlist(username))

    async def get_complete(self, username: str) -> UserComplete:
        """User, watchlist and every owned portfolio with its holdings.

        Portfolio reads are gathered together; any failure among them is
        reported as a single BadRequestError.
        """
        user = await self.get(username)
        try:
            portfolio_ids = await self.get_user_portfolio_ids(username)
            portfolios = await asyncio.gather(*(PortfolioRepository(self.db).get(pid) for pid in portfolio_ids))
        except Exception as e:
            logger.warning("Could not assemble portfolios for %s: %s", username, e)
            raise BadRequestError(str(e)) from e
        return UserComplete(**user.model_dump(), portfolios=list(portfolios))

    async def update(self, username: str, data: Dict[str, Any]) -> UserOut:
        """Partial update of password/email. A new password is hashed before storage.

        Callers must have established that the requester is `username`.
        """
        fields = allowed_fields("user", data, MUTABLE_FIELDS)
        if "password" in fields:
            if not fields["password"]:
                raise BadRequestError("Password must not be empty")
            fields["password"] = get_password_hash(fields["password"])
        update = sql_for_partial_update(fields, MUTABLE_FIELDS)

        matched = self._update("users", "username", username, update, f"Cannot update user: {username}")
        if not matched:
            raise NotFoundError(f"No user: {username}")
        user = self.db.query(User).filter(User.username == username).first()
        return UserOut.model_validate(user)

    async def remove(self, username: str) -> None:
        deleted = self.db.query(User).filter(User.username == username).delete(synchronize_session=False)
        self.db.commit()
        if not deleted:
            raise NotFoundError(f"No user: {username}")
        logger.info("Removed user %s", username)

    async def add_to_watchlist(self, username: str, symbol: str) -> None:
        if not self._exists(username):
            raise NotFoundError(f"No username: {username}")

        if self._watching(username, symbol):
            raise DuplicateResourceError(f"Symbol {symbol} already watched by user {username}")

        self._insert(
            Watchlist(username=username, symbol=symbol),
            f"Symbol {symbol} already watched by user {username}",
        )

    async def remove_from_watchlist(self, username: str, symbol: str) -> None:
        if not self._exists(username):
            raise NotFoundError(f"No username: {username}")

        deleted = self.db.query(Watchlist).filter(
            Watchlist.username == username, Watchlist.symbol == symbol
        ).delete(synchronize_session=False)
        self.db.commit()
        if not deleted:
            raise NotFoundError(f"Symbol {symbol} not watched by user {username}")

    async def get_user_portfolio_ids(self, username: str) -> List[int]:
        rows = self.db.query(Portfolio.id).filter(Portfolio.owner == username).all()
        return [r[0] for r in rows]

    async def get_user_holding_ids(self, username: str) -> List[int]:
        rows = (
            self.db.query(Holding.id)
            .join(Portfolio, Holding.portfolio_id == Portfolio.id)
            .filter(Portfolio.owner == username)
            .all()
        )
        return [r[0] for r in rows]
