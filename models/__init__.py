from models.user import User
from models.portfolio import Portfolio
from models.holding import Holding
from models.watchlist import Watchlist

__all__ = ["User", "Portfolio", "Holding", "Watchlist"]
