from sqlalchemy import Column, String, ForeignKey
from database import Base


class Watchlist(Base):
    __tablename__ = "watchlist"

    # Composite key doubles as the (username, symbol) uniqueness constraint; no surrogate id
    username = Column(String(25), ForeignKey('users.username', ondelete='CASCADE'), primary_key=True)
    symbol = Column(String, primary_key=True)
