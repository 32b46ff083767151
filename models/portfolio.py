from sqlalchemy import Column, Integer, String, Text, Numeric, ForeignKey, UniqueConstraint
from database import Base


class Portfolio(Base):
    __tablename__ = "portfolios"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    cash = Column(Numeric(18, 2), nullable=False, default=0)
    notes = Column(Text, nullable=True)
    # Exposed as `owner`, stored as `username`
    owner = Column("username", String(25), ForeignKey('users.username', ondelete='CASCADE'), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint('name', 'username', name='uq_portfolio_name_owner'),
    )
