from sqlalchemy import Column, Integer, String, Float, ForeignKey, UniqueConstraint
from database import Base


class Holding(Base):
	__tablename__ = "holdings"

	id = Column(Integer, primary_key=True, index=True)
	symbol = Column(String, nullable=False)
	shares_owned = Column(Float, nullable=False, default=0.0)
	cost_basis = Column(Float, nullable=True)
	target_percentage = Column(Float, nullable=True)
	goal = Column(String, nullable=True)
	portfolio_id = Column(Integer, ForeignKey('portfolios.id', ondelete='CASCADE'), nullable=False, index=True)

	__table_args__ = (
		UniqueConstraint('symbol', 'portfolio_id', name='uq_holding_symbol_portfolio'),
	)
