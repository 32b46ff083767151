from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from database import get_db
from security import get_current_username
from schemas.portfolio import PortfolioCreate, PortfolioDetail, PortfolioOut, PortfolioUpdate
from services.authorization import ensure_correct_portfolio, ensure_correct_user
from services.portfolios import PortfolioRepository

router = APIRouter(prefix="/portfolios", tags=["portfolios"])

@router.post("/", response_model=PortfolioOut, status_code=status.HTTP_201_CREATED)
async def create_portfolio(portfolio: PortfolioCreate, current_username: str = Depends(get_current_username), db: Session = Depends(get_db)):
    """Create a portfolio; callers may only create portfolios they own"""
    ensure_correct_user(current_username, portfolio.owner)
    return await PortfolioRepository(db).create(**portfolio.model_dump())

@router.get("/{portfolio_id}", response_model=PortfolioDetail)
async def get_portfolio(portfolio_id: int, current_username: str = Depends(get_current_username), db: Session = Depends(get_db)):
    await ensure_correct_portfolio(db, current_username, portfolio_id)
    return await PortfolioRepository(db).get(portfolio_id)

@router.patch("/{portfolio_id}", response_model=PortfolioOut)
async def update_portfolio(portfolio_id: int, data: PortfolioUpdate, current_username: str = Depends(get_current_username), db: Session = Depends(get_db)):
    await ensure_correct_portfolio(db, current_username, portfolio_id)
    return await PortfolioRepository(db).update(portfolio_id, data.model_dump(exclude_unset=True), current_username)

@router.delete("/{portfolio_id}")
async def delete_portfolio(portfolio_id: int, current_username: str = Depends(get_current_username), db: Session = Depends(get_db)):
    await ensure_correct_portfolio(db, current_username, portfolio_id)
    await PortfolioRepository(db).remove(portfolio_id)
    return {"deleted": portfolio_id}
