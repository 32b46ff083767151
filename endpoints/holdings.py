from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from database import get_db
from security import get_current_username
from schemas.holding import HoldingCreate, HoldingOut, HoldingUpdate
from services.authorization import ensure_correct_holding, ensure_correct_portfolio
from services.holdings import HoldingRepository

router = APIRouter(prefix="/holdings", tags=["holdings"])

@router.post("/", response_model=HoldingOut, status_code=status.HTTP_201_CREATED)
async def create_holding(holding: HoldingCreate, current_username: str = Depends(get_current_username), db: Session = Depends(get_db)):
    """Add a holding to one of the caller's portfolios"""
    await ensure_correct_portfolio(db, current_username, holding.portfolio_id)
    return await HoldingRepository(db).create(**holding.model_dump())

@router.get("/{holding_id}", response_model=HoldingOut)
async def get_holding(holding_id: int, current_username: str = Depends(get_current_username), db: Session = Depends(get_db)):
    await ensure_correct_holding(db, current_username, holding_id)
    return await HoldingRepository(db).get(holding_id)

@router.patch("/{holding_id}", response_model=HoldingOut)
async def update_holding(holding_id: int, data: HoldingUpdate, current_username: str = Depends(get_current_username), db: Session = Depends(get_db)):
    await ensure_correct_holding(db, current_username, holding_id)
    return await HoldingRepository(db).update(holding_id, data.model_dump(exclude_unset=True))

@router.delete("/{holding_id}")
async def delete_holding(holding_id: int, current_username: str = Depends(get_current_username), db: Session = Depends(get_db)):
    await ensure_correct_holding(db, current_username, holding_id)
    await HoldingRepository(db).remove(holding_id)
    return {"deleted": holding_id}
