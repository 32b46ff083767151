from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from database import get_db
from security import get_current_username
from schemas.user import UserComplete, UserDetail, UserOut, UserUpdate
from services.authorization import ensure_correct_user
from services.users import UserRepository

router = APIRouter(prefix="/users", tags=["users"])

@router.get("/{username}", response_model=UserDetail)
async def get_user(username: str, current_username: str = Depends(get_current_username), db: Session = Depends(get_db)):
    """User with watchlist symbols. Caller must be :username"""
    ensure_correct_user(current_username, username)
    return await UserRepository(db).get(username)

@router.get("/{username}/complete", response_model=UserComplete)
async def get_user_complete(username: str, current_username: str = Depends(get_current_username), db: Session = Depends(get_db)):
    """User with watchlist and every portfolio, holdings included"""
    ensure_correct_user(current_username, username)
    return await UserRepository(db).get_complete(username)

@router.patch("/{username}", response_model=UserOut)
async def update_user(username: str, data: UserUpdate, current_username: str = Depends(get_current_username), db: Session = Depends(get_db)):
    ensure_correct_user(current_username, username)
    return await UserRepository(db).update(username, data.model_dump(exclude_unset=True))

@router.delete("/{username}")
async def delete_user(username: str, current_username: str = Depends(get_current_username), db: Session = Depends(get_db)):
    ensure_correct_user(current_username, username)
    await UserRepository(db).remove(username)
    return {"deleted": username}

@router.post("/{username}/watchlist/{symbol}")
async def watch_symbol(username: str, symbol: str, current_username: str = Depends(get_current_username), db: Session = Depends(get_db)):
    ensure_correct_user(current_username, username)
    await UserRepository(db).add_to_watchlist(username, symbol)
    return {"watched": symbol}

@router.delete("/{username}/watchlist/{symbol}")
async def unwatch_symbol(username: str, symbol: str, current_username: str = Depends(get_current_username), db: Session = Depends(get_db)):
    ensure_correct_user(current_username, username)
    await UserRepository(db).remove_from_watchlist(username, symbol)
    return {"unwatched": symbol}
