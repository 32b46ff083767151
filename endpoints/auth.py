from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from database import get_db
from schemas.user import UserRegister, Token
from security import create_token_for
from services.users import UserRepository

router = APIRouter()

@router.post("/token", response_model=Token)
async def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """Exchange username/password for a bearer token"""
    user = await UserRepository(db).authenticate(form_data.username, form_data.password)
    return {"access_token": create_token_for(user.username), "token_type": "bearer"}

@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(user: UserRegister, db: Session = Depends(get_db)):
    new_user = await UserRepository(db).register(**user.model_dump())
    return {"access_token": create_token_for(new_user.username), "token_type": "bearer"}
