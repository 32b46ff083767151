from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import List, Optional
from schemas.portfolio import PortfolioDetail

class UserBase(BaseModel):
    email: EmailStr

class UserRegister(UserBase):
    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=5, max_length=72)

class UserUpdate(BaseModel):
    password: Optional[str] = Field(default=None, min_length=5, max_length=72)
    email: Optional[EmailStr] = None

    model_config = ConfigDict(extra="forbid")

class UserOut(BaseModel):
    username: str
    email: str

    model_config = ConfigDict(from_attributes=True)

class UserDetail(UserOut):
    watchlist: List[str] = []

class UserComplete(UserDetail):
    portfolios: List[PortfolioDetail] = []

class Token(BaseModel):
    access_token: str
    token_type: str
