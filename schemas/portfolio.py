from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from schemas.holding import HoldingOut

class PortfolioCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    cash: float = 0
    notes: Optional[str] = None
    owner: str

class PortfolioUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    cash: Optional[float] = None
    notes: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

class PortfolioOut(BaseModel):
    id: int
    name: str
    cash: float
    notes: Optional[str] = None
    owner: str

    model_config = ConfigDict(from_attributes=True)

class PortfolioDetail(PortfolioOut):
    holdings: List[HoldingOut] = []
