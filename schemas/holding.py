from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class HoldingCreate(BaseModel):
    symbol: str = Field(min_length=1, max_length=10)
    shares_owned: float = Field(ge=0)
    cost_basis: Optional[float] = Field(default=None, ge=0)
    target_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    goal: Optional[str] = None
    portfolio_id: int

class HoldingUpdate(BaseModel):
    # symbol and portfolio_id form the natural key and are not patchable
    shares_owned: Optional[float] = Field(default=None, ge=0)
    cost_basis: Optional[float] = Field(default=None, ge=0)
    target_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    goal: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

class HoldingOut(BaseModel):
    id: int
    symbol: str
    shares_owned: float
    cost_basis: Optional[float] = None
    target_percentage: Optional[float] = None
    goal: Optional[str] = None
    portfolio_id: int

    model_config = ConfigDict(from_attributes=True)
