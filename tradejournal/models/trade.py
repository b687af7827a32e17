"""Trade data model."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

TradeStatus = Literal["win", "loss", "withdrawal"]


class Trade(BaseModel):
    """Represents a journaled trade or an account withdrawal."""

    id: Optional[int] = Field(default=None, description="Database ID")
    symbol: str = Field(..., min_length=1, description="Trading symbol")
    status: TradeStatus = Field(..., description="Trade outcome (win/loss/withdrawal)")
    pnl: float = Field(..., description="Signed profit/loss amount")
    date: datetime = Field(..., description="Trade date and time")
    strategy: Optional[str] = Field(default=None, description="Strategy tag")
    notes: Optional[str] = Field(default=None, description="Free-text notes")
    image_urls: list[str] = Field(default_factory=list, description="Screenshot references")
    rr: Optional[float] = Field(default=None, ge=0, description="Risk/reward ratio")
    followed_plan: bool = Field(default=True, description="Whether the plan was followed")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_pnl_sign(self) -> "Trade":
        if self.status == "win" and self.pnl < 0:
            raise ValueError("a winning trade cannot have negative P&L")
        if self.status == "loss" and self.pnl > 0:
            raise ValueError("a losing trade cannot have positive P&L")
        return self

    @property
    def is_withdrawal(self) -> bool:
        return self.status == "withdrawal"


class TradeUpdate(BaseModel):
    """Partial set of trade fields to change."""

    symbol: Optional[str] = Field(default=None, min_length=1)
    status: Optional[TradeStatus] = None
    pnl: Optional[float] = None
    date: Optional[datetime] = None
    strategy: Optional[str] = None
    notes: Optional[str] = None
    image_urls: Optional[list[str]] = None
    rr: Optional[float] = Field(default=None, ge=0)
    followed_plan: Optional[bool] = None
