"""Funded account challenge rules model."""

from pydantic import BaseModel, Field


class ChallengeRules(BaseModel):
    """Rules of a funded-account evaluation."""

    account_size: str = Field(default="100K", description="Preset name")
    profit_target: float = Field(..., ge=0, description="Profit needed to pass")
    max_drawdown: float = Field(..., gt=0, description="Max trailing drawdown")
    starting_balance: float = Field(..., ge=0, description="Starting account balance")

    model_config = {"frozen": True}
