"""Goal data model."""

from typing import Optional
from pydantic import BaseModel, Field


class Goal(BaseModel):
    """Represents a personal trading goal."""

    id: Optional[int] = Field(default=None, description="Database ID")
    title: str = Field(..., min_length=1, description="Goal title")
    target: float = Field(..., ge=0, description="Target value")
    current: float = Field(default=0, description="Current value")
    unit: str = Field(default="", description="Unit (ILS, %, trades, ...)")
    icon: str = Field(default="Target", description="Display icon name")
    is_default: bool = Field(default=False, description="Built-in goal flag")

    model_config = {"frozen": True}
