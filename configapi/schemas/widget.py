from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from configapi.constants import POSITION_MAX, POSITION_MIN


class WidgetIn(BaseModel):
    # type stays a plain string here so unknown kinds get the service's message
    type: str = ""
    position: int = Field(default=0, ge=POSITION_MIN, le=POSITION_MAX)
    config: Any = Field(default_factory=dict)


class WidgetOut(BaseModel):
    id: str
    page_id: str
    type: str
    position: int
    config: Any = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ReorderRequest(BaseModel):
    widget_ids: list[str] = Field(default_factory=list)
