from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from configapi.schemas.widget import WidgetOut


class PageIn(BaseModel):
    # Empty defaults: a missing name/route is reported by the service, not the parser
    name: str = ""
    route: str = ""
    is_home: bool = False


class PageOut(BaseModel):
    id: str
    name: str
    route: str
    is_home: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PageWithWidgets(BaseModel):
    page: PageOut
    widgets: list[WidgetOut]
