# configapi/routers/widgets.py
# FastAPI router for widgets: create under a page, update, delete, reorder

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from configapi.constants import WIDGET_DELETED, WIDGETS_REORDERED
from configapi.db.base import get_db
from configapi.repositories.page_repository import PageRepository
from configapi.repositories.widget_repository import WidgetRepository
from configapi.schemas.common import MessageResponse
from configapi.schemas.widget import ReorderRequest, WidgetIn, WidgetOut
from configapi.services.widget_service import WidgetService


router = APIRouter(tags=["Widgets"])


def get_widget_service(session: AsyncSession = Depends(get_db)) -> WidgetService:
    return WidgetService(pages=PageRepository(session), widgets=WidgetRepository(session))


@router.post("/pages/{page_id}/widgets", response_model=WidgetOut, status_code=status.HTTP_201_CREATED)
async def create_widget(page_id: str, payload: WidgetIn, service: WidgetService = Depends(get_widget_service)) -> WidgetOut:
    widget = await service.create_widget(page_id, payload)
    return WidgetOut(**widget)


@router.post("/pages/{page_id}/widgets/reorder", response_model=MessageResponse)
async def reorder_widgets(page_id: str, payload: ReorderRequest, service: WidgetService = Depends(get_widget_service)) -> MessageResponse:
    await service.reorder_widgets(page_id, payload.widget_ids)
    return MessageResponse(message=WIDGETS_REORDERED)


@router.put("/widgets/{widget_id}", response_model=WidgetOut)
async def update_widget(widget_id: str, payload: WidgetIn, service: WidgetService = Depends(get_widget_service)) -> WidgetOut:
    widget = await service.update_widget(widget_id, payload)
    return WidgetOut(**widget)


@router.delete("/widgets/{widget_id}", response_model=MessageResponse)
async def delete_widget(widget_id: str, service: WidgetService = Depends(get_widget_service)) -> MessageResponse:
    await service.delete_widget(widget_id)
    return MessageResponse(message=WIDGET_DELETED)
