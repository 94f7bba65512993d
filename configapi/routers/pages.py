# configapi/routers/pages.py
# FastAPI router for page CRUD

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from configapi.constants import PAGE_DELETED
from configapi.db.base import get_db
from configapi.repositories.page_repository import PageRepository
from configapi.repositories.widget_repository import WidgetRepository
from configapi.schemas.common import MessageResponse
from configapi.schemas.page import PageIn, PageOut, PageWithWidgets
from configapi.services.page_service import PageService


router = APIRouter(tags=["Pages"])


def get_page_service(session: AsyncSession = Depends(get_db)) -> PageService:
    """Provide service with DI so handlers stay thin."""
    return PageService(pages=PageRepository(session), widgets=WidgetRepository(session))


@router.post("/pages", response_model=PageOut, status_code=status.HTTP_201_CREATED)
async def create_page(payload: PageIn, service: PageService = Depends(get_page_service)) -> PageOut:
    page = await service.create_page(payload)
    return PageOut(**page)


@router.get("/pages", response_model=list[PageOut])
async def list_pages(service: PageService = Depends(get_page_service)) -> list[PageOut]:
    return [PageOut(**page) for page in await service.list_pages()]


@router.get("/pages/{page_id}", response_model=PageWithWidgets)
async def get_page(page_id: str, service: PageService = Depends(get_page_service)) -> PageWithWidgets:
    data = await service.get_page_with_widgets(page_id)
    return PageWithWidgets(**data)


@router.put("/pages/{page_id}", response_model=PageOut)
async def update_page(page_id: str, payload: PageIn, service: PageService = Depends(get_page_service)) -> PageOut:
    page = await service.update_page(page_id, payload)
    return PageOut(**page)


@router.delete("/pages/{page_id}", response_model=MessageResponse)
async def delete_page(page_id: str, service: PageService = Depends(get_page_service)) -> MessageResponse:
    await service.delete_page(page_id)
    return MessageResponse(message=PAGE_DELETED)
