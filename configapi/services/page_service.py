# configapi/services/page_service.py

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from configapi.constants import (
    ANOTHER_HOME_PAGE_EXISTS,
    CANNOT_DELETE_HOME,
    HOME_PAGE_EXISTS,
)
from configapi.middleware.error_handler import ConflictError, NotFoundError, ValidationError
from configapi.repositories.page_repository import PageRepository
from configapi.repositories.widget_repository import WidgetRepository
from configapi.schemas.page import PageIn

logger = logging.getLogger(__name__)


def _validate_page_input(data: PageIn) -> None:
    if data.name == "":
        raise ValidationError("Page name is required")
    if data.route == "":
        raise ValidationError("Route is required")


class PageService:
    """Page lifecycle: route uniqueness, the single home page, and its protection.

    The home check below gives the caller a precise message; the partial unique
    index on pages.is_home is what actually holds under concurrent writers.
    """

    def __init__(self, pages: PageRepository, widgets: WidgetRepository):
        self._pages = pages
        self._widgets = widgets

    async def create_page(self, data: PageIn) -> dict[str, Any]:
        _validate_page_input(data)

        if data.is_home and await self._pages.count_home_pages() > 0:
            raise ConflictError(HOME_PAGE_EXISTS)

        now = datetime.now(timezone.utc)
        page = await self._pages.insert_page(
            {
                "id": str(uuid.uuid4()),
                "name": data.name,
                "route": data.route,
                "is_home": data.is_home,
                "created_at": now,
                "updated_at": now,
            }
        )
        logger.info("page created", extra={"page_id": page["id"], "route": page["route"]})
        return page

    async def list_pages(self) -> list[dict[str, Any]]:
        return await self._pages.list_pages()

    async def get_page_with_widgets(self, page_id: str) -> dict[str, Any]:
        page = await self._pages.get_page(page_id)
        if page is None:
            raise NotFoundError("Page not found")
        widgets = await self._widgets.list_widgets(page_id)
        return {"page": page, "widgets": widgets}

    async def update_page(self, page_id: str, data: PageIn) -> dict[str, Any]:
        _validate_page_input(data)

        if await self._pages.get_page(page_id) is None:
            raise NotFoundError("Page not found")

        if data.is_home and await self._pages.count_home_pages(exclude_id=page_id) > 0:
            raise ConflictError(ANOTHER_HOME_PAGE_EXISTS)

        page = await self._pages.update_page(
            page_id,
            {
                "name": data.name,
                "route": data.route,
                "is_home": data.is_home,
                "updated_at": datetime.now(timezone.utc),
            },
        )
        if page is None:
            # Deleted by a concurrent request after the existence check
            raise NotFoundError("Page not found")
        logger.info("page updated", extra={"page_id": page_id})
        return page

    async def delete_page(self, page_id: str) -> None:
        """Delete a non-home page; its widgets go with it (ON DELETE CASCADE)."""
        page = await self._pages.get_page(page_id)
        if page is None:
            raise NotFoundError("Page not found")
        if page["is_home"]:
            raise ConflictError(CANNOT_DELETE_HOME)

        if not await self._pages.delete_non_home_page(page_id):
            # Lost a race: the page was deleted or promoted to home meanwhile
            if await self._pages.get_page(page_id) is None:
                raise NotFoundError("Page not found")
            raise ConflictError(CANNOT_DELETE_HOME)
        logger.info("page deleted", extra={"page_id": page_id})
