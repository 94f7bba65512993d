# configapi/services/widget_service.py

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Sequence

from configapi.constants import WidgetType
from configapi.middleware.error_handler import NotFoundError, ValidationError
from configapi.repositories.page_repository import PageRepository
from configapi.repositories.widget_repository import WidgetRepository
from configapi.schemas.widget import WidgetIn

logger = logging.getLogger(__name__)


def parse_widget_type(value: str) -> WidgetType:
    """Reject anything outside the WidgetType enumeration."""
    try:
        return WidgetType(value)
    except ValueError:
        raise ValidationError(
            f"Invalid widget type: {value!r}",
            details={"allowed_types": WidgetType.values()},
        ) from None


class WidgetService:
    """Widget lifecycle under a parent page, plus bulk reordering."""

    def __init__(self, pages: PageRepository, widgets: WidgetRepository):
        self._pages = pages
        self._widgets = widgets

    async def _require_page(self, page_id: str) -> None:
        if await self._pages.get_page(page_id) is None:
            raise NotFoundError("Page not found")

    async def create_widget(self, page_id: str, data: WidgetIn) -> dict[str, Any]:
        await self._require_page(page_id)
        widget_type = parse_widget_type(data.type)

        now = datetime.now(timezone.utc)
        # position is stored as given; collisions are resolved by reorder
        widget = await self._widgets.insert_widget(
            {
                "id": str(uuid.uuid4()),
                "page_id": page_id,
                "type": widget_type.value,
                "position": data.position,
                "config": data.config if data.config is not None else {},
                "created_at": now,
                "updated_at": now,
            }
        )
        logger.info("widget created", extra={"widget_id": widget["id"], "page_id": page_id})
        return widget

    async def update_widget(self, widget_id: str, data: WidgetIn) -> dict[str, Any]:
        widget_type = parse_widget_type(data.type)

        widget = await self._widgets.update_widget(
            widget_id,
            {
                "type": widget_type.value,
                "position": data.position,
                "config": data.config if data.config is not None else {},
                "updated_at": datetime.now(timezone.utc),
            },
        )
        if widget is None:
            raise NotFoundError("Widget not found")
        logger.info("widget updated", extra={"widget_id": widget_id})
        return widget

    async def delete_widget(self, widget_id: str) -> None:
        if not await self._widgets.delete_widget(widget_id):
            raise NotFoundError("Widget not found")
        logger.info("widget deleted", extra={"widget_id": widget_id})

    async def reorder_widgets(self, page_id: str, widget_ids: Sequence[str]) -> None:
        """Positions become 1..n in the order given; omitted widgets keep theirs.

        Ids that are unknown or belong to another page are ignored without error.
        """
        if not widget_ids:
            raise ValidationError("widget_ids must not be empty")
        await self._require_page(page_id)

        await self._widgets.reorder_widgets(page_id, widget_ids, datetime.now(timezone.utc))
        logger.info("widgets reordered", extra={"page_id": page_id, "count": len(widget_ids)})
