# configapi/repositories/widget_repository.py
# Data access for the widgets table

from __future__ import annotations

from datetime import datetime
from typing import Any, Sequence

from sqlalchemy import bindparam, delete, insert, select, update

from configapi.models.widgets_table import widgets
from configapi.repositories.base import BaseRepository


class WidgetRepository(BaseRepository):
    """Widget persistence, always scoped by widget id and, where it matters, page id."""

    async def list_widgets(self, page_id: str) -> list[dict[str, Any]]:
        """Widgets of a page, top-to-bottom. Equal positions fall back to creation order."""
        stmt = (
            select(widgets)
            .where(widgets.c.page_id == page_id)
            .order_by(widgets.c.position.asc(), widgets.c.created_at.asc())
        )
        async with self._read("Failed to fetch widgets"):
            result = await self._session.execute(stmt)
            return [dict(r) for r in result.mappings().all()]

    async def get_widget(self, widget_id: str) -> dict[str, Any] | None:
        async with self._read("Failed to fetch widget"):
            result = await self._session.execute(select(widgets).where(widgets.c.id == widget_id))
            row = result.mappings().first()
            return dict(row) if row else None

    async def insert_widget(self, values: dict[str, Any]) -> dict[str, Any]:
        stmt = insert(widgets).values(**values).returning(*widgets.c)
        async with self._write("Failed to create widget"):
            result = await self._session.execute(stmt)
            return dict(result.mappings().one())

    async def update_widget(self, widget_id: str, values: dict[str, Any]) -> dict[str, Any] | None:
        stmt = update(widgets).where(widgets.c.id == widget_id).values(**values).returning(*widgets.c)
        async with self._write("Failed to update widget"):
            result = await self._session.execute(stmt)
            row = result.mappings().first()
            return dict(row) if row else None

    async def delete_widget(self, widget_id: str) -> bool:
        async with self._write("Failed to delete widget"):
            result = await self._session.execute(delete(widgets).where(widgets.c.id == widget_id))
            return result.rowcount > 0

    async def reorder_widgets(self, page_id: str, widget_ids: Sequence[str], updated_at: datetime) -> None:
        """Assign position = index + 1 to each id, in one transaction.

        Each row is matched on (id, page_id): ids that belong to another page,
        or to nothing, update zero rows. Either every position lands or none does.
        """
        stmt = (
            update(widgets)
            .where(widgets.c.id == bindparam("b_widget_id"))
            .where(widgets.c.page_id == bindparam("b_page_id"))
            .values(position=bindparam("b_position"), updated_at=bindparam("b_updated_at"))
        )
        params = [
            {
                "b_widget_id": widget_id,
                "b_page_id": page_id,
                "b_position": position,
                "b_updated_at": updated_at,
            }
            for position, widget_id in enumerate(widget_ids, start=1)
        ]
        async with self._write("Failed to reorder widgets"):
            await self._session.execute(stmt, params)
