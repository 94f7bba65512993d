# configapi/repositories/page_repository.py
# Data access for the pages table

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, func, insert, select, update

from configapi.models.pages_table import pages
from configapi.repositories.base import BaseRepository


class PageRepository(BaseRepository):
    """Page persistence. Every method returns plain dicts keyed by column name."""

    async def list_pages(self) -> list[dict[str, Any]]:
        stmt = select(pages).order_by(pages.c.created_at.asc(), pages.c.id.asc())
        async with self._read("Failed to fetch pages"):
            result = await self._session.execute(stmt)
            return [dict(r) for r in result.mappings().all()]

    async def get_page(self, page_id: str) -> dict[str, Any] | None:
        async with self._read("Failed to fetch page"):
            result = await self._session.execute(select(pages).where(pages.c.id == page_id))
            row = result.mappings().first()
            return dict(row) if row else None

    async def count_home_pages(self, exclude_id: str | None = None) -> int:
        stmt = select(func.count()).select_from(pages).where(pages.c.is_home.is_(True))
        if exclude_id is not None:
            stmt = stmt.where(pages.c.id != exclude_id)
        async with self._read("Failed to check home page"):
            result = await self._session.execute(stmt)
            return int(result.scalar_one())

    async def insert_page(self, values: dict[str, Any]) -> dict[str, Any]:
        stmt = insert(pages).values(**values).returning(*pages.c)
        async with self._write("Failed to create page"):
            result = await self._session.execute(stmt)
            return dict(result.mappings().one())

    async def update_page(self, page_id: str, values: dict[str, Any]) -> dict[str, Any] | None:
        """Overwrite the given columns; None when the row no longer exists."""
        stmt = update(pages).where(pages.c.id == page_id).values(**values).returning(*pages.c)
        async with self._write("Failed to update page"):
            result = await self._session.execute(stmt)
            row = result.mappings().first()
            return dict(row) if row else None

    async def delete_non_home_page(self, page_id: str) -> bool:
        """Delete unless the row is (or just became) the home page."""
        stmt = delete(pages).where(pages.c.id == page_id).where(pages.c.is_home.is_(False))
        async with self._write("Failed to delete page"):
            result = await self._session.execute(stmt)
            return result.rowcount > 0
