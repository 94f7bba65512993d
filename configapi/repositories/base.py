# configapi/repositories/base.py
# Session-bound repository base: one place where store errors become application errors

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from configapi.constants import HOME_PAGE_EXISTS, ROUTE_EXISTS
from configapi.middleware.error_handler import AppError, ConflictError, InternalError, NotFoundError
from configapi.models.pages_table import ROUTE_CONSTRAINT, SINGLE_HOME_INDEX
from configapi.models.widgets_table import PAGE_FOREIGN_KEY

logger = logging.getLogger(__name__)


def constraint_error(exc: IntegrityError) -> AppError:
    """Map a constraint violation to the error the caller should see."""
    text = str(exc.orig)
    if SINGLE_HOME_INDEX in text:
        return ConflictError(HOME_PAGE_EXISTS)
    if ROUTE_CONSTRAINT in text:
        return ConflictError(ROUTE_EXISTS)
    if PAGE_FOREIGN_KEY in text:
        # Parent page removed between the existence check and the insert
        return NotFoundError("Page not found")
    return ConflictError("Write conflicts with existing data")


class BaseRepository:
    """Wraps an injected AsyncSession; subclasses run statements inside _read/_write."""

    def __init__(self, session: AsyncSession):
        self._session = session

    @asynccontextmanager
    async def _read(self, failure_message: str) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            logger.error(f"{failure_message}: {type(exc).__name__}", exc_info=True)
            raise InternalError(failure_message) from exc

    @asynccontextmanager
    async def _write(self, failure_message: str) -> AsyncIterator[None]:
        """Commit on success; roll back and translate on any store failure."""
        try:
            yield
            await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            raise constraint_error(exc) from exc
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.error(f"{failure_message}: {type(exc).__name__}", exc_info=True)
            raise InternalError(failure_message) from exc
