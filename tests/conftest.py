# tests/conftest.py
# In-memory stand-ins for the repositories, shared by unit and API tests.
# They raise the same application errors the SQL repositories raise for the
# same constraint violations, so services can be tested without a database.

import copy
from typing import Any

import pytest

from configapi.constants import HOME_PAGE_EXISTS, ROUTE_EXISTS
from configapi.middleware.error_handler import ConflictError, InternalError, NotFoundError
from configapi.services.page_service import PageService
from configapi.services.widget_service import WidgetService


class InMemoryStore:
    """Rows keyed by id plus a log of repository calls."""

    def __init__(self):
        self.pages: dict[str, dict[str, Any]] = {}
        self.widgets: dict[str, dict[str, Any]] = {}
        self.calls: list[str] = []
        self.fail_writes = False

    def snapshot(self):
        return copy.deepcopy((self.pages, self.widgets))

    def _write(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_writes:
            raise InternalError(f"{name} failed")


class FakePageRepository:
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def list_pages(self):
        self._store.calls.append("list_pages")
        # sorted() is stable: equal timestamps keep insertion order
        rows = sorted(self._store.pages.values(), key=lambda p: p["created_at"])
        return [dict(p) for p in rows]

    async def get_page(self, page_id):
        self._store.calls.append("get_page")
        page = self._store.pages.get(page_id)
        return dict(page) if page else None

    async def count_home_pages(self, exclude_id=None):
        self._store.calls.append("count_home_pages")
        return sum(1 for p in self._store.pages.values() if p["is_home"] and p["id"] != exclude_id)

    def _check_constraints(self, page_id, values):
        for other in self._store.pages.values():
            if other["id"] == page_id:
                continue
            if other["route"] == values["route"]:
                raise ConflictError(ROUTE_EXISTS)
            if values["is_home"] and other["is_home"]:
                raise ConflictError(HOME_PAGE_EXISTS)

    async def insert_page(self, values):
        self._store._write("insert_page")
        self._check_constraints(values["id"], values)
        self._store.pages[values["id"]] = dict(values)
        return dict(values)

    async def update_page(self, page_id, values):
        self._store._write("update_page")
        page = self._store.pages.get(page_id)
        if page is None:
            return None
        self._check_constraints(page_id, values)
        page.update(values)
        return dict(page)

    async def delete_non_home_page(self, page_id):
        self._store._write("delete_non_home_page")
        page = self._store.pages.get(page_id)
        if page is None or page["is_home"]:
            return False
        del self._store.pages[page_id]
        # ON DELETE CASCADE
        for widget_id in [w["id"] for w in self._store.widgets.values() if w["page_id"] == page_id]:
            del self._store.widgets[widget_id]
        return True


class FakeWidgetRepository:
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def list_widgets(self, page_id):
        self._store.calls.append("list_widgets")
        rows = [w for w in self._store.widgets.values() if w["page_id"] == page_id]
        rows.sort(key=lambda w: (w["position"], w["created_at"]))
        return [dict(w) for w in rows]

    async def get_widget(self, widget_id):
        self._store.calls.append("get_widget")
        widget = self._store.widgets.get(widget_id)
        return dict(widget) if widget else None

    async def insert_widget(self, values):
        self._store._write("insert_widget")
        if values["page_id"] not in self._store.pages:
            raise NotFoundError("Page not found")
        self._store.widgets[values["id"]] = dict(values)
        return dict(values)

    async def update_widget(self, widget_id, values):
        self._store._write("update_widget")
        widget = self._store.widgets.get(widget_id)
        if widget is None:
            return None
        widget.update(values)
        return dict(widget)

    async def delete_widget(self, widget_id):
        self._store._write("delete_widget")
        return self._store.widgets.pop(widget_id, None) is not None

    async def reorder_widgets(self, page_id, widget_ids, updated_at):
        self._store._write("reorder_widgets")
        for position, widget_id in enumerate(widget_ids, start=1):
            widget = self._store.widgets.get(widget_id)
            if widget is None or widget["page_id"] != page_id:
                continue
            widget["position"] = position
            widget["updated_at"] = updated_at


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def page_repo(store) -> FakePageRepository:
    return FakePageRepository(store)


@pytest.fixture
def widget_repo(store) -> FakeWidgetRepository:
    return FakeWidgetRepository(store)


@pytest.fixture
def page_service(page_repo, widget_repo) -> PageService:
    return PageService(pages=page_repo, widgets=widget_repo)


@pytest.fixture
def widget_service(page_repo, widget_repo) -> WidgetService:
    return WidgetService(pages=page_repo, widgets=widget_repo)
