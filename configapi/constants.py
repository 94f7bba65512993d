# configapi/constants.py
# Closed set of widget kinds and the response messages shared by routers and services

from enum import Enum


class WidgetType(str, Enum):
    """Widget kinds the mobile client knows how to render."""

    BANNER = "banner"
    PRODUCT_GRID = "product_grid"
    TEXT = "text"
    IMAGE = "image"
    CAROUSEL = "carousel"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


# widgets.position is a 32-bit INTEGER column
POSITION_MIN = -(2 ** 31)
POSITION_MAX = 2 ** 31 - 1

# Conflict messages
HOME_PAGE_EXISTS = "Home page already exists"
ANOTHER_HOME_PAGE_EXISTS = "Another home page already exists"
ROUTE_EXISTS = "Page route already exists"
CANNOT_DELETE_HOME = "Cannot delete the home page"

# Success messages
PAGE_DELETED = "Page deleted successfully"
WIDGET_DELETED = "Widget deleted successfully"
WIDGETS_REORDERED = "Widgets reordered successfully"
