"""
Пути REST API (относительно API_BASE_URL, который оканчивается на /api).
"""
from urllib.parse import quote

# Auth
LOGIN = "/auth/login"
REGISTER = "/auth/register"
CURRENT_USER = "/auth/me"
UPDATE_PROFILE = "/auth/update"
CHANGE_PASSWORD = "/auth/change-password"

# Menu
MENU = "/menu"
CATEGORIES = "/category"

# Orders
ORDERS = "/orders"
ORDER_STATS = "/orders/stats"

# Users
USERS = "/users"

# Back office
SUPPLIERS = "/supplier"
REVIEWS = "/reviews"
REVIEW_RATING = "/review/rating"
INVENTORY = "/inventory"
INVENTORY_CHECK = "/inventory/check-availability"
INVENTORY_CONSUME = "/inventory/consume"
INVENTORY_LOW_STOCK = "/inventory/low-stock"
INVENTORY_DASHBOARD = "/inventory/dashboard"


def item(base: str, item_id: str) -> str:
    """/menu + "42" -> /menu/42"""
    return f"{base}/{quote(str(item_id), safe='')}"


def order_status(order_id: str) -> str:
    return f"{item(ORDERS, order_id)}/status"
