from palapizza.web.routers.admin import router as admin_router
from palapizza.web.routers.bookings import router as bookings_router
from palapizza.web.routers.chat import router as chat_router
from palapizza.web.routers.orders import router as orders_router

__all__ = [
    "admin_router",
    "bookings_router",
    "chat_router",
    "orders_router",
]
