from .lessons import router as lessons_router
from .orders import router as orders_router

__all__ = ["lessons_router", "orders_router"]
