from ridealert.routers.schedules import router as schedules_router
from ridealert.routers.umo_routes import router as umo_routes_router

__all__ = [
    "schedules_router",
    "umo_routes_router",
]
