from fastapi import APIRouter

from chatpass.presentation.routers.api.links import router as links_router
from chatpass.presentation.routers.api.sessions import router as sessions_router
from chatpass.presentation.routes.health import router as health_router
from chatpass.presentation.routes.pages import router as pages_router

api = APIRouter()

# Add all /api routers here
routers = (links_router, sessions_router)
for router in routers:
    api.include_router(router, prefix="/api")

api.include_router(health_router)
api.include_router(pages_router)
