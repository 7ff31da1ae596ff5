from fastapi import APIRouter

from codegate.presentation.routers.authentication import router as authentication_router
from codegate.presentation.routers.codes import router as codes_router
from codegate.presentation.routes.health import router as health_router

api = APIRouter()

# Add all routers here
routers = (health_router, codes_router, authentication_router)
for router in routers:
    api.include_router(router)
