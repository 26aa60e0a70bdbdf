from fastapi import APIRouter

from service_skeleton.platform.server.routes.base import base_router

root = APIRouter()
root.include_router(base_router)
