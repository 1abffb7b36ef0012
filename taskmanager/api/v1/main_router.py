# taskmanager/api/v1/main_router.py
from fastapi import APIRouter

from taskmanager.api.v1.routers.rpc_router import router as rpc_router
from taskmanager.api.v1.routers.system.health_router import router as health_router
from taskmanager.api.v1.routers.task_router import router as task_router
from taskmanager.api.v1.routers.ws_router import router as ws_router


def build_api_router(ws_enabled: bool = True) -> APIRouter:
    """创建API v1主路由"""
    api_router = APIRouter()

    api_router.include_router(health_router)
    api_router.include_router(task_router)
    api_router.include_router(rpc_router)
    if ws_enabled:
        api_router.include_router(ws_router)

    return api_router
