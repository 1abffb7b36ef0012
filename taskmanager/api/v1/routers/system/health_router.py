# taskmanager/api/v1/routers/system/health_router.py
from typing import Any, Dict

from fastapi import APIRouter, Depends

from taskmanager.application.handlers.system.health_handler import HealthHandler
from taskmanager.schemas.dtos.response.base_response import BaseResponse

router = APIRouter(prefix="/health", tags=["Health"])


def get_health_handler() -> HealthHandler:
    """获取健康检查处理器"""
    return HealthHandler()


@router.get("", response_model=BaseResponse[Dict[str, Any]], summary="健康检查")
async def health_check(handler: HealthHandler = Depends(get_health_handler)):
    """检查服务运行状态与任务存储"""
    return await handler.handle_request()


@router.get("/ping", summary="简单ping检查")
def ping():
    """
    简单的ping检查，用于负载均衡器健康检查
    """
    return {"status": "ok", "message": "pong"}
