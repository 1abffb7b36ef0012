# taskmanager/api/v1/routers/rpc_router.py
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends

from taskmanager.api.dependencies.base_deps import get_caller_scope, get_task_handler
from taskmanager.application.handlers.task_handler import TaskHandler
from taskmanager.schemas.enums.base_enums import CallerScopeEnum

router = APIRouter(prefix="/rpc", tags=["RPC"])


@router.post("", summary="处理同主机/跨主机RPC消息")
async def handle_rpc_message(
    message: Dict[str, Any] = Body(..., examples=[{"GetStatistics": {}}, {"GetTasksByStatus": "pending"}]),
    caller_scope: CallerScopeEnum = Depends(get_caller_scope),
    handler: TaskHandler = Depends(get_task_handler)
):
    """
    标签式RPC消息入口

    消息体为只有一个键的对象，键为操作名：
    CreateTask, GetAllTasks, GetTask, UpdateTaskStatus, GetStatistics, GetTasksByStatus
    """
    return await handler.handle_rpc_message(message, caller_scope=caller_scope)
