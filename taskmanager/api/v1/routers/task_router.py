# taskmanager/api/v1/routers/task_router.py
from typing import List

from fastapi import APIRouter, Depends

from taskmanager.api.dependencies.base_deps import get_task_handler
from taskmanager.application.handlers.task_handler import TaskHandler
from taskmanager.schemas.dtos.request.task_request import (
    NewTaskRequest,
    StatusUpdateBody,
    TaskStatusUpdateRequest,
)
from taskmanager.schemas.dtos.response.task_response import (
    TaskManagerStatsResponse,
    TaskResponse,
    TaskSchema,
)

router = APIRouter(prefix="/tasks", tags=["Tasks"])


@router.post("", response_model=TaskResponse, summary="创建任务")
async def create_task(
    request: NewTaskRequest,
    handler: TaskHandler = Depends(get_task_handler)
):
    """
    创建任务

    标题为空时返回 success=false 的信封，而不是HTTP错误
    """
    return await handler.create_task(request)


@router.get("", response_model=List[TaskSchema], summary="获取全部任务")
async def get_all_tasks(handler: TaskHandler = Depends(get_task_handler)):
    """按创建顺序返回全部任务"""
    return await handler.get_all_tasks()


@router.get("/statistics", response_model=TaskManagerStatsResponse, summary="获取任务统计")
async def get_statistics(handler: TaskHandler = Depends(get_task_handler)):
    return await handler.get_statistics()


@router.get("/status/{status}", response_model=List[TaskSchema], summary="按状态获取任务")
async def get_tasks_by_status(
    status: str,
    handler: TaskHandler = Depends(get_task_handler)
):
    """状态取值：pending, in-progress, completed, cancelled"""
    return await handler.get_tasks_by_status(status)


@router.get("/{task_id}", response_model=TaskResponse, summary="获取单个任务")
async def get_task(
    task_id: str,
    handler: TaskHandler = Depends(get_task_handler)
):
    return await handler.get_task(task_id)


@router.put("/{task_id}/status", response_model=TaskResponse, summary="更新任务状态")
async def update_task_status(
    task_id: str,
    body: StatusUpdateBody,
    handler: TaskHandler = Depends(get_task_handler)
):
    """
    更新任务状态

    任意状态之间均可直接切换，重复设置相同状态视为成功
    """
    request = TaskStatusUpdateRequest(task_id=task_id, new_status=body.new_status)
    return await handler.update_task_status(request)
