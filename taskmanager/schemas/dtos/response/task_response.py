# taskmanager/schemas/dtos/response/task_response.py
from typing import Optional

from pydantic import ConfigDict, Field

from taskmanager.domain.entities.task import Task
from taskmanager.infrastructure.storage.stats_tracker import TaskManagerStats
from taskmanager.schemas.base_schema import BaseSchema
from taskmanager.schemas.enums.base_enums import TaskStatusEnum


class TaskSchema(BaseSchema):
    """任务DTO"""

    id: str = Field(..., description="任务ID")
    title: str = Field(..., description="任务标题")
    description: str = Field(..., description="任务描述")
    status: TaskStatusEnum = Field(..., description="任务状态")
    created_at: int = Field(..., ge=0, description="创建时间（毫秒时间戳）")
    assigned_to: Optional[str] = Field(None, description="负责人")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "6f1c0e0a-3d59-4a7e-9a55-0c2f8d1f3b21",
                "title": "Write spec",
                "description": "Draft the task manager spec",
                "status": "pending",
                "created_at": 1760000000000,
                "assigned_to": None
            }
        }
    )

    @classmethod
    def from_entity(cls, task: Task) -> "TaskSchema":
        return cls(**task.to_dict())


class TaskResponse(BaseSchema):
    """任务操作统一响应信封

    success 表示请求整体是否成功；storage_status 单独表示存储层本身是否正常完成，
    调用方据此区分“请求无效”和“存储失败”。
    """

    success: bool = Field(..., description="请求是否成功")
    task: Optional[TaskSchema] = Field(None, description="结果任务（失败时为null）")
    storage_status: bool = Field(..., description="存储层操作是否成功")
    message: str = Field(default="", description="诊断信息，成功时为空")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "task": None,
                "storage_status": True,
                "message": "Task with ID 'missing' not found"
            }
        }
    )

    @classmethod
    def ok(cls, task: Task) -> "TaskResponse":
        return cls(success=True, task=TaskSchema.from_entity(task), storage_status=True, message="")

    @classmethod
    def failed(cls, message: str, storage_status: bool = True) -> "TaskResponse":
        return cls(success=False, task=None, storage_status=storage_status, message=message)


class TaskManagerStatsResponse(BaseSchema):
    """任务统计DTO"""

    total_tasks: int = Field(..., ge=0, description="当前任务总数")
    pending_tasks: int = Field(..., ge=0, description="待处理任务数")
    completed_tasks: int = Field(..., ge=0, description="已完成任务数")
    creation_count: int = Field(..., ge=0, description="累计创建次数")
    request_count: int = Field(..., ge=0, description="累计请求次数")

    @classmethod
    def from_stats(cls, stats: TaskManagerStats) -> "TaskManagerStatsResponse":
        return cls(
            total_tasks=stats.total_tasks,
            pending_tasks=stats.pending_tasks,
            completed_tasks=stats.completed_tasks,
            creation_count=stats.creation_count,
            request_count=stats.request_count,
        )
