# taskmanager/schemas/dtos/request/task_request.py
from typing import Optional

from pydantic import ConfigDict, Field

from taskmanager.schemas.base_schema import BaseSchema
from taskmanager.schemas.enums.base_enums import TaskStatusEnum


class NewTaskRequest(BaseSchema):
    """创建任务请求DTO

    title 为空的校验放在 TaskStore 中，以便以统一信封返回 InvalidInput。
    """

    title: str = Field(..., description="任务标题")
    description: str = Field(default="", description="任务描述")
    assigned_to: Optional[str] = Field(default=None, description="负责人（可选）")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Write spec",
                "description": "Draft the task manager spec",
                "assigned_to": "alice"
            }
        }
    )


class TaskStatusUpdateRequest(BaseSchema):
    """更新任务状态请求DTO"""

    task_id: str = Field(..., description="任务ID")
    new_status: TaskStatusEnum = Field(..., description="新状态")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "task_id": "6f1c0e0a-3d59-4a7e-9a55-0c2f8d1f3b21",
                "new_status": "completed"
            }
        }
    )


class StatusUpdateBody(BaseSchema):
    """REST接口中的状态更新请求体（task_id 来自路径）"""

    new_status: TaskStatusEnum = Field(..., description="新状态")
