# taskmanager/domain/entities/task.py
import time
import uuid
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional

from taskmanager.schemas.enums.base_enums import TaskStatusEnum


def now_millis() -> int:
    """当前时间戳（毫秒）"""
    return int(time.time() * 1000)


def new_task_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Task:
    """
    任务实体

    实体不可变：状态变更通过 with_status 生成新实例，
    由 TaskStore 替换集合中的旧实例，外部拿到的始终是快照。
    """
    id: str
    title: str
    description: str
    status: TaskStatusEnum = TaskStatusEnum.PENDING
    created_at: int = 0
    assigned_to: Optional[str] = None

    def with_status(self, new_status: TaskStatusEnum) -> "Task":
        """返回仅状态不同的新实例"""
        return replace(self, status=TaskStatusEnum(new_status))

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data
