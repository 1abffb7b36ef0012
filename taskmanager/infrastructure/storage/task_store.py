# taskmanager/infrastructure/storage/task_store.py
import threading
from collections import OrderedDict
from typing import Callable, List, Optional

from taskmanager.domain.entities.task import Task, new_task_id, now_millis
from taskmanager.domain.exceptions.task_exceptions import (
    InvalidInputException,
    StorageFailureException,
    TaskNotFoundException,
)
from taskmanager.infrastructure.logging.logger import get_logger
from taskmanager.schemas.enums.base_enums import TaskStatusEnum

logger = get_logger(__name__)


def coerce_status(value) -> TaskStatusEnum:
    """将字符串或枚举转换为 TaskStatusEnum，未知状态抛出 InvalidInputException"""
    try:
        return TaskStatusEnum(value)
    except ValueError:
        raise InvalidInputException(
            "status", f"unknown status '{value}', expected one of {TaskStatusEnum.list_values()}"
        ) from None


class TaskStore:
    """
    内存任务存储

    功能：
    1. 按插入顺序保存任务（OrderedDict）
    2. 保证任务ID在存储生命周期内唯一
    3. 状态更新为无条件替换，不限制状态流转
    4. 所有读写在同一把可重入锁下完成，读操作不会看到写了一半的数据

    任务只增不删，没有删除操作。
    """

    def __init__(self, id_factory: Optional[Callable[[], str]] = None):
        self.logger = logger
        self._id_factory = id_factory or new_task_id
        self._tasks: OrderedDict[str, Task] = OrderedDict()
        self.lock = threading.RLock()

    def create(
        self,
        title: str,
        description: str,
        assigned_to: Optional[str] = None
    ) -> Task:
        """创建任务，状态固定为 pending"""
        if not isinstance(title, str) or not title.strip():
            raise InvalidInputException("title", "title must not be empty")
        if not isinstance(description, str):
            raise InvalidInputException("description", "description must be a string")
        if assigned_to is not None and not isinstance(assigned_to, str):
            raise InvalidInputException("assigned_to", "assigned_to must be a string when present")

        with self.lock:
            task_id = self._next_id()
            task = Task(
                id=task_id,
                title=title,
                description=description,
                status=TaskStatusEnum.PENDING,
                created_at=now_millis(),
                assigned_to=assigned_to,
            )
            self._tasks[task_id] = task

        self.logger.debug(f"任务已创建: {task_id}")
        return task

    def insert_existing(self, task: Task) -> Task:
        """写入一个已构造好的任务（用于初始化数据），ID冲突时拒绝"""
        with self.lock:
            if task.id in self._tasks:
                raise StorageFailureException("insert", f"task id '{task.id}' already exists")
            self._tasks[task.id] = task
        return task

    def get(self, task_id: str) -> Task:
        """按ID获取任务，不存在时抛出 TaskNotFoundException"""
        with self.lock:
            task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundException(task_id)
        return task

    def list(self) -> List[Task]:
        """按插入顺序返回所有任务"""
        with self.lock:
            return list(self._tasks.values())

    def list_by_status(self, status: TaskStatusEnum) -> List[Task]:
        """返回状态完全匹配的任务"""
        status = coerce_status(status)
        with self.lock:
            return [task for task in self._tasks.values() if task.status == status]

    def update_status(self, task_id: str, new_status: TaskStatusEnum) -> Task:
        """更新任务状态，相同状态重复设置视为成功"""
        new_status = coerce_status(new_status)
        with self.lock:
            current = self._tasks.get(task_id)
            if current is None:
                raise TaskNotFoundException(task_id)
            if current.status == new_status:
                return current
            updated = current.with_status(new_status)
            self._tasks[task_id] = updated

        self.logger.debug(f"任务状态已更新: {task_id} {current.status} -> {new_status}")
        return updated

    def count(self) -> int:
        with self.lock:
            return len(self._tasks)

    def count_by_status(self, status: TaskStatusEnum) -> int:
        status = coerce_status(status)
        with self.lock:
            return sum(1 for task in self._tasks.values() if task.status == status)

    def _next_id(self) -> str:
        # 调用方已持有锁
        task_id = self._id_factory()
        if task_id in self._tasks:
            raise StorageFailureException("create", f"generated task id '{task_id}' collides with an existing task")
        return task_id
