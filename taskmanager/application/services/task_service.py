# taskmanager/application/services/task_service.py
from typing import Any, Dict, List, Optional

from taskmanager.application.services.service_interface import BaseService
from taskmanager.domain.entities.task import Task, new_task_id, now_millis
from taskmanager.infrastructure.realtime.connection_manager import ConnectionManager
from taskmanager.infrastructure.storage.stats_tracker import StatsTracker, TaskManagerStats
from taskmanager.infrastructure.storage.task_store import TaskStore
from taskmanager.schemas.enums.base_enums import TaskStatusEnum

WELCOME_TASK_TITLE = "Welcome Task"
WELCOME_TASK_DESCRIPTION = "This is your first task!"


class TaskService(BaseService):
    """
    任务服务 - 组合 TaskStore 与 StatsTracker

    创建成功后记录一次创建计数；请求计数由处理器层在每次调用时记录。
    """

    def __init__(
        self,
        store: Optional[TaskStore] = None,
        stats: Optional[StatsTracker] = None,
        connections: Optional[ConnectionManager] = None
    ):
        super().__init__()
        self.store = store or TaskStore()
        self.stats = stats or StatsTracker(self.store)
        self.connections = connections or ConnectionManager()

        if self.settings.seed_welcome_task:
            self._seed_welcome_task()

    def get_service_info(self) -> Dict[str, Any]:
        return {
            "service_name": self.service_name,
            "description": "任务存储与状态管理服务",
            "version": self.settings.app_version,
            "category": "tasks",
            "features": ["task_crud", "status_workflow", "statistics", "live_updates"]
        }

    def create_task(self, title: str, description: str, assigned_to: Optional[str] = None) -> Task:
        # 插入与创建计数在同一临界区内完成，快照不会看到只完成一半的创建
        with self.store.lock:
            task = self.store.create(title, description, assigned_to)
            creation_count = self.stats.record_creation()
        self.logger.info("任务创建成功", extra={
            "task_id": task.id,
            "assigned_to": assigned_to,
            "creation_count": creation_count
        })
        return task

    def get_task(self, task_id: str) -> Task:
        return self.store.get(task_id)

    def get_all_tasks(self) -> List[Task]:
        return self.store.list()

    def get_tasks_by_status(self, status: TaskStatusEnum) -> List[Task]:
        return self.store.list_by_status(status)

    def update_task_status(self, task_id: str, new_status: TaskStatusEnum) -> Task:
        task = self.store.update_status(task_id, new_status)
        self.logger.info("任务状态已更新", extra={"task_id": task_id, "status": str(task.status)})
        return task

    def get_statistics(self) -> TaskManagerStats:
        return self.stats.snapshot()

    def record_request(self) -> int:
        return self.stats.record_request()

    async def health_check(self) -> Dict[str, Any]:
        return {
            "service": self.service_name,
            "status": "healthy",
            "total_tasks": self.store.count(),
            "subscribers": self.connections.subscriber_count
        }

    def _seed_welcome_task(self) -> None:
        """写入欢迎任务，不计入创建计数"""
        task = Task(
            id=new_task_id(),
            title=WELCOME_TASK_TITLE,
            description=WELCOME_TASK_DESCRIPTION,
            status=TaskStatusEnum.PENDING,
            created_at=now_millis(),
            assigned_to=None,
        )
        self.store.insert_existing(task)
        self.logger.info("已写入欢迎任务", extra={"task_id": task.id})


_task_service: Optional[TaskService] = None


def get_task_service() -> TaskService:
    global _task_service
    if _task_service is None:
        _task_service = TaskService()
    return _task_service


def reset_task_service(service: Optional[TaskService] = None) -> TaskService:
    """替换进程内的任务服务实例（测试使用）"""
    global _task_service
    _task_service = service or TaskService()
    return _task_service
