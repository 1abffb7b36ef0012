# taskmanager/infrastructure/storage/stats_tracker.py
from dataclasses import dataclass

from taskmanager.infrastructure.logging.logger import get_logger
from taskmanager.infrastructure.storage.task_store import TaskStore
from taskmanager.schemas.enums.base_enums import TaskStatusEnum

logger = get_logger(__name__)


@dataclass(frozen=True)
class TaskManagerStats:
    """统计快照"""
    total_tasks: int
    pending_tasks: int
    completed_tasks: int
    creation_count: int
    request_count: int


class StatsTracker:
    """
    统计信息收集

    只持有两个生命周期计数器（单调递增，从不回退）；
    任务总数、待处理数、已完成数每次快照时从 TaskStore 实时计算，不做缓存。
    计数器与任务集合共用 TaskStore 的锁，快照在同一临界区内读取全部数值。
    """

    def __init__(self, store: TaskStore):
        self.store = store
        self._creation_count = 0
        self._request_count = 0

    def record_request(self) -> int:
        with self.store.lock:
            self._request_count += 1
            return self._request_count

    def record_creation(self) -> int:
        with self.store.lock:
            self._creation_count += 1
            return self._creation_count

    def snapshot(self) -> TaskManagerStats:
        with self.store.lock:
            stats = TaskManagerStats(
                total_tasks=self.store.count(),
                pending_tasks=self.store.count_by_status(TaskStatusEnum.PENDING),
                completed_tasks=self.store.count_by_status(TaskStatusEnum.COMPLETED),
                creation_count=self._creation_count,
                request_count=self._request_count,
            )
        logger.debug(f"统计快照: {stats}")
        return stats
