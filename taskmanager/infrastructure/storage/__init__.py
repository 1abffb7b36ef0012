# storage/__init__.py
"""
Storage module - 任务存储与统计

TaskStore 独占任务集合；StatsTracker 维护生命周期计数器并实时汇总任务数量
"""

from taskmanager.infrastructure.storage.task_store import TaskStore
from taskmanager.infrastructure.storage.stats_tracker import StatsTracker, TaskManagerStats

__all__ = [
    'TaskStore',
    'StatsTracker',
    'TaskManagerStats',
]
