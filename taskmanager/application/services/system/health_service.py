# taskmanager/application/services/system/health_service.py
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from taskmanager.application.services.service_interface import BaseService
from taskmanager.application.services.task_service import TaskService, get_task_service

_started_at = time.time()


class HealthService(BaseService):
    """健康检查服务"""

    def __init__(self, task_service: Optional[TaskService] = None):
        super().__init__()
        self.task_service = task_service or get_task_service()

    def get_service_info(self) -> Dict[str, Any]:
        return {
            "service_name": self.service_name,
            "description": "服务健康检查",
            "version": self.settings.app_version,
            "category": "system"
        }

    async def check_health(self) -> Dict[str, Any]:
        """检查服务及任务存储状态"""
        task_health = await self.task_service.health_check()
        return {
            "status": "healthy",
            "app_name": self.settings.app_name,
            "version": self.settings.app_version,
            "environment": self.settings.environment,
            "uptime_seconds": round(time.time() - _started_at, 3),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "total_tasks": task_health["total_tasks"],
            "subscribers": task_health["subscribers"]
        }
