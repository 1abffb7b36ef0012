# taskmanager/application/handlers/system/health_handler.py
from typing import Any, Dict

from taskmanager.application.handlers.handler_interface import BaseHandler
from taskmanager.application.services.system.health_service import HealthService


class HealthHandler(BaseHandler[Dict[str, Any]]):
    """健康检查控制器"""

    def __init__(self, health_service: HealthService = None):
        super().__init__()
        self.health_service = health_service or HealthService()

    async def _process_request(self, request_data: dict = None) -> Dict[str, Any]:
        return await self.health_service.check_health()
