# taskmanager/application/services/service_interface.py
from abc import ABC, abstractmethod
from typing import Any, Dict

from taskmanager.application.config.settings import get_settings
from taskmanager.infrastructure.logging.logger import get_logger


class BaseService(ABC):
    """
    基础服务接口 - 专注业务逻辑，不关心传输层
    """

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)
        self.settings = get_settings()
        self.service_name = self.__class__.__name__

    @abstractmethod
    def get_service_info(self) -> Dict[str, Any]:
        """获取服务信息 - 子类必须实现"""
        pass

    async def health_check(self) -> Dict[str, Any]:
        """服务健康检查"""
        return {
            "service": self.service_name,
            "status": "healthy"
        }
