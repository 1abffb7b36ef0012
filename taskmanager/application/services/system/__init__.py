# taskmanager/application/services/system/__init__.py
"""
系统服务模块

- HealthService: 健康检查
"""

from taskmanager.application.services.system.health_service import HealthService

__all__ = ['HealthService']
