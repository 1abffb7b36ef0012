# tests/conftest.py
import sys
from pathlib import Path

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from fastapi.testclient import TestClient

from taskmanager.application.services.task_service import TaskService, reset_task_service
from taskmanager.main import create_app


@pytest.fixture(autouse=True)
def task_service() -> TaskService:
    """每个测试使用全新的任务服务"""
    return reset_task_service()


@pytest.fixture
def app():
    """创建测试应用"""
    return create_app()


@pytest.fixture
def client(app):
    """带生命周期的测试客户端"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def setup_logging():
    """设置测试日志"""
    from taskmanager.infrastructure.logging.logger import setup_logging
    setup_logging()
