# tests/test_settings.py
"""
配置与种子数据测试
"""
import pytest
from pydantic import ValidationError

from taskmanager.application.config import settings as settings_module
from taskmanager.application.config.settings import Settings, get_settings
from taskmanager.application.services.task_service import WELCOME_TASK_TITLE, TaskService
from taskmanager.schemas.enums.base_enums import TaskStatusEnum


class TestSettings:
    """测试配置加载"""

    def test_defaults(self):
        settings = Settings()

        assert settings.api_prefix == "/api/v1"
        assert settings.seed_welcome_task is False
        assert settings.client_timeout_seconds == 30.0
        assert settings.get_service_config("client") == {"timeout": 30.0}
        assert settings.get_service_config("unknown") == {}

    def test_validators_normalize_values(self):
        settings = Settings(log_level="debug", log_format="JSON", environment="Testing")

        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"
        assert settings.environment == "testing"

    def test_invalid_environment_rejected(self):
        with pytest.raises(ValidationError):
            Settings(environment="moon")

    def test_nested_yaml_values_applied(self):
        settings = Settings()
        settings._update_from_nested_dict({
            "framework": {"name": "Tasks From Yaml"},
            "tasks": {"seed_welcome_task": True},
            "client": {"timeout": 5},
        })

        assert settings.app_name == "Tasks From Yaml"
        assert settings.seed_welcome_task is True
        assert settings.client_timeout_seconds == 5

    def test_explicit_values_win_over_yaml(self):
        settings = Settings(app_name="Explicit")
        settings._update_from_nested_dict({"framework": {"name": "From Yaml"}})

        assert settings.app_name == "Explicit"

    def test_core_config_yaml_loaded(self, tmp_path, monkeypatch):
        config_file = tmp_path / "core_config.yaml"
        config_file.write_text(
            "framework:\n"
            "  name: Tasks From File\n"
            "tasks:\n"
            "  seed_welcome_task: true\n"
            "realtime:\n"
            "  ws_enabled: false\n",
            encoding="utf-8"
        )
        monkeypatch.setattr(settings_module, "CORE_CONFIG_PATH", config_file)

        settings = Settings()

        assert settings.app_name == "Tasks From File"
        assert settings.seed_welcome_task is True
        assert settings.ws_enabled is False

    def test_missing_core_config_keeps_defaults(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings_module, "CORE_CONFIG_PATH", tmp_path / "absent.yaml")

        assert Settings().app_name == "Task Manager"


@pytest.fixture
def fresh_settings():
    """清除缓存的配置，测试结束后再次清除"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestWelcomeTask:
    """测试欢迎任务"""

    def test_seeded_on_startup_when_enabled(self, monkeypatch, fresh_settings):
        monkeypatch.setenv("SEED_WELCOME_TASK", "true")

        service = TaskService()

        tasks = service.get_all_tasks()
        assert [task.title for task in tasks] == [WELCOME_TASK_TITLE]
        assert tasks[0].status == TaskStatusEnum.PENDING

        stats = service.get_statistics()
        assert stats.total_tasks == 1
        assert stats.pending_tasks == 1
        assert stats.creation_count == 0

    def test_not_seeded_by_default(self, monkeypatch, fresh_settings):
        monkeypatch.delenv("SEED_WELCOME_TASK", raising=False)

        assert TaskService().get_all_tasks() == []
