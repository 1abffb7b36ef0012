# taskmanager/application/config/settings.py
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from taskmanager.schemas.enums.base_enums import EnvironmentEnum

CORE_CONFIG_PATH = Path(__file__).parent / "core_config.yaml"


class Settings(BaseSettings):
    """应用配置类 - 支持环境变量、YAML配置文件和默认值"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore"
    )

    # === 核心应用设置 ===
    app_name: str = Field(default="Task Manager")
    app_version: str = Field(default="0.1.0")
    debug: bool = Field(default=False)
    environment: str = Field(default="development")

    # === 服务器设置 ===
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    reload: bool = Field(default=False)

    # === API设置 ===
    api_prefix: str = Field(default="/api/v1")
    docs_url: Optional[str] = Field(default="/docs")
    redoc_url: Optional[str] = Field(default="/redoc")

    # === CORS设置 ===
    allowed_origins: List[str] = Field(default=["*"])
    allow_credentials: bool = Field(default=True)
    allow_methods: List[str] = Field(default=["*"])
    allow_headers: List[str] = Field(default=["*"])

    # === 日志设置 ===
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")  # json or console

    # === 任务存储设置 ===
    seed_welcome_task: bool = Field(default=False)  # 启动时写入欢迎任务（不计入创建计数）

    # === 客户端设置 ===
    client_timeout_seconds: float = Field(default=30.0, gt=0)

    # === 实时推送设置 ===
    ws_enabled: bool = Field(default=True)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        valid_formats = ["json", "console"]
        if v.lower() not in valid_formats:
            raise ValueError(f"log_format must be one of {valid_formats}")
        return v.lower()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        valid_envs = EnvironmentEnum.list_values()
        if v.lower() not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}")
        return v.lower()

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._load_config_files()

    def _load_config_files(self) -> None:
        """加载YAML配置文件"""
        if CORE_CONFIG_PATH.exists():
            with open(CORE_CONFIG_PATH, "r", encoding="utf-8") as f:
                core_config = yaml.safe_load(f) or {}
                self._update_from_nested_dict(core_config)

    def _update_from_nested_dict(self, config_dict: Dict[str, Any], prefix: str = "") -> None:
        """从嵌套字典更新配置"""
        for key, value in config_dict.items():
            if isinstance(value, dict):
                new_prefix = f"{prefix}{key}_" if prefix else f"{key}_"
                self._update_from_nested_dict(value, new_prefix)
                continue

            attr_name = f"{prefix}{key}".lower()

            attr_mapping = {
                "framework_name": "app_name",
                "framework_version": "app_version",
                "framework_debug": "debug",
                "server_host": "host",
                "server_port": "port",
                "server_reload": "reload",
                "tasks_seed_welcome_task": "seed_welcome_task",
                "client_timeout": "client_timeout_seconds",
                "realtime_ws_enabled": "ws_enabled",
            }

            final_attr = attr_mapping.get(attr_name, attr_name)

            # 只有当属性存在且显式配置（环境变量等）未覆盖时才设置
            if final_attr in type(self).model_fields and final_attr not in self.model_fields_set:
                setattr(self, final_attr, value)

    @property
    def is_production(self) -> bool:
        """是否为生产环境"""
        return self.environment == EnvironmentEnum.PRODUCTION

    @property
    def is_development(self) -> bool:
        """是否为开发环境"""
        return self.environment == EnvironmentEnum.DEVELOPMENT

    def get_service_config(self, service_name: str) -> Dict[str, Any]:
        """获取特定服务的配置"""
        service_configs = {
            "task": {
                "seed_welcome_task": self.seed_welcome_task,
            },
            "client": {
                "timeout": self.client_timeout_seconds,
            },
            "realtime": {
                "ws_enabled": self.ws_enabled,
            },
        }

        return service_configs.get(service_name, {})


@lru_cache()
def get_settings() -> Settings:
    """获取缓存的配置实例"""
    return Settings()


def get_service_config(service_name: str) -> Dict[str, Any]:
    """获取服务配置"""
    return get_settings().get_service_config(service_name)
