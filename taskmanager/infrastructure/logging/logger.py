# taskmanager/infrastructure/logging/logger.py
import logging
import sys
from functools import lru_cache
from typing import Optional

from taskmanager.application.config.settings import get_settings


def setup_logging():
    """Configure application logging based on settings."""
    settings = get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    # 根据配置选择格式
    if settings.log_format == "json":
        log_format = '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True  # 覆盖已有配置
    )

    app_logger = logging.getLogger("taskmanager")
    app_logger.setLevel(log_level)

    # Set lower level for noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured with level: {settings.log_level}, format: {settings.log_format}")


@lru_cache()
def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a named logger.

    Args:
        name: Logger name, typically __name__ of the module

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name or __name__)

