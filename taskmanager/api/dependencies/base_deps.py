# taskmanager/api/dependencies/base_deps.py
from fastapi import Request

from taskmanager.application.handlers.task_handler import TaskHandler
from taskmanager.application.services.task_service import get_task_service
from taskmanager.domain.exceptions.task_exceptions import InvalidInputException
from taskmanager.schemas.enums.base_enums import CallerScopeEnum


def get_request_id(request: Request) -> str:
    """获取请求ID"""
    return getattr(request.state, "request_id", "unknown")


def get_caller_scope(request: Request) -> CallerScopeEnum:
    """从 X-Caller-Scope 请求头解析调用方范围，缺省为 local"""
    raw = request.headers.get("X-Caller-Scope")
    if not raw:
        return CallerScopeEnum.LOCAL
    value = raw.strip().lower()
    if not CallerScopeEnum.has_value(value):
        raise InvalidInputException(
            "X-Caller-Scope", f"expected one of {CallerScopeEnum.list_values()}"
        )
    return CallerScopeEnum(value)


def get_task_handler() -> TaskHandler:
    """依赖注入：获取任务处理器（共享进程内的任务服务）"""
    return TaskHandler(get_task_service())
