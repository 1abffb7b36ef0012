# taskmanager/client/task_client.py
"""
任务服务的异步客户端

REST接口用于创建、查询、更新任务；统计与按状态查询走RPC消息入口。
每个调用返回 SendResult，网络超时、服务不可达、响应无法解析分别对应不同的结果类型，
调用方无需处理 httpx 异常。
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from taskmanager.application.config.settings import get_settings
from taskmanager.infrastructure.logging.logger import get_logger
from taskmanager.schemas.dtos.response.task_response import (
    TaskManagerStatsResponse,
    TaskResponse,
    TaskSchema,
)
from taskmanager.schemas.enums.base_enums import (
    CallerScopeEnum,
    RpcOperationEnum,
    TaskStatusEnum,
)

logger = get_logger(__name__)

T = TypeVar('T')

_task_list_adapter = TypeAdapter(List[TaskSchema])


class SendResultKind:
    SUCCESS = "success"
    TIMEOUT = "timeout"
    OFFLINE = "offline"
    DESERIALIZATION_ERROR = "deserialization_error"


@dataclass
class SendResult(Generic[T]):
    """一次调用的结果"""
    kind: str
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.kind == SendResultKind.SUCCESS

    def unwrap(self) -> T:
        if not self.is_success:
            raise RuntimeError(f"call did not succeed: {self.kind} {self.error or ''}".strip())
        return self.value


class TaskClient:
    """
    任务服务客户端

    Args:
        base_url: 服务地址，例如 http://localhost:8000
        api_prefix: API前缀，默认取配置
        caller_scope: RPC调用时携带的调用方范围
        timeout: 超时秒数，默认取配置（30秒）
        transport: 自定义 httpx 传输层（测试时可传入 ASGITransport）
    """

    def __init__(
        self,
        base_url: str,
        api_prefix: Optional[str] = None,
        caller_scope: CallerScopeEnum = CallerScopeEnum.LOCAL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        settings = get_settings()
        self.api_prefix = api_prefix if api_prefix is not None else settings.api_prefix
        self.caller_scope = CallerScopeEnum(caller_scope)
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout or settings.client_timeout_seconds,
            transport=transport
        )

    async def __aenter__(self) -> "TaskClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    # === REST接口 ===

    async def create_task(
        self,
        title: str,
        description: str = "",
        assigned_to: Optional[str] = None
    ) -> SendResult[TaskResponse]:
        payload = {"title": title, "description": description, "assigned_to": assigned_to}
        return await self._send("POST", "/tasks", TaskResponse.model_validate, json=payload)

    async def get_all_tasks(self) -> SendResult[List[TaskSchema]]:
        return await self._send("GET", "/tasks", _task_list_adapter.validate_python)

    async def get_task(self, task_id: str) -> SendResult[TaskResponse]:
        return await self._send("GET", f"/tasks/{task_id}", TaskResponse.model_validate)

    async def update_task_status(
        self,
        task_id: str,
        new_status: TaskStatusEnum
    ) -> SendResult[TaskResponse]:
        payload = {"new_status": str(TaskStatusEnum(new_status))}
        return await self._send("PUT", f"/tasks/{task_id}/status", TaskResponse.model_validate, json=payload)

    # === RPC消息 ===

    async def get_statistics(self) -> SendResult[TaskManagerStatsResponse]:
        return await self._rpc(RpcOperationEnum.GET_STATISTICS, {}, TaskManagerStatsResponse.model_validate)

    async def get_tasks_by_status(self, status: TaskStatusEnum) -> SendResult[List[TaskSchema]]:
        return await self._rpc(
            RpcOperationEnum.GET_TASKS_BY_STATUS,
            str(TaskStatusEnum(status)),
            _task_list_adapter.validate_python
        )

    async def _rpc(self, operation: RpcOperationEnum, payload: Any, decode: Callable[[Any], T]) -> SendResult[T]:
        return await self._send(
            "POST",
            "/rpc",
            decode,
            json={operation.value: payload},
            headers={"X-Caller-Scope": self.caller_scope.value}
        )

    async def _send(
        self,
        method: str,
        path: str,
        decode: Callable[[Any], T],
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> SendResult[T]:
        url = f"{self.api_prefix}{path}"
        try:
            response = await self._client.request(method, url, json=json, headers=headers)
        except httpx.TimeoutException as e:
            logger.warning(f"请求超时: {method} {url} - {str(e)}")
            return SendResult(kind=SendResultKind.TIMEOUT, error=str(e) or "timeout")
        except httpx.TransportError as e:
            logger.warning(f"服务不可达: {method} {url} - {str(e)}")
            return SendResult(kind=SendResultKind.OFFLINE, error=str(e) or "offline")

        try:
            body = response.json()
            if response.is_error:
                raise ValueError(_describe_error(response.status_code, body))
            return SendResult(kind=SendResultKind.SUCCESS, value=decode(body))
        except (ValueError, ValidationError) as e:
            logger.warning(f"响应解析失败: {method} {url} - {str(e)}")
            return SendResult(kind=SendResultKind.DESERIALIZATION_ERROR, error=str(e))


def _describe_error(status_code: int, body: Any) -> str:
    if isinstance(body, dict) and body.get("error_message"):
        return f"HTTP {status_code}: {body['error_message']}"
    return f"HTTP {status_code}"


__all__ = [
    'SendResult',
    'SendResultKind',
    'TaskClient',
]
