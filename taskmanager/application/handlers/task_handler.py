# taskmanager/application/handlers/task_handler.py
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import ValidationError

from taskmanager.application.handlers.handler_interface import BaseHandler
from taskmanager.application.services.task_service import TaskService, get_task_service
from taskmanager.domain.entities.task import Task
from taskmanager.domain.exceptions.base_exception import DomainException
from taskmanager.domain.exceptions.task_exceptions import InvalidInputException, StorageFailureException
from taskmanager.infrastructure.storage.task_store import coerce_status
from taskmanager.schemas.dtos.request.task_request import NewTaskRequest, TaskStatusUpdateRequest
from taskmanager.schemas.dtos.response.task_response import (
    TaskManagerStatsResponse,
    TaskResponse,
    TaskSchema,
)
from taskmanager.schemas.enums.base_enums import CallerScopeEnum, RpcOperationEnum, TaskStatusEnum

RpcResult = Union[TaskResponse, List[TaskSchema], TaskManagerStatsResponse]


class TaskHandler(BaseHandler[TaskResponse]):
    """
    任务处理器 - 各传输入口共用的调度层

    职责：
    1. 每次调用记录一次请求计数
    2. 将 TaskService 的结果包装为 TaskResponse 信封
    3. 捕获领域异常并写入信封，不向调用方抛出原始异常
    4. 创建/更新成功后推送实时更新
    """

    def __init__(self, task_service: Optional[TaskService] = None):
        super().__init__()
        self.task_service = task_service or get_task_service()

    async def create_task(self, request: NewTaskRequest) -> TaskResponse:
        self.task_service.record_request()
        response = self._wrap("create_task", lambda: self.task_service.create_task(
            title=request.title,
            description=request.description,
            assigned_to=request.assigned_to
        ))
        await self._publish(response)
        return response

    async def get_all_tasks(self) -> List[TaskSchema]:
        self.task_service.record_request()
        return [TaskSchema.from_entity(task) for task in self.task_service.get_all_tasks()]

    async def get_task(self, task_id: str) -> TaskResponse:
        self.task_service.record_request()
        return self._wrap("get_task", lambda: self.task_service.get_task(task_id))

    async def update_task_status(self, request: TaskStatusUpdateRequest) -> TaskResponse:
        self.task_service.record_request()
        response = self._wrap("update_task_status", lambda: self.task_service.update_task_status(
            request.task_id, request.new_status
        ))
        await self._publish(response)
        return response

    async def get_statistics(self) -> TaskManagerStatsResponse:
        self.task_service.record_request()
        return TaskManagerStatsResponse.from_stats(self.task_service.get_statistics())

    async def get_tasks_by_status(self, status: Union[str, TaskStatusEnum]) -> List[TaskSchema]:
        # 未知状态在计数之前拒绝
        status = coerce_status(status)
        self.task_service.record_request()
        return [TaskSchema.from_entity(task) for task in self.task_service.get_tasks_by_status(status)]

    async def handle_rpc_message(
        self,
        message: Any,
        caller_scope: CallerScopeEnum = CallerScopeEnum.LOCAL
    ) -> RpcResult:
        """
        处理标签式RPC消息，例如 {"GetStatistics": {}} 或 {"GetTasksByStatus": "pending"}

        消息格式错误时抛出 InvalidInputException，由错误处理中间件转换为400响应
        """
        operation, payload = self._parse_rpc_message(message)
        self.logger.info("处理RPC消息", extra={"operation": str(operation), "caller_scope": str(caller_scope)})

        if operation == RpcOperationEnum.CREATE_TASK:
            return await self.create_task(self._parse_payload(NewTaskRequest, payload))
        if operation == RpcOperationEnum.GET_ALL_TASKS:
            return await self.get_all_tasks()
        if operation == RpcOperationEnum.GET_TASK:
            if not isinstance(payload, str):
                raise InvalidInputException("GetTask", "expected a task id string")
            return await self.get_task(payload)
        if operation == RpcOperationEnum.UPDATE_TASK_STATUS:
            return await self.update_task_status(self._parse_payload(TaskStatusUpdateRequest, payload))
        if operation == RpcOperationEnum.GET_STATISTICS:
            return await self.get_statistics()
        if not isinstance(payload, str):
            raise InvalidInputException("GetTasksByStatus", "expected a status string")
        return await self.get_tasks_by_status(payload)

    def _wrap(self, operation: str, action: Callable[[], Task]) -> TaskResponse:
        """执行操作并包装为信封"""
        try:
            return TaskResponse.ok(action())
        except StorageFailureException as e:
            self.logger.error(f"存储操作失败: {operation} - {e.message}", extra={"error_code": str(e.error_code), "details": e.details})
            return TaskResponse.failed(e.message, storage_status=False)
        except DomainException as e:
            self.logger.warning(f"请求未成功: {operation} - {e.message}", extra={"error_code": str(e.error_code)})
            return TaskResponse.failed(e.message, storage_status=True)

    async def _publish(self, response: TaskResponse) -> None:
        if not response.success or response.task is None:
            return
        try:
            await self.task_service.connections.broadcast_task_update(response.task.model_dump())
        except Exception as e:
            self.logger.warning(f"任务更新推送失败: {str(e)}")

    @staticmethod
    def _parse_rpc_message(message: Any) -> tuple[RpcOperationEnum, Any]:
        if not isinstance(message, dict) or len(message) != 1:
            raise InvalidInputException("message", "RPC message must be an object with exactly one operation key")
        key, payload = next(iter(message.items()))
        if not RpcOperationEnum.has_value(key):
            raise InvalidInputException(
                "message", f"unknown operation '{key}', expected one of {RpcOperationEnum.list_values()}"
            )
        return RpcOperationEnum(key), payload

    @staticmethod
    def _parse_payload(model, payload: Any):
        if not isinstance(payload, dict):
            raise InvalidInputException(model.__name__, "expected an object payload")
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            details: Dict[str, Any] = {"errors": [{"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()]}
            raise InvalidInputException(model.__name__, "payload failed validation", details=details) from e
