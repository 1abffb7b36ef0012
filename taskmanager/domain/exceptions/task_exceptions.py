# taskmanager/domain/exceptions/task_exceptions.py
from typing import Any, Dict, Optional

from taskmanager.domain.exceptions.base_exception import DomainException, EntityNotFoundException
from taskmanager.schemas.enums.base_enums import ErrorCodeEnum


class InvalidInputException(DomainException):
    """请求参数无效（例如必填字段为空）"""

    def __init__(
        self,
        field_name: str,
        reason: str,
        details: Optional[Dict[str, Any]] = None
    ):
        message = f"Invalid value for field '{field_name}': {reason}"
        super().__init__(
            message=message,
            error_code=ErrorCodeEnum.INVALID_INPUT,
            details={
                **(details or {}),
                "field_name": field_name,
                "reason": reason
            }
        )


class TaskNotFoundException(EntityNotFoundException):
    """任务不存在"""

    def __init__(self, task_id: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(entity_type="Task", entity_id=task_id, details=details)


class StorageFailureException(DomainException):
    """存储层无法完成读写操作"""

    def __init__(
        self,
        operation: str,
        reason: str,
        details: Optional[Dict[str, Any]] = None
    ):
        message = f"Storage operation '{operation}' failed: {reason}"
        super().__init__(
            message=message,
            error_code=ErrorCodeEnum.STORAGE_FAILURE,
            details={
                **(details or {}),
                "operation": operation,
                "reason": reason
            }
        )
