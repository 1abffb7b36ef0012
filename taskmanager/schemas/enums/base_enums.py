# taskmanager/schemas/enums/base_enums.py
from enum import Enum


class BaseEnum(str, Enum):
    """基础枚举类，继承str使其可以直接序列化为字符串"""

    def __str__(self) -> str:
        return self.value

    @classmethod
    def list_values(cls) -> list[str]:
        """获取所有枚举值列表"""
        return [item.value for item in cls]

    @classmethod
    def has_value(cls, value: str) -> bool:
        """检查值是否存在于枚举中"""
        return value in cls.list_values()


class TaskStatusEnum(BaseEnum):
    """任务状态枚举 - 四种平级状态，任意状态之间均可直接切换"""
    PENDING = "pending"             # 待处理
    IN_PROGRESS = "in-progress"     # 进行中
    COMPLETED = "completed"         # 已完成
    CANCELLED = "cancelled"         # 已取消


class CallerScopeEnum(BaseEnum):
    """调用方范围枚举"""
    PUBLIC = "public"      # 公网请求
    LOCAL = "local"        # 同主机调用
    REMOTE = "remote"      # 跨主机调用


class RpcOperationEnum(BaseEnum):
    """RPC消息操作名"""
    CREATE_TASK = "CreateTask"
    GET_ALL_TASKS = "GetAllTasks"
    GET_TASK = "GetTask"
    UPDATE_TASK_STATUS = "UpdateTaskStatus"
    GET_STATISTICS = "GetStatistics"
    GET_TASKS_BY_STATUS = "GetTasksByStatus"


class ErrorCodeEnum(BaseEnum):
    """错误代码枚举"""
    # 通用错误
    INTERNAL_ERROR = "INTERNAL_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    NOT_FOUND = "NOT_FOUND"

    # 验证错误
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"

    # 业务错误
    DOMAIN_ERROR = "DOMAIN_ERROR"
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"

    # 系统错误
    STORAGE_FAILURE = "STORAGE_FAILURE"


class EnvironmentEnum(BaseEnum):
    """环境枚举"""
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"
