# taskmanager/api/middleware/error_handler.py
import traceback
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from taskmanager.domain.exceptions.base_exception import DomainException, EntityNotFoundException
from taskmanager.domain.exceptions.task_exceptions import InvalidInputException, StorageFailureException
from taskmanager.infrastructure.logging.logger import get_logger
from taskmanager.schemas.dtos.response.base_response import BaseResponse

logger = get_logger(__name__)


def _domain_status_code(exc: DomainException) -> int:
    if isinstance(exc, InvalidInputException):
        return 400
    if isinstance(exc, EntityNotFoundException):
        return 404
    if isinstance(exc, StorageFailureException):
        return 503
    return 422


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """全局异常处理中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            response = await call_next(request)
            return response

        except DomainException as e:
            # 未被信封吸收的领域异常（列表、统计、RPC消息解析）
            status_code = _domain_status_code(e)
            logger.warning(f"领域异常: {e.message}", extra={
                "url": str(request.url),
                "method": request.method,
                "error_code": str(e.error_code),
                "status_code": status_code
            })
            error_response = BaseResponse.error_response(
                error=str(e.error_code),
                error_message=e.message
            )
            return JSONResponse(
                status_code=status_code,
                content=error_response.model_dump()
            )

        except ValueError as e:
            # 参数验证错误
            logger.warning(f"参数验证错误: {str(e)}", extra={
                "url": str(request.url),
                "method": request.method,
                "error": str(e)
            })
            error_response = BaseResponse.error_response(
                error="VALIDATION_ERROR",
                error_message=str(e)
            )
            return JSONResponse(
                status_code=400,
                content=error_response.model_dump()
            )

        except Exception as e:
            # 其他未处理的异常
            logger.error(f"未处理的异常: {str(e)}", extra={
                "url": str(request.url),
                "method": request.method,
                "error": str(e),
                "traceback": traceback.format_exc()
            })
            error_response = BaseResponse.error_response(
                error="INTERNAL_SERVER_ERROR",
                error_message="服务器内部错误"
            )
            return JSONResponse(
                status_code=500,
                content=error_response.model_dump()
            )
