# taskmanager/api/middleware/logging_middleware.py
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from taskmanager.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """请求日志中间件"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        start_time = time.time()

        logger.info("请求开始", extra={
            "request_id": request_id,
            "method": request.method,
            "url": str(request.url),
            "caller_scope": request.headers.get("x-caller-scope"),
            "client_ip": request.client.host if request.client else None,
        })

        request.state.request_id = request_id

        try:
            response = await call_next(request)

            process_time = time.time() - start_time

            logger.info("请求完成", extra={
                "request_id": request_id,
                "method": request.method,
                "url": str(request.url),
                "status_code": response.status_code,
                "process_time": round(process_time, 4),
            })

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = str(round(process_time, 4))

            return response

        except Exception as e:
            process_time = time.time() - start_time

            logger.error("请求处理异常", extra={
                "request_id": request_id,
                "method": request.method,
                "url": str(request.url),
                "error": str(e),
                "process_time": round(process_time, 4),
            })

            # 重新抛出异常，让错误处理中间件处理
            raise
