# taskmanager/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskmanager.api.middleware.error_handler import ErrorHandlerMiddleware
from taskmanager.api.middleware.logging_middleware import LoggingMiddleware
from taskmanager.api.v1.main_router import build_api_router
from taskmanager.application.config.settings import get_settings
from taskmanager.application.services.task_service import get_task_service
from taskmanager.infrastructure.logging.logger import get_logger, setup_logging

# 初始化日志
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    settings = get_settings()

    logger.info("应用启动中...", extra={
        "app_name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    })

    task_service = get_task_service()
    app.state.task_service = task_service
    app.state.settings = settings
    logger.info("任务服务配置", extra=settings.get_service_config("task"))
    logger.info("应用启动完成")

    yield

    logger.info("应用关闭中...")
    stats = task_service.get_statistics()
    logger.info("任务服务关闭", extra={
        "total_tasks": stats.total_tasks,
        "creation_count": stats.creation_count,
        "request_count": stats.request_count,
    })
    logger.info("应用关闭完成")


def create_app() -> FastAPI:
    """创建FastAPI应用实例"""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Task tracking service with status workflow and usage statistics",
        version=settings.app_version,
        docs_url=settings.docs_url if not settings.is_production else None,
        redoc_url=settings.redoc_url if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=settings.allow_credentials,
        allow_methods=settings.allow_methods,
        allow_headers=settings.allow_headers,
    )

    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(LoggingMiddleware)

    app.include_router(build_api_router(ws_enabled=settings.ws_enabled), prefix=settings.api_prefix)

    @app.get("/", tags=["root"])
    async def root():
        """API根路径"""
        return {
            "message": f"欢迎使用 {settings.app_name}",
            "version": settings.app_version,
            "environment": settings.environment,
            "docs": settings.docs_url,
            "health": f"{settings.api_prefix}/health",
            "features": {
                "rest": f"{settings.api_prefix}/tasks",
                "rpc": f"{settings.api_prefix}/rpc",
                "live_updates": f"{settings.api_prefix}/ws/tasks" if settings.ws_enabled else None
            }
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn_config = {
        "host": settings.host,
        "port": settings.port,
        "reload": settings.reload and settings.is_development,
        "log_config": None,  # 使用自定义日志配置
        "access_log": False,  # 禁用默认访问日志，使用自定义中间件
    }

    logger.info("启动服务器", extra=uvicorn_config)

    uvicorn.run("taskmanager.main:app", **uvicorn_config)
