# taskmanager/api/v1/routers/ws_router.py
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from taskmanager.application.services.task_service import get_task_service
from taskmanager.infrastructure.logging.logger import get_logger
from taskmanager.schemas.dtos.response.task_response import TaskSchema

logger = get_logger(__name__)

router = APIRouter(tags=["Realtime"])


@router.websocket("/ws/tasks")
async def task_updates(websocket: WebSocket):
    """
    任务实时更新

    客户端发送 {"Subscribe": {"client_id": "..."}} 后立即收到当前任务列表，
    之后每次创建或状态更新都会推送 {"type": "task_update", "task": {...}}；
    发送 {"Unsubscribe": {}} 或断开连接即取消订阅
    """
    service = get_task_service()
    connections = service.connections
    await websocket.accept()
    try:
        while True:
            data = await websocket.receive_json()
            if not isinstance(data, dict):
                await websocket.send_json({"type": "error", "error": "message must be an object"})
                continue

            if "Subscribe" in data:
                body = data.get("Subscribe") or {}
                if not isinstance(body, dict):
                    await websocket.send_json({"type": "error", "error": "Subscribe payload must be an object"})
                    continue
                client_id = str(body.get("client_id") or "").strip()
                if not client_id:
                    await websocket.send_json({"type": "error", "error": "client_id is required"})
                    continue
                connections.subscribe(websocket, client_id)
                tasks = [TaskSchema.from_entity(task).model_dump() for task in service.get_all_tasks()]
                await websocket.send_json({"type": "snapshot", "tasks": tasks})
            elif "Unsubscribe" in data:
                connections.unsubscribe(websocket)
                await websocket.send_json({"type": "unsubscribed"})
            else:
                await websocket.send_json({"type": "error", "error": "unknown message type"})
    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.exception(f"WebSocket处理异常: {str(e)}")
    finally:
        connections.unsubscribe(websocket)
