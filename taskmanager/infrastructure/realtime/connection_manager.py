# taskmanager/infrastructure/realtime/connection_manager.py
from typing import Any, Dict, List

from fastapi import WebSocket

from taskmanager.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


class ConnectionManager:
    """管理订阅任务更新的WebSocket连接"""

    def __init__(self):
        # websocket -> client_id
        self.subscribers: Dict[WebSocket, str] = {}

    def subscribe(self, websocket: WebSocket, client_id: str) -> None:
        self.subscribers[websocket] = client_id
        logger.info("客户端订阅任务更新", extra={"client_id": client_id})

    def unsubscribe(self, websocket: WebSocket) -> None:
        client_id = self.subscribers.pop(websocket, None)
        if client_id is not None:
            logger.info("客户端取消订阅", extra={"client_id": client_id})

    @property
    def subscriber_count(self) -> int:
        return len(self.subscribers)

    async def broadcast(self, message: Dict[str, Any]) -> int:
        """向所有订阅者推送消息，单个连接失败不影响其他连接"""
        delivered = 0
        dead: List[WebSocket] = []
        for websocket, client_id in list(self.subscribers.items()):
            try:
                await websocket.send_json(message)
                delivered += 1
            except Exception as e:
                logger.warning(f"推送失败，移除订阅: {client_id} - {str(e)}")
                dead.append(websocket)

        for websocket in dead:
            self.subscribers.pop(websocket, None)

        return delivered

    async def broadcast_task_update(self, task: Dict[str, Any]) -> int:
        if not self.subscribers:
            return 0
        return await self.broadcast({"type": "task_update", "task": task})
