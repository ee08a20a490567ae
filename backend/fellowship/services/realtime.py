import logging
from collections import defaultdict
from typing import Any, Dict, Protocol, Set

from fastapi import WebSocket
from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)


def user_room(user_id: str) -> str:
    return f"user_{user_id}"


class Publisher(Protocol):
    """Anything that can push an event to a named room."""

    async def publish(self, room: str, event: str, payload: Dict[str, Any]) -> None:
        ...


class ConnectionManager:
    """Websocket rooms kept in process memory"""

    def __init__(self):
        self.rooms: Dict[str, Set[WebSocket]] = defaultdict(set)

    def join(self, room: str, websocket: WebSocket) -> None:
        self.rooms[room].add(websocket)
        logger.info(f"Websocket joined room {room} ({len(self.rooms[room])} connected)")

    def leave(self, room: str, websocket: WebSocket) -> None:
        connections = self.rooms.get(room)
        if not connections:
            return
        connections.discard(websocket)
        if not connections:
            del self.rooms[room]
        logger.info(f"Websocket left room {room}")

    async def publish(self, room: str, event: str, payload: Dict[str, Any]) -> None:
        frame = {"event": event, "data": payload}
        for websocket in list(self.rooms.get(room, ())):
            if websocket.client_state == WebSocketState.DISCONNECTED:
                self.leave(room, websocket)
                continue
            try:
                await websocket.send_json(frame)
            except Exception as e:
                logger.warning(f"Dropping websocket in room {room}: {e}")
                self.leave(room, websocket)


connection_manager = ConnectionManager()
