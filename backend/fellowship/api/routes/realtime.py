from contextlib import suppress
from typing import Optional
from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.websockets import WebSocketState
import logging

from ...database.session import get_db
from ...api.dependencies import user_from_token
from ...services.realtime import ConnectionManager, connection_manager, user_room

router = APIRouter(tags=["realtime"])
logger = logging.getLogger(__name__)


@router.websocket("/ws")
async def notifications_socket(
    websocket: WebSocket,
    token: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db)
):
    """Join room user_<id> and receive {event, data} frames"""
    user = await user_from_token(db, token) if token else None
    if user is None:
        await websocket.close(code=4401)
        return
    room = user_room(user.id)
    # release the read transaction; the socket may stay open for hours
    await db.close()

    manager: ConnectionManager = getattr(websocket.app.state, "connections", connection_manager)
    await websocket.accept()
    manager.join(room, websocket)
    try:
        while True:
            message = await websocket.receive_text()
            if message == "ping":
                await websocket.send_json({"event": "pong", "data": {}})
    except WebSocketDisconnect:
        logger.info(f"Websocket disconnected from {room}")
    finally:
        manager.leave(room, websocket)
        if websocket.client_state != WebSocketState.DISCONNECTED:
            with suppress(Exception):
                await websocket.close()
