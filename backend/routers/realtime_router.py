"""
WebSocket endpoint for realtime notification push.
"""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from core.realtime import connection_manager

router = APIRouter(tags=["realtime"])


@router.websocket("/ws/notifications/{username}")
async def notifications_socket(websocket: WebSocket, username: str) -> None:
    """
    Hold a notification session open for `username`.

    The server only pushes; anything the client sends is ignored.
    """
    session_id = await connection_manager.connect(username, websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        connection_manager.disconnect(username, session_id)
