"""
Realtime push of notifications to connected users.

Keeps a username -> session id -> WebSocket registry. Emitting is
fire-and-forget: services run in FastAPI's threadpool, so sends are scheduled
onto the event loop that accepted the socket and failures are only logged.
An offline user simply has no session and nothing is sent.
"""

import asyncio
import threading
import uuid
from typing import Any, Protocol

from fastapi import WebSocket
from loguru import logger


class NotificationEmitter(Protocol):
    """What services need from the realtime layer."""

    def session_for(self, username: str) -> str | None: ...

    def emit(self, session_id: str, event: str, payload: dict[str, Any]) -> None: ...


class ConnectionManager:
    """Registry of live notification sockets keyed by username."""

    def __init__(self) -> None:
        self._sessions: dict[str, str] = {}
        self._sockets: dict[str, WebSocket] = {}
        self._loops: dict[str, asyncio.AbstractEventLoop] = {}
        self._lock = threading.Lock()

    async def connect(self, username: str, websocket: WebSocket) -> str:
        """
        Register and accept a socket for a user.

        A newer connection replaces the previous session for the same user.

        Args:
            username: Owner of the connection
            websocket: Socket to accept

        Returns:
            The new session id
        """
        session_id = uuid.uuid4().hex
        loop = asyncio.get_running_loop()
        with self._lock:
            previous = self._sessions.get(username)
            if previous:
                self._sockets.pop(previous, None)
                self._loops.pop(previous, None)
            self._sessions[username] = session_id
            self._sockets[session_id] = websocket
            self._loops[session_id] = loop
        await websocket.accept()
        logger.info(f"Realtime session opened for {username}")
        return session_id

    def disconnect(self, username: str, session_id: str) -> None:
        """Forget a session; a newer session for the same user is kept."""
        with self._lock:
            self._sockets.pop(session_id, None)
            self._loops.pop(session_id, None)
            if self._sessions.get(username) == session_id:
                del self._sessions[username]
        logger.info(f"Realtime session closed for {username}")

    def session_for(self, username: str) -> str | None:
        """Return the active session id for a user, or None if offline."""
        with self._lock:
            return self._sessions.get(username)

    def emit(self, session_id: str, event: str, payload: dict[str, Any]) -> None:
        """
        Push an event to a session without blocking the caller.

        Args:
            session_id: Target session
            event: Event name
            payload: JSON-serializable body
        """
        with self._lock:
            websocket = self._sockets.get(session_id)
            loop = self._loops.get(session_id)
        if websocket is None or loop is None:
            logger.debug(f"No realtime session {session_id}, skipping {event}")
            return

        coro = self._send(websocket, {"event": event, "data": payload})
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is loop:
            loop.create_task(coro)
        elif loop.is_closed():
            coro.close()
            logger.debug(f"Event loop for session {session_id} is closed")
        else:
            asyncio.run_coroutine_threadsafe(coro, loop)

    @staticmethod
    async def _send(websocket: WebSocket, message: dict[str, Any]) -> None:
        try:
            await websocket.send_json(message)
        except Exception as e:
            logger.warning(f"Realtime push failed: {e!r}")

    def clear(self) -> None:
        """Drop every session."""
        with self._lock:
            self._sessions.clear()
            self._sockets.clear()
            self._loops.clear()


connection_manager = ConnectionManager()
