"""
WebSocket Manager

Pushes the controller state to every connected viewer after each change.
Viewers are passive: moves go through the HTTP endpoints.
"""

import logging
from typing import List

from fastapi import WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self):
        self.active_connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.active_connections.append(websocket)

    def disconnect(self, websocket: WebSocket):
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)

    async def broadcast(self, message: dict):
        """Broadcast message to all connected clients"""
        for connection in self.active_connections[:]:
            try:
                await connection.send_json(message)
            except (WebSocketDisconnect, RuntimeError):
                # Remove dead connections
                self.disconnect(connection)

    async def handle_session(self, websocket: WebSocket, initial: dict):
        await self.connect(websocket)
        try:
            await websocket.send_json(initial)
            # Keep the socket open until the viewer leaves
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            logger.debug("Viewer disconnected")
        finally:
            self.disconnect(websocket)


def build_state_message(state: dict) -> dict:
    """Build WebSocket message from a controller snapshot"""
    return {"type": "UPDATE", **state}
