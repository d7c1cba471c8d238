"""
WebSocket server for cache invalidation.

Clients subscribe to collection cache keys ("tasks", "goals", "events",
"notes", "contacts", "plannerSettings"). After every successful mutation
the API publishes ``{"type": "invalidate", "key": <cache key>}`` to the
subscribers of that key, who refetch the collection.

Architecture:
┌─────────────┐     ┌─────────────┐     ┌─────────────┐
│  Client A   │────►│  WebSocket  │◄────│  Client B   │
│  (browser)  │◄────│   Manager   │────►│  (terminal) │
└─────────────┘     └──────┬──────┘     └─────────────┘
                           │
                    ┌──────▼──────┐
                    │   API       │
                    │   Routes    │
                    │  (publish)  │
                    └─────────────┘
"""

from fastapi import WebSocket, WebSocketDisconnect
from typing import Dict, Iterable, Set
import json
import asyncio
import logging
from datetime import datetime, timezone
from dataclasses import dataclass, field

from bizplanner.data.client import ENTITIES

logger = logging.getLogger(__name__)

# Every collection cache key is a topic
TOPICS = tuple(spec.cache_key for spec in ENTITIES.values())


@dataclass
class Connection:
    """Represents a WebSocket connection"""
    websocket: WebSocket
    topics: Set[str] = field(default_factory=set)
    connected_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class WebSocketManager:
    """
    Manages WebSocket connections and invalidation broadcasts.

    Usage:
        manager = WebSocketManager()

        # In WebSocket endpoint
        await manager.connect(websocket)

        # After a mutation
        await manager.broadcast_to_topic("tasks", {"type": "invalidate", "key": "tasks"})
    """

    def __init__(self, topics: Iterable[str] = TOPICS):
        # Map of connection_id -> Connection
        self.connections: Dict[str, Connection] = {}
        # Map of topic -> set of connection_ids
        self.topic_subscribers: Dict[str, Set[str]] = {topic: set() for topic in topics}
        self._lock = asyncio.Lock()

    def _get_connection_id(self, websocket: WebSocket) -> str:
        """Generate unique ID for a connection"""
        return f"{id(websocket)}"

    async def connect(self, websocket: WebSocket) -> str:
        """
        Accept and register a new WebSocket connection.

        Returns:
            Connection ID
        """
        await websocket.accept()

        conn_id = self._get_connection_id(websocket)

        async with self._lock:
            self.connections[conn_id] = Connection(websocket=websocket)

        logger.info(f"Client connected: {conn_id}")
        return conn_id

    async def disconnect(self, websocket: WebSocket):
        """Remove a connection and all its subscriptions"""
        conn_id = self._get_connection_id(websocket)

        async with self._lock:
            self._drop(conn_id)
        logger.info(f"Client disconnected: {conn_id}")

    def _drop(self, conn_id: str) -> None:
        # Caller holds the lock
        connection = self.connections.pop(conn_id, None)
        if connection is None:
            return
        for topic in connection.topics:
            self.topic_subscribers[topic].discard(conn_id)

    async def subscribe(self, websocket: WebSocket, topics: list) -> list:
        """Subscribe a connection to topics; returns the topics accepted"""
        conn_id = self._get_connection_id(websocket)
        accepted = []

        async with self._lock:
            if conn_id not in self.connections:
                return accepted

            for topic in topics:
                if topic in self.topic_subscribers:
                    self.topic_subscribers[topic].add(conn_id)
                    self.connections[conn_id].topics.add(topic)
                    accepted.append(topic)
        return accepted

    async def unsubscribe(self, websocket: WebSocket, topics: list):
        """Unsubscribe a connection from topics"""
        conn_id = self._get_connection_id(websocket)

        async with self._lock:
            if conn_id not in self.connections:
                return

            for topic in topics:
                if topic in self.topic_subscribers:
                    self.topic_subscribers[topic].discard(conn_id)
                    self.connections[conn_id].topics.discard(topic)

    async def broadcast_to_topic(self, topic: str, message: dict):
        """
        Send a message to all connections subscribed to a topic.

        Args:
            topic: Cache key (e.g. "tasks")
            message: The message to send (will be JSON serialized)
        """
        if topic not in self.topic_subscribers:
            return

        message["timestamp"] = datetime.now(timezone.utc).isoformat()
        message_json = json.dumps(message)

        # Copy to avoid modification during iteration
        async with self._lock:
            subscribers = [
                (conn_id, self.connections[conn_id].websocket)
                for conn_id in self.topic_subscribers[topic]
                if conn_id in self.connections
            ]

        disconnected = []
        for conn_id, websocket in subscribers:
            try:
                await websocket.send_text(message_json)
            except (WebSocketDisconnect, RuntimeError) as e:
                logger.warning(f"Failed to send to {conn_id}: {e}")
                disconnected.append(conn_id)

        if disconnected:
            async with self._lock:
                for conn_id in disconnected:
                    self._drop(conn_id)

    def get_connection_count(self) -> int:
        """Get number of active connections"""
        return len(self.connections)

    def get_topic_subscriber_count(self, topic: str) -> int:
        """Get number of subscribers for a topic"""
        return len(self.topic_subscribers.get(topic, set()))


# Global manager instance
ws_manager = WebSocketManager()


async def websocket_endpoint(websocket: WebSocket):
    """
    Main WebSocket endpoint handler.

    Protocol:
        Client sends: { "type": "subscribe", "topics": ["tasks", "events"] }
        Server sends: { "type": "subscribed", "topics": ["tasks", "events"] }
        Client sends: { "type": "ping", "timestamp": 1234567890 }
        Server sends: { "type": "pong", "timestamp": 1234567890, "serverTime": "..." }
        Server sends: { "type": "invalidate", "key": "tasks", "timestamp": "..." }
    """
    await ws_manager.connect(websocket)

    try:
        while True:
            data = await websocket.receive_text()

            try:
                message = json.loads(data)
                msg_type = message.get("type")

                if msg_type == "subscribe":
                    topics = await ws_manager.subscribe(websocket, message.get("topics", []))
                    await websocket.send_text(json.dumps({"type": "subscribed", "topics": topics}))

                elif msg_type == "unsubscribe":
                    await ws_manager.unsubscribe(websocket, message.get("topics", []))

                elif msg_type == "ping":
                    await websocket.send_text(json.dumps({
                        "type": "pong",
                        "timestamp": message.get("timestamp"),
                        "serverTime": datetime.now(timezone.utc).isoformat(),
                    }))

                else:
                    await websocket.send_text(json.dumps({
                        "type": "error",
                        "code": "UNKNOWN_MESSAGE_TYPE",
                        "message": f"Unknown message type: {msg_type}",
                    }))

            except (json.JSONDecodeError, AttributeError):
                await websocket.send_text(json.dumps({
                    "type": "error",
                    "code": "INVALID_JSON",
                    "message": "Message must be a JSON object",
                }))

    except WebSocketDisconnect:
        await ws_manager.disconnect(websocket)


async def notify_invalidate(key: str):
    """Call this after any mutation of the collection behind ``key``"""
    await ws_manager.broadcast_to_topic(key, {"type": "invalidate", "key": key})
