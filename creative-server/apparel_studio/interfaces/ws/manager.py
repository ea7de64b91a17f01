"""Connection manager pushing data-change events to web clients."""
import asyncio
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from fastapi import WebSocket

from apparel_studio.core.config import get_settings
from apparel_studio.schemas import ChangeEvent

logger = logging.getLogger(__name__)

MESSAGE_CHANGE = "change"
MESSAGE_HEARTBEAT = "heartbeat"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class WebClient:
    account_id: str
    is_admin: bool
    websocket: WebSocket
    last_seen: datetime = field(default_factory=_utcnow)


class ConnectionManager:
    def __init__(self, timeout: int = 300, check_interval: int = 30) -> None:
        self.clients: Dict[int, WebClient] = {}
        self.heartbeat_tasks: Dict[int, asyncio.Task] = {}
        self.timeout = timedelta(seconds=timeout)
        self.check_interval = check_interval

    async def connect(self, account_id: str, is_admin: bool, websocket: WebSocket) -> int:
        await websocket.accept()
        return self.register(account_id, is_admin, websocket)

    def register(self, account_id: str, is_admin: bool, websocket: WebSocket) -> int:
        client_id = id(websocket)
        self.clients[client_id] = WebClient(account_id=account_id, is_admin=is_admin, websocket=websocket)
        self._start_heartbeat_monitor(client_id)
        logger.info("Web client %s connected for account %s", client_id, account_id)
        return client_id

    async def disconnect(self, client_id: int) -> None:
        client = self.clients.pop(client_id, None)
        task = self.heartbeat_tasks.pop(client_id, None)
        if task and task is not asyncio.current_task():
            task.cancel()
        if client:
            logger.info("Web client %s disconnected (account %s)", client_id, client.account_id)

    def update_heartbeat(self, client_id: int) -> None:
        client = self.clients.get(client_id)
        if client:
            client.last_seen = _utcnow()

    def is_online(self, account_id: str) -> bool:
        return any(client.account_id == account_id for client in self.clients.values())

    def get_online_count(self) -> int:
        return len(self.clients)

    async def send_message(self, client_id: int, message: dict) -> bool:
        client = self.clients.get(client_id)
        if client is None:
            return False
        try:
            await client.websocket.send_text(json.dumps(message))
            return True
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("Sending to web client %s failed: %s", client_id, exc)
            await self.disconnect(client_id)
            return False

    async def publish_change(self, event: ChangeEvent, owner_id: Optional[str] = None) -> int:
        """Push ``event`` to every admin and to the owning customer; return the delivery count."""
        message = {"type": MESSAGE_CHANGE, "data": event.model_dump()}
        recipients = [
            client_id
            for client_id, client in list(self.clients.items())
            if client.is_admin or (owner_id is not None and client.account_id == owner_id)
        ]
        delivered = 0
        for client_id in recipients:
            if await self.send_message(client_id, message):
                delivered += 1
        return delivered

    def _start_heartbeat_monitor(self, client_id: int) -> None:
        task = self.heartbeat_tasks.get(client_id)
        if task:
            task.cancel()
        self.heartbeat_tasks[client_id] = asyncio.create_task(self._heartbeat_monitor(client_id))

    async def _heartbeat_monitor(self, client_id: int) -> None:
        try:
            while True:
                await asyncio.sleep(self.check_interval)
                client = self.clients.get(client_id)
                if client is None:
                    break
                if _utcnow() - client.last_seen > self.timeout:
                    logger.warning("Web client %s heartbeat timed out, closing", client_id)
                    await self.disconnect(client_id)
                    try:
                        await client.websocket.close(code=1001)
                    except Exception as exc:  # pylint: disable=broad-except
                        logger.debug("Closing stale web client %s failed: %s", client_id, exc)
                    break
        except asyncio.CancelledError:
            logger.debug("Heartbeat monitor for web client %s cancelled", client_id)


_settings = get_settings()
manager = ConnectionManager(timeout=_settings.ws_timeout, check_interval=_settings.ws_heartbeat_interval)
