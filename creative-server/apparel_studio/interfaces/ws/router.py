"""WebSocket endpoint through which web clients receive change events."""
import json
import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, WebSocket, WebSocketDisconnect

from apparel_studio.core.security import decode_access_token
from apparel_studio.modules.accounts import ROLE_ADMIN

from .manager import MESSAGE_HEARTBEAT, manager

logger = logging.getLogger(__name__)

router = APIRouter()


def _message_type(raw: str) -> Optional[str]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return None
    return data.get("type") if isinstance(data, dict) else None


@router.websocket("/ws/web")
async def web_change_feed(websocket: WebSocket, token: str = Query(...)):
    try:
        token_data = decode_access_token(token)
    except HTTPException as exc:
        logger.warning("WebSocket token rejected: %s", exc.detail)
        await websocket.close(code=1008, reason="Token validation failed")
        return

    client_id = await manager.connect(token_data.account_id, token_data.role == ROLE_ADMIN, websocket)
    try:
        while True:
            raw = await websocket.receive_text()
            manager.update_heartbeat(client_id)
            if _message_type(raw) == MESSAGE_HEARTBEAT:
                await manager.send_message(client_id, {"type": MESSAGE_HEARTBEAT})
    except WebSocketDisconnect:
        logger.info("Web client %s closed the change feed", client_id)
    finally:
        await manager.disconnect(client_id)
