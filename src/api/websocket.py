"""WebSocket endpoint streaming view category changes to a board's team."""

import asyncio
import logging

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect

from src.database import SessionLocal
from src.services.auth import resolve_user
from src.services.permissions import get_board, has_board_view_access
from src.services.realtime import RealtimeService, team_channel

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/ws", tags=["websocket"])

PING_INTERVAL_SECONDS = 30


@router.websocket("/boards/{board_id}")
async def websocket_board_events(
    websocket: WebSocket,
    board_id: str,
    token: str = Query(...),
) -> None:
    """Forward the team's change events to a client viewing ``board_id``.

    Authentication via token query parameter (WebSocket doesn't support headers).
    Events are published per team, so the client also sees changes to the
    team's other boards and filters them itself.
    """
    # Manual DB session for WebSocket (can't use Depends normally)
    db = SessionLocal()
    realtime_service = RealtimeService()
    user_id: str | None = None

    try:
        user = resolve_user(db, token)
        if user is None:
            await websocket.close(code=4001, reason="Invalid token")
            return
        user_id = user.id

        board = get_board(db, board_id)
        if board is None or not has_board_view_access(db, user.id, board_id):
            await websocket.close(code=4003, reason="Access denied")
            return
        channel = team_channel(board.team_id)

        # The session is only needed for the handshake checks
        db.close()

        await websocket.accept()
        logger.info(f"WebSocket connected: user={user_id}, board={board_id}, channel={channel}")

        async def handle_messages() -> None:
            """Receive messages from Redis and forward to WebSocket."""
            async for message in realtime_service.subscribe(channel):
                try:
                    await websocket.send_json(message)
                except WebSocketDisconnect:
                    break
                except Exception as e:
                    logger.error(f"Error sending WebSocket message: {e}")
                    break

        async def handle_ping() -> None:
            """Send periodic pings to keep connection alive."""
            while True:
                try:
                    await asyncio.sleep(PING_INTERVAL_SECONDS)
                    await websocket.send_json({"action": "PING"})
                except Exception:
                    break

        async def handle_client() -> None:
            """Drain client messages (pong responses) until it disconnects."""
            while True:
                try:
                    await websocket.receive_json()
                except WebSocketDisconnect:
                    break
                except Exception:
                    break

        await asyncio.gather(
            handle_messages(),
            handle_ping(),
            handle_client(),
            return_exceptions=True,
        )

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected: user={user_id}, board={board_id}")
    except Exception as e:
        logger.error(f"WebSocket error: {e}", exc_info=True)
    finally:
        db.close()
        await realtime_service.cleanup()
