"""Real-time change notification using Redis pub/sub."""

import json
import logging
from collections.abc import AsyncIterator
from datetime import UTC, datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Any

import redis
import redis.asyncio as aioredis

from src.config import get_settings

if TYPE_CHECKING:
    from redis.asyncio.client import PubSub

    from src.models.view_category import ViewCategory

logger = logging.getLogger(__name__)
settings = get_settings()


class ViewCategoryAction(StrEnum):
    """Actions carried by view category change events."""

    UPDATE_VIEW_CATEGORY = "UPDATE_VIEW_CATEGORY"
    REORDER_VIEW_CATEGORIES = "REORDER_VIEW_CATEGORIES"
    UPDATE_VIEW_CATEGORY_VIEW = "UPDATE_VIEW_CATEGORY_VIEW"
    REORDER_VIEW_CATEGORY_VIEWS = "REORDER_VIEW_CATEGORY_VIEWS"


def team_channel(team_id: str) -> str:
    """Redis channel every client of a team listens on."""
    return f"team:{team_id}"


# Synchronous Redis client for use in API endpoints
_sync_redis: redis.Redis | None = None


def get_sync_redis() -> redis.Redis:
    """Get synchronous Redis client for publishing from API endpoints."""
    global _sync_redis
    if _sync_redis is None:
        _sync_redis = redis.from_url(
            settings.redis_url,
            socket_timeout=settings.redis_socket_timeout,
            socket_connect_timeout=settings.redis_socket_timeout,
        )
    return _sync_redis


def publish_team_event(team_id: str, action: ViewCategoryAction, payload: dict | None = None) -> None:
    """Publish an event to a team's Redis channel.

    Called after a mutation has committed. Delivery is best effort: failures
    are logged and never reach the caller, and nothing is retried.

    Args:
        team_id: The team whose subscribers receive the event
        action: What changed
        payload: Event body
    """
    try:
        redis_client = get_sync_redis()
        channel = team_channel(team_id)
        message = {
            "action": action,
            "team_id": team_id,
            "timestamp": datetime.now(UTC).isoformat(),
            "payload": payload or {},
        }
        redis_client.publish(channel, json.dumps(message))
        logger.debug(f"Published {action} to {channel}")
    except Exception as e:
        # Don't fail the request if pub/sub fails
        logger.error(f"Failed to publish team event: {e}")


def serialize_view_category(category: "ViewCategory") -> dict[str, Any]:
    """Wire form of a category record."""
    return {
        "id": category.id,
        "name": category.name,
        "user_id": category.user_id,
        "board_id": category.board_id,
        "create_at": category.create_at,
        "update_at": category.update_at,
        "delete_at": category.delete_at,
        "collapsed": category.collapsed,
        "sort_order": category.sort_order,
        "type": category.type,
    }


class ChangeNotifier:
    """Builds view category events and publishes them to the team channel."""

    def category_changed(self, team_id: str, category: "ViewCategory") -> None:
        publish_team_event(
            team_id,
            ViewCategoryAction.UPDATE_VIEW_CATEGORY,
            {"view_category": serialize_view_category(category)},
        )

    def categories_reordered(self, team_id: str, board_id: str, category_order: list[str]) -> None:
        publish_team_event(
            team_id,
            ViewCategoryAction.REORDER_VIEW_CATEGORIES,
            {"board_id": board_id, "category_order": category_order},
        )

    def membership_changed(self, team_id: str, category_id: str, view_id: str, hidden: bool) -> None:
        publish_team_event(
            team_id,
            ViewCategoryAction.UPDATE_VIEW_CATEGORY_VIEW,
            {"category_id": category_id, "view_id": view_id, "hidden": hidden},
        )

    def views_reordered(self, team_id: str, category_id: str, view_order: list[str]) -> None:
        publish_team_event(
            team_id,
            ViewCategoryAction.REORDER_VIEW_CATEGORY_VIEWS,
            {"category_id": category_id, "view_order": view_order},
        )


class RealtimeService:
    """Async Redis pub/sub service for WebSocket connections."""

    def __init__(self) -> None:
        self._redis: aioredis.Redis | None = None
        self._pubsub: PubSub | None = None

    async def _get_redis(self) -> aioredis.Redis:
        if self._redis is None:
            self._redis = aioredis.from_url(settings.redis_url)
        return self._redis

    async def subscribe(self, channel: str) -> AsyncIterator[dict]:
        """Subscribe to a Redis channel and yield messages."""
        redis_conn = await self._get_redis()
        self._pubsub = redis_conn.pubsub()
        await self._pubsub.subscribe(channel)

        try:
            async for message in self._pubsub.listen():
                if message["type"] == "message":
                    try:
                        data = json.loads(message["data"])
                        yield data
                    except json.JSONDecodeError:
                        logger.warning(f"Invalid JSON in pub/sub message: {message['data']}")
        finally:
            if self._pubsub:
                await self._pubsub.unsubscribe(channel)

    async def cleanup(self) -> None:
        """Clean up Redis connections."""
        if self._pubsub:
            await self._pubsub.close()
        if self._redis:
            await self._redis.close()
