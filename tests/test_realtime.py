"""Tests for real-time change notification."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

import src.services.realtime as realtime_module
from src.models.view_category import ViewCategory
from src.services.realtime import (
    ChangeNotifier,
    RealtimeService,
    ViewCategoryAction,
    get_sync_redis,
    publish_team_event,
    team_channel,
)


@pytest.fixture
def mock_redis():
    """Install a fake synchronous Redis client for publishing."""
    client = MagicMock()
    realtime_module._sync_redis = client
    yield client
    realtime_module._sync_redis = None


def published(mock_redis) -> tuple[str, dict]:
    channel, raw = mock_redis.publish.call_args[0]
    return channel, json.loads(raw)


class TestViewCategoryAction:
    """Tests for ViewCategoryAction enum."""

    def test_actions_exist(self):
        assert ViewCategoryAction.UPDATE_VIEW_CATEGORY == "UPDATE_VIEW_CATEGORY"
        assert ViewCategoryAction.REORDER_VIEW_CATEGORIES == "REORDER_VIEW_CATEGORIES"
        assert ViewCategoryAction.UPDATE_VIEW_CATEGORY_VIEW == "UPDATE_VIEW_CATEGORY_VIEW"
        assert ViewCategoryAction.REORDER_VIEW_CATEGORY_VIEWS == "REORDER_VIEW_CATEGORY_VIEWS"

    def test_team_channel(self):
        assert team_channel("t1") == "team:t1"


class TestGetSyncRedis:
    """Tests for get_sync_redis function."""

    def test_creates_redis_client(self):
        realtime_module._sync_redis = None

        with patch("src.services.realtime.redis.from_url") as mock_from_url:
            mock_client = MagicMock()
            mock_from_url.return_value = mock_client

            result = get_sync_redis()

            assert result == mock_client
            mock_from_url.assert_called_once()
            assert "socket_timeout" in mock_from_url.call_args.kwargs

        realtime_module._sync_redis = None

    def test_reuses_existing_client(self, mock_redis):
        with patch("src.services.realtime.redis.from_url") as mock_from_url:
            assert get_sync_redis() == mock_redis
            mock_from_url.assert_not_called()


class TestPublishTeamEvent:
    """Tests for publish_team_event function."""

    def test_publishes_to_team_channel(self, mock_redis):
        publish_team_event("team-9", ViewCategoryAction.REORDER_VIEW_CATEGORIES, {"x": 1})

        channel, message = published(mock_redis)
        assert channel == "team:team-9"
        assert message["action"] == "REORDER_VIEW_CATEGORIES"
        assert message["team_id"] == "team-9"
        assert message["payload"] == {"x": 1}
        assert "timestamp" in message

    def test_publishes_event_without_payload(self, mock_redis):
        publish_team_event("team-9", ViewCategoryAction.UPDATE_VIEW_CATEGORY)

        _, message = published(mock_redis)
        assert message["payload"] == {}

    def test_handles_redis_error_gracefully(self, mock_redis):
        """Redis errors never reach the caller."""
        mock_redis.publish.side_effect = Exception("Redis connection failed")

        publish_team_event("team-9", ViewCategoryAction.UPDATE_VIEW_CATEGORY, {})


class TestChangeNotifier:
    """Tests for the payload shapes ChangeNotifier publishes."""

    def test_category_changed(self, mock_redis):
        category = ViewCategory(
            id="c1",
            name="Mine",
            user_id="u1",
            board_id="b1",
            create_at=1,
            update_at=2,
            delete_at=3,
            collapsed=True,
            sort_order=10,
            type="custom",
        )

        ChangeNotifier().category_changed("t1", category)

        channel, message = published(mock_redis)
        assert channel == "team:t1"
        assert message["action"] == "UPDATE_VIEW_CATEGORY"
        assert message["payload"]["view_category"] == {
            "id": "c1",
            "name": "Mine",
            "user_id": "u1",
            "board_id": "b1",
            "create_at": 1,
            "update_at": 2,
            "delete_at": 3,
            "collapsed": True,
            "sort_order": 10,
            "type": "custom",
        }

    def test_categories_reordered(self, mock_redis):
        ChangeNotifier().categories_reordered("t1", "b1", ["c2", "c1"])

        _, message = published(mock_redis)
        assert message["action"] == "REORDER_VIEW_CATEGORIES"
        assert message["payload"] == {"board_id": "b1", "category_order": ["c2", "c1"]}

    def test_membership_changed(self, mock_redis):
        ChangeNotifier().membership_changed("t1", "c1", "v1", True)

        _, message = published(mock_redis)
        assert message["action"] == "UPDATE_VIEW_CATEGORY_VIEW"
        assert message["payload"] == {"category_id": "c1", "view_id": "v1", "hidden": True}

    def test_views_reordered(self, mock_redis):
        ChangeNotifier().views_reordered("t1", "c1", ["v2", "v1"])

        _, message = published(mock_redis)
        assert message["action"] == "REORDER_VIEW_CATEGORY_VIEWS"
        assert message["payload"] == {"category_id": "c1", "view_order": ["v2", "v1"]}


class TestRealtimeService:
    """Tests for RealtimeService class."""

    def test_init(self):
        service = RealtimeService()
        assert service._redis is None
        assert service._pubsub is None

    @pytest.mark.asyncio
    async def test_get_redis_creates_connection(self):
        service = RealtimeService()

        with patch("src.services.realtime.aioredis.from_url") as mock_from_url:
            mock_redis = AsyncMock()
            mock_from_url.return_value = mock_redis

            result = await service._get_redis()

            assert result == mock_redis
            mock_from_url.assert_called_once()

    @pytest.mark.asyncio
    async def test_cleanup_closes_connections(self):
        service = RealtimeService()
        mock_redis = AsyncMock()
        mock_pubsub = AsyncMock()
        service._redis = mock_redis
        service._pubsub = mock_pubsub

        await service.cleanup()

        mock_pubsub.close.assert_called_once()
        mock_redis.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_cleanup_handles_no_connections(self):
        await RealtimeService().cleanup()

    @pytest.mark.asyncio
    async def test_subscribe_skips_control_and_invalid_messages(self):
        """Subscribe confirmations and bad JSON are skipped; real events are yielded."""
        service = RealtimeService()

        mock_redis = MagicMock()
        mock_pubsub = MagicMock()
        event = {"action": "UPDATE_VIEW_CATEGORY", "team_id": "t1"}

        async def mock_listen():
            yield {"type": "subscribe", "data": 1}
            yield {"type": "message", "data": "not valid json"}
            yield {"type": "message", "data": json.dumps(event)}

        mock_pubsub.listen = mock_listen
        mock_pubsub.subscribe = AsyncMock()
        mock_pubsub.unsubscribe = AsyncMock()
        mock_redis.pubsub.return_value = mock_pubsub
        service._redis = mock_redis

        messages = []
        async for msg in service.subscribe("team:t1"):
            messages.append(msg)
            break

        assert messages == [event]
        mock_pubsub.subscribe.assert_awaited_once_with("team:t1")


class TestWebSocketEndpoint:
    """Tests for the board WebSocket endpoint."""

    def test_websocket_requires_token(self, client):
        from starlette.websockets import WebSocketDisconnect

        with pytest.raises(WebSocketDisconnect), client.websocket_connect("/api/v1/ws/boards/b1"):
            pass

    def test_websocket_rejects_invalid_token(self, client, board):
        from starlette.websockets import WebSocketDisconnect

        with (
            pytest.raises(WebSocketDisconnect),
            client.websocket_connect(f"/api/v1/ws/boards/{board.id}?token=invalid_token"),
        ):
            pass

    def test_websocket_rejects_user_without_board_access(
        self, client, db, board, outsider_headers, monkeypatch
    ):
        from starlette.websockets import WebSocketDisconnect

        monkeypatch.setattr("src.api.websocket.SessionLocal", lambda: db)
        token = outsider_headers["Authorization"].replace("Bearer ", "")
        with (
            pytest.raises(WebSocketDisconnect),
            client.websocket_connect(f"/api/v1/ws/boards/{board.id}?token={token}"),
        ):
            pass
