"""Tests for listing change events."""

import json
from unittest.mock import MagicMock, patch

import labexchange.services.realtime as realtime_module
from labexchange.services.realtime import (
    EQUIPMENT_CHANNEL,
    EquipmentEventType,
    get_sync_redis,
    publish_equipment_event,
)


class TestEquipmentEventType:
    """Tests for EquipmentEventType enum."""

    def test_events_exist(self):
        """Verify all listing event types are defined."""
        assert EquipmentEventType.CREATED == "equipment_created"
        assert EquipmentEventType.UPDATED == "equipment_updated"
        assert EquipmentEventType.DELETED == "equipment_deleted"


class TestGetSyncRedis:
    """Tests for get_sync_redis function."""

    def test_creates_redis_client(self):
        """Test that get_sync_redis creates a Redis client."""
        realtime_module._sync_redis = None

        with patch("labexchange.services.realtime.redis.from_url") as mock_from_url:
            mock_client = MagicMock()
            mock_from_url.return_value = mock_client

            result = get_sync_redis()

            assert result == mock_client
            mock_from_url.assert_called_once()

        realtime_module._sync_redis = None

    def test_reuses_existing_client(self):
        """Test that get_sync_redis reuses existing client."""
        mock_client = MagicMock()
        realtime_module._sync_redis = mock_client

        with patch("labexchange.services.realtime.redis.from_url") as mock_from_url:
            result = get_sync_redis()

            assert result == mock_client
            mock_from_url.assert_not_called()

        realtime_module._sync_redis = None


class TestPublishEquipmentEvent:
    """Tests for publish_equipment_event function."""

    def test_publishes_to_equipment_channel(self):
        """Test that events land on the equipment channel with their payload."""
        mock_redis = MagicMock()
        realtime_module._sync_redis = mock_redis

        publish_equipment_event(42, EquipmentEventType.CREATED, owner_id=7)

        mock_redis.publish.assert_called_once()
        channel, payload = mock_redis.publish.call_args[0]
        assert channel == EQUIPMENT_CHANNEL
        message = json.loads(payload)
        assert message["type"] == "equipment_created"
        assert message["listing_id"] == 42
        assert message["owner_id"] == 7
        assert "timestamp" in message

        realtime_module._sync_redis = None

    def test_publish_failure_does_not_raise(self):
        """Test that Redis errors are logged, not raised."""
        mock_redis = MagicMock()
        mock_redis.publish.side_effect = ConnectionError("Redis down")
        realtime_module._sync_redis = mock_redis

        # Should not raise exception
        publish_equipment_event(42, EquipmentEventType.DELETED, owner_id=7)

        realtime_module._sync_redis = None
