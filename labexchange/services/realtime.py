"""Listing change events published over Redis pub/sub."""

import json
import logging
from datetime import UTC, datetime
from enum import StrEnum

import redis

from labexchange.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

EQUIPMENT_CHANNEL = "equipment"


class EquipmentEventType(StrEnum):
    """Event types for listing writes."""

    CREATED = "equipment_created"
    UPDATED = "equipment_updated"
    DELETED = "equipment_deleted"


_sync_redis: redis.Redis | None = None


def get_sync_redis() -> redis.Redis:
    """Get the shared Redis client used by API endpoints."""
    global _sync_redis
    if _sync_redis is None:
        _sync_redis = redis.from_url(settings.redis_url)
    return _sync_redis


def publish_equipment_event(
    listing_id: int,
    event_type: EquipmentEventType,
    owner_id: int,
) -> None:
    """Tell subscribed browse views that a listing changed.

    Called after the database commit. Subscribers use the event only as a
    refresh hint, so a failed publish is logged and the request still succeeds.
    """
    try:
        message = {
            "type": event_type,
            "listing_id": listing_id,
            "owner_id": owner_id,
            "timestamp": datetime.now(UTC).isoformat(),
        }
        get_sync_redis().publish(EQUIPMENT_CHANNEL, json.dumps(message))
        logger.debug(f"Published {event_type} for listing {listing_id}")
    except Exception as e:
        logger.error(f"Failed to publish equipment event: {e}")
