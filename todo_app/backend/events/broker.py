"""
Event Broker.

FastStream RedisBroker setup with lazy initialization. The API process
connects it at startup when event publishing is enabled.

Usage:
    from todo_app.backend.events.broker import get_event_broker

    broker = get_event_broker()
"""

from faststream.redis import RedisBroker

from todo_app.backend.core.logging import get_logger

logger = get_logger(__name__)

_broker: RedisBroker | None = None


def create_event_broker() -> RedisBroker:
    """Create a new RedisBroker using the project's Redis URL.

    Returns:
        Configured RedisBroker instance
    """
    from todo_app.backend.core.config import get_redis_url

    broker = RedisBroker(get_redis_url())
    logger.info("Event broker created")
    return broker


def get_event_broker() -> RedisBroker:
    """Get the shared event broker (lazy initialization).

    Returns:
        Shared RedisBroker instance
    """
    global _broker
    if _broker is None:
        _broker = create_event_broker()
    return _broker


async def connect_event_broker() -> None:
    """Open the Redis connection used for publishing."""
    await get_event_broker().connect()
    logger.info("Event broker connected")


async def close_event_broker() -> None:
    """Close the shared broker, if one was created, and forget it."""
    global _broker
    if _broker is not None:
        await _broker.close()
        _broker = None
        logger.info("Event broker closed")
