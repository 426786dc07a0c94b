"""
Event Publishers.

Publishes domain events produced by use cases to Redis Streams through
the FastStream broker, after persistence has succeeded. Each event goes
to its own stream, named after the event type.

The publisher checks the events_publish_enabled feature flag before
publishing. When disabled, events are skipped without error.

Usage:
    from todo_app.backend.events.publishers import TodoEventPublisher

    publisher = TodoEventPublisher()
    await publisher.publish(outcome.events, correlation_id=request_id)
"""

from collections.abc import Iterable

from faststream.redis import RedisBroker

from todo_app.backend.core.config import get_app_config
from todo_app.backend.core.logging import get_logger
from todo_app.backend.domain.events import DomainEvent
from todo_app.backend.events.schemas import EventEnvelope

logger = get_logger(__name__)


class TodoEventPublisher:
    """Publishes todo domain events to Redis Streams."""

    SOURCE = "todo-service"

    STREAM_CREATED = "todos:todo-created"
    STREAM_COMPLETED = "todos:todo-completed"
    STREAM_UNCOMPLETED = "todos:todo-uncompleted"
    STREAM_UPDATED = "todos:todo-updated"
    STREAM_DELETED = "todos:todo-deleted"

    STREAMS = (
        STREAM_CREATED,
        STREAM_COMPLETED,
        STREAM_UNCOMPLETED,
        STREAM_UPDATED,
        STREAM_DELETED,
    )

    def __init__(
        self, enabled: bool | None = None, broker: RedisBroker | None = None,
    ) -> None:
        self._enabled = enabled
        self._broker = broker

    @property
    def enabled(self) -> bool:
        if self._enabled is not None:
            return self._enabled
        return get_app_config().features.events_publish_enabled

    @property
    def broker(self) -> RedisBroker:
        if self._broker is not None:
            return self._broker

        from todo_app.backend.events.broker import get_event_broker

        return get_event_broker()

    async def publish(
        self, events: Iterable[DomainEvent], correlation_id: str | None = None,
    ) -> list[EventEnvelope]:
        """
        Wrap each event in an envelope and publish it to its stream.

        Broker failures propagate to the caller.

        Returns:
            The envelopes that were published, empty when publishing is disabled
        """
        events = list(events)
        if not events or not self.enabled:
            return []

        broker = self.broker
        envelopes = [
            EventEnvelope.from_domain(event, source=self.SOURCE, correlation_id=correlation_id)
            for event in events
        ]
        for envelope in envelopes:
            await broker.publish(envelope.model_dump(), channel=envelope.stream)
            logger.info(
                "Event published",
                extra={
                    "source": "events",
                    "event_type": envelope.event_type,
                    "stream": envelope.stream,
                    "event_id": envelope.event_id,
                    "correlation_id": correlation_id,
                },
            )
        return envelopes


_publisher: TodoEventPublisher | None = None


def get_event_publisher() -> TodoEventPublisher:
    """Process-wide publisher, created on first use."""
    global _publisher
    if _publisher is None:
        _publisher = TodoEventPublisher()
    return _publisher
