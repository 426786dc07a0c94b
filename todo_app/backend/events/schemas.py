"""
Event Schemas.

Standardized envelope for todo domain events leaving the process.

Naming convention for event_type: domain.entity.action (dot notation)
Stream naming convention: {domain}:{entity}-{action} (colon-separated)

Usage:
    from todo_app.backend.events.schemas import EventEnvelope

    envelope = EventEnvelope.from_domain(event, source="todo-service", correlation_id=request_id)
"""

from uuid import uuid4

from pydantic import BaseModel, Field

from todo_app.backend.core.utils import utc_now
from todo_app.backend.domain.events import DomainEvent


class EventEnvelope(BaseModel):
    """Wire envelope for a domain event.

    Fields:
        event_id: Unique event identifier
        event_type: Domain event type in dot notation (e.g. todos.todo.created)
        event_version: Schema version for forward compatibility
        timestamp: ISO 8601 UTC timestamp of when the event occurred
        source: Service/module that published the event
        correlation_id: Request ID for tracing across services
        payload: Event-specific data
    """

    event_id: str = Field(default_factory=lambda: uuid4().hex)
    event_type: str
    event_version: int = 1
    timestamp: str = Field(default_factory=lambda: utc_now().isoformat())
    source: str
    correlation_id: str | None = None
    payload: dict

    @classmethod
    def from_domain(
        cls, event: DomainEvent, source: str, correlation_id: str | None = None,
    ) -> "EventEnvelope":
        return cls(
            event_id=event.event_id,
            event_type=event.event_type,
            timestamp=event.occurred_at.isoformat(),
            source=source,
            correlation_id=correlation_id,
            payload=event.payload(),
        )

    @property
    def stream(self) -> str:
        """Stream name, e.g. todos:todo-created."""
        domain, entity, action = self.event_type.split(".", 2)
        return f"{domain}:{entity}-{action}"
