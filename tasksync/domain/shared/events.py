"""Base domain event infrastructure.

Domain events are immutable records of something that happened: a task
changed state, a group view was activated, an action created a task.
Each carries its own id and the moment it was recorded, which is useful
when the same change is delivered more than once.

Example usage:
    >>> class GroupActivated(DomainEvent):
    ...     task_group_id: str
    ...
    >>> event = GroupActivated(task_group_id="fH3Q1yFkTzCyRxQ6Y8c7aw")
    >>> print(f"Event {event.event_id} occurred at {event.occurred_at}")
"""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class DomainEvent(BaseModel):
    """Base class for all domain events.

    Attributes:
        event_id: Unique identifier for this event instance.
        occurred_at: UTC timestamp when the event was recorded.
    """

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"frozen": True}
