"""Push stream infrastructure."""

from tasksync.infrastructure.events.broker import EventBroker, EventSubscription

__all__ = ["EventBroker", "EventSubscription"]
