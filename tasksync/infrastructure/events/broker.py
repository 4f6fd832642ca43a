"""In-process push stream of task state changes.

Routes published TaskStateChanged events to the callbacks subscribed to
their group and event kind. Delivery is synchronous, in publish order,
on the caller's thread.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from itertools import count

from tasksync.domain.task.events import TaskStateChanged

logger = logging.getLogger(__name__)

_subscription_ids = count(1)


@dataclass(frozen=True)
class EventSubscription:
    """Handle for one subscription."""

    task_group_id: str
    kinds: tuple[str, ...]
    callback: Callable[[TaskStateChanged], None] = field(compare=False, repr=False)
    id: int = field(default_factory=lambda: next(_subscription_ids))


class EventBroker:
    """Publish/subscribe hub for task state changes.

    Example:
        broker = EventBroker()
        handle = broker.subscribe(gid, ["tasksRunning"], view.handle_event)
        broker.publish(TaskStateChanged(kind="tasksRunning", ...))
        broker.unsubscribe(handle)
    """

    def __init__(self) -> None:
        self._subscriptions: dict[int, EventSubscription] = {}

    def subscribe(
        self,
        task_group_id: str,
        kinds: Sequence[str],
        callback: Callable[[TaskStateChanged], None],
    ) -> EventSubscription:
        subscription = EventSubscription(
            task_group_id=task_group_id, kinds=tuple(kinds), callback=callback
        )
        self._subscriptions[subscription.id] = subscription
        logger.debug(f"Subscribed {subscription.id} to group {task_group_id}")
        return subscription

    def unsubscribe(self, subscription: EventSubscription) -> None:
        if self._subscriptions.pop(subscription.id, None) is not None:
            logger.debug(f"Unsubscribed {subscription.id} from group {subscription.task_group_id}")

    def active_subscriptions(self) -> list[EventSubscription]:
        return list(self._subscriptions.values())

    def publish(self, event: TaskStateChanged) -> int:
        """Deliver an event to matching subscribers.

        Returns:
            Number of subscribers the event was delivered to.
        """
        delivered = 0
        for subscription in list(self._subscriptions.values()):
            if subscription.task_group_id != event.task_group_id:
                continue
            if event.kind not in subscription.kinds:
                continue
            subscription.callback(event)
            delivered += 1
        return delivered
