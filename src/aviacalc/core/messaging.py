"""Priority message queue connecting the fuel form to whatever displays it.

The form publishes alerts and results; the window (or a test) subscribes to
the topics it cares about and drains the queue once per frame.

Typical usage example:
    from aviacalc.core.messaging import Message, MessageQueue, MessageTopic

    queue = MessageQueue()
    queue.subscribe(MessageTopic.FORM_ALERT, show_alert)
    queue.publish(Message(
        sender="fuel_form",
        recipients=["*"],
        topic=MessageTopic.FORM_ALERT,
        data={"title": "Error", "text": "Invalid time format", "level": "error"},
    ))
    queue.process()
"""

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from queue import PriorityQueue
from typing import Any


class MessagePriority(Enum):
    """Priority levels for messages, processed from CRITICAL to LOW."""

    CRITICAL = 0
    HIGH = 1
    NORMAL = 2
    LOW = 3


@dataclass(order=True)
class Message:
    """Message passed through the queue.

    Attributes:
        priority: Message priority (affects processing order).
        timestamp: Unix timestamp when message was created.
        sender: Name of the component sending the message.
        recipients: Recipient names, or ["*"] for broadcast.
        topic: Message topic (see MessageTopic).
        data: Message payload.
    """

    priority: int = field(compare=True)
    timestamp: float = field(default_factory=time.time, compare=True)
    sender: str = field(default="", compare=False)
    recipients: list[str] = field(default_factory=list, compare=False)
    topic: str = field(default="", compare=False)
    data: dict[str, Any] = field(default_factory=dict, compare=False)

    def __init__(
        self,
        sender: str,
        recipients: list[str],
        topic: str,
        data: dict[str, Any],
        priority: MessagePriority = MessagePriority.NORMAL,
    ) -> None:
        self.priority = priority.value
        self.timestamp = time.time()
        self.sender = sender
        self.recipients = recipients
        self.topic = topic
        self.data = data


class MessageTopic:
    """Well-known topic names."""

    FORM_ALERT = "form.alert"
    FORM_CLEARED = "form.cleared"


class MessageQueue:
    """Priority-ordered message queue with topic subscriptions.

    Examples:
        >>> queue = MessageQueue()
        >>> queue.subscribe("form.alert", lambda msg: print(msg.data["text"]))
        >>> queue.publish(Message("form", ["*"], "form.alert", {"text": "Done"}))
        >>> queue.process()
        Done
        1
    """

    def __init__(self) -> None:
        self._queue: PriorityQueue[Message] = PriorityQueue()
        self._subscriptions: dict[str, list[Callable[[Message], None]]] = {}

    def subscribe(self, topic: str, handler: Callable[[Message], None]) -> None:
        """Subscribe a handler to a topic.

        Args:
            topic: Topic string to subscribe to.
            handler: Callable that accepts a Message as its only parameter.
        """
        self._subscriptions.setdefault(topic, []).append(handler)

    def unsubscribe(self, topic: str, handler: Callable[[Message], None]) -> None:
        """Unsubscribe a handler from a topic. No-op if not subscribed."""
        if topic in self._subscriptions:
            self._subscriptions[topic] = [h for h in self._subscriptions[topic] if h != handler]

            if not self._subscriptions[topic]:
                del self._subscriptions[topic]

    def publish(self, message: Message) -> None:
        """Queue a message for the next process() call."""
        self._queue.put(message)

    def process(self, max_messages: int = 100) -> int:
        """Dispatch queued messages in priority order.

        Args:
            max_messages: Maximum number of messages to process in this call.

        Returns:
            Number of messages processed.
        """
        processed = 0

        while not self._queue.empty() and processed < max_messages:
            message = self._queue.get()
            for handler in self._subscriptions.get(message.topic, []):
                handler(message)
            processed += 1

        return processed
