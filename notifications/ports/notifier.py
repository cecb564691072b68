"""
Notifier port (interface).

Notifications are best effort: callers log and swallow failures, a
notification never decides the outcome of the operation that sent it.
"""
from abc import ABC, abstractmethod


class Notifier(ABC):
    """Abstract outbound message channel to customers."""

    @abstractmethod
    async def send(self, to: str, subject: str, body: str) -> None:
        """
        Deliver a plain-text message.

        Args:
            to: Recipient address
            subject: Message subject
            body: Plain-text body

        Raises:
            NotificationError: If the message could not be delivered
        """
        pass
