"""Real-time push channel port: abstract interface for room broadcasts."""

from abc import ABC, abstractmethod


class PushPort(ABC):
    """Abstract interface for real-time push adapters.

    Messages are addressed to rooms such as ``buyer:<id>`` or ``seller:<id>``
    that connected clients subscribe to.
    """

    @abstractmethod
    def send(
        self,
        room: str,
        event: str,
        title: str,
        body: str,
        data: dict | None = None,
    ) -> dict:
        """Broadcast a message to everyone in ``room``.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
