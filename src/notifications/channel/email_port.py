"""Email channel port: abstract interface for transactional order emails."""

from abc import ABC, abstractmethod


class EmailPort(ABC):
    """Abstract interface for email dispatch adapters."""

    @abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
        tags: list[str] | None = None,
    ) -> dict:
        """Send one email.

        ``tags`` label the message for the provider (e.g. ``["order.created"]``).

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
