"""Email channel port — abstract interface for email dispatch."""

from abc import ABC, abstractmethod


class DeliveryError(Exception):
    """A channel or sink could not deliver a notification."""


class EmailPort(ABC):
    """Abstract interface for email dispatch adapters."""

    @abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> str:
        """Send an email message.

        Returns:
            The provider's message identifier.

        Raises:
            DeliveryError: the provider rejected or failed the message.
        """
        ...
