from abc import ABC, abstractmethod


class EmailDeliveryError(Exception):
    """Raised when a message could not be handed to the mail transport."""


class IEmailSender(ABC):
    """Outbound email interface - application layer"""

    @abstractmethod
    async def send(self, recipient: str, subject: str, html_body: str) -> None:
        """
        Deliver an HTML message.

        Raises:
            ConfigurationError: mail transport is not configured
            EmailDeliveryError: transport rejected or failed to send
        """
        pass
