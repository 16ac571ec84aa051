"""Notification Service Interface

Defines the contract for sending invoice notifications to customers.
"""

from abc import ABC, abstractmethod
from uuid import UUID


class NotificationService(ABC):
    """
    Abstract notification service for outbound invoice messages

    Implementations can send notifications via:
    - Webhook (HTTP POST to a mail gateway)
    - Email
    - Logging (development)

    The resource_id is echoed back by the delivery confirmation event,
    so implementations must pass it through to the transport.
    """

    @abstractmethod
    async def notify(self, resource_id: UUID, to_email: str, subject: str, message: str) -> None:
        """
        Send a notification

        Args:
            resource_id: Invoice id the notification refers to
            to_email: Recipient address
            subject: Message subject
            message: Message body

        Raises:
            NotifierError: If the message could not be handed to the transport
        """
        pass
