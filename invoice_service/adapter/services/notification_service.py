"""Notification Service Implementations

Provides concrete implementations for sending invoice notifications.
"""

import logging
from typing import Awaitable, Callable, Optional
from uuid import UUID
import httpx
from invoice_service.app.services.notification_service import NotificationService
from invoice_service.domain.exceptions import InfrastructureError, NotifierError

logger = logging.getLogger(__name__)


class LoggingNotificationService(NotificationService):
    """
    Notification service that logs messages instead of sending them

    Useful for development and testing.
    """

    async def notify(self, resource_id: UUID, to_email: str, subject: str, message: str) -> None:
        logger.info(
            f"[INVOICE NOTIFICATION] Resource: {resource_id}, "
            f"To: {to_email}, Subject: {subject}"
        )
        logger.debug(message)


class SimulatedDeliveryNotificationService(LoggingNotificationService):
    """
    Logging notifier that also confirms delivery right away

    Stands in for the mail gateway's delivery webhook during local
    development, so sent invoices reach SENT without an external service.
    A failed confirmation is logged only: the message itself went out.
    """

    def __init__(self, confirm_delivery: Callable[[UUID], Awaitable[None]]):
        """
        Args:
            confirm_delivery: Coroutine function running the delivery
                              confirmation for an invoice id
        """
        self.confirm_delivery = confirm_delivery

    async def notify(self, resource_id: UUID, to_email: str, subject: str, message: str) -> None:
        await super().notify(resource_id, to_email, subject, message)

        try:
            await self.confirm_delivery(resource_id)
        except InfrastructureError as e:
            logger.warning(
                f"Simulated delivery confirmation failed for invoice {resource_id}: {e}"
            )
            return

        logger.info(f"Simulated delivery confirmation for invoice {resource_id}")


class WebhookNotificationService(NotificationService):
    """
    Notification service that hands messages to a mail gateway via HTTP webhook

    Sends JSON payload to configured webhook URL. The gateway is expected to
    echo resource_id back in its delivery confirmation.
    """

    def __init__(self, webhook_url: str, timeout: float = 10.0):
        """
        Initialize webhook notification service

        Args:
            webhook_url: URL to POST notifications to
            timeout: Request timeout in seconds
        """
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def notify(self, resource_id: UUID, to_email: str, subject: str, message: str) -> None:
        """
        Send notification via webhook

        Raises:
            NotifierError: If the request fails or the gateway answers with an error
        """
        payload = {
            "type": "invoice_notification",
            "resource_id": str(resource_id),
            "to_email": to_email,
            "subject": subject,
            "message": message,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.webhook_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(
                f"Failed to send webhook notification for invoice {resource_id}: {e}"
            )
            raise NotifierError(
                f"Failed to send notification for invoice {resource_id}",
                reason=str(e),
            ) from e

        logger.info(
            f"Webhook notification sent for invoice {resource_id} to {self.webhook_url}"
        )


def create_notification_service(
    webhook_url: Optional[str] = None,
    timeout: float = 10.0,
    confirm_delivery: Optional[Callable[[UUID], Awaitable[None]]] = None,
) -> NotificationService:
    """
    Factory function to create appropriate notification service

    Args:
        webhook_url: Optional webhook URL. If provided, notifications go to
                     the webhook. Otherwise, they are only logged.
        timeout: Webhook request timeout in seconds
        confirm_delivery: Without a webhook, confirm delivery through this
                          callable right after logging (development)

    Returns:
        Configured NotificationService
    """
    if webhook_url:
        return WebhookNotificationService(webhook_url, timeout=timeout)

    if confirm_delivery is not None:
        return SimulatedDeliveryNotificationService(confirm_delivery)

    return LoggingNotificationService()
