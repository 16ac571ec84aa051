from .unit_of_work import SqlAlchemyUnitOfWork
from .notification_service import (
    LoggingNotificationService,
    SimulatedDeliveryNotificationService,
    WebhookNotificationService,
    create_notification_service,
)

__all__ = [
    "SqlAlchemyUnitOfWork",
    "LoggingNotificationService",
    "SimulatedDeliveryNotificationService",
    "WebhookNotificationService",
    "create_notification_service",
]
