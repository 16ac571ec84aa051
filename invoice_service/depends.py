from typing import Awaitable, Callable
from uuid import UUID
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from invoice_service.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from invoice_service.adapter.services.notification_service import create_notification_service
from invoice_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from invoice_service.app.services.notification_service import NotificationService
from invoice_service.app.use_cases.invoices.confirm_delivery import ConfirmInvoiceDelivery

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def build_delivery_confirmer(session_factory) -> Callable[[UUID], Awaitable[None]]:
    """Run ConfirmInvoiceDelivery on its own session, as the delivery webhook would"""

    async def confirm_delivery(resource_id: UUID) -> None:
        async with session_factory() as session:
            use_case = ConfirmInvoiceDelivery(
                SqlAlchemyUnitOfWork(session),
                SqlAlchemyInvoiceRepository(session),
            )
            await use_case.execute(resource_id)

    return confirm_delivery


def get_notification_service() -> NotificationService:
    confirm_delivery = None
    if ApplicationConfig.SIMULATE_DELIVERY_CONFIRMATION:
        confirm_delivery = build_delivery_confirmer(AsyncSessionLocal)

    return create_notification_service(
        ApplicationConfig.NOTIFICATION_WEBHOOK_URL,
        timeout=ApplicationConfig.NOTIFICATION_TIMEOUT_SECONDS,
        confirm_delivery=confirm_delivery,
    )
