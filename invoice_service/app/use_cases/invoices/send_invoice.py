"""SendInvoice Use Case

Moves a draft invoice to SENDING and notifies the customer.
"""

import logging
from uuid import UUID
from invoice_service.libs.result import Result, Return, Error
from invoice_service.app.services.unit_of_work import UnitOfWork
from invoice_service.app.services.notification_service import NotificationService
from invoice_service.app.repositories.invoice_repository import InvoiceRepository
from invoice_service.domain.exceptions import (
    InfrastructureError,
    InvalidTransitionError,
    InvoiceNotFoundError,
    NotifierError,
)
from invoice_service.domain.invoice import Invoice
from .dtos import InvoiceResponseDTO

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT = "New invoice is now available"
DEFAULT_COMPANY_NAME = "Company Name"


class SendInvoice:
    """
    Use Case: Send invoice to customer

    Business Rules:
    1. Only draft invoices with at least one line can be sent
    2. SENDING is committed before the notifier is called
    3. The notifier is called at most once per execution
    4. A notifier failure leaves the invoice in SENDING (no revert to draft)

    Every early return rolls back so the row lock taken on load is released.

    Flow:
    1. Load invoice
    2. Transition draft -> sending (rejects with no mutation if not allowed)
    3. Persist and commit SENDING
    4. Call notifier with id, recipient, subject and body
    5. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        notification_service: NotificationService,
        subject: str = DEFAULT_SUBJECT,
        company_name: str = DEFAULT_COMPANY_NAME,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.notification_service = notification_service
        self.subject = subject
        self.company_name = company_name

    async def execute(self, invoice_id: UUID) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice sending

        Args:
            invoice_id: Invoice to send

        Returns:
            Result[InvoiceResponseDTO]: Invoice in SENDING, or one of
            INVOICE_NOT_FOUND, INVALID_STATUS_TRANSITION, NOTIFICATION_FAILED,
            INFRASTRUCTURE_ERROR / CONCURRENCY_CONFLICT
        """
        # Step 1: Load invoice
        try:
            invoice = await self.invoice_repo.load(invoice_id, for_update=True)
        except InvoiceNotFoundError as e:
            await self.uow.rollback()
            return Return.err(Error(code=e.code, message=e.message))
        except InfrastructureError as e:
            await self.uow.rollback()
            logger.error(f"Failed to load invoice {invoice_id}: {e}")
            return Return.err(
                Error(code=e.code, message="Failed to load invoice", reason=str(e))
            )

        # Step 2: Transition draft -> sending
        try:
            invoice.mark_as_sending()
        except InvalidTransitionError as e:
            logger.info(f"Invoice {invoice_id} cannot be sent: {e.message}")
            await self.uow.rollback()
            return Return.err(Error(code=e.code, message=e.message, reason=e.reason))

        # Step 3: Persist SENDING before any side effect
        try:
            await self.invoice_repo.save(invoice)
            await self.uow.commit()
        except InfrastructureError as e:
            await self.uow.rollback()
            logger.error(f"Failed to persist SENDING for invoice {invoice_id}: {e}")
            return Return.err(
                Error(code=e.code, message="Failed to send invoice", reason=str(e))
            )

        logger.info(f"Invoice {invoice_id} marked as sending")

        # Step 4: Notify customer
        try:
            await self.notification_service.notify(
                invoice.id,
                invoice.customer_email.value,
                self.subject,
                self.render_message(invoice),
            )
        except NotifierError as e:
            logger.error(
                f"Notification failed for invoice {invoice_id}, invoice left in sending: {e}"
            )
            return Return.err(Error(code=e.code, message=e.message, reason=e.reason))

        # Step 5: Build response
        return Return.ok(InvoiceResponseDTO.from_domain(invoice))

    def render_message(self, invoice: Invoice) -> str:
        """Render the notification body for an invoice"""
        return (
            f"Dear {invoice.customer_name},\n\n"
            f"New invoice is now available.\n"
            f"Total due: {invoice.total().amount}\n\n"
            f"Thank you for your business!\n\n"
            f"Best regards,\n{self.company_name}"
        )
