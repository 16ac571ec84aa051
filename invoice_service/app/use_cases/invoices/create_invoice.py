"""CreateInvoice Use Case

Creates a draft invoice with its lines.
"""

import logging
from invoice_service.libs.result import Result, Return, Error
from invoice_service.app.services.unit_of_work import UnitOfWork
from invoice_service.app.repositories.invoice_repository import InvoiceRepository
from invoice_service.domain.exceptions import InfrastructureError, InvoiceValidationError
from invoice_service.domain.invoice import Invoice
from .dtos import CreateInvoiceCommandDTO, InvoiceResponseDTO

logger = logging.getLogger(__name__)


class CreateInvoice:
    """
    Use Case: Create draft invoice

    Business Rules:
    1. Customer name must not be empty
    2. Customer email is normalized and must be valid
    3. Every line needs a product name and positive quantity/unit price
    4. Invoice is created with status=draft

    Flow:
    1. Build the Invoice aggregate (validates input)
    2. Persist invoice and lines
    3. Commit transaction
    4. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(self, command: CreateInvoiceCommandDTO) -> Result[InvoiceResponseDTO]:
        """
        Execute invoice creation

        Args:
            command: CreateInvoiceCommandDTO with customer and lines

        Returns:
            Result[InvoiceResponseDTO]: Success with invoice details or error
        """
        # Step 1: Build aggregate
        try:
            invoice = Invoice.create(
                customer_name=command.customer_name,
                customer_email=command.customer_email,
                lines=[line.model_dump() for line in command.lines],
            )
        except InvoiceValidationError as e:
            return Return.err(
                Error(code=e.code, message=e.message, reason=e.reason)
            )

        try:
            # Step 2: Persist
            await self.invoice_repo.save(invoice)

            # Step 3: Commit transaction
            await self.uow.commit()
        except InfrastructureError as e:
            await self.uow.rollback()
            logger.error(f"Failed to persist invoice {invoice.id}: {e}")
            return Return.err(
                Error(
                    code=e.code,
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )

        logger.info(f"Invoice {invoice.id} created with {len(invoice.lines)} line(s)")

        # Step 4: Build response
        return Return.ok(InvoiceResponseDTO.from_domain(invoice))
