"""ConfirmInvoiceDelivery Use Case

Handles the asynchronous delivery confirmation for a sent invoice.
Delivery is at-least-once upstream, so this handler is idempotent.
"""

import logging
from uuid import UUID
from invoice_service.libs.result import Result, Return
from invoice_service.app.services.unit_of_work import UnitOfWork
from invoice_service.app.repositories.invoice_repository import InvoiceRepository
from invoice_service.domain.exceptions import InfrastructureError
from .dtos import DeliveryConfirmationResponseDTO, DeliveryOutcome

logger = logging.getLogger(__name__)


class ConfirmInvoiceDelivery:
    """
    Use Case: Mark a sending invoice as sent on delivery confirmation

    Business Rules:
    1. Unknown invoice: acknowledged, not retried
    2. Already sent: acknowledged as a duplicate, no write
    3. Not in sending (e.g. still draft): acknowledged with a warning,
       not retried, since the event can never become valid
    4. Infrastructure failures are re-raised so the delivery mechanism
       retries the whole invocation
    5. Acknowledged no-ops roll back to release the row lock taken on load

    Flow:
    1. Load invoice
    2. Idempotency check
    3. Transition check
    4. Transition sending -> sent, persist and commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo

    async def execute(self, resource_id: UUID) -> Result[DeliveryConfirmationResponseDTO]:
        """
        Execute delivery confirmation

        Args:
            resource_id: Invoice id carried by the confirmation event

        Returns:
            Result[DeliveryConfirmationResponseDTO]: Always ok; the outcome
            tells how the event was handled

        Raises:
            InfrastructureError: On storage failure, for the caller to retry
        """
        try:
            # Step 1: Load invoice
            invoice = await self.invoice_repo.get_by_id(resource_id, for_update=True)
            if invoice is None:
                await self.uow.rollback()
                logger.warning(
                    f"Delivery confirmation for non-existent invoice {resource_id}, "
                    f"acknowledging without retry"
                )
                return Return.ok(
                    DeliveryConfirmationResponseDTO(
                        invoice_id=resource_id,
                        outcome=DeliveryOutcome.NOT_FOUND,
                    )
                )

            # Step 2: Idempotency check
            if invoice.is_delivered():
                await self.uow.rollback()
                logger.info(f"Invoice {resource_id} is already marked as sent, ignoring event")
                return Return.ok(
                    DeliveryConfirmationResponseDTO(
                        invoice_id=resource_id,
                        outcome=DeliveryOutcome.ALREADY_DELIVERED,
                        status=invoice.status.value,
                    )
                )

            # Step 3: Transition check
            if not invoice.can_be_marked_delivered():
                await self.uow.rollback()
                logger.warning(
                    f"Delivery confirmation for invoice {resource_id} in status "
                    f"'{invoice.status.value}', acknowledging without retry"
                )
                return Return.ok(
                    DeliveryConfirmationResponseDTO(
                        invoice_id=resource_id,
                        outcome=DeliveryOutcome.NOT_SENDING,
                        status=invoice.status.value,
                    )
                )

            # Step 4: Transition and persist
            invoice.mark_as_delivered()
            await self.invoice_repo.save(invoice)
            await self.uow.commit()

        except InfrastructureError as e:
            await self.uow.rollback()
            logger.error(
                f"Error while processing delivery confirmation for invoice {resource_id}, "
                f"rethrowing for retry: {e}"
            )
            raise

        logger.info(f"Invoice {resource_id} marked as sent")

        return Return.ok(
            DeliveryConfirmationResponseDTO(
                invoice_id=resource_id,
                outcome=DeliveryOutcome.DELIVERED,
                status=invoice.status.value,
            )
        )
