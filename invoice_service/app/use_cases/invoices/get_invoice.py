"""GetInvoice Use Case

Retrieves a single invoice with its lines and total.
"""

from uuid import UUID
from invoice_service.libs.result import Result, Return, Error
from invoice_service.app.repositories.invoice_repository import InvoiceRepository
from invoice_service.domain.exceptions import InfrastructureError, InvoiceNotFoundError
from .dtos import InvoiceResponseDTO


class GetInvoice:
    """
    Use Case: Get invoice by id

    Read-only: no unit of work needed.
    """

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(self, invoice_id: UUID) -> Result[InvoiceResponseDTO]:
        try:
            invoice = await self.invoice_repo.load(invoice_id)
        except InvoiceNotFoundError as e:
            return Return.err(Error(code=e.code, message=e.message))
        except InfrastructureError as e:
            return Return.err(
                Error(code=e.code, message="Failed to load invoice", reason=str(e))
            )

        return Return.ok(InvoiceResponseDTO.from_domain(invoice))
