"""Invoice Repository Interface

Defines the contract for invoice aggregate persistence.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID
from invoice_service.domain.exceptions import InvoiceNotFoundError
from invoice_service.domain.invoice import Invoice


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Implementations must:
    - Save status and lines atomically (one aggregate, one write)
    - Provide read-modify-write isolation per invoice id, so two concurrent
      writers that loaded the same version cannot both commit
    - Raise InfrastructureError for storage failures
    """

    @abstractmethod
    async def get_by_id(self, invoice_id: UUID, for_update: bool = False) -> Optional[Invoice]:
        """
        Retrieve invoice by ID

        Args:
            invoice_id: Invoice ID
            for_update: If True, locks the row until the transaction ends

        Returns:
            Invoice if found, None otherwise

        Raises:
            InfrastructureError: If storage is unavailable
        """
        pass

    @abstractmethod
    async def save(self, invoice: Invoice) -> Invoice:
        """
        Persist the whole aggregate (insert or update)

        Args:
            invoice: Invoice aggregate to persist

        Returns:
            The same invoice with its version advanced

        Raises:
            ConcurrencyConflictError: If the stored version moved since load
            InfrastructureError: If storage is unavailable
        """
        pass

    async def load(self, invoice_id: UUID, for_update: bool = False) -> Invoice:
        """
        Retrieve invoice by ID or fail

        Raises:
            InvoiceNotFoundError: If no invoice has this id
        """
        invoice = await self.get_by_id(invoice_id, for_update=for_update)
        if invoice is None:
            raise InvoiceNotFoundError(invoice_id)
        return invoice
