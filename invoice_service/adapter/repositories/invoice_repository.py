"""SQLAlchemy Invoice Repository Implementation

Implements invoice aggregate persistence using SQLAlchemy async session.
"""

from typing import Optional
from uuid import UUID
from sqlalchemy import delete, insert, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from invoice_service.app.repositories.invoice_repository import InvoiceRepository
from invoice_service.domain.exceptions import ConcurrencyConflictError, InfrastructureError
from invoice_service.domain.invoice import Invoice, InvoiceStatus
from invoice_service.domain.invoice_line import InvoiceLine
from invoice_service.domain.value_objects import Email
from .tables import InvoiceRecord, InvoiceLineRecord, utc_now


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    Features:
    - Optimistic concurrency via a version column checked on update
    - Optional pessimistic locking via SELECT FOR UPDATE
    - Lines replaced as a whole (delete + bulk insert) in the same transaction
    - SQLAlchemy errors surfaced as InfrastructureError

    Writes are flushed, not committed: the UnitOfWork owns the commit.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invoice_id: UUID, for_update: bool = False) -> Optional[Invoice]:
        """
        Retrieve invoice with its lines by ID

        Args:
            invoice_id: Invoice ID
            for_update: If True, locks the invoice row with SELECT FOR UPDATE

        Returns:
            Invoice if found, None otherwise
        """
        # Rows may already sit in the identity map with a stale version
        stmt = (
            select(InvoiceRecord)
            .where(InvoiceRecord.id == invoice_id)
            .execution_options(populate_existing=True)
        )

        if for_update:
            stmt = stmt.with_for_update()

        try:
            result = await self.session.execute(stmt)
            record = result.scalar_one_or_none()
            if record is None:
                return None

            lines_stmt = (
                select(InvoiceLineRecord)
                .where(InvoiceLineRecord.invoice_id == invoice_id)
                .order_by(InvoiceLineRecord.position)
                .execution_options(populate_existing=True)
            )
            lines_result = await self.session.execute(lines_stmt)
            line_records = list(lines_result.scalars().all())
        except SQLAlchemyError as e:
            raise InfrastructureError(f"Failed to load invoice {invoice_id}", reason=str(e)) from e

        return self._to_domain(record, line_records)

    async def save(self, invoice: Invoice) -> Invoice:
        """
        Insert or update the whole aggregate

        Args:
            invoice: Invoice aggregate (version 0 means never persisted)

        Returns:
            The invoice with its version advanced

        Raises:
            ConcurrencyConflictError: If the stored version is not the one loaded
            InfrastructureError: On any other storage failure
        """
        now = utc_now()

        try:
            if invoice.version == 0:
                self.session.add(
                    InvoiceRecord(
                        id=invoice.id,
                        status=invoice.status.value,
                        customer_name=invoice.customer_name,
                        customer_email=invoice.customer_email.value,
                        version=1,
                        created_at=now,
                        updated_at=now,
                    )
                )
                await self.session.flush()
            else:
                stmt = (
                    update(InvoiceRecord)
                    .where(InvoiceRecord.id == invoice.id)
                    .where(InvoiceRecord.version == invoice.version)
                    .values(
                        status=invoice.status.value,
                        version=invoice.version + 1,
                        updated_at=now,
                    )
                    .execution_options(synchronize_session=False)
                )
                result = await self.session.execute(stmt)
                if result.rowcount == 0:
                    raise ConcurrencyConflictError(invoice.id, invoice.version)

            await self._replace_lines(invoice)
        except SQLAlchemyError as e:
            raise InfrastructureError(f"Failed to save invoice {invoice.id}", reason=str(e)) from e

        invoice.version += 1
        return invoice

    async def _replace_lines(self, invoice: Invoice) -> None:
        """Delete existing lines and bulk insert the current ones"""
        await self.session.execute(
            delete(InvoiceLineRecord).where(InvoiceLineRecord.invoice_id == invoice.id)
        )

        rows = [
            {
                "id": line.id,
                "invoice_id": invoice.id,
                "position": position,
                "product_name": line.product_name,
                "quantity": line.quantity.value,
                "unit_price": line.unit_price.value,
            }
            for position, line in enumerate(invoice.lines)
        ]

        if rows:
            await self.session.execute(insert(InvoiceLineRecord), rows)
        await self.session.flush()

    def _to_domain(self, record: InvoiceRecord, line_records: list[InvoiceLineRecord]) -> Invoice:
        """Map table rows to the Invoice aggregate"""
        lines = [
            InvoiceLine.reconstitute(
                line_id=line.id,
                product_name=line.product_name,
                quantity=line.quantity,
                unit_price=line.unit_price,
            )
            for line in line_records
        ]

        return Invoice.reconstitute(
            invoice_id=record.id,
            status=InvoiceStatus(record.status),
            customer_name=record.customer_name,
            customer_email=Email(value=record.customer_email),
            lines=lines,
            version=record.version,
        )
