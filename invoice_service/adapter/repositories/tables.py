"""Invoice Persistence Tables

SQLModel table definitions for the Invoice aggregate.
Rows are mapped to and from the domain model by SqlAlchemyInvoiceRepository.
"""

from datetime import datetime, timezone
from uuid import UUID
from sqlmodel import SQLModel, Field, Column, Index
from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Uuid


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InvoiceRecord(SQLModel, table=True):
    """
    Invoice row

    version is incremented on every update and checked in the WHERE clause
    (optimistic concurrency per invoice id).
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_status', 'status'),
        CheckConstraint("status IN ('draft', 'sending', 'sent')", name='invoice_status_valid'),
    )

    id: UUID = Field(
        sa_column=Column(Uuid, primary_key=True),
        description="Invoice identifier (UUID4, assigned by the domain)"
    )

    status: str = Field(
        sa_column=Column(String(20), nullable=False),
        description="Invoice status (draft, sending, sent)"
    )

    customer_name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Customer full name"
    )

    customer_email: str = Field(
        sa_column=Column(String(320), nullable=False),
        description="Normalized customer email"
    )

    version: int = Field(
        sa_column=Column(Integer, nullable=False, default=1),
        description="Optimistic concurrency counter"
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp"
    )


class InvoiceLineRecord(SQLModel, table=True):
    """Invoice line row, ordered by position within its invoice"""

    __tablename__ = "invoice_lines"
    __table_args__ = (
        Index('ix_invoice_lines_invoice_id', 'invoice_id'),
        CheckConstraint('quantity > 0', name='quantity_positive'),
        CheckConstraint('unit_price > 0', name='unit_price_positive'),
    )

    id: UUID = Field(
        sa_column=Column(Uuid, primary_key=True),
        description="Line identifier (UUID4, assigned by the domain)"
    )

    invoice_id: UUID = Field(
        sa_column=Column(Uuid, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    position: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Insertion order within the invoice"
    )

    product_name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Product name"
    )

    quantity: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Quantity (> 0)"
    )

    unit_price: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Price per unit in the smallest currency unit (> 0)"
    )
