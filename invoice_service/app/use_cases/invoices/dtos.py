"""Data Transfer Objects for Invoice Use Cases

Pydantic models for command inputs and response outputs.
"""

from enum import Enum
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, Field

from invoice_service.domain.invoice import Invoice


class InvoiceLineCommandDTO(BaseModel):
    """Single line of a CreateInvoice command"""

    product_name: str = Field(
        ...,
        description="Product name (must not be empty)"
    )

    quantity: int = Field(
        ...,
        description="Quantity (must be > 0)"
    )

    unit_price: int = Field(
        ...,
        description="Price per unit in the smallest currency unit (must be > 0)"
    )


class CreateInvoiceCommandDTO(BaseModel):
    """
    Command DTO for creating an invoice

    Used as input to CreateInvoice use case. Business validation happens
    in the Invoice aggregate, not here.
    """

    customer_name: str = Field(
        ...,
        description="Customer full name"
    )

    customer_email: str = Field(
        ...,
        description="Customer email address"
    )

    lines: List[InvoiceLineCommandDTO] = Field(
        default_factory=list,
        description="Invoice lines (may be empty while in draft)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "customer_name": "Jane Doe",
                "customer_email": "jane@example.com",
                "lines": [
                    {"product_name": "Consulting hour", "quantity": 2, "unit_price": 100},
                    {"product_name": "Travel", "quantity": 1, "unit_price": 50},
                ]
            }
        }


class InvoiceLineDTO(BaseModel):
    """Invoice line in responses"""

    id: UUID
    product_name: str
    quantity: int
    unit_price: int
    total_price: int


class InvoiceResponseDTO(BaseModel):
    """
    Response DTO for invoice operations

    Returned by CreateInvoice, GetInvoice and SendInvoice.
    """

    invoice_id: UUID = Field(
        ...,
        description="Invoice ID"
    )

    status: str = Field(
        ...,
        description="Invoice status (draft, sending, sent)"
    )

    customer_name: str = Field(
        ...,
        description="Customer full name"
    )

    customer_email: str = Field(
        ...,
        description="Normalized customer email"
    )

    lines: List[InvoiceLineDTO] = Field(
        default_factory=list,
        description="Invoice lines in insertion order"
    )

    total: int = Field(
        ...,
        description="Sum of line totals in the smallest currency unit"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "invoice_id": "5b1c2c0e-3a53-4a4b-9f44-0d6f2f6f8e41",
                "status": "draft",
                "customer_name": "Jane Doe",
                "customer_email": "jane@example.com",
                "lines": [
                    {
                        "id": "0c1b5a3e-9a57-4f7e-8d0e-7b0f7a9f2d10",
                        "product_name": "Consulting hour",
                        "quantity": 2,
                        "unit_price": 100,
                        "total_price": 200,
                    }
                ],
                "total": 200,
            }
        }

    @classmethod
    def from_domain(cls, invoice: Invoice) -> "InvoiceResponseDTO":
        return cls(
            invoice_id=invoice.id,
            status=invoice.status.value,
            customer_name=invoice.customer_name,
            customer_email=invoice.customer_email.value,
            lines=[
                InvoiceLineDTO(
                    id=line.id,
                    product_name=line.product_name,
                    quantity=line.quantity.value,
                    unit_price=line.unit_price.value,
                    total_price=line.total_price().amount,
                )
                for line in invoice.lines
            ],
            total=invoice.total().amount,
        )


class DeliveryOutcome(str, Enum):
    """How a delivery confirmation event was handled"""
    DELIVERED = "delivered"                  # SENDING -> SENT committed
    ALREADY_DELIVERED = "already_delivered"  # Duplicate confirmation, no-op
    NOT_FOUND = "not_found"                  # Unknown invoice, acknowledged
    NOT_SENDING = "not_sending"              # Invoice never sent, acknowledged


class DeliveryConfirmationResponseDTO(BaseModel):
    """
    Response DTO for a handled delivery confirmation

    Every outcome means the event is acknowledged and must not be retried.
    """

    invoice_id: UUID = Field(
        ...,
        description="Resource id carried by the confirmation event"
    )

    outcome: DeliveryOutcome = Field(
        ...,
        description="How the event was handled"
    )

    status: Optional[str] = Field(
        default=None,
        description="Invoice status after handling (None when not found)"
    )
