"""Request schemas for Invoice API

Pydantic models for validating the shape of incoming HTTP requests.
Business rules (non-empty names, valid email, positive amounts) are
enforced by the Invoice aggregate.
"""

from typing import List
from pydantic import BaseModel, Field


class InvoiceLineRequestSchema(BaseModel):
    """Single invoice line in a create request"""

    product_name: str = Field(
        ...,
        description="Product name (required, non-empty)"
    )

    quantity: int = Field(
        ...,
        description="Quantity (must be > 0)"
    )

    unit_price: int = Field(
        ...,
        description="Price per unit in the smallest currency unit (must be > 0)"
    )


class CreateInvoiceRequestSchema(BaseModel):
    """
    Request schema for creating an invoice

    Used for POST /invoices endpoint.
    """

    customer_name: str = Field(
        ...,
        description="Customer full name (required, non-empty)"
    )

    customer_email: str = Field(
        ...,
        description="Customer email address (required, valid email)"
    )

    lines: List[InvoiceLineRequestSchema] = Field(
        default_factory=list,
        description="Invoice lines (optional, may be empty while in draft)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "customer_name": "Jane Doe",
                "customer_email": "jane@example.com",
                "lines": [
                    {"product_name": "Consulting hour", "quantity": 2, "unit_price": 100},
                    {"product_name": "Travel", "quantity": 1, "unit_price": 50}
                ]
            }
        }
