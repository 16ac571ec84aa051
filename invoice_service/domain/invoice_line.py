"""Invoice Line Domain Entity

Tracks individual priced lines within an invoice.
"""

from uuid import UUID, uuid4
from pydantic import BaseModel, ConfigDict, Field

from invoice_service.domain.exceptions import InvoiceValidationError
from invoice_service.domain.value_objects import Money, Quantity, UnitPrice


class InvoiceLine(BaseModel):
    """
    Invoice Line - Individual priced line within an invoice

    Domain Rules:
    - Each line belongs to exactly one invoice
    - Identity is the id only: two otherwise identical lines are distinct
    - product_name must not be empty or whitespace only
    - total_price = quantity * unit_price, derived and never stored
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    product_name: str
    quantity: Quantity
    unit_price: UnitPrice

    @classmethod
    def create(cls, product_name: str, quantity: int, unit_price: int) -> "InvoiceLine":
        """
        Create a new line with a fresh identity

        Args:
            product_name: Name of the product (non-empty after trimming)
            quantity: Strictly positive integer
            unit_price: Strictly positive integer in the smallest currency unit

        Raises:
            InvoiceValidationError: If any attribute is invalid
        """
        if not isinstance(product_name, str) or not product_name.strip():
            raise InvoiceValidationError("Product name must not be empty or only whitespace.")

        return cls(
            product_name=product_name,
            quantity=Quantity.of(quantity),
            unit_price=UnitPrice.of(unit_price),
        )

    @classmethod
    def reconstitute(
        cls, line_id: UUID, product_name: str, quantity: int, unit_price: int
    ) -> "InvoiceLine":
        """Rebuild a previously persisted line without re-checking business rules"""
        return cls(
            id=line_id,
            product_name=product_name,
            quantity=Quantity.of(quantity),
            unit_price=UnitPrice.of(unit_price),
        )

    def total_price(self) -> Money:
        return self.unit_price * self.quantity

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvoiceLine):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
