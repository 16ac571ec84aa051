"""Invoice Domain Aggregate

Owns the invoice status, customer identity and lines, and enforces the
delivery state machine:

    DRAFT -> SENDING -> SENT

Transitions are all-or-nothing: a failed transition raises
InvalidTransitionError and leaves the invoice untouched.
"""

from enum import Enum
from typing import Any, Iterable, Mapping, Tuple, Union
from uuid import UUID, uuid4
from pydantic import BaseModel, Field

from invoice_service.domain.exceptions import InvalidTransitionError, InvoiceValidationError
from invoice_service.domain.invoice_line import InvoiceLine
from invoice_service.domain.value_objects import Email, Money


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    SENDING = "sending"
    SENT = "sent"


LineInput = Union[InvoiceLine, Mapping[str, Any]]


class Invoice(BaseModel):
    """
    Invoice - Aggregate root for an invoice and its lines

    Domain Rules:
    - Created in DRAFT with a new id
    - Status transitions: draft -> sending -> sent, never backwards
    - draft -> sending requires at least one line
    - lines keep insertion order and are replaced only as a whole
    - total is the sum of line totals, computed on demand
    - version belongs to persistence (optimistic concurrency), 0 = never saved
    """

    id: UUID = Field(frozen=True)
    status: InvoiceStatus
    customer_name: str = Field(frozen=True)
    customer_email: Email = Field(frozen=True)
    lines: Tuple[InvoiceLine, ...] = Field(default=(), frozen=True)
    version: int = 0

    @classmethod
    def create(
        cls,
        customer_name: str,
        customer_email: str,
        lines: Iterable[LineInput] = (),
    ) -> "Invoice":
        """
        Create a new draft invoice

        Args:
            customer_name: Customer full name (non-empty)
            customer_email: Raw email, normalized and validated here
            lines: InvoiceLine entities, or mappings with product_name,
                   quantity and unit_price keys

        Returns:
            Invoice in DRAFT status with a fresh id

        Raises:
            InvoiceValidationError: If the name, email or any line is invalid
        """
        if not isinstance(customer_name, str) or not customer_name.strip():
            raise InvoiceValidationError("Customer name must not be empty.")

        email = Email.from_string(customer_email)

        built_lines = []
        for index, line in enumerate(lines):
            if isinstance(line, InvoiceLine):
                built_lines.append(line)
                continue
            try:
                built_lines.append(
                    InvoiceLine.create(
                        product_name=line["product_name"],
                        quantity=line["quantity"],
                        unit_price=line["unit_price"],
                    )
                )
            except KeyError as e:
                raise InvoiceValidationError(
                    f"Line at index {index} is missing {e.args[0]}."
                ) from e
            except InvoiceValidationError as e:
                raise InvoiceValidationError(
                    f"Line at index {index}: {e.message}", reason=e.reason
                ) from e

        return cls(
            id=uuid4(),
            status=InvoiceStatus.DRAFT,
            customer_name=customer_name,
            customer_email=email,
            lines=tuple(built_lines),
        )

    @classmethod
    def reconstitute(
        cls,
        invoice_id: UUID,
        status: InvoiceStatus,
        customer_name: str,
        customer_email: Email,
        lines: Iterable[InvoiceLine],
        version: int,
    ) -> "Invoice":
        """Rebuild a previously persisted invoice without re-checking business rules"""
        return cls(
            id=invoice_id,
            status=InvoiceStatus(status),
            customer_name=customer_name,
            customer_email=customer_email,
            lines=tuple(lines),
            version=version,
        )

    def has_lines(self) -> bool:
        return len(self.lines) > 0

    def total(self) -> Money:
        total = Money.zero()
        for line in self.lines:
            total = total + line.total_price()
        return total

    # State machine

    def can_be_sent(self) -> bool:
        return self.status == InvoiceStatus.DRAFT and self.has_lines()

    def mark_as_sending(self) -> None:
        """Transition DRAFT -> SENDING"""
        if self.status != InvoiceStatus.DRAFT:
            raise InvalidTransitionError.cannot_mark_as_sending(self.id, self.status.value)
        if not self.has_lines():
            raise InvalidTransitionError.cannot_send_without_lines(self.id)
        self.status = InvoiceStatus.SENDING

    def can_be_marked_delivered(self) -> bool:
        return self.status == InvoiceStatus.SENDING

    def mark_as_delivered(self) -> None:
        """Transition SENDING -> SENT"""
        if not self.can_be_marked_delivered():
            raise InvalidTransitionError.cannot_mark_as_delivered(self.id, self.status.value)
        self.status = InvoiceStatus.SENT

    def is_delivered(self) -> bool:
        return self.status == InvoiceStatus.SENT
