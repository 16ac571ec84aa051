from .exceptions import (
    InvoiceServiceError,
    InvoiceValidationError,
    InvalidTransitionError,
    InvoiceNotFoundError,
    NotifierError,
    InfrastructureError,
    ConcurrencyConflictError,
)
from .value_objects import Email, Quantity, UnitPrice, Money
from .invoice_line import InvoiceLine
from .invoice import Invoice, InvoiceStatus

__all__ = [
    "InvoiceServiceError",
    "InvoiceValidationError",
    "InvalidTransitionError",
    "InvoiceNotFoundError",
    "NotifierError",
    "InfrastructureError",
    "ConcurrencyConflictError",
    "Email",
    "Quantity",
    "UnitPrice",
    "Money",
    "InvoiceLine",
    "Invoice",
    "InvoiceStatus",
]
