"""Invoice domain use cases"""
from .create_invoice import CreateInvoice
from .get_invoice import GetInvoice
from .send_invoice import SendInvoice
from .confirm_delivery import ConfirmInvoiceDelivery
from .dtos import (
    InvoiceLineCommandDTO,
    CreateInvoiceCommandDTO,
    InvoiceLineDTO,
    InvoiceResponseDTO,
    DeliveryOutcome,
    DeliveryConfirmationResponseDTO,
)

__all__ = [
    "CreateInvoice",
    "GetInvoice",
    "SendInvoice",
    "ConfirmInvoiceDelivery",
    "InvoiceLineCommandDTO",
    "CreateInvoiceCommandDTO",
    "InvoiceLineDTO",
    "InvoiceResponseDTO",
    "DeliveryOutcome",
    "DeliveryConfirmationResponseDTO",
]
