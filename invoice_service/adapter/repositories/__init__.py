from .invoice_repository import SqlAlchemyInvoiceRepository
from .tables import InvoiceRecord, InvoiceLineRecord

__all__ = [
    "SqlAlchemyInvoiceRepository",
    "InvoiceRecord",
    "InvoiceLineRecord",
]
