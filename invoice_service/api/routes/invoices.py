"""Invoice API Routes

FastAPI routes for invoice creation, retrieval and sending.
"""

from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from invoice_service.api.schemas.invoice_request import CreateInvoiceRequestSchema
from invoice_service.app.services.notification_service import NotificationService
from invoice_service.app.use_cases.invoices.dtos import (
    CreateInvoiceCommandDTO,
    InvoiceLineCommandDTO,
    InvoiceResponseDTO,
)
from invoice_service.app.use_cases.invoices.create_invoice import CreateInvoice
from invoice_service.app.use_cases.invoices.get_invoice import GetInvoice
from invoice_service.app.use_cases.invoices.send_invoice import SendInvoice
from invoice_service.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from invoice_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from invoice_service.depends import get_session, get_notification_service
from invoice_service.api.error import ClientError

router = APIRouter(prefix="/invoices", tags=["Invoices"])

ERROR_STATUS_CODES = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVOICE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_STATUS_TRANSITION": status.HTTP_409_CONFLICT,
    "NOTIFICATION_FAILED": status.HTTP_502_BAD_GATEWAY,
    "INFRASTRUCTURE_ERROR": status.HTTP_503_SERVICE_UNAVAILABLE,
    "CONCURRENCY_CONFLICT": status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _raise_for(error) -> None:
    raise ClientError(
        error,
        status_code=ERROR_STATUS_CODES.get(error.code, status.HTTP_400_BAD_REQUEST),
    )


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Validation error",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "VALIDATION_ERROR",
                            "message": "Invalid customer email."
                        }
                    }
                }
            }
        }
    }
)
async def create_invoice(
    request: CreateInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Create a draft invoice.

    **Request body:**
    - `customer_name` (required): Customer full name
    - `customer_email` (required): Customer email, normalized to lower case
    - `lines` (optional): Invoice lines with `product_name`, `quantity`, `unit_price`

    **Returns:**
    - 201: Invoice created in draft status
    - 400: Invalid request parameters
    """
    uow = SqlAlchemyUnitOfWork(session)
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    command = CreateInvoiceCommandDTO(
        customer_name=request.customer_name,
        customer_email=request.customer_email,
        lines=[
            InvoiceLineCommandDTO(
                product_name=line.product_name,
                quantity=line.quantity,
                unit_price=line.unit_price,
            )
            for line in request.lines
        ],
    )

    use_case = CreateInvoice(uow, invoice_repo)
    result = await use_case.execute(command)

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        404: {
            "description": "Invoice not found",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVOICE_NOT_FOUND",
                            "message": "Invoice with ID \"5b1c2c0e-3a53-4a4b-9f44-0d6f2f6f8e41\" was not found."
                        }
                    }
                }
            }
        }
    }
)
async def get_invoice(
    invoice_id: UUID,
    session: AsyncSession = Depends(get_session)
):
    """
    View an invoice with its lines and total.

    **Returns:**
    - 200: Invoice found
    - 404: Invoice not found
    """
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    result = await GetInvoice(invoice_repo).execute(invoice_id)

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.post(
    "/{invoice_id}/send",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_202_ACCEPTED,
    responses={
        404: {"description": "Invoice not found"},
        409: {
            "description": "Invoice cannot be sent",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_STATUS_TRANSITION",
                            "message": "Cannot mark invoice ... as sending. Invoice must contain at least one line."
                        }
                    }
                }
            }
        },
        502: {"description": "Notification could not be sent; invoice stays in sending"},
        503: {"description": "Storage unavailable; safe to retry"},
    }
)
async def send_invoice(
    invoice_id: UUID,
    session: AsyncSession = Depends(get_session),
    notification_service: NotificationService = Depends(get_notification_service),
):
    """
    Send an invoice to its customer.

    The invoice is committed in `sending` status before the notification is
    dispatched. It becomes `sent` when the delivery confirmation arrives on
    the notifications webhook.

    **Returns:**
    - 202: Sending initiated
    - 404: Invoice not found
    - 409: Invoice is not a draft, or has no lines
    - 502: Notification failed (invoice remains in sending)
    - 503: Storage unavailable
    """
    uow = SqlAlchemyUnitOfWork(session)
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    use_case = SendInvoice(
        uow,
        invoice_repo,
        notification_service,
        subject=ApplicationConfig.INVOICE_EMAIL_SUBJECT,
        company_name=ApplicationConfig.COMPANY_NAME,
    )
    result = await use_case.execute(invoice_id)

    if result.is_err():
        _raise_for(result.error)

    return result.value
