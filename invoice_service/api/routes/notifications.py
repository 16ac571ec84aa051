"""Notification Webhook Routes

Inbound delivery confirmations from the notification gateway.
"""

from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from invoice_service.app.use_cases.invoices.dtos import DeliveryConfirmationResponseDTO
from invoice_service.app.use_cases.invoices.confirm_delivery import ConfirmInvoiceDelivery
from invoice_service.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from invoice_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from invoice_service.depends import get_session
from invoice_service.domain.exceptions import InfrastructureError
from invoice_service.libs.result import Error
from invoice_service.api.error import ClientError

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.post(
    "/hooks/delivered/{reference}",
    response_model=DeliveryConfirmationResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        503: {
            "description": "Storage unavailable; the gateway should retry",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INFRASTRUCTURE_ERROR",
                            "message": "Failed to save invoice ..."
                        }
                    }
                }
            }
        }
    }
)
async def invoice_delivered(
    reference: UUID,
    session: AsyncSession = Depends(get_session)
):
    """
    Delivery confirmation webhook.

    Safe to call any number of times for the same reference. Unknown
    invoices, duplicates and invoices that were never sent are acknowledged
    with 200 and an `outcome` describing what happened.

    **Returns:**
    - 200: Event handled (see `outcome`)
    - 503: Transient failure, retry the delivery
    """
    uow = SqlAlchemyUnitOfWork(session)
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    use_case = ConfirmInvoiceDelivery(uow, invoice_repo)
    try:
        result = await use_case.execute(reference)
    except InfrastructureError as e:
        raise ClientError(
            Error(code=e.code, message=e.message, reason=e.reason),
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return result.value
