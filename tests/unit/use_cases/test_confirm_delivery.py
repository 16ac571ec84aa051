"""Unit tests for ConfirmInvoiceDelivery use case

Tests cover:
- Sending -> sent on confirmation
- Idempotence for duplicate confirmations
- Acknowledged no-ops (unknown invoice, invoice never sent)
- Infrastructure failures re-raised for retry
"""

import pytest
from unittest.mock import AsyncMock
from uuid import uuid4

from invoice_service.app.use_cases.invoices.confirm_delivery import ConfirmInvoiceDelivery
from invoice_service.app.use_cases.invoices.dtos import DeliveryOutcome
from invoice_service.domain.exceptions import InfrastructureError
from invoice_service.domain.invoice import Invoice, InvoiceStatus


def make_sending_invoice() -> Invoice:
    invoice = Invoice.create(
        "Jane Doe",
        "jane@example.com",
        [{"product_name": "Widget", "quantity": 1, "unit_price": 100}],
    )
    invoice.mark_as_sending()
    return invoice


@pytest.fixture
def confirm_delivery_use_case(mock_uow, mock_invoice_repo):
    """ConfirmInvoiceDelivery use case instance with mocked dependencies"""
    return ConfirmInvoiceDelivery(
        uow=mock_uow,
        invoice_repo=mock_invoice_repo,
    )


@pytest.mark.asyncio
class TestConfirmDelivery:
    """Test delivery confirmation handling"""

    async def test_confirm_sending_invoice(
        self, confirm_delivery_use_case, mock_invoice_repo, mock_uow
    ):
        """
        Given: An invoice in sending
        When: A delivery confirmation arrives
        Then: Invoice is sent, saved and committed
        """
        # Arrange
        invoice = make_sending_invoice()
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)
        mock_invoice_repo.save = AsyncMock(side_effect=lambda inv: inv)

        # Act
        result = await confirm_delivery_use_case.execute(invoice.id)

        # Assert
        assert result.is_ok()
        assert result.value.outcome == DeliveryOutcome.DELIVERED
        assert result.value.status == "sent"
        assert invoice.status == InvoiceStatus.SENT
        mock_invoice_repo.get_by_id.assert_called_once_with(invoice.id, for_update=True)
        mock_invoice_repo.save.assert_called_once_with(invoice)
        mock_uow.commit.assert_called_once()
        mock_uow.rollback.assert_not_called()

    async def test_duplicate_confirmation_is_noop(
        self, confirm_delivery_use_case, mock_invoice_repo, mock_uow
    ):
        """
        Given: An invoice in sending
        When: The same confirmation is delivered twice
        Then: Second run reports already delivered and performs no write
        """
        # Arrange
        invoice = make_sending_invoice()
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)
        mock_invoice_repo.save = AsyncMock(side_effect=lambda inv: inv)

        # Act
        first = await confirm_delivery_use_case.execute(invoice.id)
        second = await confirm_delivery_use_case.execute(invoice.id)

        # Assert
        assert first.value.outcome == DeliveryOutcome.DELIVERED
        assert second.is_ok()
        assert second.value.outcome == DeliveryOutcome.ALREADY_DELIVERED
        assert second.value.status == "sent"
        assert invoice.status == InvoiceStatus.SENT
        assert mock_invoice_repo.save.call_count == 1
        assert mock_uow.commit.call_count == 1
        assert mock_uow.rollback.call_count == 1

    async def test_confirmation_for_draft_invoice(
        self, confirm_delivery_use_case, mock_invoice_repo, mock_uow
    ):
        """
        Given: An invoice still in draft
        When: A delivery confirmation arrives
        Then: Event is acknowledged without changing the invoice
        """
        # Arrange
        invoice = Invoice.create("Jane Doe", "jane@example.com", [])
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)
        mock_invoice_repo.save = AsyncMock()

        # Act
        result = await confirm_delivery_use_case.execute(invoice.id)

        # Assert
        assert result.is_ok()
        assert result.value.outcome == DeliveryOutcome.NOT_SENDING
        assert result.value.status == "draft"
        assert invoice.status == InvoiceStatus.DRAFT
        mock_invoice_repo.save.assert_not_called()
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_confirmation_for_unknown_invoice(
        self, confirm_delivery_use_case, mock_invoice_repo, mock_uow
    ):
        # Arrange
        resource_id = uuid4()
        mock_invoice_repo.get_by_id = AsyncMock(return_value=None)
        mock_invoice_repo.save = AsyncMock()

        # Act
        result = await confirm_delivery_use_case.execute(resource_id)

        # Assert
        assert result.is_ok()
        assert result.value.outcome == DeliveryOutcome.NOT_FOUND
        assert result.value.invoice_id == resource_id
        assert result.value.status is None
        mock_invoice_repo.save.assert_not_called()
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
class TestConfirmDeliveryFailures:
    """Test infrastructure failures are re-raised"""

    async def test_load_failure_is_reraised(
        self, confirm_delivery_use_case, mock_invoice_repo, mock_uow
    ):
        # Arrange
        mock_invoice_repo.get_by_id = AsyncMock(side_effect=InfrastructureError("Database down"))

        # Act & Assert
        with pytest.raises(InfrastructureError):
            await confirm_delivery_use_case.execute(uuid4())

        mock_uow.rollback.assert_called_once()

    async def test_commit_failure_is_reraised(
        self, confirm_delivery_use_case, mock_invoice_repo, mock_uow
    ):
        """
        Given: Commit of SENT fails
        When: A delivery confirmation arrives
        Then: InfrastructureError propagates after rollback
        """
        # Arrange
        invoice = make_sending_invoice()
        mock_invoice_repo.get_by_id = AsyncMock(return_value=invoice)
        mock_invoice_repo.save = AsyncMock(side_effect=lambda inv: inv)
        mock_uow.commit = AsyncMock(side_effect=InfrastructureError("Database down"))

        # Act & Assert
        with pytest.raises(InfrastructureError, match="Database down"):
            await confirm_delivery_use_case.execute(invoice.id)

        mock_uow.rollback.assert_called_once()
