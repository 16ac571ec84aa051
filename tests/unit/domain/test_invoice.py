"""Unit tests for Invoice aggregate

Tests cover:
- Creation and validation
- Total computation
- State machine: draft -> sending -> sent, rejections leave state untouched
"""

import pytest
from itertools import product
from uuid import uuid4
from pydantic import ValidationError
from invoice_service.domain.exceptions import InvalidTransitionError, InvoiceValidationError
from invoice_service.domain.invoice import Invoice, InvoiceStatus
from invoice_service.domain.invoice_line import InvoiceLine
from invoice_service.domain.value_objects import Email, Money

CUSTOMER_NAME = "Jane Doe"
CUSTOMER_EMAIL = "jane@example.com"

STATUS_ORDER = [InvoiceStatus.DRAFT, InvoiceStatus.SENDING, InvoiceStatus.SENT]


def make_invoice(lines=None) -> Invoice:
    if lines is None:
        lines = [
            {"product_name": "Consulting hour", "quantity": 2, "unit_price": 100},
            {"product_name": "Travel", "quantity": 1, "unit_price": 50},
        ]
    return Invoice.create(CUSTOMER_NAME, CUSTOMER_EMAIL, lines)


class TestInvoiceCreation:
    """Test Invoice.create"""

    def test_create_invoice_in_draft_status(self):
        invoice = make_invoice()

        assert invoice.status == InvoiceStatus.DRAFT
        assert invoice.customer_name == CUSTOMER_NAME
        assert invoice.customer_email == Email.from_string(CUSTOMER_EMAIL)
        assert invoice.version == 0
        assert len(invoice.lines) == 2

    def test_each_invoice_gets_a_new_id(self):
        assert make_invoice().id != make_invoice().id

    def test_create_without_lines(self):
        invoice = make_invoice(lines=[])

        assert invoice.status == InvoiceStatus.DRAFT
        assert invoice.has_lines() is False

    def test_lines_keep_insertion_order(self):
        invoice = make_invoice(lines=[
            {"product_name": "C", "quantity": 1, "unit_price": 1},
            {"product_name": "A", "quantity": 1, "unit_price": 1},
            {"product_name": "B", "quantity": 1, "unit_price": 1},
        ])

        assert [line.product_name for line in invoice.lines] == ["C", "A", "B"]

    def test_accepts_prebuilt_lines(self):
        line = InvoiceLine.create("Widget", 4, 25)

        invoice = Invoice.create(CUSTOMER_NAME, CUSTOMER_EMAIL, [line])

        assert invoice.lines == (line,)
        assert invoice.lines[0].id == line.id

    def test_email_is_normalized(self):
        invoice = Invoice.create(CUSTOMER_NAME, "  JANE@Example.com ", [])

        assert invoice.customer_email.value == "jane@example.com"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_customer_name_rejected(self, name):
        with pytest.raises(InvoiceValidationError, match="Customer name"):
            Invoice.create(name, CUSTOMER_EMAIL, [])

    def test_invalid_email_rejected(self):
        with pytest.raises(InvoiceValidationError, match="Invalid customer email"):
            Invoice.create(CUSTOMER_NAME, "not-an-email", [])

    def test_invalid_line_rejected_with_index(self):
        lines = [
            {"product_name": "Widget", "quantity": 1, "unit_price": 10},
            {"product_name": "Gadget", "quantity": 0, "unit_price": 10},
        ]

        with pytest.raises(InvoiceValidationError, match="Line at index 1"):
            Invoice.create(CUSTOMER_NAME, CUSTOMER_EMAIL, lines)

    def test_line_missing_field_rejected(self):
        with pytest.raises(InvoiceValidationError, match="missing unit_price"):
            Invoice.create(CUSTOMER_NAME, CUSTOMER_EMAIL, [{"product_name": "Widget", "quantity": 1}])

    def test_lines_cannot_be_replaced_by_assignment(self):
        invoice = make_invoice()

        with pytest.raises(ValidationError):
            invoice.lines = ()

    def test_reconstitute_keeps_identity_status_and_version(self):
        invoice_id = uuid4()
        line = InvoiceLine.reconstitute(uuid4(), "Product 1", 5, 25)

        invoice = Invoice.reconstitute(
            invoice_id=invoice_id,
            status=InvoiceStatus.SENDING,
            customer_name=CUSTOMER_NAME,
            customer_email=Email.from_string(CUSTOMER_EMAIL),
            lines=[line],
            version=3,
        )

        assert invoice.id == invoice_id
        assert invoice.status == InvoiceStatus.SENDING
        assert invoice.version == 3
        assert invoice.total() == Money(amount=125)


class TestInvoiceTotal:
    """Test total computation"""

    def test_total_for_two_lines(self):
        invoice = make_invoice()

        assert invoice.total().amount == 250

    def test_total_is_zero_without_lines(self):
        assert make_invoice(lines=[]).total() == Money.zero()

    @pytest.mark.parametrize(
        "quantity,unit_price,expected",
        [(2, 100, 200), (5, 25, 125), (1, 1000, 1000), (999, 999999, 998999001)],
    )
    def test_total_for_single_line(self, quantity, unit_price, expected):
        invoice = make_invoice(lines=[
            {"product_name": "Test Product", "quantity": quantity, "unit_price": unit_price}
        ])

        assert invoice.total().amount == expected

    def test_total_equals_sum_of_line_products(self):
        pairs = list(product([1, 3, 7], [10, 99, 250]))
        invoice = make_invoice(lines=[
            {"product_name": f"P{i}", "quantity": q, "unit_price": p}
            for i, (q, p) in enumerate(pairs)
        ])

        assert invoice.total().amount == sum(q * p for q, p in pairs)

    def test_total_unchanged_by_transitions(self):
        invoice = make_invoice()

        invoice.mark_as_sending()
        invoice.mark_as_delivered()

        assert invoice.total().amount == 250


class TestInvoiceStateMachine:
    """Test draft -> sending -> sent"""

    def test_jane_doe_invoice_can_be_sent(self):
        invoice = make_invoice()

        assert invoice.total().amount == 250
        assert invoice.can_be_sent() is True

    def test_invoice_without_lines_cannot_be_sent(self):
        invoice = make_invoice(lines=[])

        assert invoice.can_be_sent() is False
        with pytest.raises(InvalidTransitionError, match="at least one line") as exc_info:
            invoice.mark_as_sending()

        assert exc_info.value.reason == "no_lines"
        assert invoice.status == InvoiceStatus.DRAFT

    def test_mark_as_sending_from_draft(self):
        invoice = make_invoice()

        invoice.mark_as_sending()

        assert invoice.status == InvoiceStatus.SENDING
        assert invoice.can_be_sent() is False
        assert invoice.can_be_marked_delivered() is True
        assert invoice.is_delivered() is False

    def test_mark_as_sending_twice_rejected(self):
        invoice = make_invoice()
        invoice.mark_as_sending()

        with pytest.raises(InvalidTransitionError, match="must be 'draft'") as exc_info:
            invoice.mark_as_sending()

        assert exc_info.value.reason == "wrong_status"
        assert invoice.status == InvoiceStatus.SENDING

    def test_mark_as_delivered_from_sending(self):
        invoice = make_invoice()
        invoice.mark_as_sending()

        invoice.mark_as_delivered()

        assert invoice.status == InvoiceStatus.SENT
        assert invoice.is_delivered() is True
        assert invoice.can_be_marked_delivered() is False

    def test_mark_as_delivered_from_draft_rejected(self):
        invoice = make_invoice()

        with pytest.raises(InvalidTransitionError, match="must be 'sending'"):
            invoice.mark_as_delivered()

        assert invoice.status == InvoiceStatus.DRAFT

    def test_sent_is_terminal(self):
        invoice = make_invoice()
        invoice.mark_as_sending()
        invoice.mark_as_delivered()

        with pytest.raises(InvalidTransitionError):
            invoice.mark_as_sending()
        with pytest.raises(InvalidTransitionError):
            invoice.mark_as_delivered()

        assert invoice.status == InvoiceStatus.SENT

    @pytest.mark.parametrize(
        "operations",
        [
            ops
            for length in range(1, 5)
            for ops in product(["mark_as_sending", "mark_as_delivered"], repeat=length)
        ],
    )
    def test_observed_history_follows_lifecycle_order(self, operations):
        """
        Given: Any sequence of transition attempts
        When: Each attempt either succeeds or raises
        Then: Observed statuses are a subsequence of draft -> sending -> sent
        """
        invoice = make_invoice()
        history = [invoice.status]

        for operation in operations:
            try:
                getattr(invoice, operation)()
            except InvalidTransitionError:
                pass
            if invoice.status != history[-1]:
                history.append(invoice.status)

        assert all(status in STATUS_ORDER for status in history)
        assert history == STATUS_ORDER[:len(history)]
