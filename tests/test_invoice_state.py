"""
Invoice status transition and derived payment status tests.
"""

from datetime import date, datetime, timezone
from types import SimpleNamespace

import pytest

from invoicing.core.exceptions import ConflictException
from invoicing.models.invoice import InvoiceStatus
from invoicing.utils.invoice_state import (
    PaymentStatus,
    can_transition,
    derive_payment_status,
    effective_status,
    mark_invoice_paid,
    transition_invoice,
)


def make_invoice(status=InvoiceStatus.DRAFT, is_paid=False, due_date=date(2024, 1, 31)):
    return SimpleNamespace(
        invoice_number="INV-000001",
        status=status,
        is_paid=is_paid,
        due_date=due_date,
        payment_date=None,
        payment_method=None,
        payment_reference=None,
    )


def test_paid_invoice_reads_paid_even_when_past_due():
    invoice = make_invoice(status=InvoiceStatus.PAID, is_paid=True)
    assert derive_payment_status(invoice, date(2024, 6, 1)) == PaymentStatus.PAID


def test_unpaid_invoice_past_due_reads_overdue():
    invoice = make_invoice(status=InvoiceStatus.SENT)
    assert derive_payment_status(invoice, date(2024, 2, 1)) == PaymentStatus.OVERDUE


def test_unpaid_invoice_on_due_date_is_pending():
    invoice = make_invoice(status=InvoiceStatus.SENT)
    assert derive_payment_status(invoice, date(2024, 1, 31)) == PaymentStatus.PENDING


def test_payment_status_accepts_datetimes():
    invoice = make_invoice(status=InvoiceStatus.SENT)
    now = datetime(2024, 2, 1, 9, 30, tzinfo=timezone.utc)
    assert derive_payment_status(invoice, now) == PaymentStatus.OVERDUE


def test_effective_status_reads_overdue_for_late_sent_invoice():
    invoice = make_invoice(status=InvoiceStatus.SENT)

    assert effective_status(invoice, date(2024, 2, 1)) == InvoiceStatus.OVERDUE
    assert invoice.status == InvoiceStatus.SENT


def test_effective_status_leaves_drafts_and_cancellations_alone():
    assert effective_status(make_invoice(), date(2024, 2, 1)) == InvoiceStatus.DRAFT
    cancelled = make_invoice(status=InvoiceStatus.CANCELLED)
    assert effective_status(cancelled, date(2024, 2, 1)) == InvoiceStatus.CANCELLED


def test_late_payment_is_not_masked_by_overdue():
    invoice = make_invoice(status=InvoiceStatus.SENT)
    assert derive_payment_status(invoice, date(2024, 3, 1)) == PaymentStatus.OVERDUE

    mark_invoice_paid(invoice, date(2024, 3, 1))

    assert derive_payment_status(invoice, date(2024, 3, 1)) == PaymentStatus.PAID
    assert effective_status(invoice, date(2024, 3, 1)) == InvoiceStatus.PAID


@pytest.mark.parametrize(
    "current, target, allowed",
    [
        (InvoiceStatus.DRAFT, InvoiceStatus.SENT, True),
        (InvoiceStatus.DRAFT, InvoiceStatus.CANCELLED, True),
        (InvoiceStatus.SENT, InvoiceStatus.PAID, True),
        (InvoiceStatus.SENT, InvoiceStatus.DRAFT, False),
        (InvoiceStatus.PAID, InvoiceStatus.SENT, False),
        (InvoiceStatus.CANCELLED, InvoiceStatus.SENT, False),
        (InvoiceStatus.CANCELLED, InvoiceStatus.PAID, False),
    ],
)
def test_can_transition(current, target, allowed):
    assert can_transition(current, target) is allowed


def test_send_draft():
    invoice = transition_invoice(make_invoice(), InvoiceStatus.SENT)
    assert invoice.status == InvoiceStatus.SENT


def test_cancel_sent_invoice():
    invoice = transition_invoice(make_invoice(status=InvoiceStatus.SENT), InvoiceStatus.CANCELLED)
    assert invoice.status == InvoiceStatus.CANCELLED


def test_overdue_cannot_be_stored():
    invoice = make_invoice(status=InvoiceStatus.SENT)
    with pytest.raises(ConflictException):
        transition_invoice(invoice, InvoiceStatus.OVERDUE)
    assert invoice.status == InvoiceStatus.SENT


def test_paid_goes_through_mark_paid():
    invoice = make_invoice(status=InvoiceStatus.SENT)
    with pytest.raises(ConflictException):
        transition_invoice(invoice, InvoiceStatus.PAID)
    assert invoice.is_paid is False


def test_paid_invoice_cannot_be_cancelled():
    invoice = make_invoice(status=InvoiceStatus.PAID, is_paid=True)
    with pytest.raises(ConflictException):
        transition_invoice(invoice, InvoiceStatus.CANCELLED)
    assert invoice.status == InvoiceStatus.PAID


def test_cancelled_invoice_cannot_be_resent():
    invoice = make_invoice(status=InvoiceStatus.CANCELLED)
    with pytest.raises(ConflictException):
        transition_invoice(invoice, InvoiceStatus.SENT)
    assert invoice.status == InvoiceStatus.CANCELLED


def test_mark_paid_records_payment_details():
    invoice = make_invoice(status=InvoiceStatus.SENT)

    mark_invoice_paid(invoice, date(2024, 1, 20), payment_method="bank_transfer", payment_reference="TX-1")

    assert invoice.status == InvoiceStatus.PAID
    assert invoice.is_paid is True
    assert invoice.payment_date == date(2024, 1, 20)
    assert invoice.payment_method == "bank_transfer"
    assert invoice.payment_reference == "TX-1"


def test_mark_paid_requires_payment_date():
    invoice = make_invoice(status=InvoiceStatus.SENT)
    with pytest.raises(ConflictException):
        mark_invoice_paid(invoice, None)
    assert invoice.is_paid is False


def test_cancelled_invoice_cannot_be_marked_paid():
    invoice = make_invoice(status=InvoiceStatus.CANCELLED)

    with pytest.raises(ConflictException):
        mark_invoice_paid(invoice, date(2024, 1, 20))

    assert invoice.status == InvoiceStatus.CANCELLED
    assert invoice.is_paid is False
    assert invoice.payment_date is None


def test_invoice_cannot_be_paid_twice():
    invoice = make_invoice(status=InvoiceStatus.SENT)
    mark_invoice_paid(invoice, date(2024, 1, 20))

    with pytest.raises(ConflictException):
        mark_invoice_paid(invoice, date(2024, 1, 25))
    assert invoice.payment_date == date(2024, 1, 20)
