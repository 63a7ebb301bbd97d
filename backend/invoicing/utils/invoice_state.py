"""
Invoice status transitions and the read-time payment status.

Overdue is derived from the due date whenever an invoice is read and is never
written back, so a later payment can never be masked by a stale status.
"""

from datetime import date, datetime, timezone
import enum
import logging
from typing import Any, Optional, Union

from invoicing.core.exceptions import ConflictException
from invoicing.models.invoice import InvoiceStatus

logger = logging.getLogger(__name__)


class PaymentStatus(str, enum.Enum):
    """Read-time payment status label."""
    PAID = "Paid"
    OVERDUE = "Overdue"
    PENDING = "Pending"


ALLOWED_TRANSITIONS = {
    InvoiceStatus.DRAFT: {InvoiceStatus.SENT, InvoiceStatus.PAID, InvoiceStatus.CANCELLED},
    InvoiceStatus.SENT: {InvoiceStatus.PAID, InvoiceStatus.CANCELLED},
    InvoiceStatus.PAID: set(),
    InvoiceStatus.CANCELLED: set(),
}


def _as_date(now: Optional[Union[date, datetime]]) -> date:
    if now is None:
        return datetime.now(timezone.utc).date()
    if isinstance(now, datetime):
        return now.date()
    return now


def derive_payment_status(invoice: Any, now: Optional[Union[date, datetime]] = None) -> PaymentStatus:
    """Paid if the invoice is paid, Overdue once past its due date, otherwise Pending."""
    if invoice.is_paid:
        return PaymentStatus.PAID
    if invoice.due_date is not None and _as_date(now) > invoice.due_date:
        return PaymentStatus.OVERDUE
    return PaymentStatus.PENDING


def effective_status(invoice: Any, now: Optional[Union[date, datetime]] = None) -> InvoiceStatus:
    """Stored status, with an unpaid sent invoice past its due date read as overdue."""
    if invoice.status == InvoiceStatus.SENT and derive_payment_status(invoice, now) == PaymentStatus.OVERDUE:
        return InvoiceStatus.OVERDUE
    return invoice.status


def can_transition(current: InvoiceStatus, target: InvoiceStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, set())


def transition_invoice(invoice: Any, target: InvoiceStatus) -> Any:
    """
    Move an invoice to a new stored status.

    Paid goes through mark_invoice_paid because it needs a payment date, and
    overdue is never stored.

    Raises:
        ConflictException: If the transition is not allowed; the invoice is left unchanged
    """
    target = InvoiceStatus(target)
    current = invoice.status

    if target == InvoiceStatus.OVERDUE:
        raise ConflictException(
            "Overdue is derived from the due date and cannot be set",
            details={"invoice_number": invoice.invoice_number},
        )
    if target == InvoiceStatus.PAID:
        raise ConflictException(
            "Use the mark-paid operation to record a payment date",
            details={"invoice_number": invoice.invoice_number},
        )
    if target == InvoiceStatus.CANCELLED and invoice.is_paid:
        raise ConflictException(
            "A paid invoice cannot be cancelled",
            details={"invoice_number": invoice.invoice_number},
        )
    if not can_transition(current, target):
        raise ConflictException(
            f"Invalid status transition from {current.value} to {target.value}",
            details={"invoice_number": invoice.invoice_number, "from": current.value, "to": target.value},
        )

    invoice.status = target
    logger.info(
        "Invoice status changed",
        extra={"invoice_number": invoice.invoice_number, "from": current.value, "to": target.value},
    )
    return invoice


def mark_invoice_paid(
    invoice: Any,
    payment_date: date,
    payment_method: Optional[str] = None,
    payment_reference: Optional[str] = None,
) -> Any:
    """
    Record an invoice as paid.

    Raises:
        ConflictException: If the invoice is cancelled or already paid; the invoice is left unchanged
    """
    if payment_date is None:
        raise ConflictException(
            "A payment date is required to mark an invoice paid",
            details={"invoice_number": invoice.invoice_number},
        )
    if invoice.status == InvoiceStatus.CANCELLED:
        raise ConflictException(
            "A cancelled invoice cannot be marked paid",
            details={"invoice_number": invoice.invoice_number},
        )
    if invoice.is_paid or invoice.status == InvoiceStatus.PAID:
        raise ConflictException(
            "Invoice is already paid",
            details={"invoice_number": invoice.invoice_number},
        )

    invoice.is_paid = True
    invoice.payment_date = payment_date
    if payment_method is not None:
        invoice.payment_method = payment_method
    if payment_reference is not None:
        invoice.payment_reference = payment_reference
    invoice.status = InvoiceStatus.PAID

    logger.info(
        "Invoice marked paid",
        extra={"invoice_number": invoice.invoice_number, "payment_date": payment_date.isoformat()},
    )
    return invoice
