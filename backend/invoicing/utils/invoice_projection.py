"""
Projection of priced line items and invoice drafts.

Used for direct invoice creation, contract creation and for deriving a new
invoice from an existing contract. Totals are always recomputed from the
lines; totals submitted by a caller are never trusted.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from invoicing.core.exceptions import (
    ConflictException,
    FailedPreconditionException,
    NotFoundException,
    ValidationException,
)
from invoicing.models.client import PaymentTerms
from invoicing.models.contract import Contract, ContractStatus
from invoicing.models.invoice import InvoiceStatus
from invoicing.models.product import Product
from invoicing.utils.invoice_math import DEFAULT_TAX_RATE, compute_line_amount, compute_totals, to_money, to_rate


PAYMENT_TERM_DAYS = {
    PaymentTerms.IMMEDIATE: 0,
    PaymentTerms.NET15: 15,
    PaymentTerms.NET30: 30,
    PaymentTerms.NET60: 60,
}
DEFAULT_DUE_DAYS = 30


@dataclass
class DraftLine:
    """A line item resolved against the product catalogue."""
    product_id: UUID
    description: Optional[str]
    quantity: Decimal
    unit_price: Decimal
    discount: Decimal
    amount: Decimal
    notes: Optional[str] = None
    row_order: int = 0


@dataclass
class InvoiceDraft:
    """Initial state of an invoice before it is numbered and persisted."""
    client_id: UUID
    issue_date: date
    due_date: date
    payment_terms: Optional[PaymentTerms]
    currency: str
    tax_rate: Decimal
    subtotal: Decimal
    tax: Decimal
    total_amount: Decimal
    line_items: List[DraftLine] = field(default_factory=list)
    contract_id: Optional[UUID] = None
    status: InvoiceStatus = InvoiceStatus.DRAFT


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


def normalize_payment_terms(payment_terms: Any) -> Optional[PaymentTerms]:
    """Coerce a payment terms value (enum or raw string) to PaymentTerms."""
    if payment_terms is None or isinstance(payment_terms, PaymentTerms):
        return payment_terms
    try:
        return PaymentTerms(str(payment_terms).lower())
    except ValueError:
        raise ValidationException(
            f"Unknown payment terms: {payment_terms}",
            details={"allowed": [term.value for term in PaymentTerms]},
        )


def compute_due_date(issue_date: date, payment_terms: Any = None) -> date:
    """Issue date plus the payment term offset, 30 days when no term is given."""
    terms = normalize_payment_terms(payment_terms)
    days = DEFAULT_DUE_DAYS if terms is None else PAYMENT_TERM_DAYS[terms]
    return issue_date + timedelta(days=days)


def price_line_items(lines: Iterable[Any], products: Iterable[Product]) -> List[DraftLine]:
    """
    Resolve requested lines against the product catalogue.

    Each line must expose product_id, quantity, unit_price and discount;
    description and notes are optional. A line without its own unit price
    inherits the product price.

    Raises:
        FailedPreconditionException: If a product is missing or inactive
    """
    products_by_id: Dict[UUID, Product] = {product.id: product for product in products}
    priced: List[DraftLine] = []

    for index, line in enumerate(lines):
        product = products_by_id.get(line.product_id)
        if product is None:
            raise FailedPreconditionException(
                f"Product {line.product_id} does not exist",
                details={"product_id": str(line.product_id)},
            )
        if not product.is_active:
            raise FailedPreconditionException(
                f"Product {line.product_id} is inactive",
                details={"product_id": str(line.product_id)},
            )

        # Lines are priced at the precision they are stored with
        quantity = None if line.quantity is None else to_money(line.quantity)
        unit_price = line.unit_price if line.unit_price is not None else product.price
        unit_price = None if unit_price is None else to_money(unit_price)
        discount = to_money(line.discount) if line.discount is not None else Decimal("0.00")
        amount = compute_line_amount(quantity, unit_price, discount)

        priced.append(
            DraftLine(
                product_id=product.id,
                description=getattr(line, "description", None) or product.name,
                quantity=quantity,
                unit_price=unit_price,
                discount=discount,
                amount=amount,
                notes=getattr(line, "notes", None),
                row_order=index,
            )
        )

    return priced


def build_invoice_draft(
    client_id: UUID,
    lines: Iterable[Any],
    products: Iterable[Product],
    issue_date: Optional[date] = None,
    payment_terms: Any = None,
    currency: str = "USD",
    tax_rate: Any = None,
    contract_id: Optional[UUID] = None,
) -> InvoiceDraft:
    """Price the lines, compute totals and due date, and return a draft invoice."""
    issue_date = issue_date or _utc_today()
    terms = normalize_payment_terms(payment_terms)
    rate = to_rate(DEFAULT_TAX_RATE if tax_rate is None else tax_rate)

    draft_lines = price_line_items(lines, products)
    if not draft_lines:
        raise ValidationException("An invoice requires at least one line item")
    totals = compute_totals(draft_lines, rate)

    return InvoiceDraft(
        client_id=client_id,
        contract_id=contract_id,
        issue_date=issue_date,
        due_date=compute_due_date(issue_date, terms),
        payment_terms=terms,
        currency=currency,
        tax_rate=rate,
        subtotal=totals.subtotal,
        tax=totals.tax,
        total_amount=totals.total,
        line_items=draft_lines,
    )


def project_invoice_from_contract(
    contract: Optional[Contract],
    products: Iterable[Product],
    issue_date: Optional[date] = None,
    tax_rate: Any = None,
) -> InvoiceDraft:
    """
    Derive a draft invoice from a contract.

    The client, currency, payment terms and line items are copied from the
    contract; totals are recomputed over the copied lines.

    Raises:
        NotFoundException: If the contract does not exist
        ConflictException: If the contract is deactivated or cancelled
        FailedPreconditionException: If a referenced product is missing or inactive
    """
    if contract is None:
        raise NotFoundException("Contract not found")
    if not contract.is_active:
        raise ConflictException(
            f"Contract {contract.contract_number} is deactivated",
            details={"contract_id": str(contract.id)},
        )
    if contract.status == ContractStatus.CANCELLED:
        raise ConflictException(
            f"Contract {contract.contract_number} is cancelled",
            details={"contract_id": str(contract.id)},
        )

    rate = tax_rate if tax_rate is not None else contract.tax_rate
    return build_invoice_draft(
        client_id=contract.client_id,
        lines=contract.line_items,
        products=products,
        issue_date=issue_date,
        payment_terms=contract.payment_terms,
        currency=contract.currency or "USD",
        tax_rate=rate,
        contract_id=contract.id,
    )
