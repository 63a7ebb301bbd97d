"""
Invoice projection tests: due dates, line pricing and contract projection.
"""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

import pytest

from invoicing.core.exceptions import (
    ConflictException,
    FailedPreconditionException,
    NotFoundException,
    ValidationException,
)
from invoicing.models.client import PaymentTerms
from invoicing.models.contract import ContractStatus
from invoicing.models.invoice import InvoiceStatus
from invoicing.utils.invoice_math import compute_totals, to_rate
from invoicing.utils.invoice_projection import (
    build_invoice_draft,
    compute_due_date,
    price_line_items,
    project_invoice_from_contract,
)


def make_product(price="100.00", is_active=True, name="Consulting"):
    return SimpleNamespace(id=uuid4(), name=name, price=Decimal(price), is_active=is_active)


def make_line(product, quantity="1", unit_price=None, discount="0", description=None):
    return SimpleNamespace(
        product_id=product.id,
        quantity=Decimal(quantity),
        unit_price=None if unit_price is None else Decimal(unit_price),
        discount=Decimal(discount),
        description=description,
        notes=None,
    )


def make_contract(lines, **kwargs):
    values = {
        "id": uuid4(),
        "contract_number": "CON-000001",
        "client_id": uuid4(),
        "is_active": True,
        "status": ContractStatus.ACTIVE,
        "payment_terms": PaymentTerms.NET15,
        "currency": "EUR",
        "tax_rate": Decimal("0.10"),
        "line_items": lines,
    }
    values.update(kwargs)
    return SimpleNamespace(**values)


@pytest.mark.parametrize(
    "terms, expected",
    [
        (PaymentTerms.IMMEDIATE, date(2024, 1, 1)),
        (PaymentTerms.NET15, date(2024, 1, 16)),
        (PaymentTerms.NET30, date(2024, 1, 31)),
        (PaymentTerms.NET60, date(2024, 3, 1)),
        ("net15", date(2024, 1, 16)),
        (None, date(2024, 1, 31)),
    ],
)
def test_due_date_follows_payment_terms(terms, expected):
    assert compute_due_date(date(2024, 1, 1), terms) == expected


def test_due_date_rejects_unknown_terms():
    with pytest.raises(ValidationException):
        compute_due_date(date(2024, 1, 1), "net45")


def test_line_without_price_inherits_product_price():
    product = make_product(price="75.50")
    priced = price_line_items([make_line(product, quantity="2")], [product])

    assert priced[0].unit_price == Decimal("75.50")
    assert priced[0].amount == Decimal("151.00")
    assert priced[0].description == "Consulting"


def test_line_price_overrides_product_price():
    product = make_product(price="75.50")
    priced = price_line_items(
        [make_line(product, unit_price="60.00", discount="50", description="Discounted hours")],
        [product],
    )

    assert priced[0].amount == Decimal("30.00")
    assert priced[0].description == "Discounted hours"


def test_missing_product_is_named_in_error():
    product = make_product()
    with pytest.raises(FailedPreconditionException) as exc_info:
        price_line_items([make_line(product)], [])
    assert str(product.id) in exc_info.value.message


def test_inactive_product_is_rejected():
    product = make_product(is_active=False)
    with pytest.raises(FailedPreconditionException) as exc_info:
        price_line_items([make_line(product)], [product])
    assert str(product.id) in exc_info.value.message


def test_draft_requires_line_items():
    with pytest.raises(ValidationException):
        build_invoice_draft(uuid4(), [], [], issue_date=date(2024, 1, 1))


def test_projection_copies_contract_and_recomputes_totals():
    hosting = make_product(price="50.00", name="Hosting")
    support = make_product(price="100.00", name="Support")
    contract = make_contract(
        [
            make_line(hosting, quantity="2", unit_price="50.00"),
            make_line(support, quantity="1", unit_price="100.00", discount="10"),
        ]
    )

    draft = project_invoice_from_contract(contract, [hosting, support], issue_date=date(2024, 1, 1))

    assert draft.status == InvoiceStatus.DRAFT
    assert draft.client_id == contract.client_id
    assert draft.contract_id == contract.id
    assert draft.currency == "EUR"
    assert draft.payment_terms == PaymentTerms.NET15
    assert draft.due_date == date(2024, 1, 16)
    assert [line.product_id for line in draft.line_items] == [hosting.id, support.id]
    assert [line.row_order for line in draft.line_items] == [0, 1]
    assert draft.subtotal == Decimal("190.00")
    assert draft.tax == Decimal("19.00")
    assert draft.total_amount == Decimal("209.00")


def test_projection_tax_rate_can_be_overridden():
    product = make_product()
    contract = make_contract([make_line(product, unit_price="100.00")])

    draft = project_invoice_from_contract(contract, [product], issue_date=date(2024, 1, 1), tax_rate="0.20")

    assert draft.tax_rate == Decimal("0.20")
    assert draft.total_amount == Decimal("120.00")


def test_projection_defaults_issue_date_to_today():
    product = make_product()
    contract = make_contract([make_line(product)], payment_terms=PaymentTerms.IMMEDIATE)

    draft = project_invoice_from_contract(contract, [product])

    assert draft.due_date == draft.issue_date


def test_projection_of_missing_contract_is_not_found():
    with pytest.raises(NotFoundException):
        project_invoice_from_contract(None, [])


def test_projection_of_deactivated_contract_conflicts():
    product = make_product()
    contract = make_contract([make_line(product)], is_active=False)
    with pytest.raises(ConflictException):
        project_invoice_from_contract(contract, [product])


def test_projection_of_cancelled_contract_conflicts():
    product = make_product()
    contract = make_contract([make_line(product)], status=ContractStatus.CANCELLED)
    with pytest.raises(ConflictException):
        project_invoice_from_contract(contract, [product])


def test_projection_with_deactivated_product_fails_precondition():
    product = make_product(is_active=False)
    contract = make_contract([make_line(product)])
    with pytest.raises(FailedPreconditionException):
        project_invoice_from_contract(contract, [product])


def test_line_values_are_priced_at_stored_precision():
    product = make_product(price="100.00")
    priced = price_line_items([make_line(product, quantity="3", discount="33.333")], [product])

    assert priced[0].discount == Decimal("33.33")
    assert priced[0].amount == Decimal("200.01")


def test_projected_totals_match_contract_totals_for_fractional_discount():
    product = make_product(price="100.00")
    stored_lines = price_line_items([make_line(product, quantity="3", discount="33.333")], [product])
    contract_totals = compute_totals(stored_lines, "0.12345")
    contract = make_contract(stored_lines, tax_rate=to_rate("0.12345"))

    draft = project_invoice_from_contract(contract, [product], issue_date=date(2024, 1, 1))

    assert (draft.subtotal, draft.tax, draft.total_amount) == (
        contract_totals.subtotal,
        contract_totals.tax,
        contract_totals.total,
    )
    assert [line.amount for line in draft.line_items] == [line.amount for line in stored_lines]
