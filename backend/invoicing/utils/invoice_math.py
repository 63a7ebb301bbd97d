"""
Money and line item arithmetic for contracts and invoices.

All amounts are Decimal. Each line amount is rounded to cents (half up), the
subtotal is the exact sum of the rounded lines, tax is rounded once on the
subtotal and the total is subtotal plus tax.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Iterable, Optional, Protocol

from invoicing.core.exceptions import ValidationException


CENT = Decimal("0.01")
RATE_STEP = Decimal("0.0001")
HUNDRED = Decimal("100")
DEFAULT_TAX_RATE = Decimal("0.10")


class PricedLine(Protocol):
    """Anything carrying the three priced fields of a line item."""
    quantity: Any
    unit_price: Any
    discount: Any


@dataclass(frozen=True)
class Totals:
    """Computed document totals."""
    subtotal: Decimal
    tax: Decimal
    total: Decimal


def to_decimal(value: Any, field: str = "value") -> Decimal:
    """Convert an int, str, float or Decimal to a finite Decimal without binary drift."""
    if isinstance(value, bool):
        raise ValidationException(f"{field} must be numeric", details={"field": field})
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            # floats go through their shortest repr so 0.1 stays 0.1
            result = Decimal(str(value))
        except (InvalidOperation, ValueError, TypeError):
            raise ValidationException(f"{field} must be numeric", details={"field": field, "value": str(value)})
    if not result.is_finite():
        raise ValidationException(f"{field} must be a finite number", details={"field": field, "value": str(value)})
    return result


def to_money(value: Any) -> Decimal:
    """Quantize a value to cents, rounding half up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def to_rate(value: Any, field: str = "tax_rate") -> Decimal:
    """Quantize a tax rate to the four places rates are stored with."""
    return to_decimal(value, field).quantize(RATE_STEP, rounding=ROUND_HALF_UP)


def compute_line_amount(
    quantity: Any,
    unit_price: Any,
    discount_percent: Optional[Any] = None,
) -> Decimal:
    """
    Compute quantity * unit_price * (1 - discount / 100), rounded to cents.

    Args:
        quantity: Number of units, required and non-negative
        unit_price: Price per unit, required and non-negative
        discount_percent: Discount between 0 and 100; None means no discount

    Returns:
        Line amount as a cent-quantized Decimal

    Raises:
        ValidationException: If a required field is missing or out of range
    """
    if quantity is None:
        raise ValidationException("Line item quantity is required", details={"field": "quantity"})
    if unit_price is None:
        raise ValidationException("Line item unit price is required", details={"field": "unit_price"})

    qty = to_decimal(quantity, "quantity")
    price = to_decimal(unit_price, "unit_price")
    discount = Decimal(0) if discount_percent is None else to_decimal(discount_percent, "discount")

    if qty < 0:
        raise ValidationException("Line item quantity must not be negative", details={"quantity": str(qty)})
    if price < 0:
        raise ValidationException("Line item unit price must not be negative", details={"unit_price": str(price)})
    if discount < 0 or discount > HUNDRED:
        raise ValidationException("Line item discount must be between 0 and 100", details={"discount": str(discount)})

    return to_money(qty * price * (HUNDRED - discount) / HUNDRED)


def compute_totals(lines: Iterable[PricedLine], tax_rate: Any = DEFAULT_TAX_RATE) -> Totals:
    """
    Compute subtotal, tax and total over a document's line items.

    Args:
        lines: Objects exposing quantity, unit_price and discount
        tax_rate: Flat rate applied to the subtotal, between 0 and 1, taken
            to four places

    Returns:
        Totals for the document
    """
    rate = to_rate(DEFAULT_TAX_RATE if tax_rate is None else tax_rate)
    if rate < 0 or rate > 1:
        raise ValidationException("Tax rate must be between 0 and 1", details={"tax_rate": str(rate)})

    subtotal = sum(
        (compute_line_amount(line.quantity, line.unit_price, line.discount) for line in lines),
        Decimal("0.00"),
    )
    subtotal = to_money(subtotal)
    tax = to_money(subtotal * rate)
    return Totals(subtotal=subtotal, tax=tax, total=subtotal + tax)
