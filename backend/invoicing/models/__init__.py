"""
Database models.
Import all models here to ensure they're registered with Base.
"""

from invoicing.models.client import Client, PaymentTerms
from invoicing.models.product import Product, ProductUnit
from invoicing.models.contract import Contract, ContractLineItem, ContractStatus, BillingCycle
from invoicing.models.invoice import Invoice, InvoiceLineItem, InvoiceStatus
from invoicing.models.payment import Payment
from invoicing.models.document_counter import DocumentCounter

__all__ = [
    "Client",
    "PaymentTerms",
    "Product",
    "ProductUnit",
    "Contract",
    "ContractLineItem",
    "ContractStatus",
    "BillingCycle",
    "Invoice",
    "InvoiceLineItem",
    "InvoiceStatus",
    "Payment",
    "DocumentCounter",
]
