"""
Notification service for invoice lifecycle events.
"""

import logging
from typing import Optional

from invoicing.core.config import settings
from invoicing.models.invoice import Invoice
from invoicing.services.base_service import BaseService

logger = logging.getLogger(__name__)


class NotificationService(BaseService):
    """Announces paid invoices to the outside world."""

    def __init__(self, enabled: Optional[bool] = None):
        self.enabled = settings.NOTIFICATIONS_ENABLED if enabled is None else enabled

    async def invoice_paid(self, invoice: Invoice) -> bool:
        """
        Notify that an invoice has been paid.

        Returns:
            True if a notification was emitted
        """
        if not self.enabled:
            logger.debug("Notifications disabled", extra={"invoice_number": invoice.invoice_number})
            return False

        logger.info(
            f"Invoice {invoice.invoice_number} paid",
            extra={
                "invoice_id": str(invoice.id),
                "client_id": str(invoice.client_id),
                "total_amount": str(invoice.total_amount),
                "payment_date": invoice.payment_date.isoformat() if invoice.payment_date else None,
            },
        )
        return True
