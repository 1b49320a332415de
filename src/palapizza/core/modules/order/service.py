from typing import Any

import structlog

from palapizza.core.core import Service
from palapizza.core.modules.order.models import Order, OrderStatus, OrderSubmission
from palapizza.core.modules.order.rows import parse_order_rows, parse_status
from palapizza.core.modules.order.validators import is_spam, validate_submission
from palapizza.core.modules.store.models import MAX_LIST_LIMIT
from palapizza.core.modules.whatsapp.links import build_status_message, build_whatsapp_url
from palapizza.errors import NotFoundError, ValidationError

logger = structlog.get_logger(__name__)


class OrderService(Service):
    """Order workflow on top of the store: submission, listing and status changes."""

    async def submit_order(self, submission: OrderSubmission) -> Any | None:
        """Validate and forward a new order. Returns None when the submission was dropped as spam."""
        self.core.services.store.ensure_submit_configured()
        if is_spam(submission):
            logger.info("order_spam_skipped")
            return None
        row = validate_submission(submission)
        result = await self.core.services.store.append_order(row)
        logger.info("order_submitted", type=row["tipo"], channel=row["canale"])
        return result

    async def list_orders(self, limit: Any = None) -> tuple[list[Order], int]:
        data = await self.core.services.store.list_rows(limit)
        return parse_order_rows(data.rows), data.count

    async def get_order(self, order_id: str) -> Order:
        orders, _ = await self.list_orders(MAX_LIST_LIMIT)
        order = next((o for o in orders if o.id == order_id), None)
        if order is None:
            raise NotFoundError(f"Ordine '{order_id}' non trovato")
        return order

    async def update_status(
        self, order_id: str, raw_status: str, notify: bool = False, mobile: bool = False
    ) -> tuple[OrderStatus, Any, str | None]:
        """Move an order to a new status. Any known spelling of the status is accepted.

        With ``notify`` the customer link is built before the store is written, so a
        missing row or a failed lookup leaves the status untouched.
        """
        order_id = order_id.strip()
        if not order_id:
            raise ValidationError("Manca id")
        status = parse_status(raw_status) if raw_status.strip() else None
        if status is None:
            raise ValidationError("Stato non valido")

        whatsapp_url = await self.build_notification_url(order_id, status, mobile) if notify else None
        result = await self.core.services.store.update_status(order_id, status)
        return status, result, whatsapp_url

    async def build_notification_url(self, order_id: str, status: OrderStatus, mobile: bool) -> str:
        """WhatsApp link telling the customer about ``status``, empty for NEW or a missing phone."""
        if status is OrderStatus.NEW:
            return ""
        order = await self.get_order(order_id)
        return build_whatsapp_url(order.phone, build_status_message(order, status), mobile=mobile)
