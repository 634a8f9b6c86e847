"""
Refund Service for the order ledger
Handles refund processing and eligibility checks with the Result pattern.
"""

from __future__ import annotations

import logging
from typing import Any, TypedDict

from django.db import transaction

from apps.common.types import Cents, Err, Ok, RecordInvalidError, Result
from apps.common.validators import log_security_event
from apps.orders.models import Order

from .refund_models import Refund

logger = logging.getLogger(__name__)


class RefundEligibility(TypedDict):
    """Refund eligibility TypedDict"""

    is_eligible: bool
    max_refund_amount_cents: int
    already_refunded_cents: int
    reason: str


class RefundService:
    """RefundService implementation with Result pattern"""

    @staticmethod
    def refund_order(order_id: Any, amount_cents: Cents | None = None) -> Result[Refund, str]:
        """Refund an order, defaulting to the full remaining balance"""
        order_result = RefundService._get_order(order_id)
        if order_result.is_err():
            return order_result

        order = order_result.unwrap()

        try:
            with transaction.atomic():
                refund = order.refund(amount_cents)
        except RecordInvalidError as e:
            return Err(str(e))

        log_security_event(
            event_type="refund_processed",
            details={
                "refund_id": refund.pk,
                "order_id": order.pk,
                "amount_cents": refund.amount_in_cents,
                "remaining_cents": order.refundable_amount_in_cents(),
                "critical_financial_operation": True,
            },
        )
        return Ok(refund)

    @staticmethod
    def _get_order(order_id: Any) -> Result[Order, str]:
        """Get order by ID with error handling"""
        try:
            return Ok(Order.objects.get(pk=order_id))
        except Order.DoesNotExist:
            logger.warning(f"⚠️ [Refunds] Refund requested for unknown order {order_id}")
            return Err("Failed to process refund: Order not found")

    @staticmethod
    def get_refund_eligibility(order: Order) -> RefundEligibility:
        """Summarize how much of an order can still be refunded"""
        already_refunded = order.refunded_amount_in_cents()
        max_refund = order.total_in_cents - already_refunded

        if max_refund > 0:
            reason = "Order has a refundable balance"
        else:
            reason = "Order is fully refunded - not eligible for refund"

        return RefundEligibility(
            is_eligible=max_refund > 0,
            max_refund_amount_cents=max(max_refund, 0),
            already_refunded_cents=already_refunded,
            reason=reason,
        )
