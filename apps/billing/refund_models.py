"""
Refund models for the order ledger
Immutable refund records validated against the parent order's balance.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.core.validators import MinValueValidator
from django.db import models, transaction
from django.utils.translation import gettext_lazy as _

from apps.common.types import ImmutableRecordError, RecordInvalidError

logger = logging.getLogger(__name__)

# ===============================================================================
# REFUND MODELS
# ===============================================================================


class Refund(models.Model):
    """
    A partial or full refund against an order.
    Validated and inserted once, never updated or deleted.
    """

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.RESTRICT,
        related_name="refunds",
        error_messages={
            "null": _("Order can't be blank"),
            "blank": _("Order can't be blank"),
        },
    )

    # Financial amounts
    amount_in_cents = models.BigIntegerField(validators=[MinValueValidator(0)])

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "refunds"
        verbose_name = _("Refund")
        verbose_name_plural = _("Refunds")
        ordering: ClassVar[tuple[str, ...]] = ("created_at", "id")
        indexes: ClassVar[tuple[models.Index, ...]] = (
            models.Index(fields=["order", "created_at"], name="refunds_order_created_idx"),
        )

    def __str__(self) -> str:
        return f"Refund #{self.pk} - Order #{self.order_id} - {self.amount_in_cents} cents"

    def clean(self) -> None:
        """Validate the amount against the order's refundable balance"""
        super().clean()

        # Missing or unknown order is reported by the field validation
        if self.order_id is None or self.amount_in_cents is None:
            return
        try:
            order = self.order
        except ObjectDoesNotExist:
            return

        if self.amount_in_cents > order.refundable_amount_in_cents():
            raise ValidationError(_("Amount in cents is invalid"), code="invalid_amount")

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self._state.adding:
            raise ImmutableRecordError(f"Refund {self.pk} cannot be modified")

        with transaction.atomic():
            self._lock_order()
            try:
                self.full_clean()
            except ValidationError as e:
                logger.warning(f"⚠️ [Refunds] Rejected refund for order {self.order_id}: {e.messages}")
                raise RecordInvalidError(e.messages) from e

            super().save(*args, **kwargs)
            self.order.mark_refunded()

        logger.info(f"💸 [Refunds] Refund {self.pk} of {self.amount_in_cents} cents recorded for order {self.order_id}")

    def delete(self, *args: Any, **kwargs: Any) -> Any:
        raise ImmutableRecordError(f"Refund {self.pk} cannot be deleted")

    def _lock_order(self) -> None:
        """Serialize balance checks for the same order"""
        if self.order_id is None:
            return
        from apps.orders.models import Order  # noqa: PLC0415 - Circular import prevention

        Order.objects.select_for_update().filter(pk=self.order_id).first()
