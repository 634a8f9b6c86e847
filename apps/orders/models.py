"""
Order models for the refund ledger
An order carries a fixed total and owns the refunds issued against it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Sum
from django.utils.translation import gettext_lazy as _

from apps.common.types import Cents, ImmutableRecordError, RecordInvalidError

if TYPE_CHECKING:
    from apps.billing.models import Refund

logger = logging.getLogger(__name__)

# ===============================================================================
# ORDER MODEL
# ===============================================================================

class Order(models.Model):
    """
    Customer order with a fixed total.
    Status moves from paid to refunded once the first refund is recorded.
    """

    STATUS_PAID = 'paid'
    STATUS_REFUNDED = 'refunded'

    STATUS_CHOICES: ClassVar[tuple[tuple[str, str], ...]] = (
        (STATUS_PAID, _('Paid')),
        (STATUS_REFUNDED, _('Refunded')),  # At least one refund recorded
    )
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_PAID,
        help_text=_("Current order status")
    )

    # Amounts in cents for precision
    total_in_cents = models.BigIntegerField(
        validators=[MinValueValidator(0)],
        help_text=_("Order total in cents, fixed at creation")
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        verbose_name = _('Order')
        verbose_name_plural = _('Orders')
        ordering: ClassVar[tuple[str, ...]] = ('-created_at',)
        indexes: ClassVar[tuple[models.Index, ...]] = (
            models.Index(fields=['status', '-created_at'], name='orders_status_created_idx'),
        )

    def __str__(self) -> str:
        return f"Order #{self.pk} - {self.status} ({self.total_in_cents} cents)"

    def save(self, *args: Any, **kwargs: Any) -> None:
        """Default the status, validate new orders and keep the total fixed"""
        if not self.status:
            self.status = self.STATUS_PAID

        if self._state.adding:
            try:
                self.full_clean()
            except ValidationError as e:
                logger.warning(f"⚠️ [Orders] Rejected order: {e.messages}")
                raise RecordInvalidError(e.messages) from e

        update_fields = kwargs.get('update_fields')
        if not self._state.adding and (update_fields is None or 'total_in_cents' in update_fields):
            stored_total = (
                Order.objects.filter(pk=self.pk).values_list('total_in_cents', flat=True).first()
            )
            if stored_total is not None and stored_total != self.total_in_cents:
                raise ImmutableRecordError(
                    f"Order {self.pk} total is fixed at {stored_total} cents"
                )

        super().save(*args, **kwargs)

    # ===============================================================================
    # STATUS
    # ===============================================================================

    @property
    def is_paid(self) -> bool:
        """Check if order is paid and not yet refunded"""
        return self.status == self.STATUS_PAID

    @property
    def is_refunded(self) -> bool:
        """Check if at least one refund was recorded"""
        return self.status == self.STATUS_REFUNDED

    def mark_refunded(self) -> None:
        """Move the order to refunded; no reversal exists"""
        if self.is_refunded:
            return
        self.status = self.STATUS_REFUNDED
        self.save(update_fields=['status', 'updated_at'])
        logger.info(f"💸 [Orders] Order {self.pk} marked as refunded")

    # ===============================================================================
    # REFUND ACCOUNTING
    # ===============================================================================

    def refund(self, amount: Cents | None = None) -> Refund:
        """
        Record a refund against this order.
        Refunds the whole remaining balance when no amount is given.
        Raises RecordInvalidError if the amount exceeds the refundable balance.
        """
        if amount is None:
            amount = self.refundable_amount_in_cents()
        return self.refunds.create(amount_in_cents=amount)

    def refunded_amount_in_cents(self) -> Cents:
        """Sum of all refunds recorded against this order"""
        return self.refunds.aggregate(total=Sum('amount_in_cents'))['total'] or 0

    def refundable_amount_in_cents(self) -> Cents:
        """Remaining balance that can still be refunded"""
        return self.total_in_cents - self.refunded_amount_in_cents()

    def can_refund(self, amount: Cents | None = None) -> bool:
        """Check whether a refund of amount (or any refund) is possible"""
        if amount is not None:
            return amount <= self.refundable_amount_in_cents()
        return self.refundable_amount_in_cents() > 0
