"""
Test suite for the Order model
Tests status defaults, refund accounting and refundability checks.
"""

from django.test import TestCase

from apps.common.types import ImmutableRecordError, RecordInvalidError
from apps.orders.models import Order


class OrderStatusTestCase(TestCase):
    """Test cases for order status handling"""

    def test_new_order_is_paid(self):
        """New orders start as paid"""
        order = Order.objects.create(total_in_cents=16_000)

        self.assertTrue(order.is_paid)
        self.assertFalse(order.is_refunded)

    def test_empty_status_defaults_to_paid(self):
        """An explicitly empty status falls back to paid on save"""
        order = Order.objects.create(total_in_cents=16_000, status='')

        order.refresh_from_db()
        self.assertEqual(order.status, Order.STATUS_PAID)

    def test_refund_marks_order_refunded(self):
        """Any refund moves the order to refunded"""
        order = Order.objects.create(total_in_cents=16_000)

        order.refund(400)
        order.refresh_from_db()

        self.assertTrue(order.is_refunded)

    def test_status_stays_refunded_after_further_refunds(self):
        """Later successful refunds keep the refunded status"""
        order = Order.objects.create(total_in_cents=16_000)

        order.refund(4000)
        order.refund(3000)
        order.refund()
        order.refresh_from_db()

        self.assertTrue(order.is_refunded)
        self.assertEqual(order.refunds.count(), 3)

    def test_negative_total_is_rejected(self):
        """Orders cannot be created with a negative total"""
        with self.assertRaises(RecordInvalidError):
            Order.objects.create(total_in_cents=-5)

        self.assertFalse(Order.objects.exists())

    def test_missing_total_is_rejected(self):
        with self.assertRaises(RecordInvalidError):
            Order.objects.create()

        self.assertFalse(Order.objects.exists())

    def test_status_stays_refunded_after_failed_refund(self):
        """A rejected refund does not revert the status"""
        order = Order.objects.create(total_in_cents=16_000)
        order.refund(400)

        with self.assertRaises(RecordInvalidError):
            order.refund(20_000)

        order.refresh_from_db()
        self.assertTrue(order.is_refunded)

    def test_mark_refunded_is_idempotent(self):
        """Marking twice keeps a single refunded status"""
        order = Order.objects.create(total_in_cents=16_000)

        order.mark_refunded()
        order.mark_refunded()
        order.refresh_from_db()

        self.assertEqual(order.status, Order.STATUS_REFUNDED)

    def test_total_is_fixed_after_creation(self):
        """Changing the total of a saved order is rejected"""
        order = Order.objects.create(total_in_cents=16_000)
        order.total_in_cents = 20_000

        with self.assertRaises(ImmutableRecordError):
            order.save()

        order.refresh_from_db()
        self.assertEqual(order.total_in_cents, 16_000)

    def test_str(self):
        order = Order.objects.create(total_in_cents=16_000)

        self.assertEqual(str(order), f"Order #{order.pk} - paid (16000 cents)")


class OrderRefundAccountingTestCase(TestCase):
    """Test cases for refunded and refundable amounts"""

    def setUp(self):
        """Set up test data"""
        self.order = Order.objects.create(total_in_cents=16_000)

    def test_refunded_amount_is_zero_without_refunds(self):
        self.assertEqual(self.order.refunded_amount_in_cents(), 0)
        self.assertEqual(self.order.refundable_amount_in_cents(), 16_000)

    def test_refundable_amount_decreases_with_each_refund(self):
        """Partial refunds reduce the refundable balance"""
        self.order.refund(6000)
        self.assertEqual(self.order.refundable_amount_in_cents(), 10_000)

        self.order.refund(6000)
        self.assertEqual(self.order.refundable_amount_in_cents(), 4000)

    def test_refunded_amount_sums_refunds(self):
        self.order.refund(4000)
        self.order.refund(3000)

        self.assertEqual(self.order.refunded_amount_in_cents(), 7000)

    def test_full_refund_by_default(self):
        """Refund without an amount covers the whole remaining balance"""
        self.order.refund()

        self.assertEqual(self.order.refunded_amount_in_cents(), self.order.total_in_cents)
        self.assertEqual(self.order.refundable_amount_in_cents(), 0)

    def test_default_refund_after_partial_refund(self):
        self.order.refund(4000)

        refund = self.order.refund()

        self.assertEqual(refund.amount_in_cents, 12_000)
        self.assertEqual(self.order.refundable_amount_in_cents(), 0)

    def test_refund_exceeding_total_is_rejected(self):
        """Refunding more than the total fails and persists nothing"""
        with self.assertRaises(RecordInvalidError) as ctx:
            self.order.refund(17_000)

        self.assertEqual(str(ctx.exception), 'Validation failed: Amount in cents is invalid')
        self.assertEqual(ctx.exception.messages, ['Amount in cents is invalid'])

        self.order.refresh_from_db()
        self.assertTrue(self.order.is_paid)
        self.assertEqual(self.order.refunded_amount_in_cents(), 0)
        self.assertEqual(self.order.refunds.count(), 0)

    def test_refund_exceeding_remaining_balance_is_rejected(self):
        self.order.refund(10_000)

        with self.assertRaises(RecordInvalidError):
            self.order.refund(6001)

        self.assertEqual(self.order.refunded_amount_in_cents(), 10_000)

    def test_full_refund_of_large_total(self):
        """Large totals are refunded in full without an amount cap"""
        order = Order.objects.create(total_in_cents=2 * 10**15)

        refund = order.refund()

        self.assertEqual(refund.amount_in_cents, 2 * 10**15)
        self.assertEqual(order.refundable_amount_in_cents(), 0)

    def test_huge_amount_is_reported_as_invalid_amount(self):
        with self.assertRaises(RecordInvalidError) as ctx:
            self.order.refund(10**16)

        self.assertEqual(ctx.exception.messages, ['Amount in cents is invalid'])
        self.assertEqual(self.order.refunded_amount_in_cents(), 0)

    def test_refund_of_exact_remaining_balance(self):
        self.order.refund(10_000)
        self.order.refund(6000)

        self.assertEqual(self.order.refundable_amount_in_cents(), 0)

    def test_sum_of_refunds_never_exceeds_total(self):
        """Sequence of accepted and rejected refunds keeps the invariant"""
        for amount in (5000, 7000, 5000, 3000, 1000, 2000):
            try:
                self.order.refund(amount)
            except RecordInvalidError:
                pass
            self.assertLessEqual(self.order.refunded_amount_in_cents(), self.order.total_in_cents)

        self.assertEqual(self.order.refunded_amount_in_cents(), 16_000)
        self.assertEqual(self.order.refunds.count(), 4)


class OrderCanRefundTestCase(TestCase):
    """Test cases for refundability checks"""

    def setUp(self):
        """Set up test data"""
        self.order = Order.objects.create(total_in_cents=16_000)

    def test_new_order_can_be_refunded(self):
        self.assertTrue(self.order.can_refund())

    def test_fully_refunded_order_cannot_be_refunded(self):
        self.order.refund()

        self.assertIs(self.order.can_refund(), False)

    def test_amount_above_total_cannot_be_refunded(self):
        self.assertIs(self.order.can_refund(17_000), False)

    def test_can_refund_for_amount(self):
        """Amount checks follow the remaining balance"""
        self.assertTrue(self.order.can_refund(16_000))

        self.order.refund(4000)

        self.assertIs(self.order.can_refund(14_000), False)
        self.assertTrue(self.order.can_refund(12_000))

        self.order.refund()

        self.assertIs(self.order.can_refund(), False)
        self.assertTrue(self.order.can_refund(0))

    def test_zero_total_order_cannot_be_refunded(self):
        order = Order.objects.create(total_in_cents=0)

        self.assertIs(order.can_refund(), False)
