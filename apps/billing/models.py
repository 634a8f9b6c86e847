"""
Billing models for the order ledger
Import models from the refund_models module for Django to discover them.
"""

from .refund_models import Refund

__all__ = ["Refund"]
