"""
Security logging helpers shared across apps.
"""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)

# ===============================================================================
# SECURITY EVENT LOGGING
# ===============================================================================

def log_security_event(event_type: str, details: dict[str, Any], request_ip: str | None = None) -> None:
    """
    Log security and financial events for monitoring and forensics
    """
    logger.warning(f"🚨 [Security] {event_type}: {details} from IP: {request_ip}")
