# assessment_tax/infrastructure/audit.py
"""
Audit logger for administrative actions.

Records who changed which allowance cap, when, and from where, as
structured log lines that any log aggregator can ingest.
"""

import logging
from datetime import datetime, timezone
from typing import Any

logger = logging.getLogger("audit")


def log_admin_action(
    action: str,
    *,
    admin: str = "",
    admin_ip: str = "",
    details: dict[str, Any] | None = None,
) -> None:
    """Log an admin action (allowance cap update, etc.)."""
    logger.info(
        "ADMIN_ACTION action=%s admin=%s ip=%s time=%s details=%s",
        action,
        admin,
        admin_ip,
        datetime.now(timezone.utc).isoformat(),
        details or {},
    )
