# assessment_tax/domain/models/allowance_config.py
"""
Allowance cap registry.

AllowanceRegistry: per-type maximum allowance amounts, shared by every
request an application instance serves. The "personal" and "k-receipt"
caps can be changed at runtime by an administrator; "donation" is fixed.
"""

from __future__ import annotations

import threading
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Mapping

DONATION = "donation"
K_RECEIPT = "k-receipt"
PERSONAL = "personal"

DEFAULT_CAPS: dict[str, Decimal] = {
    DONATION: Decimal("100000"),
    K_RECEIPT: Decimal("50000"),
    PERSONAL: Decimal("60000"),
}

# Admin-adjustable bounds (inclusive)
PERSONAL_CAP_MIN = Decimal("10000")
PERSONAL_CAP_MAX = Decimal("100000")
K_RECEIPT_CAP_MIN = Decimal("0")
K_RECEIPT_CAP_MAX = Decimal("100000")


class CapOutOfRangeError(Exception):
    """Raised when an administrative cap update falls outside its bounds."""
    pass


def _check_range(amount: Decimal, lower: Decimal, upper: Decimal) -> None:
    if amount < lower:
        raise CapOutOfRangeError(f"Amount cannot be less than {int(lower):,}")
    if amount > upper:
        raise CapOutOfRangeError(f"Amount cannot be more than {int(upper):,}")


class AllowanceRegistry:
    """Lock-guarded mapping of allowance type -> cap amount."""

    def __init__(self, caps: Mapping[str, Decimal] | None = None) -> None:
        self._caps: dict[str, Decimal] = dict(caps if caps is not None else DEFAULT_CAPS)
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Any) -> AllowanceRegistry:
        return cls({
            DONATION: settings.DEFAULT_DONATION_CAP,
            K_RECEIPT: settings.DEFAULT_K_RECEIPT_CAP,
            PERSONAL: settings.DEFAULT_PERSONAL_CAP,
        })

    def snapshot(self) -> Mapping[str, Decimal]:
        """Read-only copy of all caps, taken atomically."""
        with self._lock:
            return MappingProxyType(dict(self._caps))

    # ---- admin updates ----

    def _set_cap(self, allowance_type: str, amount: Decimal) -> Decimal:
        with self._lock:
            self._caps[allowance_type] = amount
        return amount

    def update_personal_cap(self, amount: Decimal) -> Decimal:
        _check_range(amount, PERSONAL_CAP_MIN, PERSONAL_CAP_MAX)
        return self._set_cap(PERSONAL, amount)

    def update_k_receipt_cap(self, amount: Decimal) -> Decimal:
        _check_range(amount, K_RECEIPT_CAP_MIN, K_RECEIPT_CAP_MAX)
        return self._set_cap(K_RECEIPT, amount)

    # ---- serialization ----

    def to_dict(self) -> dict[str, float]:
        """Serialize current caps to a JSON-safe dict."""
        return {name: float(amount) for name, amount in self.snapshot().items()}
