# assessment_tax/domain/services/allowance_validator.py
"""
Allowance validation.

Checks caller-supplied allowances against the registry, clamps amounts to
their caps and appends the mandatory personal allowance. Never mutates the
input list.
"""

from __future__ import annotations

import logging
from typing import Iterable

from assessment_tax.domain.models.allowance_config import PERSONAL, AllowanceRegistry
from assessment_tax.domain.models.tax import Allowance

logger = logging.getLogger("allowance_validator")


class AllowanceValidationError(Exception):
    """Base class for rejected allowance lists."""
    pass


class DuplicateAllowanceTypeError(AllowanceValidationError):
    """Raised when the same allowance type is supplied more than once."""

    def __init__(self, allowance_type: str) -> None:
        self.allowance_type = allowance_type
        super().__init__(f"duplicate allowance type: {allowance_type}")


class ForbiddenAllowanceTypeError(AllowanceValidationError):
    """Raised when the caller supplies an allowance only the system may add."""

    def __init__(self, allowance_type: str) -> None:
        self.allowance_type = allowance_type
        super().__init__(f"not allowed type: {allowance_type}")


class UnknownAllowanceTypeError(AllowanceValidationError):
    """Raised when an allowance type is not in the registry."""

    def __init__(self, allowance_type: str) -> None:
        self.allowance_type = allowance_type
        super().__init__(f"invalid allowance type: {allowance_type}")


def check_allowance_types(allowances: Iterable[Allowance]) -> None:
    """Reject caller-supplied personal allowances and duplicate types."""
    seen: set[str] = set()
    for allowance in allowances:
        if allowance.allowance_type == PERSONAL:
            raise ForbiddenAllowanceTypeError(allowance.allowance_type)
        if allowance.allowance_type in seen:
            raise DuplicateAllowanceTypeError(allowance.allowance_type)
        seen.add(allowance.allowance_type)


def validate_allowances(
    allowances: list[Allowance],
    registry: AllowanceRegistry,
) -> list[Allowance]:
    """
    Validate and normalize *allowances* against *registry*.

    Returns a new list where each amount is clamped to its type's cap
    (amounts over the cap are reduced, never rejected; negative amounts
    pass through untouched), followed by exactly one personal allowance at
    the registry's current personal cap.

    Raises:
        ForbiddenAllowanceTypeError: an entry has type "personal".
        DuplicateAllowanceTypeError: a type appears more than once.
        UnknownAllowanceTypeError: a type is not in the registry.
    """
    check_allowance_types(allowances)

    # Clamping and the personal allowance read the same cap version.
    caps = registry.snapshot()

    validated: list[Allowance] = []
    for allowance in allowances:
        cap = caps.get(allowance.allowance_type)
        if cap is None:
            raise UnknownAllowanceTypeError(allowance.allowance_type)
        if allowance.amount > cap:
            logger.debug(
                "Clamping %s allowance %s to cap %s",
                allowance.allowance_type, allowance.amount, cap,
            )
            allowance = Allowance(allowance.allowance_type, cap)
        validated.append(allowance)

    validated.append(Allowance(PERSONAL, caps[PERSONAL]))
    return validated
