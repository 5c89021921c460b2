# assessment_tax/domain/models/tax.py
"""Domain dataclasses for a single tax calculation request and its result."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class Allowance:
    """One itemized allowance: a registry type and the amount claimed."""
    allowance_type: str
    amount: Decimal = Decimal("0")


@dataclass
class TaxInput:
    """Inputs needed for one tax calculation."""
    total_income: Decimal = Decimal("0")
    withholding_tax_paid: Decimal = Decimal("0")   # WHT already deducted at source
    allowances: list[Allowance] = field(default_factory=list)


@dataclass(frozen=True)
class TaxLevel:
    """Tax owed in one bracket, after the withholding offset."""
    label: str
    tax: Decimal = Decimal("0")


@dataclass
class TaxResult:
    """Result of a tax calculation. At most one of total_tax / tax_refund is nonzero."""
    total_tax: Decimal = Decimal("0")
    tax_refund: Decimal = Decimal("0")
    levels: list[TaxLevel] = field(default_factory=list)
