# assessment_tax/domain/services/tax_service.py
"""
Personal income tax computation service.

Taxable income is total income minus allowances. It is taxed across five
fixed progressive brackets; withholding tax already paid is credited
bracket by bracket from the lowest upward, and any credit left over turns
into a refund.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from assessment_tax.domain.models.allowance_config import AllowanceRegistry
from assessment_tax.domain.models.tax import Allowance, TaxInput, TaxLevel, TaxResult
from assessment_tax.domain.services.allowance_validator import validate_allowances

logger = logging.getLogger("tax_service")

_ONE_DECIMAL = Decimal("0.1")


# ---------------------------------------------------------------------------
# Tax brackets
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TaxBracket:
    min_income: Decimal
    max_income: Decimal | None  # None means no upper bound
    rate: Decimal               # e.g. Decimal("0.10") for 10%
    label: str


TAX_BRACKETS: tuple[TaxBracket, ...] = (
    TaxBracket(Decimal("0"), Decimal("150000"), Decimal("0"), "0-150,000"),
    TaxBracket(Decimal("150001"), Decimal("500000"), Decimal("0.10"), "150,001-500,000"),
    TaxBracket(Decimal("500001"), Decimal("1000000"), Decimal("0.15"), "500,001-1,000,000"),
    TaxBracket(Decimal("1000001"), Decimal("2000000"), Decimal("0.20"), "1,000,001-2,000,000"),
    TaxBracket(Decimal("2000001"), None, Decimal("0.35"), "2,000,001 ขึ้นไป"),
)


def round_tax(amount: Decimal) -> Decimal:
    """Round to one decimal place, halves away from zero."""
    return amount.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)


# ---------------------------------------------------------------------------
# Core computation
# ---------------------------------------------------------------------------

def taxable_in_bracket(taxable_income: Decimal, bracket: TaxBracket) -> Decimal:
    """
    Portion of *taxable_income* falling in *bracket*.

    Brackets start one unit above the previous bracket's maximum, so the
    lower bound is shifted down by one: income of 500,000 has 350,000 in
    the 150,001-500,000 bracket.
    """
    upper = taxable_income
    if bracket.max_income is not None and upper > bracket.max_income:
        upper = bracket.max_income
    return upper - (bracket.min_income - 1)


def compute_tax(
    total_income: Decimal,
    withholding_tax_paid: Decimal,
    allowances: list[Allowance],
    brackets: tuple[TaxBracket, ...] = TAX_BRACKETS,
) -> TaxResult:
    """
    Compute tax owed (or refunded) for already-validated allowances.

    Args:
        total_income: gross income for the year.
        withholding_tax_paid: WHT already paid; offsets the lowest
            brackets first.
        allowances: validated allowances, personal included.

    Returns:
        TaxResult with the per-bracket breakdown. Each bracket entry and
        the totals are rounded to one decimal independently; the total is
        accumulated from unrounded bracket amounts.
    """
    taxable_income = total_income - sum((a.amount for a in allowances), Decimal("0"))
    remaining_wht = withholding_tax_paid

    total_tax = Decimal("0")
    levels: list[TaxLevel] = []

    for bracket in brackets:
        if taxable_income <= bracket.min_income:
            levels.append(TaxLevel(bracket.label, Decimal("0")))
            continue

        tax = taxable_in_bracket(taxable_income, bracket) * bracket.rate

        if tax >= remaining_wht:
            tax -= remaining_wht
            remaining_wht = Decimal("0")
        else:
            remaining_wht -= tax
            tax = Decimal("0")

        total_tax += tax
        levels.append(TaxLevel(bracket.label, round_tax(tax)))

    total_tax -= remaining_wht

    tax_refund = Decimal("0")
    if total_tax < 0:
        tax_refund = -total_tax
        total_tax = Decimal("0")

    return TaxResult(
        total_tax=round_tax(total_tax),
        tax_refund=round_tax(tax_refund),
        levels=levels,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def calculate_tax(inp: TaxInput, registry: AllowanceRegistry) -> TaxResult:
    """
    Validate the caller's allowances against *registry* and compute tax.

    Raises AllowanceValidationError subclasses for rejected allowance lists.
    """
    allowances = validate_allowances(inp.allowances, registry)
    result = compute_tax(inp.total_income, inp.withholding_tax_paid, allowances)
    logger.info(
        "Tax calculated: income=%s wht=%s allowances=%d tax=%s refund=%s",
        inp.total_income, inp.withholding_tax_paid, len(allowances),
        result.total_tax, result.tax_refund,
    )
    return result
