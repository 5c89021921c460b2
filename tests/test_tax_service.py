"""Tests for the tax computation service."""

from decimal import Decimal

import pytest

from assessment_tax.domain.models.tax import Allowance, TaxInput
from assessment_tax.domain.services.allowance_validator import (
    DuplicateAllowanceTypeError,
    ForbiddenAllowanceTypeError,
)
from assessment_tax.domain.services.tax_service import (
    TAX_BRACKETS,
    calculate_tax,
    compute_tax,
    round_tax,
    taxable_in_bracket,
)


def _levels(result) -> list[Decimal]:
    return [level.tax for level in result.levels]


class TestBracketArithmetic:
    """Verify bracket boundaries, including the one-unit lower-bound shift."""

    def test_five_brackets_in_ascending_order(self):
        mins = [b.min_income for b in TAX_BRACKETS]
        assert mins == sorted(mins)
        assert len(TAX_BRACKETS) == 5
        assert TAX_BRACKETS[-1].max_income is None

    def test_lower_bound_shifted_by_one(self):
        bracket = TAX_BRACKETS[1]  # 150,001-500,000
        assert taxable_in_bracket(Decimal("500000"), bracket) == Decimal("350000")

    def test_capped_at_bracket_max(self):
        bracket = TAX_BRACKETS[1]
        assert taxable_in_bracket(Decimal("900000"), bracket) == Decimal("350000")

    def test_top_bracket_unbounded(self):
        bracket = TAX_BRACKETS[4]
        assert taxable_in_bracket(Decimal("3000000"), bracket) == Decimal("1000000")

    def test_income_equal_to_bracket_min_is_not_taxed(self):
        result = compute_tax(Decimal("150001"), Decimal("0"), [])
        assert result.total_tax == Decimal("0")

    def test_income_just_over_bracket_min(self):
        # (150,002 - 150,000) * 10%
        result = compute_tax(Decimal("150002"), Decimal("0"), [])
        assert result.total_tax == Decimal("0.2")


class TestComputeTax:
    """Verify progressive tax over already-validated allowances."""

    def test_zero_income(self):
        result = compute_tax(Decimal("0"), Decimal("0"), [])
        assert result.total_tax == Decimal("0")
        assert result.tax_refund == Decimal("0")
        assert _levels(result) == [Decimal("0")] * 5

    def test_income_within_exempt_bracket(self):
        result = compute_tax(Decimal("120000"), Decimal("0"), [])
        assert result.total_tax == Decimal("0")

    def test_allowances_reduce_taxable_income(self):
        allowances = [Allowance("personal", Decimal("60000"))]
        result = compute_tax(Decimal("500000"), Decimal("0"), allowances)
        assert result.total_tax == Decimal("29000.0")
        assert _levels(result) == [
            Decimal("0"), Decimal("29000.0"), Decimal("0"), Decimal("0"), Decimal("0"),
        ]

    def test_three_brackets(self):
        result = compute_tax(Decimal("1000000"), Decimal("0"), [])
        # 350,000 @ 10% + 500,000 @ 15%
        assert result.total_tax == Decimal("110000.0")
        assert _levels(result)[1:3] == [Decimal("35000.0"), Decimal("75000.0")]

    def test_all_brackets(self):
        result = compute_tax(Decimal("3000000"), Decimal("0"), [])
        assert _levels(result) == [
            Decimal("0"),
            Decimal("35000.0"),
            Decimal("75000.0"),
            Decimal("200000.0"),
            Decimal("350000.0"),
        ]
        assert result.total_tax == Decimal("660000.0")

    def test_labels(self):
        result = compute_tax(Decimal("0"), Decimal("0"), [])
        assert [level.label for level in result.levels] == [
            "0-150,000",
            "150,001-500,000",
            "500,001-1,000,000",
            "1,000,001-2,000,000",
            "2,000,001 ขึ้นไป",
        ]

    def test_bracket_tax_rounded_to_one_decimal(self):
        # 3 units in the 15% bracket -> 0.45 -> 0.5
        result = compute_tax(Decimal("500003"), Decimal("0"), [])
        assert result.levels[2].tax == Decimal("0.5")
        assert result.total_tax == Decimal("35000.5")


class TestWithholdingOffset:
    """Withholding tax is credited lowest bracket first."""

    def test_partial_offset(self):
        allowances = [Allowance("personal", Decimal("60000"))]
        result = compute_tax(Decimal("500000"), Decimal("25000"), allowances)
        assert result.total_tax == Decimal("4000.0")
        assert result.tax_refund == Decimal("0")

    def test_consumes_lower_bracket_before_higher(self):
        result = compute_tax(Decimal("1000000"), Decimal("40000"), [])
        # 35,000 bracket fully offset, 5,000 carried into the 15% bracket
        assert _levels(result)[1:3] == [Decimal("0"), Decimal("70000.0")]
        assert result.total_tax == Decimal("70000.0")

    def test_excess_withholding_becomes_refund(self):
        allowances = [Allowance("personal", Decimal("60000"))]
        result = compute_tax(Decimal("500000"), Decimal("30000"), allowances)
        assert result.total_tax == Decimal("0")
        assert result.tax_refund == Decimal("1000.0")

    def test_refund_when_no_tax_due(self):
        result = compute_tax(Decimal("100000"), Decimal("500"), [])
        assert result.total_tax == Decimal("0")
        assert result.tax_refund == Decimal("500.0")

    @pytest.mark.parametrize("income", ["0", "200000", "750000", "1500000", "5000000"])
    @pytest.mark.parametrize("wht", ["0", "10000", "100000", "1000000"])
    def test_tax_and_refund_mutually_exclusive(self, income, wht):
        result = compute_tax(Decimal(income), Decimal(wht), [])
        assert result.total_tax >= 0
        assert result.tax_refund >= 0
        assert not (result.total_tax > 0 and result.tax_refund > 0)


class TestRounding:

    def test_half_rounds_up(self):
        assert round_tax(Decimal("0.15")) == Decimal("0.2")
        assert round_tax(Decimal("0.25")) == Decimal("0.3")

    def test_below_half_rounds_down(self):
        assert round_tax(Decimal("29000.04")) == Decimal("29000.0")


class TestCalculateTax:
    """End-to-end calculation: validation, personal allowance, computation."""

    def test_donation_zero(self, registry):
        inp = TaxInput(
            total_income=Decimal("500000"),
            allowances=[Allowance("donation", Decimal("0"))],
        )
        assert calculate_tax(inp, registry).total_tax == Decimal("29000.0")

    def test_donation_clamped_to_cap(self, registry):
        inp = TaxInput(
            total_income=Decimal("500000"),
            allowances=[Allowance("donation", Decimal("200000"))],
        )
        assert calculate_tax(inp, registry).total_tax == Decimal("19000.0")

    def test_k_receipt_clamped_to_cap(self, registry):
        inp = TaxInput(
            total_income=Decimal("500000"),
            allowances=[Allowance("k-receipt", Decimal("80000"))],
        )
        # 500,000 - 50,000 - 60,000 = 390,000
        assert calculate_tax(inp, registry).total_tax == Decimal("24000.0")

    def test_no_allowances_still_gets_personal(self, registry):
        inp = TaxInput(total_income=Decimal("500000"))
        assert calculate_tax(inp, registry).total_tax == Decimal("29000.0")

    def test_personal_follows_registry_update(self, registry):
        registry.update_personal_cap(Decimal("100000"))
        inp = TaxInput(total_income=Decimal("500000"))
        # 400,000 taxable -> 250,000 @ 10%
        assert calculate_tax(inp, registry).total_tax == Decimal("25000.0")

    def test_negative_allowance_accepted(self, registry):
        inp = TaxInput(
            total_income=Decimal("500000"),
            allowances=[Allowance("donation", Decimal("-10000"))],
        )
        # Negative amounts are not rejected and raise taxable income
        assert calculate_tax(inp, registry).total_tax == Decimal("30000.0")

    def test_negative_income_yields_no_tax(self, registry):
        inp = TaxInput(total_income=Decimal("-100000"))
        result = calculate_tax(inp, registry)
        assert result.total_tax == Decimal("0")
        assert result.tax_refund == Decimal("0")

    def test_rejections_propagate(self, registry):
        with pytest.raises(ForbiddenAllowanceTypeError):
            calculate_tax(
                TaxInput(allowances=[Allowance("personal", Decimal("1"))]), registry,
            )
        with pytest.raises(DuplicateAllowanceTypeError):
            calculate_tax(
                TaxInput(allowances=[
                    Allowance("donation", Decimal("1")),
                    Allowance("donation", Decimal("2")),
                ]),
                registry,
            )
