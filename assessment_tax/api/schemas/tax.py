# assessment_tax/api/schemas/tax.py
"""Request and response schemas for the tax calculation endpoint."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Request - unknown fields and wrongly-typed values are rejected
# ---------------------------------------------------------------------------

class AllowanceIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    allowance_type: str = Field(alias="allowanceType", strict=True, description="donation / k-receipt")
    amount: float = Field(default=0.0, strict=True, allow_inf_nan=False)


class TaxCalculationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    total_income: float = Field(default=0.0, alias="totalIncome", strict=True, allow_inf_nan=False)
    wht: float = Field(default=0.0, strict=True, allow_inf_nan=False, description="Withholding tax already paid")
    allowances: list[AllowanceIn] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------

class TaxLevelOut(BaseModel):
    level: str
    tax: float


class TaxCalculationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tax: float
    tax_refund: float | None = Field(default=None, alias="taxRefund")
    tax_level: list[TaxLevelOut] = Field(default_factory=list, alias="taxLevel")
