# assessment_tax/api/routes/tax.py
"""
Tax calculation endpoint.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from fastapi import APIRouter, Depends

from assessment_tax.api.deps import get_allowance_registry
from assessment_tax.api.schemas.tax import (
    TaxCalculationRequest,
    TaxCalculationResponse,
    TaxLevelOut,
)
from assessment_tax.domain.models.allowance_config import AllowanceRegistry
from assessment_tax.domain.models.tax import Allowance, TaxInput, TaxResult
from assessment_tax.domain.services.tax_service import calculate_tax

logger = logging.getLogger("api.tax")

router = APIRouter(prefix="/tax", tags=["Tax"])


def _result_to_schema(result: TaxResult) -> TaxCalculationResponse:
    """Convert a service-layer TaxResult dataclass to a response schema."""
    return TaxCalculationResponse(
        tax=float(result.total_tax),
        tax_refund=float(result.tax_refund) if result.tax_refund else None,
        tax_level=[
            TaxLevelOut(level=level.label, tax=float(level.tax))
            for level in result.levels
        ],
    )


@router.post(
    "/calculations",
    response_model=TaxCalculationResponse,
    response_model_exclude_none=True,
)
async def calculate(
    body: TaxCalculationRequest,
    registry: AllowanceRegistry = Depends(get_allowance_registry),
):
    """
    Compute tax owed (or refund due) for one taxpayer.

    A personal allowance at the current cap is always added; callers may
    not supply one themselves.
    """
    inp = TaxInput(
        total_income=Decimal(str(body.total_income)),
        withholding_tax_paid=Decimal(str(body.wht)),
        allowances=[
            Allowance(allowance_type=a.allowance_type, amount=Decimal(str(a.amount)))
            for a in body.allowances
        ],
    )
    result = calculate_tax(inp, registry)
    return _result_to_schema(result)
