# assessment_tax/api/routes/admin_deductions.py
"""
Admin endpoints for allowance-cap management.

Changes take effect immediately for every later calculation and are not
persisted across restarts.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from fastapi import APIRouter, Depends, Request

from assessment_tax.api.deps import get_allowance_registry, require_admin
from assessment_tax.api.schemas.deductions import (
    AllowanceCapsResponse,
    CapUpdateRequest,
    KReceiptDeductionResponse,
    PersonalDeductionResponse,
)
from assessment_tax.domain.models.allowance_config import AllowanceRegistry
from assessment_tax.infrastructure.audit import log_admin_action

logger = logging.getLogger("api.admin_deductions")

router = APIRouter(prefix="/admin/deductions", tags=["Admin Deductions"])


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else ""


# ---------------------------------------------------------------------------
# GET - current caps
# ---------------------------------------------------------------------------


@router.get("", response_model=AllowanceCapsResponse)
async def get_allowance_caps(
    registry: AllowanceRegistry = Depends(get_allowance_registry),
    _: str = Depends(require_admin),
):
    """Get the current cap for every allowance type."""
    return AllowanceCapsResponse(caps=registry.to_dict())


# ---------------------------------------------------------------------------
# POST - cap updates
# ---------------------------------------------------------------------------


@router.post("/personal", response_model=PersonalDeductionResponse)
async def update_personal_deduction(
    body: CapUpdateRequest,
    request: Request,
    registry: AllowanceRegistry = Depends(get_allowance_registry),
    admin: str = Depends(require_admin),
):
    """Set the personal allowance (10,000 - 100,000)."""
    amount = registry.update_personal_cap(Decimal(str(body.amount)))
    log_admin_action(
        "update_personal_deduction", admin=admin, admin_ip=_client_ip(request),
        details={"amount": str(amount)},
    )
    return PersonalDeductionResponse(personal_deduction=float(amount))


@router.post("/k-receipt", response_model=KReceiptDeductionResponse)
async def update_k_receipt_deduction(
    body: CapUpdateRequest,
    request: Request,
    registry: AllowanceRegistry = Depends(get_allowance_registry),
    admin: str = Depends(require_admin),
):
    """Set the k-receipt allowance cap (0 - 100,000)."""
    amount = registry.update_k_receipt_cap(Decimal(str(body.amount)))
    log_admin_action(
        "update_k_receipt_deduction", admin=admin, admin_ip=_client_ip(request),
        details={"amount": str(amount)},
    )
    return KReceiptDeductionResponse(k_receipt=float(amount))
