# assessment_tax/api/schemas/deductions.py
"""Pydantic schemas for allowance-cap administration endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CapUpdateRequest(BaseModel):
    """Request body for changing a single allowance cap."""

    amount: float = Field(strict=True, allow_inf_nan=False, description="New cap amount")


class PersonalDeductionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    personal_deduction: float = Field(alias="personalDeduction")


class KReceiptDeductionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    k_receipt: float = Field(alias="kReceipt")


class AllowanceCapsResponse(BaseModel):
    """Current cap for every allowance type."""

    caps: dict[str, float]
