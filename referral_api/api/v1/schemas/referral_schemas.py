"""Referral schemas for request/response models."""

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class ReferralOut(_CamelModel):
    """Created referral as returned to the submitter. Referee email is never exposed."""

    id: int
    referrer_name: str = Field(..., alias="referrerName")
    referee_name: str = Field(..., alias="refereeName")
    course: str
    created_at: datetime = Field(..., alias="createdAt")


class ReferralCreatedResponse(BaseModel):
    message: str
    referral: ReferralOut


class RecentReferralOut(_CamelModel):
    referrer_name: str = Field(..., alias="referrerName")
    course: str
    created_at: datetime = Field(..., alias="createdAt")


class ReferralStatsResponse(_CamelModel):
    total_referrals: int = Field(..., alias="totalReferrals")
    recent_referrals: List[RecentReferralOut] = Field(default_factory=list, alias="recentReferrals")


class ErrorResponse(BaseModel):
    error: str
