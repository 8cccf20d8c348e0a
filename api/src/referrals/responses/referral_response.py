from pydantic import BaseModel
from typing import Optional

from ...common import DecimalStr


class ReferralCodeResponse(BaseModel):
    """Response schema for a newly generated referral code"""
    referral_code: str


class ReferralInfoResponse(BaseModel):
    """Referral program state for a user (camelCase on the wire)"""
    referralCode: Optional[str]
    referralCount: int
    rewardsEarned: DecimalStr
