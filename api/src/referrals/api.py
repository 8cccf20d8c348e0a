from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from database import get_db
from ..common.responses import MessageResponse
from .service import referrals_service
from .responses import ReferralCodeResponse, ReferralInfoResponse


router = APIRouter(prefix="/wallet", tags=["referrals"])

logger = logging.getLogger("api")


@router.post("/generateReferral/{user_id}", response_model=ReferralCodeResponse)
async def generate_referral_code(
    user_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Generate a new referral code for a user"""
    return await referrals_service.generate_referral_code(db, user_id)


@router.post("/referral/processReferral/{referral_code}/{user_id}", response_model=MessageResponse)
async def process_referral(
    referral_code: str,
    user_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Redeem a referral code for a user"""
    return await referrals_service.process_referral(db, referral_code, user_id)


@router.get("/referral/{user_id}", response_model=ReferralInfoResponse)
async def get_referral_info(
    user_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get referral code, count and rewards for a user"""
    return await referrals_service.get_referral_info(db, user_id)
