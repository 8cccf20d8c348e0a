import logging
import os
import secrets
import string
from decimal import Decimal

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import User
from ...common import NotFoundError, ValidationError
from ...common.aggregate import require_user, touch, write_transaction
from ...common.responses import MessageResponse
from ..responses import ReferralCodeResponse, ReferralInfoResponse

logger = logging.getLogger("api")

REFERRAL_CODE_ALPHABET = string.ascii_uppercase + string.digits
REFERRAL_CODE_LENGTH = 8
REFERRAL_REWARD = Decimal(os.getenv("REFERRAL_REWARD", "10"))


def new_referral_code() -> str:
    return "".join(secrets.choice(REFERRAL_CODE_ALPHABET) for _ in range(REFERRAL_CODE_LENGTH))


class ReferralsService:
    """Service class for the referral program"""

    async def generate_referral_code(self, db: AsyncSession, telegram_id: str) -> ReferralCodeResponse:
        """Assign a fresh referral code to the user"""
        async with write_transaction(db, "Failed to generate referral code"):
            user = await require_user(db, telegram_id, for_update=True)
            user.referral_code = await self._unused_code(db)
            touch(user)

        logger.info(f"🎟️ Referral code generated for user {telegram_id}")
        return ReferralCodeResponse(referral_code=user.referral_code)

    async def process_referral(
        self, db: AsyncSession, referral_code: str, telegram_id: str
    ) -> MessageResponse:
        """
        Link a referred user to the owner of referral_code and credit the
        referrer. Both rows are locked in id order and updated in one
        transaction; every rejection happens before either row changes.
        """
        async with write_transaction(db, "Failed to process referral"):
            result = await db.execute(
                select(User)
                .filter(or_(User.referral_code == referral_code, User.telegram_id == telegram_id))
                .order_by(User.id)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            users = result.scalars().all()

            referrer = next((u for u in users if u.referral_code == referral_code), None)
            if not referrer:
                raise NotFoundError("Invalid referral code", details={"referral_code": referral_code})

            referred = next((u for u in users if u.telegram_id == telegram_id), None)
            if not referred:
                raise NotFoundError("Referred user not found", details={"telegram_id": telegram_id})

            if referred.referred_by_id is not None:
                raise ValidationError("User has already been referred")
            if referrer.id == referred.id:
                raise ValidationError("You cannot refer yourself")

            referred.referred_by_id = referrer.id
            referrer.referral_count = (referrer.referral_count or 0) + 1
            referrer.rewards_earned = (referrer.rewards_earned or Decimal("0")) + REFERRAL_REWARD
            touch(referred)
            touch(referrer)

        logger.info(f"🤝 User {telegram_id} referred by {referrer.telegram_id}")
        return MessageResponse(message="Referral processed successfully")

    async def get_referral_info(self, db: AsyncSession, telegram_id: str) -> ReferralInfoResponse:
        """Referral state; a code is generated on first access"""
        user = await require_user(db, telegram_id)

        if not user.referral_code:
            await self.generate_referral_code(db, telegram_id)
            user = await require_user(db, telegram_id)

        return ReferralInfoResponse(
            referralCode=user.referral_code,
            referralCount=user.referral_count or 0,
            rewardsEarned=user.rewards_earned or Decimal("0"),
        )

    async def _unused_code(self, db: AsyncSession) -> str:
        while True:
            code = new_referral_code()
            result = await db.execute(select(User.id).filter(User.referral_code == code))
            if result.first() is None:
                return code


# Create service instance
referrals_service = ReferralsService()
