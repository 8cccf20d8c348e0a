from .referrals_service import ReferralsService, referrals_service

__all__ = [
    "ReferralsService",
    "referrals_service",
]
