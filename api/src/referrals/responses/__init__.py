from .referral_response import ReferralCodeResponse, ReferralInfoResponse

__all__ = [
    "ReferralCodeResponse",
    "ReferralInfoResponse",
]
