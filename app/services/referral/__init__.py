"""
Referral services package.

Contains modular services for referral processing:
- referral_bonus_processor: Applies the one-time referral bonus
- query_manager: Referral queries and link helpers
- referral_notifications: Notifies referrers
"""

from app.services.referral.query_manager import (
    ReferralQueryManager,
    build_referral_link,
    parse_referral_code,
)
from app.services.referral.referral_bonus_processor import (
    BonusResult,
    ReferralBonusProcessor,
)


__all__ = [
    "BonusResult",
    "ReferralBonusProcessor",
    "ReferralQueryManager",
    "build_referral_link",
    "parse_referral_code",
]
