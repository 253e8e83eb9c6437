"""
Referral notifications.

Handles notifications for referral events.
"""

from decimal import Decimal

from app.services.notification_service import NotificationService
from app.utils.formatters import format_pkr


async def notify_new_referral(
    notifier: NotificationService,
    referrer_telegram_id: int,
    new_user_username: str,
    bonus: Decimal,
) -> bool:
    """
    Notify referrer about new referral registration.

    Args:
        notifier: Notification service
        referrer_telegram_id: Referrer's Telegram ID
        new_user_username: New user's username
        bonus: Credited bonus

    Returns:
        True if notification sent successfully
    """
    text = (
        "🎉 <b>New referral!</b>\n\n"
        f"@{new_user_username} registered with your invite link.\n"
        f"💰 {format_pkr(bonus)} has been added to your earnings."
    )
    return await notifier.send_notification(referrer_telegram_id, text)
