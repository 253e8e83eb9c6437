"""FSM state helpers."""

from aiogram.fsm.context import FSMContext

# Keys that survive a state reset
REFERRAL_CODE_KEY = "referral_code"
WITHDRAWAL_NOTICE_SEEN_KEY = "withdrawal_notice_seen"

PRESERVED_KEYS = (REFERRAL_CODE_KEY, WITHDRAWAL_NOTICE_SEEN_KEY)


async def clear_state_preserve_referral(state: FSMContext) -> None:
    """
    Clear FSM state and data but keep the pending referral code.

    The code from the invite link must survive until registration, and the
    withdrawal referral notice is shown only once per user.
    """
    data = await state.get_data()
    kept = {key: data[key] for key in PRESERVED_KEYS if data.get(key)}
    await state.clear()
    if kept:
        await state.update_data(kept)


async def mark_withdrawal_notice_seen(state: FSMContext) -> bool:
    """
    Record that the withdrawal referral notice was shown.

    Returns:
        True if this is the first time, so the notice should be shown
    """
    data = await state.get_data()
    if data.get(WITHDRAWAL_NOTICE_SEEN_KEY):
        return False
    await state.update_data({WITHDRAWAL_NOTICE_SEEN_KEY: True})
    return True
