"""Text helpers for Telegram messages."""

from aiogram.types import Message

TELEGRAM_MESSAGE_LIMIT = 4096


def split_text(text: str, limit: int = TELEGRAM_MESSAGE_LIMIT) -> list[str]:
    """
    Split text into chunks that fit a Telegram message.

    Splits on line boundaries; a single line longer than the limit is cut.

    Args:
        text: Text to split
        limit: Max chunk length

    Returns:
        List of chunks (at least one)
    """
    if len(text) <= limit:
        return [text]

    chunks: list[str] = []
    current = ""
    for line in text.split("\n"):
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:limit])
            line = line[limit:]
        candidate = f"{current}\n{line}" if current else line
        if len(candidate) > limit:
            chunks.append(current)
            current = line
        else:
            current = candidate
    if current:
        chunks.append(current)
    return chunks


async def answer_long(message: Message, text: str, **kwargs) -> None:
    """Send a possibly long text as several messages."""
    for chunk in split_text(text):
        await message.answer(chunk, **kwargs)
