"""Theme colours and the per-user message background palette."""

from __future__ import annotations

import hashlib

PRIMARY_COLOR = "#4A90E2"
SECONDARY_COLOR = "#FF6B35"
SUCCESS_COLOR = "#7ED321"
WARNING_COLOR = "#F5A623"
DANGER_COLOR = "#D0021B"
BACKGROUND_COLOR = "#F8FAFE"
CARD_COLOR = "#FFFFFF"

MESSAGE_COLORS: tuple[str, ...] = (
    "#E3F2FD",  # sky
    "#F3E5F5",  # lavender
    "#E8F5E8",  # sprout
    "#FFF3E0",  # warm sun
    "#FCE4EC",  # cherry blossom
    "#E0F2F1",  # mint
    "#FFF8E1",  # lemon
    "#F1F8E9",  # new leaf
    "#E8EAF6",  # dusk
    "#FFEBEE",  # blush
    "#E4F7F7",  # lake
    "#FDF2F8",  # petal
)


def message_background_color(username: str) -> str:
    """Return a stable background colour for messages posted by ``username``.

    The first byte of the MD5 digest of the UTF-8 name is read as a signed
    byte; its absolute value picks an entry of ``MESSAGE_COLORS``.
    """
    first = hashlib.md5(username.encode("utf-8")).digest()[0]
    signed = first - 256 if first >= 128 else first
    return MESSAGE_COLORS[abs(signed) % len(MESSAGE_COLORS)]