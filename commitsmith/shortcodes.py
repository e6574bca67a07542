"""Emoji shortcode substitution.

Replaces `:shortcode:` tokens (e.g. `:badger:`) with their glyphs using the
alias table shipped with the `emoji` library. Unknown shortcodes are left
untouched.
"""

from typing import Optional

import emoji


def replace_emoji_shortcodes(text: str) -> str:
    """Replace every known `:shortcode:` in text with its emoji glyph.

    The text is scanned once, so a substituted glyph is never re-scanned and
    applying the function twice gives the same result as applying it once.

    Args:
        text: Text that may contain shortcodes.

    Returns:
        Text with known shortcodes replaced.
    """
    return emoji.emojize(text, language="alias")


def replace_optional(text: Optional[str]) -> Optional[str]:
    """Like replace_emoji_shortcodes, but passes None through."""
    if text is None:
        return None
    return replace_emoji_shortcodes(text)
