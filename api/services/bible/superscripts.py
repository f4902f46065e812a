# api/services/bible/superscripts.py
"""
Superscript handling for verse text.

Verse numbers are shown inline as superscript digits ("³⁹ text ⁴⁰ text").
Source texts may also embed superscript footnote markers ("his Son¹"),
which are stripped when superscripts are not requested.
"""

import re

SUPERSCRIPT_DIGITS = str.maketrans("0123456789", "⁰¹²³⁴⁵⁶⁷⁸⁹")

# Digits, signs and the modifier letters commonly used as footnote markers
SUPERSCRIPT_CHARS = (
    "⁰¹²³⁴⁵⁶⁷⁸⁹⁺⁻⁼⁽⁾"
    "ᵃᵇᶜᵈᵉᶠᵍʰⁱʲᵏˡᵐⁿᵒᵖʳˢᵗᵘᵛʷˣʸᶻ"
)

_SUPERSCRIPT_RE = re.compile(f"[{re.escape(SUPERSCRIPT_CHARS)}]+")


def to_superscript(number: int) -> str:
    """Render a verse number in superscript digits (16 -> '¹⁶')."""
    return str(number).translate(SUPERSCRIPT_DIGITS)


def has_superscripts(text: str) -> bool:
    """True if the text embeds any superscript marker."""
    return _SUPERSCRIPT_RE.search(text) is not None


def strip_superscripts(text: str) -> str:
    """Remove embedded superscript markers and tidy the whitespace left behind."""
    if not has_superscripts(text):
        return text
    stripped = _SUPERSCRIPT_RE.sub("", text)
    return re.sub(r"\s+", " ", stripped).strip()
