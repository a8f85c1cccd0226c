"""
Asset Tracker — Numeric Normalization Helpers

Turns scraped price text into integers. Parse failures return None and are
treated by callers exactly like "nothing found".
"""

from __future__ import annotations

import re

_NON_DIGITS = re.compile(r"[^0-9]")

# 1-3 digits followed by one or more ".ddd" groups: 5.000, 1.234.567
_DOTTED_NUMBER = re.compile(r"[0-9]{1,3}(?:\.[0-9]{3})+")


def parse_digits(text: str | None) -> int | None:
    """
    Strip every non-ASCII-digit character and parse the rest as base-10.

    Examples:
        >>> parse_digits("18.380 VNĐ")
        18380
        >>> parse_digits("Liên hệ") is None
        True
    """
    if not text:
        return None
    digits = _NON_DIGITS.sub("", text.strip())
    if not digits:
        return None
    return int(digits)


def find_dotted_number(text: str | None) -> int | None:
    """
    Parse the FIRST dot-grouped thousands number in `text`.

    Examples:
        >>> find_dotted_number("Giá: 1.234.567 VNĐ")
        1234567
    """
    if not text:
        return None
    match = _DOTTED_NUMBER.search(text)
    if match is None:
        return None
    return int(match.group().replace(".", ""))
