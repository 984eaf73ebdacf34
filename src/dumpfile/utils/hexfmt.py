from __future__ import annotations

import locale

_HEX_DIGITS = "0123456789ABCDEF"


def mask_for_digits(digits: int) -> int:
    return (1 << (digits * 4)) - 1


def format_hex(value: int, digits: int) -> str:
    """Uppercase, zero-padded hex; anything wider than ``digits`` is truncated."""
    value &= mask_for_digits(digits)
    out = []
    for _ in range(digits):
        out.append(_HEX_DIGITS[value & 0xF])
        value >>= 4
    return "".join(reversed(out))


def format_count(n: int) -> str:
    # The C locale has no thousands separator; fall back to commas there.
    if locale.localeconv().get("thousands_sep"):
        return locale.format_string("%d", n, grouping=True)
    return f"{n:,}"
