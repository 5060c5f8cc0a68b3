"""Fixed-width field codec for the accounts and transactions files.

Every encoder here is total: any input produces a field of exactly the
declared width, padding or truncating as needed. Decoders are lenient and
fall back to a zero value instead of raising.
"""

import re
from decimal import Decimal, InvalidOperation, Context, MAX_EMAX, MIN_EMIN, ROUND_HALF_UP
from typing import Any, Optional

from bankcore.logging import get_logger

logger = get_logger(__name__)

NAME_WIDTH = 20
ACCOUNT_ID_WIDTH = 5
MONEY_WIDTH = 8
MISC_WIDTH = 2

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

_INTEGER = re.compile(r"[+-]?[0-9]+")


def pad_right(value: Optional[str], width: int) -> str:
    """Pad with spaces on the right to exactly ``width`` characters.

    Overlong input keeps its leftmost ``width`` characters.
    """
    text = "" if value is None else value
    return text.ljust(width)[:width]


def pad_left_zeros(value: Optional[str], width: int) -> str:
    """Pad with zeros on the left to exactly ``width`` characters.

    Overlong input keeps its rightmost ``width`` characters.
    """
    text = "" if value is None else value
    text = text.rjust(width, "0")
    return text[len(text) - width:]


def name_field(name: Optional[str]) -> str:
    """Encode a holder name as a 20-character, space-padded field."""
    trimmed = "" if name is None else name.strip()
    return pad_right(trimmed[:NAME_WIDTH], NAME_WIDTH)


def account_id_field(account_id: Any) -> str:
    """Encode an account identifier as a 5-digit, zero-filled field.

    Anything that does not parse as a non-negative integer encodes as 00000.
    Applying this to its own output returns the output unchanged.
    """
    number = 0
    if account_id is not None:
        text = str(account_id).strip()
        if _INTEGER.fullmatch(text):
            number = max(int(text), 0)
    return f"{number:0{ACCOUNT_ID_WIDTH}d}"


def to_decimal(amount: Any) -> Decimal:
    """Convert an int, float, string or Decimal to Decimal.

    Unconvertible and non-finite values become zero.
    """
    if isinstance(amount, Decimal):
        value = amount
    else:
        try:
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError):
            return ZERO
    if not value.is_finite():
        return ZERO
    return value


def money_field(amount: Any) -> str:
    """Encode a monetary amount as an 8-character field such as ``00110.00``.

    Negative amounts encode as zero. Values whose two-decimal rendering is
    wider than 8 characters are clipped to their first 8 characters, which
    drops the least significant digits. Existing files depend on this layout.
    """
    value = to_decimal(amount)
    if value <= 0:
        value = ZERO
    value = _round_cents(value)
    if value.adjusted() >= MONEY_WIDTH:
        # Nine or more integer digits: the field is the leading eight
        digits = "".join(str(d) for d in value.as_tuple().digits[:MONEY_WIDTH])
        return digits.ljust(MONEY_WIDTH, "0")
    text = f"{value:.2f}"
    if len(text) > MONEY_WIDTH:
        return text[:MONEY_WIDTH]
    return pad_left_zeros(text, MONEY_WIDTH)


def _round_cents(value: Decimal) -> Decimal:
    """Round half-up to cents, whatever the magnitude of ``value``."""
    _, digits, exponent = value.as_tuple()
    if exponent >= -2:
        return value
    context = Context(prec=len(digits) + 1, Emax=MAX_EMAX, Emin=MIN_EMIN)
    return value.quantize(CENT, rounding=ROUND_HALF_UP, context=context)


def misc_field(value: Optional[str]) -> str:
    """Encode a miscellaneous code as a 2-character, space-padded field."""
    trimmed = "" if value is None else value.strip()
    return pad_right(trimmed[:MISC_WIDTH], MISC_WIDTH)


def parse_money(text: str) -> Decimal:
    """Decode a money field, returning 0.00 when it cannot be parsed."""
    stripped = text.strip()
    try:
        value = Decimal(stripped)
    except InvalidOperation:
        logger.warning("Unparsable money field %r, using 0.00", text)
        return ZERO
    if not value.is_finite():
        logger.warning("Non-finite money field %r, using 0.00", text)
        return ZERO
    return value
