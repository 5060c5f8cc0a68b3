"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from bankcore.domain.errors import InvalidAmountError


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount typed at the command line into a Decimal.

    Handles:
    - "123.45"
    - "$123.45"
    - "1,234.56"
    - "-50" (sign is kept so the rule engine can reject it)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        InvalidAmountError: If the string is not a finite number with at
            most two decimal places
    """
    if not amount_str or not amount_str.strip():
        raise InvalidAmountError("Empty amount")

    text = re.sub(r"[$,\s]", "", amount_str)

    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise InvalidAmountError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise InvalidAmountError(f"Could not parse amount '{amount_str}'")
    if amount.as_tuple().exponent < -2:
        raise InvalidAmountError(f"Amount '{amount_str}' has more than two decimal places")
    return amount
