"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional
import re


def parse_amount(amount: Any) -> Decimal:
    """Parse an amount value into a Decimal.

    Handles various formats:
    - 123.45 (int, float or Decimal)
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)
    - "USD 1,234.56"

    Args:
        amount: Amount value

    Returns:
        Decimal amount

    Raises:
        ValueError: If the amount cannot be parsed or is not finite
    """
    if isinstance(amount, bool):
        raise ValueError(f"Could not parse amount '{amount}'")
    if isinstance(amount, Decimal):
        result = amount
    elif isinstance(amount, int):
        result = Decimal(amount)
    elif isinstance(amount, float):
        # Go through repr so 0.1 stays 0.1
        result = Decimal(repr(amount))
    else:
        result = _parse_amount_str("" if amount is None else str(amount))

    if not result.is_finite():
        raise ValueError(f"Could not parse amount '{amount}': not a finite number")
    return result


def try_parse_amount(amount: Any) -> Optional[Decimal]:
    """Parse an amount value, returning None instead of raising."""
    try:
        return parse_amount(amount)
    except ValueError:
        return None


def _parse_amount_str(amount_str: str) -> Decimal:
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols and ISO currency codes
    amount_str = re.sub(r"[$€£¥]", "", amount_str)
    amount_str = re.sub(r"^[A-Za-z]{3}\s+|\s+[A-Za-z]{3}$", "", amount_str.strip())

    # Remove thousands separators
    amount_str = amount_str.replace(",", "")

    # Remove whitespace again
    amount_str = amount_str.strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if is_negative:
        amount = amount.copy_negate()
    return amount
