"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

_CURRENCY_PATTERN = re.compile(r"(?i)^(rs\.?|inr|usd|eur)|[$€£¥₹]|(rs\.?|inr|usd|eur)$")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles plain numbers ("1200", "1200.50"), thousands separators
    ("1,200.50", "1,00,000" as written in India), currency markers
    ("₹1200", "Rs. 1200", "1200 INR", "$12") and a leading minus or
    parentheses for negatives. The sign is kept; rejecting non-positive
    amounts is left to validation.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount, quantized to two places

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if amount_str is None or not str(amount_str).strip():
        raise ValueError("Empty amount string")

    cleaned = str(amount_str).strip()

    is_negative = False
    if cleaned.startswith("(") and cleaned.endswith(")"):
        is_negative = True
        cleaned = cleaned[1:-1].strip()
    if cleaned.startswith("-"):
        is_negative = not is_negative
        cleaned = cleaned[1:].strip()

    cleaned = _CURRENCY_PATTERN.sub("", cleaned).strip()
    cleaned = cleaned.replace(",", "").replace(" ", "")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")

    try:
        amount = amount.quantize(Decimal("0.01"))
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount
