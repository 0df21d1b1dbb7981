"""Decimal amount utilities.

Crypto amounts carry 6 decimal places, fiat amounts 2. Floats never reach the
balance math: every number entering the core goes through ``parse_amount``.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CRYPTO_PLACES = Decimal("0.000001")
FIAT_PLACES = Decimal("0.01")

ZERO = Decimal("0")


def parse_amount(value: object) -> Decimal | None:
    """Parse user/wire input into a finite Decimal. Returns None if not a number.

    bool is rejected even though it is an int subclass.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            result = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    if not result.is_finite():
        return None
    return result


def quantize_crypto(amount: Decimal) -> Decimal:
    return amount.quantize(CRYPTO_PLACES, rounding=ROUND_HALF_UP)


def quantize_fiat(amount: Decimal) -> Decimal:
    return amount.quantize(FIAT_PLACES, rounding=ROUND_HALF_UP)


def fiat_to_display(amount: Decimal, currency: str = "USD") -> str:
    """Format a fiat amount: Decimal('1234.5') -> '1,234.50 USD'."""
    return f"{quantize_fiat(amount):,.2f} {currency}"
