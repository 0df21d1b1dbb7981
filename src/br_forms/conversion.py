"""Two-way crypto <-> fiat conversion on form text fields.

Inputs and outputs are the strings shown in the fields. An unparseable input or
a missing price (unit price 0) clears the counterpart field instead of dividing
by zero.
"""
from decimal import Decimal

from src.br_common.amounts import parse_amount, quantize_crypto, quantize_fiat


def fiat_to_crypto(fiat_text: str, unit_price: Decimal) -> str:
    amount = parse_amount(fiat_text)
    if amount is None or not unit_price:
        return ""
    return f"{quantize_crypto(amount / unit_price):f}"


def crypto_to_fiat(crypto_text: str, unit_price: Decimal) -> str:
    amount = parse_amount(crypto_text)
    if amount is None or not unit_price:
        return ""
    return f"{quantize_fiat(amount * unit_price):f}"
