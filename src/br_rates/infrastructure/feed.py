"""Simulated live rate feed.

Stands in for a real price API: waits a moment, then returns the reference
prices with random jitter. Any callable with the same signature can be passed
to RateOracle instead.
"""
import asyncio
import random
from collections.abc import Awaitable, Callable
from decimal import Decimal

from config.settings import settings
from src.br_rates.domain.models import USD, ExchangeRates

RateFeed = Callable[[], Awaitable[ExchangeRates]]

# symbol -> (center, full jitter width)
_CRYPTO_REFERENCE: dict[str, tuple[str, str]] = {
    "ETH": ("3642.5", "100"),
    "BTC": ("65100.0", "1000"),
    "USDC": ("1.0", "0"),
    "USDT": ("1.0", "0"),
    "ARB": ("2.47", "0.1"),
}
_FIAT_REFERENCE: dict[str, tuple[str, str]] = {
    "EUR": ("1.10", "0.02"),
    "GBP": ("1.27", "0.02"),
}


def _jitter(center: str, width: str, rng: random.Random) -> Decimal:
    offset = Decimal(str(rng.random() - 0.5)) * Decimal(width)
    return (Decimal(center) + offset).quantize(Decimal("0.0001"))


def make_simulated_feed(
    delay_seconds: float | None = None,
    rng: random.Random | None = None,
) -> RateFeed:
    delay = settings.RATE_REFRESH_DELAY_SECONDS if delay_seconds is None else delay_seconds
    rng = rng or random.Random()

    async def fetch() -> ExchangeRates:
        await asyncio.sleep(delay)
        return ExchangeRates(
            crypto={s: _jitter(c, w, rng) for s, (c, w) in _CRYPTO_REFERENCE.items()},
            fiat={
                **{s: _jitter(c, w, rng) for s, (c, w) in _FIAT_REFERENCE.items()},
                USD: Decimal("1"),
            },
        )

    return fetch
