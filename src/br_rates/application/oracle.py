"""RateOracle: the only source of crypto/fiat conversion prices.

Starts on the hardcoded table so conversions always work offline. refresh()
swaps the whole table on success; on failure the previous table and provenance
stay in place and the state carries an error message.
"""
import asyncio
import logging
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

from src.br_common.datetime_utils import clock_label, utc_now
from src.br_common.enums import RatesProvenance
from src.br_rates.domain.models import HARDCODED_RATES, USD, ExchangeRates, RatesState
from src.br_rates.infrastructure.feed import RateFeed, make_simulated_feed

logger = logging.getLogger(__name__)

REFRESH_FAILED_MESSAGE = "Failed to fetch live rates"


class RateOracle:
    def __init__(
        self,
        feed: RateFeed | None = None,
        rates: ExchangeRates | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._feed = feed or make_simulated_feed()
        self._rates = rates or HARDCODED_RATES
        self._state = RatesState()
        self._clock = clock
        self._inflight: asyncio.Task[bool] | None = None

    @property
    def rates(self) -> ExchangeRates:
        return self._rates

    @property
    def state(self) -> RatesState:
        return self._state

    @property
    def provenance(self) -> RatesProvenance:
        return self._state.status

    @property
    def is_updating(self) -> bool:
        return self._state.status is RatesProvenance.UPDATING

    def usd_price(self, crypto: str) -> Decimal:
        return self._rates.usd_price(crypto)

    def unit_price(self, crypto: str, fiat: str) -> Decimal:
        """Price of one unit of crypto in fiat. 0 means "no price available"."""
        usd_price = self._rates.usd_price(crypto)
        if not usd_price:
            return Decimal("0")
        if fiat.upper() == USD:
            return usd_price
        per_unit = self._rates.usd_per_unit(fiat)
        if not per_unit:
            return usd_price
        return usd_price / per_unit

    async def refresh(self) -> bool:
        """Fetch a new table. Concurrent callers share the refresh already running."""
        if self._inflight is None or self._inflight.done():
            previous = self._state
            self._state = RatesState(
                status=RatesProvenance.UPDATING, last_updated=previous.last_updated
            )
            self._inflight = asyncio.ensure_future(self._do_refresh(previous))
        return await asyncio.shield(self._inflight)

    async def _do_refresh(self, previous: RatesState) -> bool:
        try:
            fresh = await self._feed()
        except Exception as exc:  # noqa: BLE001  -- any feed failure keeps the last table
            logger.warning("Rate refresh failed: %s", exc)
            self._state = RatesState(
                status=previous.status,
                last_updated=previous.last_updated,
                error=REFRESH_FAILED_MESSAGE,
            )
            return False
        self._rates = fresh
        self._state = RatesState(
            status=RatesProvenance.LIVE, last_updated=clock_label(self._clock())
        )
        logger.info("Rates refreshed at %s", self._state.last_updated)
        return True
