"""Converter form state and recompute rules.

One `ConversionView` backs one browser session. It owns the form state and
the current rate table; nothing else mutates either.

Rules:
    - Changing the source currency (directly or through swap) fetches a fresh
      rate table for it. Nothing else triggers a fetch.
    - Changing the amount, the destination or the rate table attempts a
      recompute. A recompute only happens when the amount parses to a finite
      number, the table was fetched for the current source and it holds a
      usable rate for the destination. Otherwise the previous converted amount
      stays on screen.
    - Every fetch takes a ticket. Only the result of the newest ticket is
      applied; older results are dropped when they arrive, so a slow response
      for an abandoned source can never overwrite a newer table.
    - A failed fetch leaves table and converted amount untouched and pushes a
      single notification.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Optional

from currency_converter.models.constants import is_supported, symbol_for
from currency_converter.models.conversion import ConversionState
from currency_converter.models.rates import RateTable
from currency_converter.services.money import format_amount, format_rate, parse_amount
from currency_converter.services.notifications import Notification, Notifier
from currency_converter.services.rates.base import FetchError, RateFetcher

logger = logging.getLogger("converter.view")

FETCH_FAILED = Notification(
    title="Error",
    description="Failed to fetch exchange rates. Please try again.",
    severity="destructive",
)


class ConversionView:
    def __init__(
        self,
        fetcher: RateFetcher,
        notifier: Notifier,
        *,
        amount: str = "1",
        source: str = "USD",
        destination: str = "EUR",
    ):
        self._fetcher = fetcher
        self._notifier = notifier
        self._state = ConversionState(
            amount=amount,
            source_currency=self._require_supported(source),
            destination_currency=self._require_supported(destination),
        )
        self._rates = RateTable.empty()
        self._ticket = 0

    # Read side --------------------------------------------------
    @property
    def state(self) -> ConversionState:
        return self._state

    @property
    def rates(self) -> RateTable:
        return self._rates

    def current_rate(self) -> Optional[float]:
        """Rate from source to destination, if the table is for the current source."""
        if self._rates.base != self._state.source_currency:
            return None
        return self._rates.rate_for(self._state.destination_currency)

    def rate_summary(self) -> str:
        s = self._state
        return f"1 {s.source_currency} = {format_rate(self.current_rate())} {s.destination_currency}"

    def converted_display(self) -> str:
        if self._state.is_fetching:
            return "Converting..."
        return f"{symbol_for(self._state.destination_currency)} {self._state.converted_amount}"

    # Input events -----------------------------------------------
    async def mount(self) -> bool:
        return await self.refresh_rates()

    def set_amount(self, text: str) -> None:
        if text == self._state.amount:
            return
        self._state = replace(self._state, amount=text)
        self._recompute()

    def select_destination(self, code: str) -> None:
        code = self._require_supported(code)
        if code == self._state.destination_currency:
            return
        self._state = replace(self._state, destination_currency=code)
        self._recompute()

    async def select_source(self, code: str) -> bool:
        """Switch the base currency and fetch rates for it.

        Returns True when a new table was applied.
        """
        code = self._require_supported(code)
        if code == self._state.source_currency:
            return False
        self._state = replace(self._state, source_currency=code)
        return await self.refresh_rates()

    async def swap(self) -> bool:
        prior = self._state
        self._state = replace(
            prior,
            source_currency=prior.destination_currency,
            destination_currency=prior.source_currency,
        )
        self._recompute()
        if self._state.source_currency == prior.source_currency:
            return False
        return await self.refresh_rates()

    async def refresh_rates(self) -> bool:
        self._ticket += 1
        ticket = self._ticket
        base = self._state.source_currency
        self._state = replace(self._state, is_fetching=True)
        logger.debug("fetch #%d for %s started", ticket, base)
        try:
            table = await self._fetcher.fetch_rates(base)
        except FetchError as exc:
            if ticket != self._ticket:
                logger.info("ignoring failure of superseded fetch #%d for %s", ticket, base)
                return False
            self._state = replace(self._state, is_fetching=False)
            logger.warning("fetch #%d for %s failed: %s", ticket, base, exc)
            self._notifier.notify(FETCH_FAILED)
            return False
        except Exception:
            if ticket == self._ticket:
                self._state = replace(self._state, is_fetching=False)
            raise
        if ticket != self._ticket:
            logger.info("discarding stale rates from fetch #%d for %s", ticket, base)
            return False
        self._state = replace(self._state, is_fetching=False)
        self._rates = table
        logger.debug("fetch #%d for %s applied (%d rates)", ticket, base, len(table))
        self._recompute()
        return True

    # Internal ---------------------------------------------------
    def _recompute(self) -> None:
        amount = parse_amount(self._state.amount)
        rate = self.current_rate()
        if amount is None or rate is None:
            return
        converted = amount * rate
        if not math.isfinite(converted):
            logger.debug("conversion of %s overflowed, keeping previous value", self._state.amount)
            return
        self._state = replace(self._state, converted_amount=format_amount(converted))

    @staticmethod
    def _require_supported(code: str) -> str:
        if not is_supported(code):
            raise ValueError(f"unsupported currency '{code}'")
        return code
