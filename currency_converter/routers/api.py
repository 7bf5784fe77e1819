from __future__ import annotations

import math
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request
from pydantic import BaseModel

from currency_converter.models.constants import is_supported
from currency_converter.services.money import format_amount, round2
from currency_converter.services.rates.base import RateFetcher

"""JSON endpoints for scripts and the browser alike.

Endpoints:
    - GET /api/rates/{base}  -> full rate table for a base currency
    - GET /api/convert       -> one-shot conversion {amount, source, destination}

Stateless: every call fetches fresh rates. Failures of the remote service
surface as 502 through the FetchError handler.
"""

router = APIRouter(prefix="/api", tags=["rates"])


def get_rate_fetcher(request: Request) -> RateFetcher:
    return request.app.state.rate_fetcher


def _require_supported(code: str) -> str:
    if not is_supported(code):
        raise HTTPException(status_code=422, detail=f"Unsupported currency '{code}'")
    return code


class RatesOut(BaseModel):
    base: str
    as_of: Optional[str] = None
    rates: Dict[str, float]


class ConversionOut(BaseModel):
    source: str
    destination: str
    amount: float
    rate: float
    converted_amount: float
    display: str
    as_of: Optional[str] = None


@router.get("/rates/{base}", response_model=RatesOut, summary="Rates for a base currency")
async def get_rates(
    base: str = Path(..., min_length=3, max_length=3),
    fetcher: RateFetcher = Depends(get_rate_fetcher),
):
    base = _require_supported(base)
    table = await fetcher.fetch_rates(base)
    return RatesOut(base=base, as_of=table.as_of, rates=table.as_dict())


@router.get("/convert", response_model=ConversionOut, summary="Convert an amount")
async def convert(
    amount: float = Query(..., allow_inf_nan=False, description="Amount in source currency"),
    source: str = Query(..., min_length=3, max_length=3, description="Source currency code"),
    destination: str = Query(..., min_length=3, max_length=3, description="Destination currency code"),
    fetcher: RateFetcher = Depends(get_rate_fetcher),
):
    source = _require_supported(source)
    destination = _require_supported(destination)
    table = await fetcher.fetch_rates(source)
    rate = table.rate_for(destination)
    if rate is None:
        raise HTTPException(
            status_code=404, detail=f"No rate from {source} to {destination}"
        )
    converted = amount * rate
    if not math.isfinite(converted):
        raise HTTPException(
            status_code=422, detail=f"Converted amount for {amount} {source} is out of range"
        )
    return ConversionOut(
        source=source,
        destination=destination,
        amount=amount,
        rate=rate,
        converted_amount=round2(converted),
        display=format_amount(converted),
        as_of=table.as_of,
    )
