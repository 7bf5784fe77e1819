from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator

from .constants import CURRENCY_CODES


@dataclass(frozen=True)
class ConversionState:
    """Snapshot of what the converter form shows.

    `amount` is the raw text from the input box; it is only parsed when a
    recompute is attempted.
    """

    amount: str
    source_currency: str
    destination_currency: str
    converted_amount: str = "0"
    is_fetching: bool = False


class ConversionForm(BaseModel):
    amount: str = Field("", max_length=64)
    source: str
    destination: str
    action: str = "convert"

    @field_validator("source", "destination")
    @classmethod
    def valid_currency(cls, v: str) -> str:
        if v not in CURRENCY_CODES:
            raise ValueError("unsupported currency")
        return v

    @field_validator("action")
    @classmethod
    def valid_action(cls, v: str) -> str:
        if v not in ("convert", "swap"):
            raise ValueError("action must be 'convert' or 'swap'")
        return v
