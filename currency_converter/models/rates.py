from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Union

from pydantic import BaseModel, StrictFloat, StrictInt

logger = logging.getLogger("converter.rates")


class RatesPayload(BaseModel):
    """Body returned by the remote rate service.

    Only `rates` is required; providers differ in what else they send
    (exchangerate-api adds `time_last_updated`, frankfurter adds `amount`).
    Rates must be JSON numbers: booleans and numeric strings are rejected.
    """

    base: Optional[str] = None
    date: Optional[str] = None
    rates: Dict[str, Union[StrictFloat, StrictInt]]


@dataclass(frozen=True)
class RateTable:
    """Rates for one base currency: units of quote currency per 1 unit of base.

    Immutable; a new table replaces the old one wholesale on every fetch.
    """

    base: Optional[str]
    rates: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
    as_of: Optional[str] = None

    @classmethod
    def empty(cls) -> "RateTable":
        return cls(base=None)

    @classmethod
    def from_mapping(
        cls, base: str, rates: Mapping[str, float], as_of: Optional[str] = None
    ) -> "RateTable":
        clean: Dict[str, float] = {}
        for code, value in rates.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                continue
            value = float(value)
            if math.isfinite(value) and value > 0:
                clean[code] = value
            else:
                logger.debug("dropping unusable rate %s=%r for base %s", code, value, base)
        return cls(base=base, rates=MappingProxyType(clean), as_of=as_of)

    def rate_for(self, code: str) -> Optional[float]:
        return self.rates.get(code)

    def __contains__(self, code: object) -> bool:
        return code in self.rates

    def __iter__(self) -> Iterator[str]:
        return iter(self.rates)

    def __len__(self) -> int:
        return len(self.rates)

    def as_dict(self) -> Dict[str, float]:
        return dict(self.rates)
