import math

import pytest
from pydantic import ValidationError

from currency_converter.models import (
    CURRENCIES,
    CURRENCY_CODES,
    ConversionForm,
    RateTable,
    get_currency,
    symbol_for,
)


def test_currency_list_is_fixed_and_ordered():
    codes = [c.code for c in CURRENCIES]
    assert codes == ["USD", "EUR", "GBP", "JPY", "CAD", "AUD", "CHF", "CNY", "INR", "KRW"]
    assert CURRENCY_CODES == frozenset(codes)
    assert isinstance(CURRENCIES, tuple)


def test_currency_lookup_and_symbols():
    assert get_currency("GBP").name == "British Pound"
    assert get_currency("gbp") is None
    assert symbol_for("CAD") == "C$"
    assert symbol_for("INR") == "₹"
    assert symbol_for("SEK") == "SEK"


def test_rate_table_filters_unusable_values():
    table = RateTable.from_mapping(
        "USD",
        {"EUR": 0.9, "JPY": 150, "A": 0.0, "B": -1.0, "C": math.inf, "D": math.nan, "E": True},
    )
    assert table.as_dict() == {"EUR": 0.9, "JPY": 150.0}
    assert table.rate_for("A") is None


def test_rate_table_is_read_only():
    table = RateTable.from_mapping("USD", {"EUR": 0.9})
    with pytest.raises(TypeError):
        table.rates["EUR"] = 2.0  # type: ignore[index]


def test_empty_rate_table():
    table = RateTable.empty()
    assert table.base is None
    assert len(table) == 0
    assert table.rate_for("EUR") is None


def test_conversion_form_validation():
    form = ConversionForm(amount="12.5", source="USD", destination="JPY")
    assert form.action == "convert"

    with pytest.raises(ValidationError):
        ConversionForm(amount="1", source="XXX", destination="EUR")
    with pytest.raises(ValidationError):
        ConversionForm(amount="1", source="USD", destination="EUR", action="reset")
