"""Tests for presence, username and reply text."""
import re
import pytest
from pricebot.formatting import (
    DOWN_INDICATOR,
    UP_INDICATOR,
    change_indicator,
    format_number,
    presence_state,
    presence_title,
    price_reply,
    username_for,
)

@pytest.mark.parametrize("price", [0.0, 0.000012, 0.12345678, 1, 123.45, 98765.4321])
def test_presence_title_has_five_decimals(price):
    title = presence_title(price)
    assert re.fullmatch(r"DEV \$\d+\.\d{5}", title)

def test_presence_title_rounds():
    assert presence_title(0.0123456) == "DEV $0.01235"

def test_presence_title_custom_label():
    assert presence_title(2, "BTC") == "BTC $2.00000"

def test_change_indicator_boundary():
    """A flat day (exactly 0) counts as up."""
    assert change_indicator(0) == UP_INDICATOR
    assert change_indicator(0.0001) == UP_INDICATOR
    assert change_indicator(-0.0001) == DOWN_INDICATOR

def test_presence_state_up():
    assert presence_state(4.5678, 1_234_567) == "24h: 📈4.57% | Vol: $1.23M"

def test_presence_state_down():
    assert presence_state(-2.5, 850) == "24h: 📉-2.50% | Vol: $850.00"

def test_presence_state_zero_change_and_volume():
    assert presence_state(0, 0) == "24h: 📈0.00% | Vol: $0.00"

@pytest.mark.parametrize("value,expected", [
    (0, "0.00"),
    (999.994, "999.99"),
    (1_000, "1.00K"),
    (12_360, "12.36K"),
    (1_500_000, "1.50M"),
    (2_000_000_000, "2.00B"),
    (3_100_000_000_000, "3.10T"),
    (-45_000, "-45.00K"),
    (999.999, "1.00K"),
    (999_999.99, "1.00M"),
    (999_999_999.999, "1.00B"),
    (-999_999.99, "-1.00M"),
])
def test_format_number(value, expected):
    assert format_number(value) == expected

def test_username_for():
    assert username_for(0.5) == "DEV: $0.50000"

def test_price_reply_literal():
    assert price_reply(123.45) == "**DEV Token Price:** $123.45000\n"
