"""Text rendered into presence, username and command replies."""

UP_INDICATOR = "📈"
DOWN_INDICATOR = "📉"

PRICE_UNAVAILABLE_REPLY = "Sorry, I couldn't fetch the price right now. Please try again later."

_UNITS = (
    (1, ""),
    (1_000, "K"),
    (1_000_000, "M"),
    (1_000_000_000, "B"),
    (1_000_000_000_000, "T"),
)

def format_number(value: float) -> str:
    """Abbreviate a large number with K/M/B/T suffixes, e.g. 1234567 -> '1.23M'."""
    magnitude = abs(value)
    index = 0
    for i, (threshold, _) in enumerate(_UNITS):
        if magnitude >= threshold:
            index = i

    # 999.999 rounds to 1000.00 in its own unit; show it as 1.00K instead
    if index < len(_UNITS) - 1 and round(magnitude / _UNITS[index][0], 2) >= 1000:
        index += 1

    threshold, suffix = _UNITS[index]
    return f"{value / threshold:.2f}{suffix}"

def change_indicator(change_24h: float) -> str:
    # a flat day counts as up
    return UP_INDICATOR if change_24h >= 0 else DOWN_INDICATOR

def presence_title(price: float, label: str = "DEV") -> str:
    return f"{label} ${price:.5f}"

def presence_state(change_24h: float, volume_24h: float) -> str:
    return f"24h: {change_indicator(change_24h)}{change_24h:.2f}% | Vol: ${format_number(volume_24h)}"

def username_for(price: float, label: str = "DEV") -> str:
    return f"{label}: ${price:.5f}"

def price_reply(price: float, label: str = "DEV") -> str:
    return f"**{label} Token Price:** ${price:.5f}\n"
