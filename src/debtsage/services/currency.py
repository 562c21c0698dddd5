"""Currency display helpers."""

from __future__ import annotations

from ..constants.currencies import DEFAULT_SYMBOL, SUPPORTED_CURRENCIES


def currency_symbol(currency_code: str | None) -> str:
    """Return the display symbol for ``currency_code`` (``$`` when unknown)."""

    code = (currency_code or "").strip().upper()
    for currency in SUPPORTED_CURRENCIES:
        if currency.code == code:
            return currency.symbol
    return DEFAULT_SYMBOL


def format_currency(amount: float, currency_code: str | None = "USD") -> str:
    """Format ``amount`` with two decimals and thousands separators, e.g. ``$1,234.50``."""

    symbol = currency_symbol(currency_code)
    value = float(amount or 0.0)
    if value < 0:
        return f"-{symbol}{abs(value):,.2f}"
    return f"{symbol}{value:,.2f}"


def format_short(amount: float, currency_code: str | None = "USD") -> str:
    """Compact axis label, e.g. ``$12.5k``."""

    symbol = currency_symbol(currency_code)
    value = float(amount or 0.0)
    if abs(value) >= 1000:
        return f"{symbol}{value / 1000:g}k"
    return f"{symbol}{value:,.0f}"


__all__ = ["currency_symbol", "format_currency", "format_short"]
