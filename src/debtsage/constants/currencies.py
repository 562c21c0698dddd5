"""
Supported display currencies.
Only symbols are needed; amounts are never converted between currencies.
"""

from __future__ import annotations

from typing import NamedTuple


class Currency(NamedTuple):
    code: str
    name: str
    symbol: str


SUPPORTED_CURRENCIES = [
    Currency("USD", "United States Dollar", "$"),
    Currency("EUR", "Euro", "€"),
    Currency("GBP", "British Pound", "£"),
    Currency("JPY", "Japanese Yen", "¥"),
    Currency("KES", "Kenyan Shilling", "Ksh"),
]

DEFAULT_SYMBOL = "$"
