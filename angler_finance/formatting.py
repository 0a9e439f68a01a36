"""Formatting utilities for currency display.

Every monetary string shown on screen or written into a PDF goes
through :func:`format_amount`, so the statistics view and the exports
always agree on the text.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    RUB = "RUB"
    CUSTOM = "Custom"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    Currency.USD: "$",
    Currency.EUR: "€",
    Currency.GBP: "£",
    Currency.RUB: "₽",
    Currency.CUSTOM: "$",
}


@dataclass(frozen=True)
class CurrencySetting:
    """Selected currency plus the symbol used when it is ``Custom``.

    Only the display symbol changes; amounts are never converted.
    """

    currency: Currency = Currency.USD
    custom_symbol: str = "$"

    @property
    def symbol(self) -> str:
        if self.currency is Currency.CUSTOM:
            return self.custom_symbol
        return self.currency.symbol

    @classmethod
    def from_value(cls, value: Optional[str], custom_symbol: str = "$") -> "CurrencySetting":
        """Build a setting from a stored currency code, defaulting to USD.

        Example:
            >>> CurrencySetting.from_value("EUR").symbol
            '€'
            >>> CurrencySetting.from_value("Custom", "kr").symbol
            'kr'
        """
        try:
            currency = Currency(value)
        except ValueError:
            currency = Currency.USD
        return cls(currency=currency, custom_symbol=custom_symbol)


DEFAULT_CURRENCY = CurrencySetting()


def format_amount(amount: Union[float, int], setting: Optional[CurrencySetting] = None) -> str:
    """Format a monetary amount with the selected currency symbol.

    The amount is rendered with two decimals; whole amounts drop the
    ``.00`` suffix.

    Args:
        amount: The amount to format
        setting: Currency selection, USD when omitted

    Returns:
        Formatted string such as ``"10 $"`` or ``"-7.25 €"``

    Example:
        >>> format_amount(10.0)
        '10 $'
        >>> format_amount(10.5)
        '10.50 $'
        >>> format_amount(-5)
        '-5 $'
    """
    symbol = (setting or DEFAULT_CURRENCY).symbol
    text = f"{float(amount):.2f}"
    if text == "-0.00":
        text = "0.00"
    if text.endswith(".00"):
        text = text[:-3]
    return f"{text} {symbol}"


def format_percent(ratio: float) -> str:
    """Render a progress ratio as a whole percentage, truncating like a gauge label."""
    return f"{int(ratio * 100)}%"
