"""
Currency Presentation
=====================

Symbols, rate conversion and display formatting for prices.

Exchange rates are supplied by the caller through CurrencyContext;
nothing here fetches or caches them.
"""

from dataclasses import dataclass
from typing import Optional

from configurator.models.catalog import Package

CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CNY": "¥",
    "KRW": "₩",
    "INR": "₹",
    "BRL": "R$",
    "CAD": "C$",
    "AUD": "A$",
    "ZAR": "R",
    "Kz": "Kz",
}

# Angolan kwanza is shown as a rounded amount with a suffix, not a prefix symbol
SUFFIX_CURRENCIES = {"Kz"}


def currency_symbol(currency: str) -> str:
    """Display symbol for a currency code; unknown codes show as-is."""
    return CURRENCY_SYMBOLS.get(currency, currency)


def format_number(amount: float, currency: str = "USD") -> str:
    """Two decimals with thousands grouping (South African style for ZAR)."""
    text = f"{amount:,.2f}"
    if currency == "ZAR":
        text = text.replace(",", "\u00a0").replace(".", ",")
    return text


def convert_price(amount: float, currency: str, rate: float, base_currency: str = "USD") -> float:
    if currency != base_currency:
        return amount * rate
    return amount


def format_amount(amount: float, currency: str) -> str:
    """Format an amount already expressed in `currency`."""
    if currency in SUFFIX_CURRENCIES:
        return f"{round(amount)}{currency}"
    return f"{currency_symbol(currency)} {format_number(amount, currency)}"


@dataclass(frozen=True)
class CurrencyContext:
    """The buyer's display currency and its rate against the base currency."""
    code: str = "USD"
    rate: float = 1.0
    symbol: Optional[str] = None
    base_currency: str = "USD"

    @property
    def display_symbol(self) -> str:
        return self.symbol or currency_symbol(self.code)

    def with_currency(self, code: str, rate: float = 1.0) -> "CurrencyContext":
        return CurrencyContext(code=code, rate=rate, base_currency=self.base_currency)

    def convert(self, amount: float) -> float:
        return convert_price(amount, self.code, self.rate, self.base_currency)

    def format(self, amount: float, convert: bool = True) -> str:
        """Format a base-currency amount for display in this currency."""
        value = self.convert(amount) if convert else amount
        return format_amount(value, self.code)

    def format_package_price(self, package: Package, amount: float) -> str:
        """
        Format a package-level amount.

        An explicit per-currency price on the package wins over rate
        conversion when the package is priced in the base currency.
        """
        display = amount
        if self.code != self.base_currency and package.currency == self.base_currency:
            explicit = package.multi_currency_prices.get(self.code)
            display = explicit if explicit else amount * self.rate
        return format_amount(display, self.code)
