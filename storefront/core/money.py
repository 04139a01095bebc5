"""
Money formatting helpers.

Prices travel as integer minor units (cents) everywhere; they are only
turned into text at the edge, es-ES style ("1.234,50 €").
"""

from typing import Optional


def format_cents(cents: Optional[int], symbol: str = "€") -> str:
    """Format integer cents as an es-ES currency string."""
    cents = cents or 0
    sign = "-" if cents < 0 else ""
    units, minor = divmod(abs(cents), 100)
    grouped = f"{units:,}".replace(",", ".")
    return f"{sign}{grouped},{minor:02d} {symbol}"


def format_delta(cents: int) -> str:
    """Label for a modifier price delta: "+ 1,20 €" or "Incluido"."""
    if cents > 0:
        return f"+ {format_cents(cents)}"
    return "Incluido"
