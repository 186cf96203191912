from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UiActionResult:
    ok: bool
    message: str


def format_amount(value: float) -> str:
    """
    Format an amount for display with two decimals.

    Example:
    - 1234.5 -> "1234.50"
    - -150 -> "-150.00"
    """
    return f"{float(value):.2f}"
