"""Job money math.

Line totals bill the installed quantity (work actually done), not the
requested quantity. All amounts are Decimals rounded half-up to cents.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Protocol

DEFAULT_TAX_RATE = Decimal("0.08")
_CENT = Decimal("0.01")


class PricedLine(Protocol):
    price: Decimal
    installed_quantity: float


def to_cents(amount: Decimal) -> Decimal:
    return amount.quantize(_CENT, rounding=ROUND_HALF_UP)


def line_total(line: PricedLine) -> Decimal:
    return to_cents(Decimal(line.price) * Decimal(str(line.installed_quantity)))


def subtotal(lines: Iterable[PricedLine]) -> Decimal:
    return to_cents(sum((line_total(line) for line in lines), Decimal("0")))


def apply_tax(amount: Decimal, rate: Decimal = DEFAULT_TAX_RATE) -> Decimal:
    return to_cents(amount * (1 + rate))


def calculate_job_total(job, tax_rate: Decimal = DEFAULT_TAX_RATE) -> Decimal:
    """Server-assigned ``total_amount`` when the job has one.

    Client-only drafts have no server total; for those the subtotal of the
    line totals plus flat tax is computed locally.
    """
    total = getattr(job, "total_amount", None)
    if total is not None:
        return Decimal(total)
    return apply_tax(subtotal(job.items), tax_rate)
