"""Loan amortization and inflation helpers."""

import math


def months_in(years: float) -> int:
    """Whole number of months in ``years``, halves rounded up."""
    return math.floor(years * 12 + 0.5)


def monthly_payment(principal: float, annual_rate: float, years: float) -> float:
    """Level monthly payment that fully amortizes ``principal`` over ``years``.

    Zero rate or zero principal falls back to straight-line repayment.
    """
    n = max(1, months_in(years))
    if annual_rate <= 0 or principal <= 0:
        return principal / n
    r = annual_rate / 12
    return principal * r * (1 + r) ** n / ((1 + r) ** n - 1)


def yearly_inflate(amount: float, rate: float, years: float) -> float:
    """Future value of ``amount`` after ``years`` of growth at ``rate``."""
    return amount * (1 + rate) ** years
