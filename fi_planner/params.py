"""Plan parameters and rental property records."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PlanParams:
    """Household plan inputs. Rates and ratios are fractions (0.055 = 5.5%)."""

    # Home & primary mortgage
    home_value: float = 1_200_000
    mortgage_balance: float = 320_836.56
    primary_rate: float = 0.055
    amort_years: float = 25
    extra_prepay: float = 2000  # fixed extra principal per month

    # HELOC / investment line of credit
    heloc_rate: float = 0.067
    max_ltv: float = 0.80        # mortgage + HELOC ceiling
    max_heloc_ltv: float = 0.65  # HELOC-only ceiling
    tax_rate: float = 0.40       # marginal rate applied to deductible interest
    capitalize_interest: bool = True

    # Portfolio
    dividend_yield: float = 0.045
    total_return: float = 0.06
    inflation: float = 0.025

    # Rental financing (shared by all properties)
    rental_rate: float = 0.055
    rental_amort_years: float = 30
    rental_ltv: float = 0.80

    # Plan
    horizon_years: float = 10
    retirement_year: int = 5  # display only
    salary_target: float = 150_000  # today's dollars

    @property
    def price_return(self) -> float:
        return self.total_return - self.dividend_yield

    @property
    def max_combined_credit(self) -> float:
        return self.home_value * self.max_ltv

    @property
    def max_heloc_credit(self) -> float:
        return self.home_value * self.max_heloc_ltv


@dataclass(frozen=True)
class Property:
    """Planned rental acquisition."""

    name: str
    price: float
    cap_rate: float
    purchase_month: int  # 1-indexed month within the horizon
    use_heloc: bool = True  # down payment drawn from the HELOC

    def down_payment(self, rental_ltv: float) -> float:
        return self.price * (1 - rental_ltv)

    def monthly_noi(self) -> float:
        return self.price * self.cap_rate / 12


DEFAULT_PROPERTIES: tuple[Property, ...] = (
    Property("Rental #1", 750_000, 0.065, 6, True),
    Property("Rental #2", 750_000, 0.0675, 18, True),
)
