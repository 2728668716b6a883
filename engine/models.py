from dataclasses import dataclass


class InvalidParameter(ValueError):
    pass


class NumericOverflow(ArithmeticError):
    pass


@dataclass(frozen=True)
class LoanParameters:
    principal: float
    annual_rate: float  # annual %
    tenure_years: int
    extra_emi_per_year: int = 0
    emi_hike_percent: float = 0.0  # annual %

    @property
    def total_months(self) -> int:
        return self.tenure_years * 12


@dataclass(frozen=True)
class MonthlyRecord:
    month: int
    emi: float
    principal_paid: float
    interest: float
    outstanding: float
    prepayment: float
    is_paid: bool


@dataclass(frozen=True)
class SummaryMetrics:
    principal: float
    interest_without_prepayment: float
    interest_with_prepayment: float
    total_without_prepayment: float
    total_with_prepayment: float
    money_saved: float
    paid_in_years: int
    paid_in_months: int
    months_saved: int
