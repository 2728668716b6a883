import asyncio
import math
import numbers
from dataclasses import replace

import pandas as pd

from .models import (
    InvalidParameter,
    LoanParameters,
    MonthlyRecord,
    NumericOverflow,
    SummaryMetrics,
)
from .interest import (
    SETTLEMENT_TOLERANCE,
    baseline_total_interest,
    monthly_interest,
    settle,
    standard_emi,
)

# extra EMIs per year must divide the twelve months evenly
EXTRA_EMI_CHOICES = (0, 1, 2, 3, 4, 6, 12)


def _is_real(value):
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def validate(params: LoanParameters):
    for field in ("principal", "annual_rate", "emi_hike_percent"):
        value = getattr(params, field)
        if not _is_real(value) or not math.isfinite(value):
            raise InvalidParameter(f"{field} must be a finite number, got {value!r}")

    for field in ("tenure_years", "extra_emi_per_year"):
        value = getattr(params, field)
        if not isinstance(value, numbers.Integral) or isinstance(value, bool):
            raise InvalidParameter(f"{field} must be an integer, got {value!r}")

    if params.principal <= 0:
        raise InvalidParameter(f"principal must be positive, got {params.principal}")
    if params.tenure_years <= 0:
        raise InvalidParameter(f"tenure_years must be positive, got {params.tenure_years}")
    if params.annual_rate < 0:
        raise InvalidParameter(f"annual_rate must not be negative, got {params.annual_rate}")
    if params.emi_hike_percent < 0:
        raise InvalidParameter(
            f"emi_hike_percent must not be negative, got {params.emi_hike_percent}"
        )
    if params.extra_emi_per_year not in EXTRA_EMI_CHOICES:
        raise InvalidParameter(
            f"extra_emi_per_year must be one of {EXTRA_EMI_CHOICES}, "
            f"got {params.extra_emi_per_year}"
        )


def base_emi(params: LoanParameters) -> float:
    try:
        emi = standard_emi(params.principal, params.annual_rate, params.tenure_years)
    except OverflowError as exc:
        raise NumericOverflow(f"EMI overflowed for {params}") from exc

    if not math.isfinite(emi):
        raise NumericOverflow(f"EMI is not finite for {params}")
    return emi


def simulate(params: LoanParameters) -> list[MonthlyRecord]:
    """
    Month-by-month amortization with annual EMI hikes and periodic
    prepayments. Stops on payoff or when the tenure runs out.
    """
    emi = base_emi(params)
    # prepayments stay at the initial EMI even after hikes
    prepayment_amount = emi
    tolerance = params.principal * SETTLEMENT_TOLERANCE
    interval = 12 // params.extra_emi_per_year if params.extra_emi_per_year else None

    records = []
    outstanding = params.principal
    last_year = 1
    month = 1

    while outstanding > 0 and month <= params.total_months:
        year = (month - 1) // 12 + 1
        if year > last_year:
            if params.emi_hike_percent > 0:
                emi = emi * (1 + params.emi_hike_percent / 100)
            last_year = year

        interest = monthly_interest(outstanding, params.annual_rate)
        principal_paid = settle(outstanding, max(emi - interest, 0), tolerance)
        paid_emi = principal_paid + interest if principal_paid == outstanding else emi

        remaining = outstanding - principal_paid
        prepayment = 0.0
        if interval and month % interval == 0 and remaining > 0:
            prepayment = settle(remaining, prepayment_amount, tolerance)

        outstanding = max(remaining - prepayment, 0)

        records.append(MonthlyRecord(
            month=month,
            emi=paid_emi,
            principal_paid=principal_paid,
            interest=interest,
            outstanding=outstanding,
            prepayment=prepayment,
            is_paid=outstanding == 0,
        ))
        month += 1

    return records


def summarize(params: LoanParameters, records: list[MonthlyRecord]) -> SummaryMetrics:
    baseline_interest = baseline_total_interest(
        params.principal, params.annual_rate, params.tenure_years
    )
    interest_paid = sum(r.interest for r in records)
    paid_in_months = len(records)

    return SummaryMetrics(
        principal=params.principal,
        interest_without_prepayment=baseline_interest,
        interest_with_prepayment=interest_paid,
        total_without_prepayment=params.principal + baseline_interest,
        total_with_prepayment=params.principal + interest_paid,
        money_saved=baseline_interest - interest_paid,
        paid_in_years=paid_in_months // 12,
        paid_in_months=paid_in_months,
        months_saved=params.total_months - paid_in_months,
    )


def compute_schedule(
    params: LoanParameters,
) -> tuple[list[MonthlyRecord], SummaryMetrics]:

    validate(params)
    records = simulate(params)
    return records, summarize(params, records)


async def compute_schedule_async(params: LoanParameters):
    return await asyncio.to_thread(compute_schedule, params)


def baseline_schedule(params: LoanParameters) -> list[MonthlyRecord]:
    validate(params)
    return simulate(replace(params, extra_emi_per_year=0, emi_hike_percent=0.0))


def schedule_frame(records: list[MonthlyRecord]) -> pd.DataFrame:
    rows = [{
        "Month": r.month,
        "EMI": r.emi,
        "Principal Paid": r.principal_paid,
        "Interest": r.interest,
        "Prepayment": r.prepayment,
        "Outstanding": r.outstanding,
        "Paid": r.is_paid,
    } for r in records]

    return pd.DataFrame(rows, columns=[
        "Month", "EMI", "Principal Paid", "Interest", "Prepayment", "Outstanding", "Paid",
    ])


def yearly_breakdown(records: list[MonthlyRecord]) -> pd.DataFrame:
    df = schedule_frame(records)
    df["Year"] = (df["Month"] - 1) // 12 + 1

    return (
        df.groupby("Year", as_index=False)
        .agg({
            "Principal Paid": "sum",
            "Interest": "sum",
            "Prepayment": "sum",
            "Outstanding": "last",
        })
    )


def compare_outstanding(baseline, scenario) -> pd.DataFrame:
    comparison = (
        schedule_frame(baseline)[["Month", "Outstanding"]]
        .rename(columns={"Outstanding": "Baseline Outstanding"})
        .merge(
            schedule_frame(scenario)[["Month", "Outstanding"]]
            .rename(columns={"Outstanding": "Scenario Outstanding"}),
            on="Month",
            how="outer"
        )
        .set_index("Month")
    )

    comparison["Scenario Outstanding"] = comparison["Scenario Outstanding"].fillna(0)
    return comparison
