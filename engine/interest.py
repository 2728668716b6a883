import math

# residue below principal * SETTLEMENT_TOLERANCE on the last month counts as paid
SETTLEMENT_TOLERANCE = 1e-9


def monthly_rate(annual_rate):
    return annual_rate / 12 / 100


def standard_emi(principal, annual_rate, tenure_years):
    """
    Fixed monthly installment that amortizes the principal over the tenure.
    """
    n = tenure_years * 12
    if annual_rate == 0:
        return principal / n

    r = monthly_rate(annual_rate)
    # (1 + r) ** n computed via log1p/expm1 to keep small rates accurate
    growth = math.expm1(n * math.log1p(r))
    # rate too small to register as a float
    if r == 0 or growth == 0:
        return principal / n

    return principal * r * (growth + 1) / growth


def monthly_interest(outstanding, annual_rate):
    return outstanding * monthly_rate(annual_rate)


def settle(outstanding, principal_paid, tolerance):
    """
    Clamp a month's principal portion so it never exceeds the balance.
    """
    if principal_paid > outstanding - tolerance:
        return outstanding
    return principal_paid


def baseline_total_interest(principal, annual_rate, tenure_years):
    """
    Interest paid over the full tenure at the constant standard EMI,
    with no hikes and no prepayments.
    """
    if annual_rate == 0:
        return 0.0

    emi = standard_emi(principal, annual_rate, tenure_years)
    tolerance = principal * SETTLEMENT_TOLERANCE
    outstanding = principal
    total = 0.0

    for _ in range(tenure_years * 12):
        interest = monthly_interest(outstanding, annual_rate)
        principal_paid = settle(outstanding, max(emi - interest, 0), tolerance)
        total += interest
        outstanding = max(outstanding - principal_paid, 0)
        if outstanding <= 0:
            break

    return total

