import logging

import altair as alt
import pandas as pd
import streamlit as st

from config import PAGE_SIZES, load_defaults, setup_logging
from engine.models import InvalidParameter, LoanParameters, NumericOverflow
from engine.schedule import (
    EXTRA_EMI_CHOICES,
    base_emi,
    baseline_schedule,
    compare_outstanding,
    compute_schedule,
    schedule_frame,
    yearly_breakdown,
)
from formatting import format_currency, format_duration, format_number
from table import page_count, paginate, search_rows

# --------------------------------------------------
# Setup
# --------------------------------------------------

defaults = load_defaults()
setup_logging(defaults.log_level)
logger = logging.getLogger(__name__)

st.set_page_config(layout="wide")
st.title("Loan Prepayment Calculator")

# --------------------------------------------------
# Loan basics
# --------------------------------------------------

with st.form("loan"):
    c1, c2, c3 = st.columns(3)
    principal = c1.number_input("Loan Amount", value=float(defaults.principal), min_value=1.0, step=100_000.0)
    rate = c2.number_input("Rate of Interest (%)", value=float(defaults.annual_rate), min_value=0.0, step=0.01, format="%.2f")
    tenure = c3.number_input("Tenure (Years)", value=int(defaults.tenure_years), min_value=1, max_value=50, step=1)

    c4, c5 = st.columns(2)
    extra_default = defaults.extra_emi_per_year if defaults.extra_emi_per_year in EXTRA_EMI_CHOICES else 0
    extra_emi = c4.selectbox("Extra EMI Every Year", EXTRA_EMI_CHOICES, index=EXTRA_EMI_CHOICES.index(extra_default))
    hike = c5.number_input("Hike EMI by % Every Year", value=float(defaults.emi_hike_percent), min_value=0.0, step=0.1)

    st.form_submit_button("Calculate")

params = LoanParameters(
    principal=principal,
    annual_rate=rate,
    tenure_years=int(tenure),
    extra_emi_per_year=int(extra_emi),
    emi_hike_percent=hike,
)

# --------------------------------------------------
# Compute
# --------------------------------------------------

try:
    records, summary = compute_schedule(params)
    baseline = baseline_schedule(params)
except (InvalidParameter, NumericOverflow) as e:
    logger.warning(f"Rejected loan parameters {params}: {e}")
    st.error(str(e))
    st.stop()

logger.info(f"Computed {len(records)} months for {params}")

df = schedule_frame(records)

# --------------------------------------------------
# Summary
# --------------------------------------------------

st.subheader("Summary")

st.metric("Standard Monthly EMI", format_currency(base_emi(params)))

c1, c2, c3, c4 = st.columns(4)
c1.metric("Principal Amount", format_currency(summary.principal))
c2.metric("Interest (Without Prepayment)", format_currency(summary.interest_without_prepayment))
c3.metric("Interest (With Prepayment)", format_currency(summary.interest_with_prepayment))
c4.metric("Total Money Saved", format_currency(summary.money_saved))

c1, c2, c3, c4 = st.columns(4)
c1.metric("Total Amount (Without Prepayment)", format_currency(summary.total_without_prepayment))
c2.metric("Total Amount (With Prepayment)", format_currency(summary.total_with_prepayment))
c3.metric("Loan Paid In", format_duration(summary.paid_in_years, summary.paid_in_months))
c4.metric("Loan Tenure Reduced", f"{summary.months_saved} months")

# --------------------------------------------------
# Charts
# --------------------------------------------------

yearly = yearly_breakdown(records)

c1, c2 = st.columns(2)

area = alt.Chart(yearly).mark_area(opacity=0.6).encode(
    x="Year:Q",
    y=alt.Y("Outstanding:Q", title="Outstanding Principal"),
).properties(title="Outstanding Principal Over Time", height=350)
c1.altair_chart(area, width='stretch')

split_df = pd.DataFrame({
    "Component": ["Principal", "Interest"],
    "Amount": [summary.principal, summary.interest_with_prepayment],
})
pie = alt.Chart(split_df).mark_arc().encode(
    theta="Amount:Q",
    color=alt.Color(
        "Component:N",
        scale=alt.Scale(domain=["Principal", "Interest"], range=["#0088FE", "#FF8042"]),
    ),
).properties(title="Principal vs Interest", height=350)
c2.altair_chart(pie, width='stretch')

bars_df = yearly.melt(
    id_vars="Year",
    value_vars=["Principal Paid", "Interest"],
    var_name="Type",
    value_name="Amount",
)
bars = alt.Chart(bars_df).mark_bar().encode(
    x="Year:O",
    y="Amount:Q",
    xOffset="Type:N",
    color=alt.Color(
        "Type:N",
        scale=alt.Scale(domain=["Principal Paid", "Interest"], range=["#00C49F", "#FF8042"]),
    ),
).properties(title="Yearly Principal vs Interest", height=350)
st.altair_chart(bars, width='stretch')

comparison_df = compare_outstanding(baseline, records)

chart_df = comparison_df.reset_index().melt(
    id_vars="Month",
    value_vars=["Baseline Outstanding", "Scenario Outstanding"],
    var_name="Type",
    value_name="Outstanding"
)

chart = alt.Chart(chart_df).mark_line(strokeWidth=3).encode(
    x="Month:Q",
    y="Outstanding:Q",
    color=alt.Color(
        "Type:N",
        scale=alt.Scale(
            domain=["Baseline Outstanding", "Scenario Outstanding"],
            range=["#d62728", "#2ca02c"]  # red, green
        ),
        legend=alt.Legend(title="Schedule")
    )
).properties(
    width="container",
    height=400,
    title="Outstanding Balance: Baseline vs Scenario"
)

st.altair_chart(chart, width='stretch')

# --------------------------------------------------
# Amortization table
# --------------------------------------------------

st.subheader("Amortization Schedule")

c1, c2, c3 = st.columns([3, 1, 1])
term = c1.text_input("Search by month, EMI or principal")
page_size = c2.selectbox("Rows per page", PAGE_SIZES, index=PAGE_SIZES.index(defaults.page_size))

filtered = search_rows(df, term)
pages = page_count(filtered, page_size)
page = c3.number_input("Page", min_value=1, max_value=pages, value=1, step=1)

view = paginate(filtered, int(page), page_size).copy()
for column in ["EMI", "Principal Paid", "Interest", "Prepayment", "Outstanding"]:
    view[column] = view[column].map(format_number)

st.dataframe(view, width='stretch', hide_index=True)
st.caption(f"Page {int(page)} of {pages} ({len(filtered)} months)")
