"""
Singapore Property Investment Calculator - Schedules

Year-by-year tables derived from a calculation result, as pandas
DataFrames for display or export.
"""

import math

import pandas as pd

from calculations import (
    CalculationResult,
    calculate_monthly_payment,
    calculate_remaining_balance,
)
from logging_setup import get_logger
from models import PropertyInputs

logger = get_logger(__name__)


def build_amortization_schedule(
    loan_amount: float,
    annual_rate: float,
    tenure_years: int
) -> pd.DataFrame:
    """
    Yearly amortization schedule over the full tenure.

    Year-end balances come from the closed-form remaining balance, so each
    row agrees with calculate_remaining_balance for that year.
    """
    monthly = calculate_monthly_payment(loan_amount, annual_rate, tenure_years)
    annual_payment = monthly * 12

    rows = []
    opening = loan_amount
    for year in range(1, int(math.ceil(tenure_years)) + 1):
        closing = calculate_remaining_balance(loan_amount, annual_rate, tenure_years, year)
        principal_paid = opening - closing
        rows.append({
            "Year": year,
            "Payment": annual_payment,
            "Interest": annual_payment - principal_paid,
            "Principal": principal_paid,
            "Ending Balance": closing,
        })
        opening = closing

    return pd.DataFrame(rows, columns=["Year", "Payment", "Interest", "Principal", "Ending Balance"])


def build_holding_schedule(inputs: PropertyInputs, result: CalculationResult) -> pd.DataFrame:
    """
    One row per whole year of the holding period.

    Cashflow lines are level across years; PV and FV columns discount and
    compound each year's net cashflow at the prevailing rate, so their sums
    equal the result's pv_cashflows and fv_cashflows.
    """
    cashflow = result.cashflow
    loan = result.loan
    years = inputs.holding_period_years
    growth = 1 + inputs.prevailing_interest_rate / 100

    rows = []
    for year in range(1, int(math.floor(years)) + 1):
        net = cashflow.annual_net_cashflow
        rows.append({
            "Year": year,
            "Income": cashflow.annual_income_from_property,
            "Property Tax": cashflow.annual_property_tax,
            "Income Tax": cashflow.annual_rental_tax + cashflow.annual_room_tax,
            "Loan Repayment": cashflow.annual_loan_repayment,
            "Maintenance": cashflow.annual_maintenance,
            "Net Cashflow": net,
            "PV": net / growth ** year,
            "FV": net * growth ** (years - year),
            "Loan Balance": calculate_remaining_balance(
                loan.loan_amount, inputs.loan_interest_rate, inputs.loan_tenure_years, year
            ),
        })

    logger.debug("Built holding schedule with %d rows", len(rows))
    return pd.DataFrame(rows).set_index("Year")


def build_benchmark_table(result: CalculationResult) -> pd.DataFrame:
    """
    Property return against alternative assets on the same cash base.

    The property row uses net profit over total investment; the others
    compound the cash needed upfront.
    """
    benchmarks = result.benchmarks
    base = benchmarks.cash_investment

    table = pd.DataFrame(
        [
            ("Property", result.returns.total_investment, result.returns.net_profit),
            ("Stocks", base, benchmarks.stock_return),
            ("REITs", base, benchmarks.reit_return),
            ("Bonds", base, benchmarks.bond_return),
            ("Fixed Deposit", base, benchmarks.savings_return),
        ],
        columns=["Investment", "Amount", "Return"],
    ).set_index("Investment")

    table["Return %"] = (table["Return"] / table["Amount"].where(table["Amount"] > 0) * 100).fillna(0.0)
    return table
