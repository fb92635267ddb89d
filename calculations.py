"""
Singapore Property Investment Calculator - Calculations

Core financial calculations for buying, holding and selling a private
property: upfront duties, loan amortization, affordability, holding
cashflow, sale proceeds and overall return.
"""

import math
from dataclasses import asdict, dataclass
from typing import Optional

from config import BenchmarkConfig, CalculatorConfig
from constants import (
    AFFORDABILITY_COST_BUFFER,
    ANNUAL_REPAIRS_RATE,
    CPF_OA_INTEREST_RATE,
    CPF_USABLE_FRACTION,
    DEEMED_RENTAL_EXPENSE_RATE,
    EARLY_REPAYMENT_PENALTY_RATE,
    FIRE_INSURANCE_ANNUAL,
    HOME_INSURANCE_ANNUAL,
    MAX_PRICE_ROUNDING_STEP,
    MIN_CASH_DOWNPAYMENT_RATE,
    MORTGAGE_STAMP_DUTY_RATE,
    OVERSTRETCHED_RATIO,
    SELLING_LEGAL_FEES,
    SSD_FREE_AFTER_YEARS,
    STRETCHED_RATIO,
    TDSR_LIMIT,
    VALUATION_FEE,
    WEEKS_PER_MONTH,
    calculate_absd,
    calculate_legal_fees,
    calculate_property_tax,
    calculate_ssd,
    calculate_stamp_duty,
    get_absd_rate,
)
from logging_setup import get_logger
from models import PropertyInputs

logger = get_logger(__name__)


@dataclass(frozen=True)
class UpfrontCosts:
    """One-time costs of buying, excluding the downpayment itself."""
    bsd: float
    absd: float
    absd_rate: float  # Percent, for display
    legal_fees: float
    valuation_fee: float
    stamp_duty_on_mortgage: float
    fire_insurance: float  # Annual allowance, not part of the upfront total
    home_insurance: float  # Annual allowance, not part of the upfront total
    renovation: float  # 0 unless renovation is included
    total_stamp_duty: float
    total_upfront_costs: float


@dataclass(frozen=True)
class LoanSummary:
    """Loan figures over the full tenure and over the holding period."""
    loan_amount: float
    down_payment: float
    monthly_payment: float
    total_interest_paid: float  # Over the full tenure
    annual_mortgage_interest: float  # Full-tenure interest averaged per year
    annual_loan_repayment: float
    remaining_loan: float  # Outstanding when the property is sold
    total_loan_payments: float  # Paid during the holding period
    interest_during_holding: float


@dataclass(frozen=True)
class AffordabilityResult:
    """Cash/CPF sufficiency, debt servicing and maximum price."""
    min_cash_downpayment: float
    cpf_used_for_downpayment: float
    cash_for_downpayment: float
    monthly_from_cpf: float
    total_cpf_for_monthly: float  # Over the holding period
    total_cpf_used: float
    cpf_accrued_interest: float
    total_cpf_refund: float  # Principal plus accrued interest returned to CPF on sale
    tdsr: float
    tdsr_ok: bool
    tdsr_remaining: float
    cash_needed: float
    can_afford: bool
    shortfall: float
    max_affordable_price: float
    affordability_ratio: float  # Price as % of max affordable price
    is_stretched: bool
    is_overstretched: bool


@dataclass(frozen=True)
class HoldingCashflow:
    """Recurring income and costs while the property is held."""
    monthly_rental_income: float
    annual_rental_income: float
    vacancy_loss: float
    effective_annual_rental: float
    monthly_saved_rent: float
    annual_saved_rent: float
    monthly_room_income: float
    annual_room_income: float
    annual_value: float
    annual_property_tax: float
    annual_rental_tax: float
    annual_room_tax: float
    annual_condo_fees: float
    annual_repairs: float
    annual_insurance: float
    annual_maintenance: float
    annual_income_from_property: float
    annual_loan_repayment: float
    annual_net_cashflow: float  # May be negative
    monthly_net_cashflow: float
    total_rental_income: float
    total_saved_rent: float
    total_room_income: float
    total_income_from_property: float
    total_vacancy_loss: float
    total_rental_tax: float
    holding_costs: float  # Property tax + maintenance over the holding period


@dataclass(frozen=True)
class SaleProceeds:
    """Exit economics at the end of the holding period."""
    future_value: float
    capital_gain: float
    total_appreciation_percent: float
    ssd: float
    ssd_applies: bool
    agent_commission: float
    selling_legal_fees: float
    early_repayment_penalty: float
    selling_costs: float
    remaining_loan: float
    sales_income: float  # Net of selling costs and loan payoff


@dataclass(frozen=True)
class ReturnSummary:
    """Overall return on the purchase."""
    pv_cashflows: float
    fv_cashflows: float
    total_initial_expense: float
    pv_negative_cashflows: float
    total_investment: float
    fv_positive_cashflows: float
    total_return: float
    cpf_opportunity_cost: float
    net_profit: float
    roi: float  # Percent
    annualized_roi: float  # Fraction, e.g. 0.05 for 5% a year
    break_even_price: float


@dataclass(frozen=True)
class BenchmarkComparison:
    """Gains from putting the same cash into alternative assets."""
    cash_investment: float
    stock_return: float
    reit_return: float
    bond_return: float
    savings_return: float
    cpf_return: float  # Interest the CPF downpayment would have earned in the OA


@dataclass(frozen=True)
class CalculationResult:
    """Everything derived from one PropertyInputs evaluation."""
    upfront: UpfrontCosts
    loan: LoanSummary
    affordability: AffordabilityResult
    cashflow: HoldingCashflow
    sale: SaleProceeds
    returns: ReturnSummary
    benchmarks: BenchmarkComparison

    def to_dict(self) -> dict:
        """Flatten all stage results into one field-to-value mapping."""
        flat = {}
        for stage in (
            self.upfront,
            self.loan,
            self.affordability,
            self.cashflow,
            self.sale,
            self.returns,
            self.benchmarks,
        ):
            flat.update(asdict(stage))
        return flat


# =============================================================================
# UPFRONT COSTS
# =============================================================================

def calculate_upfront_costs(
    price: float,
    residency_status: str,
    property_number: int,
    loan_percentage: float,
    include_renovation: bool = False,
    renovation_cost: float = 0,
) -> UpfrontCosts:
    """
    Calculate one-time costs of buying.

    Includes:
    1. Buyer's Stamp Duty and Additional Buyer's Stamp Duty
    2. Conveyancing fee and valuation fee
    3. Stamp duty on the mortgage (0.4% of loan amount)
    4. Renovation, if included
    """
    bsd = calculate_stamp_duty(price)
    absd = calculate_absd(price, residency_status, property_number)
    absd_rate = get_absd_rate(residency_status, property_number)
    legal_fees = calculate_legal_fees(price)
    stamp_duty_on_mortgage = price * loan_percentage / 100 * MORTGAGE_STAMP_DUTY_RATE
    renovation = renovation_cost if include_renovation else 0.0

    total_stamp_duty = bsd + absd
    total_upfront = total_stamp_duty + legal_fees + VALUATION_FEE + stamp_duty_on_mortgage + renovation

    return UpfrontCosts(
        bsd=bsd,
        absd=absd,
        absd_rate=absd_rate,
        legal_fees=legal_fees,
        valuation_fee=float(VALUATION_FEE),
        stamp_duty_on_mortgage=stamp_duty_on_mortgage,
        fire_insurance=float(FIRE_INSURANCE_ANNUAL),
        home_insurance=float(HOME_INSURANCE_ANNUAL),
        renovation=float(renovation),
        total_stamp_duty=total_stamp_duty,
        total_upfront_costs=total_upfront,
    )


# =============================================================================
# LOAN CALCULATIONS
# =============================================================================

def calculate_monthly_payment(
    loan_amount: float,
    annual_rate: float,
    tenure_years: float
) -> float:
    """
    Calculate monthly mortgage payment using PMT formula.

    PMT = P * [r(1+r)^n] / [(1+r)^n - 1]
    where:
        P = Principal (loan amount)
        r = Monthly interest rate (annual_rate is in percent)
        n = Number of months

    A zero rate repays the principal in equal instalments.
    """
    if loan_amount <= 0:
        return 0.0

    r = annual_rate / 100 / 12
    n = tenure_years * 12

    if r == 0:
        return loan_amount / n

    return loan_amount * (r * (1 + r) ** n) / ((1 + r) ** n - 1)


def calculate_max_loan(
    monthly_installment: float,
    annual_rate: float,
    tenure_years: float
) -> float:
    """
    Calculate maximum loan amount given a monthly payment limit.

    This is the inverse of PMT - Present Value of Annuity.
    PV = PMT * [1 - (1+r)^-n] / r
    """
    if monthly_installment <= 0:
        return 0.0

    r = annual_rate / 100 / 12
    n = tenure_years * 12

    if r == 0:
        return monthly_installment * n

    return monthly_installment * (1 - (1 + r) ** -n) / r


def calculate_total_interest(
    loan_amount: float,
    annual_rate: float,
    tenure_years: float
) -> float:
    """Calculate total interest paid over the loan tenure."""
    monthly = calculate_monthly_payment(loan_amount, annual_rate, tenure_years)
    total_paid = monthly * tenure_years * 12
    return total_paid - loan_amount


def calculate_remaining_balance(
    loan_amount: float,
    annual_rate: float,
    tenure_years: float,
    elapsed_years: float
) -> float:
    """
    Outstanding principal after elapsed_years of scheduled payments.

    Present value of the payments still to come. A zero-rate loan falls
    back to straight-line repayment, principal * remaining / total months.
    """
    payments_remaining = (tenure_years - elapsed_years) * 12
    if loan_amount <= 0 or payments_remaining <= 0:
        return 0.0

    r = annual_rate / 100 / 12
    if r == 0:
        return loan_amount * payments_remaining / (tenure_years * 12)

    monthly = calculate_monthly_payment(loan_amount, annual_rate, tenure_years)
    return monthly * (1 - (1 + r) ** -payments_remaining) / r


def summarize_loan(
    price: float,
    loan_percentage: float,
    annual_rate: float,
    tenure_years: float,
    holding_period_years: float
) -> LoanSummary:
    """Loan amount, payment schedule figures and the payoff due on sale."""
    loan_amount = price * loan_percentage / 100
    monthly = calculate_monthly_payment(loan_amount, annual_rate, tenure_years)
    total_interest = monthly * tenure_years * 12 - loan_amount
    annual_repayment = monthly * 12

    remaining = calculate_remaining_balance(loan_amount, annual_rate, tenure_years, holding_period_years)
    total_payments = annual_repayment * min(holding_period_years, tenure_years)

    return LoanSummary(
        loan_amount=loan_amount,
        down_payment=price - loan_amount,
        monthly_payment=monthly,
        total_interest_paid=total_interest,
        annual_mortgage_interest=total_interest / tenure_years,
        annual_loan_repayment=annual_repayment,
        remaining_loan=remaining,
        total_loan_payments=total_payments,
        interest_during_holding=total_payments - (loan_amount - remaining),
    )


# =============================================================================
# AFFORDABILITY ANALYSIS
# =============================================================================

def calculate_tdsr(monthly_payment: float, existing_debt: float, monthly_income: float) -> float:
    """Total Debt Servicing Ratio in percent of gross monthly income."""
    if monthly_income <= 0:
        return 0.0
    return (monthly_payment + existing_debt) / monthly_income * 100


def calculate_cpf_accrued_interest(cpf_used: float, years: float) -> float:
    """
    Accrued interest owed back to the CPF OA on sale.

    CPF used for housing must be refunded with the 2.5% p.a. interest it
    would have earned, compounded annually.
    """
    if cpf_used == 0 or years == 0:
        return 0.0
    return cpf_used * ((1 + CPF_OA_INTEREST_RATE) ** years - 1)


def calculate_max_affordable_price(
    cash_available: float,
    cpf_oa_balance: float,
    monthly_income: float,
    existing_debt: float,
    loan_percentage: float,
    interest_rate: float,
    tenure_years: float
) -> float:
    """
    Calculate the maximum property price that can be afforded.

    Limited by whichever is lower:
    1. Cash + CPF covering the downpayment plus a 5% allowance for duties
    2. The largest loan whose instalment fits within the TDSR limit,
       grossed up by the loan-to-value ratio
       (no bound when nothing is borrowed)

    Rounded down to the nearest $50,000.
    """
    downpayment_fraction = (100 - loan_percentage) / 100
    max_from_cash_cpf = (
        (cash_available + cpf_oa_balance * CPF_USABLE_FRACTION)
        / (downpayment_fraction + AFFORDABILITY_COST_BUFFER)
    )

    if loan_percentage > 0:
        max_monthly_payment = monthly_income * TDSR_LIMIT / 100 - existing_debt
        if max_monthly_payment <= 0:
            return 0.0
        max_loan = calculate_max_loan(max_monthly_payment, interest_rate, tenure_years)
        max_from_tdsr = max_loan / (loan_percentage / 100)
    else:
        max_from_tdsr = math.inf

    max_price = min(max_from_cash_cpf, max_from_tdsr)
    return float(math.floor(max_price / MAX_PRICE_ROUNDING_STEP) * MAX_PRICE_ROUNDING_STEP)


def evaluate_affordability(
    inputs: PropertyInputs,
    upfront: UpfrontCosts,
    loan: LoanSummary
) -> AffordabilityResult:
    """
    Check whether the buyer can fund the purchase.

    Checks:
    1. Is there enough cash for the cash part of the downpayment plus
       upfront costs? (5% of price must always be paid in cash)
    2. Is the TDSR within 55%?
    3. If CPF is used for the downpayment, does the OA balance cover it?
    """
    price = inputs.price
    min_cash_downpayment = price * MIN_CASH_DOWNPAYMENT_RATE

    if inputs.use_cpf_for_downpayment:
        cpf_for_downpayment = max(0.0, min(inputs.cpf_oa_balance, loan.down_payment - min_cash_downpayment))
    else:
        cpf_for_downpayment = 0.0
    cash_for_downpayment = loan.down_payment - cpf_for_downpayment

    # Spread the OA balance evenly over the tenure, capped at the instalment
    if inputs.use_cpf_for_monthly:
        monthly_from_cpf = min(loan.monthly_payment, inputs.cpf_oa_balance / (inputs.loan_tenure_years * 12))
    else:
        monthly_from_cpf = 0.0
    total_cpf_for_monthly = monthly_from_cpf * inputs.holding_period_years * 12
    total_cpf_used = cpf_for_downpayment + total_cpf_for_monthly

    # Monthly CPF is approximated as half the total, outstanding for half the period
    cpf_accrued_interest = (
        calculate_cpf_accrued_interest(cpf_for_downpayment, inputs.holding_period_years)
        + calculate_cpf_accrued_interest(total_cpf_for_monthly / 2, inputs.holding_period_years / 2)
    )

    tdsr = calculate_tdsr(loan.monthly_payment, inputs.existing_monthly_debt, inputs.monthly_income)
    tdsr_ok = tdsr <= TDSR_LIMIT

    cash_needed = cash_for_downpayment + upfront.total_upfront_costs
    cpf_ok = inputs.cpf_oa_balance >= cpf_for_downpayment if inputs.use_cpf_for_downpayment else True
    can_afford = inputs.cash_available >= cash_needed and tdsr_ok and cpf_ok
    shortfall = 0.0 if can_afford else max(0.0, cash_needed - inputs.cash_available)

    max_price = calculate_max_affordable_price(
        inputs.cash_available,
        inputs.cpf_oa_balance if inputs.use_cpf_for_downpayment else 0,
        inputs.monthly_income,
        inputs.existing_monthly_debt,
        inputs.loan_percentage,
        inputs.loan_interest_rate,
        inputs.loan_tenure_years,
    )
    affordability_ratio = price / max_price * 100 if max_price > 0 else 100.0

    return AffordabilityResult(
        min_cash_downpayment=min_cash_downpayment,
        cpf_used_for_downpayment=cpf_for_downpayment,
        cash_for_downpayment=cash_for_downpayment,
        monthly_from_cpf=monthly_from_cpf,
        total_cpf_for_monthly=total_cpf_for_monthly,
        total_cpf_used=total_cpf_used,
        cpf_accrued_interest=cpf_accrued_interest,
        total_cpf_refund=total_cpf_used + cpf_accrued_interest,
        tdsr=tdsr,
        tdsr_ok=tdsr_ok,
        tdsr_remaining=TDSR_LIMIT - tdsr,
        cash_needed=cash_needed,
        can_afford=can_afford,
        shortfall=shortfall,
        max_affordable_price=max_price,
        affordability_ratio=affordability_ratio,
        is_stretched=affordability_ratio > STRETCHED_RATIO,
        is_overstretched=affordability_ratio > OVERSTRETCHED_RATIO,
    )


# =============================================================================
# HOLDING PERIOD CASHFLOW
# =============================================================================

def calculate_rental_income_tax(
    gross_rent: float,
    mortgage_interest: float,
    marginal_tax_rate: float
) -> float:
    """
    Income tax on rent at the owner's marginal rate.

    Taxable rent is gross rent less 15% deemed expenses and less the
    mortgage interest attributable to the year, floored at zero.
    """
    deemed_expenses = gross_rent * DEEMED_RENTAL_EXPENSE_RATE
    taxable_income = max(0.0, gross_rent - deemed_expenses - mortgage_interest)
    return taxable_income * marginal_tax_rate / 100


def calculate_holding_cashflow(inputs: PropertyInputs, loan: LoanSummary) -> HoldingCashflow:
    """
    Annual income and costs while holding the property.

    Income depends on occupancy:
    - Renting out: rent less vacancy loss, taxed net of deemed expenses
      and mortgage interest
    - Own stay: rent you no longer pay, plus room rental if subletting
      (taxed net of deemed expenses only)

    Property tax uses the expected rent as Annual Value in both modes,
    with owner-occupier rates unless the whole unit is let out.
    """
    years = inputs.holding_period_years
    renting_out = inputs.is_renting_out
    renting_room = not renting_out and inputs.rent_out_room

    monthly_rental = inputs.expected_monthly_rental if renting_out else 0.0
    annual_rental = monthly_rental * 12
    vacancy_loss = inputs.expected_monthly_rental * inputs.vacancy_weeks_per_year / WEEKS_PER_MONTH if renting_out else 0.0
    effective_rental = annual_rental - vacancy_loss

    monthly_room = inputs.room_rental_income if renting_room else 0.0
    annual_room = monthly_room * 12

    monthly_saved_rent = inputs.current_monthly_rent if not renting_out else 0.0
    annual_saved_rent = monthly_saved_rent * 12

    annual_value = inputs.expected_monthly_rental * 12
    property_tax = calculate_property_tax(annual_value, is_owner_occupied=not renting_out)

    if renting_out:
        rental_tax = calculate_rental_income_tax(annual_rental, loan.annual_mortgage_interest, inputs.marginal_tax_rate)
    else:
        rental_tax = 0.0
    room_tax = calculate_rental_income_tax(annual_room, 0, inputs.marginal_tax_rate) if renting_room else 0.0

    annual_condo_fees = inputs.monthly_condo_fees * 12
    annual_repairs = inputs.price * ANNUAL_REPAIRS_RATE
    annual_insurance = FIRE_INSURANCE_ANNUAL + HOME_INSURANCE_ANNUAL
    maintenance = annual_condo_fees + annual_repairs + annual_insurance

    income = effective_rental if renting_out else annual_saved_rent + annual_room
    net_cashflow = income - property_tax - (rental_tax + room_tax) - loan.annual_loan_repayment - maintenance

    return HoldingCashflow(
        monthly_rental_income=monthly_rental,
        annual_rental_income=annual_rental,
        vacancy_loss=vacancy_loss,
        effective_annual_rental=effective_rental,
        monthly_saved_rent=monthly_saved_rent,
        annual_saved_rent=annual_saved_rent,
        monthly_room_income=monthly_room,
        annual_room_income=annual_room,
        annual_value=annual_value,
        annual_property_tax=property_tax,
        annual_rental_tax=rental_tax,
        annual_room_tax=room_tax,
        annual_condo_fees=annual_condo_fees,
        annual_repairs=annual_repairs,
        annual_insurance=float(annual_insurance),
        annual_maintenance=maintenance,
        annual_income_from_property=income,
        annual_loan_repayment=loan.annual_loan_repayment,
        annual_net_cashflow=net_cashflow,
        monthly_net_cashflow=net_cashflow / 12,
        total_rental_income=annual_rental * years,
        total_saved_rent=annual_saved_rent * years,
        total_room_income=annual_room * years,
        total_income_from_property=income * years,
        total_vacancy_loss=vacancy_loss * years,
        total_rental_tax=(rental_tax + room_tax) * years,
        holding_costs=(property_tax + maintenance) * years,
    )


# =============================================================================
# SALE
# =============================================================================

def calculate_future_value(price: float, annual_appreciation: float, years: float) -> float:
    """Sale price after compounding appreciation (in percent) for the given years."""
    return price * (1 + annual_appreciation / 100) ** years


def calculate_sale_proceeds(inputs: PropertyInputs, loan: LoanSummary) -> SaleProceeds:
    """
    Net cash from selling at the end of the holding period.

    Selling costs:
    - SSD if sold within 3 years
    - Agent commission on the sale price
    - Legal fees
    - Early repayment penalty (1.5% of outstanding loan) within the lock-in
    """
    years = inputs.holding_period_years
    future_value = calculate_future_value(inputs.price, inputs.annual_appreciation, years)

    ssd = calculate_ssd(future_value, years)
    agent_commission = future_value * inputs.agent_fee_percent / 100
    if years < inputs.loan_lock_in_years:
        penalty = loan.remaining_loan * EARLY_REPAYMENT_PENALTY_RATE
    else:
        penalty = 0.0
    selling_costs = ssd + agent_commission + SELLING_LEGAL_FEES + penalty

    return SaleProceeds(
        future_value=future_value,
        capital_gain=future_value - inputs.price,
        total_appreciation_percent=(future_value / inputs.price - 1) * 100,
        ssd=ssd,
        ssd_applies=years < SSD_FREE_AFTER_YEARS,
        agent_commission=agent_commission,
        selling_legal_fees=float(SELLING_LEGAL_FEES),
        early_repayment_penalty=penalty,
        selling_costs=selling_costs,
        remaining_loan=loan.remaining_loan,
        sales_income=future_value - selling_costs - loan.remaining_loan,
    )


# =============================================================================
# RETURNS
# =============================================================================

def discount_cashflows(annual_cashflow: float, rate: float, years: float) -> tuple[float, float]:
    """
    Present and future value of a level annual cashflow.

    Each whole year's cashflow is discounted back to today and compounded
    forward to the sale date at the same rate (in percent).

    Returns:
        Tuple of (present_value, future_value)
    """
    growth = 1 + rate / 100
    whole_years = int(math.floor(years))

    pv = 0.0
    fv = 0.0
    for year in range(1, whole_years + 1):
        pv += annual_cashflow / growth ** year
        fv += annual_cashflow * growth ** (years - year)

    return pv, fv


def calculate_annualized_roi(net_profit: float, total_investment: float, years: float) -> float:
    """
    Geometric annualisation of total ROI, as a fraction.

    Zero when nothing was invested; -1 when the whole investment (or more)
    was lost.
    """
    if total_investment <= 0:
        return 0.0
    growth = 1 + net_profit / total_investment
    if growth <= 0:
        return -1.0
    return growth ** (1 / years) - 1


def aggregate_returns(
    inputs: PropertyInputs,
    upfront: UpfrontCosts,
    loan: LoanSummary,
    affordability: AffordabilityResult,
    cashflow: HoldingCashflow,
    sale: SaleProceeds
) -> ReturnSummary:
    """
    Combine cashflow, sale proceeds and CPF refund into overall return.

    Negative holding cashflow adds to the capital committed (at present
    value); positive cashflow is treated as reinvested until the sale (at
    future value). Under own stay, rent saved is added back undiscounted.
    """
    years = inputs.holding_period_years
    pv, fv = discount_cashflows(cashflow.annual_net_cashflow, inputs.prevailing_interest_rate, years)

    initial_expense = upfront.total_upfront_costs + loan.down_payment
    pv_negative = abs(pv) if pv < 0 else 0.0
    total_investment = initial_expense + pv_negative

    fv_positive = fv if fv > 0 else 0.0
    saved_rent = 0.0 if inputs.is_renting_out else cashflow.total_saved_rent
    total_return = sale.sales_income + fv_positive + saved_rent

    cpf_opportunity_cost = affordability.cpf_accrued_interest
    net_profit = total_return - total_investment - cpf_opportunity_cost
    roi = net_profit / total_investment * 100 if total_investment > 0 else 0.0

    break_even = (
        inputs.price
        + upfront.total_upfront_costs
        + cashflow.holding_costs
        + loan.interest_during_holding
        + sale.selling_costs
        + cashflow.total_rental_tax
        - cashflow.total_income_from_property
    )

    return ReturnSummary(
        pv_cashflows=pv,
        fv_cashflows=fv,
        total_initial_expense=initial_expense,
        pv_negative_cashflows=pv_negative,
        total_investment=total_investment,
        fv_positive_cashflows=fv_positive,
        total_return=total_return,
        cpf_opportunity_cost=cpf_opportunity_cost,
        net_profit=net_profit,
        roi=roi,
        annualized_roi=calculate_annualized_roi(net_profit, total_investment, years),
        break_even_price=break_even,
    )


def compare_benchmarks(
    cash_investment: float,
    years: float,
    cpf_used_for_downpayment: float = 0,
    benchmarks: Optional[BenchmarkConfig] = None
) -> BenchmarkComparison:
    """Gain from compounding the same cash in alternative assets."""
    rates = benchmarks or BenchmarkConfig()

    def gain(rate: float) -> float:
        return cash_investment * (1 + rate) ** years - cash_investment

    return BenchmarkComparison(
        cash_investment=cash_investment,
        stock_return=gain(rates.stocks),
        reit_return=gain(rates.reits),
        bond_return=gain(rates.bonds),
        savings_return=gain(rates.fixed_deposit),
        cpf_return=calculate_cpf_accrued_interest(cpf_used_for_downpayment, years),
    )


# =============================================================================
# FULL EVALUATION
# =============================================================================

def calculate_property_investment(
    inputs: PropertyInputs,
    config: Optional[CalculatorConfig] = None
) -> CalculationResult:
    """
    Run every calculation stage for one set of inputs.

    Pure: the same inputs always give the same result.
    """
    config = config or CalculatorConfig()
    logger.debug(
        "Evaluating price=%s residency=%s property_number=%s holding=%s",
        inputs.price,
        inputs.residency_status.value,
        inputs.property_number,
        inputs.holding_period_years,
    )

    upfront = calculate_upfront_costs(
        inputs.price,
        inputs.residency_status.value,
        inputs.property_number,
        inputs.loan_percentage,
        inputs.include_renovation,
        inputs.renovation_cost,
    )
    loan = summarize_loan(
        inputs.price,
        inputs.loan_percentage,
        inputs.loan_interest_rate,
        inputs.loan_tenure_years,
        inputs.holding_period_years,
    )
    affordability = evaluate_affordability(inputs, upfront, loan)
    cashflow = calculate_holding_cashflow(inputs, loan)
    sale = calculate_sale_proceeds(inputs, loan)
    returns = aggregate_returns(inputs, upfront, loan, affordability, cashflow, sale)
    benchmarks = compare_benchmarks(
        affordability.cash_needed,
        inputs.holding_period_years,
        affordability.cpf_used_for_downpayment,
        config.benchmarks,
    )

    logger.debug(
        "Evaluated net_profit=%.2f roi=%.2f can_afford=%s",
        returns.net_profit,
        returns.roi,
        affordability.can_afford,
    )

    return CalculationResult(
        upfront=upfront,
        loan=loan,
        affordability=affordability,
        cashflow=cashflow,
        sale=sale,
        returns=returns,
        benchmarks=benchmarks,
    )


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

def format_currency(amount: float) -> str:
    """Format amount as Singapore dollars."""
    if amount >= 0:
        return f"S${amount:,.0f}"
    else:
        return f"-S${abs(amount):,.0f}"


def format_percent(value: float) -> str:
    """Format a percentage with two decimals."""
    return f"{value:.2f}%"
