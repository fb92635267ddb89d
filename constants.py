"""
Singapore Property Investment Calculator - Constants

Stamp duty schedules, property tax bands, income tax brackets and the
fixed fee assumptions used by the calculation engine.
Last updated: February 2026
"""

import math

from exceptions import InvalidCategoryError


# =============================================================================
# RESIDENCY & PROPERTY COUNT
# =============================================================================

CITIZEN = "citizen"
PERMANENT_RESIDENT = "pr"
FOREIGNER = "foreigner"

# 3 means "third and subsequent"
PROPERTY_NUMBERS = (1, 2, 3)


# =============================================================================
# BUYER'S STAMP DUTY (BSD)
# =============================================================================

# Effective from 15 Feb 2023 (Source: IRAS)
BSD_BRACKETS = [
    (180000, 0.01),       # First $180,000: 1%
    (180000, 0.02),       # Next $180,000: 2%
    (640000, 0.03),       # Next $640,000: 3%
    (500000, 0.04),       # Next $500,000: 4%
    (1500000, 0.05),      # Next $1,500,000: 5%
    (float('inf'), 0.06)  # Remaining amount: 6%
]


def apply_marginal_bands(amount: float, brackets: list) -> float:
    """
    Accumulate tax over successive (band width, rate) brackets.

    Each band contributes min(remaining, width) * rate; bands the amount
    never reaches contribute nothing.
    """
    if amount <= 0:
        return 0.0

    total = 0.0
    remaining = amount

    for band_width, rate in brackets:
        if remaining <= 0:
            break

        taxable_amount = min(remaining, band_width)
        total += taxable_amount * rate
        remaining -= taxable_amount

    return total


def calculate_stamp_duty(property_value: float) -> float:
    """
    Calculate Buyer's Stamp Duty (BSD) for residential property in Singapore.

    Uses tiered rates as per IRAS (effective from 15 Feb 2023):
    - First $180,000: 1%
    - Next $180,000: 2%
    - Next $640,000: 3%
    - Next $500,000: 4%
    - Next $1,500,000: 5%
    - Remaining amount: 6%

    Args:
        property_value: Purchase price of the property

    Returns:
        Stamp duty amount (unrounded, so the schedule stays continuous)
    """
    return apply_marginal_bands(property_value, BSD_BRACKETS)


# =============================================================================
# ADDITIONAL BUYER'S STAMP DUTY (ABSD)
# =============================================================================

# Rates in percent, April 2023 onwards
ABSD_RATES = {
    CITIZEN: {1: 0, 2: 20, 3: 30},
    PERMANENT_RESIDENT: {1: 5, 2: 30, 3: 35},
    FOREIGNER: {1: 60, 2: 60, 3: 60},
}


def get_absd_rate(residency_status: str, property_number: int) -> float:
    """
    Look up the ABSD rate (in percent) for a buyer profile.

    Raises:
        InvalidCategoryError: if the residency or property number is not
            one of the recognised values.
    """
    rates = ABSD_RATES.get(residency_status)
    if rates is None:
        raise InvalidCategoryError(f"Unknown residency status: {residency_status!r}")
    if isinstance(property_number, bool) or property_number not in rates:
        raise InvalidCategoryError(f"Unknown property number: {property_number!r}")
    return rates[property_number]


def calculate_absd(price: float, residency_status: str, property_number: int) -> float:
    """Calculate the ABSD amount payable on top of BSD."""
    return price * get_absd_rate(residency_status, property_number) / 100


# =============================================================================
# SELLER'S STAMP DUTY (SSD)
# =============================================================================

# (holding years strictly below, rate)
SSD_SCHEDULE = [
    (1, 0.12),
    (2, 0.08),
    (3, 0.04),
]

SSD_FREE_AFTER_YEARS = 3


def get_ssd_rate(years_held: float) -> float:
    """SSD rate for a sale after the given holding period (exactly 3.0 years is free)."""
    for years_below, rate in SSD_SCHEDULE:
        if years_held < years_below:
            return rate
    return 0.0


def calculate_ssd(sale_price: float, years_held: float) -> float:
    """Calculate Seller's Stamp Duty on the sale price."""
    return sale_price * get_ssd_rate(years_held)


# =============================================================================
# PROPERTY TAX (IRAS 2024 rates, on Annual Value)
# =============================================================================

OWNER_OCCUPIED_TAX_BRACKETS = [
    (8000, 0.00),          # First $8,000: 0%
    (22000, 0.04),         # Next $22,000: 4%
    (10000, 0.06),         # Next $10,000: 6%
    (15000, 0.10),         # Next $15,000: 10%
    (15000, 0.14),         # Next $15,000: 14%
    (15000, 0.20),         # Next $15,000: 20%
    (15000, 0.26),         # Next $15,000: 26%
    (float('inf'), 0.32),  # Above $100,000: 32%
]

NON_OWNER_OCCUPIED_TAX_BRACKETS = [
    (30000, 0.12),         # First $30,000: 12%
    (15000, 0.20),         # Next $15,000: 20%
    (15000, 0.28),         # Next $15,000: 28%
    (float('inf'), 0.36),  # Above $60,000: 36%
]


def calculate_property_tax(annual_value: float, is_owner_occupied: bool) -> float:
    """
    Calculate annual property tax on the Annual Value.

    Annual Value is approximated by the expected annual rent, whether or
    not the unit is actually let out.
    """
    brackets = OWNER_OCCUPIED_TAX_BRACKETS if is_owner_occupied else NON_OWNER_OCCUPIED_TAX_BRACKETS
    return apply_marginal_bands(annual_value, brackets)


# =============================================================================
# INCOME TAX BRACKETS (marginal rate selector)
# =============================================================================

# (marginal rate %, chargeable income upper bound, label)
TAX_BRACKETS = [
    (0, 20000, "0% (≤$20k)"),
    (2, 30000, "2% ($20-30k)"),
    (3.5, 40000, "3.5% ($30-40k)"),
    (7, 80000, "7% ($40-80k)"),
    (11.5, 120000, "11.5% ($80-120k)"),
    (15, 160000, "15% ($120-160k)"),
    (18, 200000, "18% ($160-200k)"),
    (19, 240000, "19% ($200-240k)"),
    (19.5, 280000, "19.5% ($240-280k)"),
    (20, 320000, "20% ($280-320k)"),
    (22, 500000, "22% ($320-500k)"),
    (23, 1000000, "23% ($500k-1M)"),
    (24, float('inf'), "24% (>$1M)"),
]

TAX_BRACKET_RATES = tuple(rate for rate, _, _ in TAX_BRACKETS)


def validate_marginal_tax_rate(rate: float) -> float:
    """Ensure a marginal rate is one of the selectable brackets."""
    if isinstance(rate, bool) or rate not in TAX_BRACKET_RATES:
        raise InvalidCategoryError(f"Unknown marginal tax rate: {rate!r}")
    return rate


def suggest_marginal_tax_rate(annual_income: float) -> float:
    """Pick the selector bracket whose income band contains annual_income."""
    for rate, upper_bound, _ in TAX_BRACKETS:
        if annual_income <= upper_bound:
            return rate
    return TAX_BRACKETS[-1][0]


# =============================================================================
# LEGAL FEES & FIXED COSTS
# =============================================================================

# (price up to, flat fee), based on market quotes for private property
LEGAL_FEE_TIERS = [
    (1000000, 2500),
    (2000000, 3000),
    (3000000, 3500),
    (float('inf'), 5000),
]


def calculate_legal_fees(price: float) -> float:
    """Conveyancing fee for the purchase, a flat fee stepped by price."""
    for price_ceiling, fee in LEGAL_FEE_TIERS:
        if price <= price_ceiling:
            return float(fee)
    return float(LEGAL_FEE_TIERS[-1][1])


VALUATION_FEE = 500
MORTGAGE_STAMP_DUTY_RATE = 0.004  # 0.4% of loan amount
FIRE_INSURANCE_ANNUAL = 150       # Mandatory for mortgage
HOME_INSURANCE_ANNUAL = 200       # Home contents, recommended
ANNUAL_REPAIRS_RATE = 0.01        # 1% of price per year

SELLING_LEGAL_FEES = 2500
EARLY_REPAYMENT_PENALTY_RATE = 0.015


# =============================================================================
# LOAN & CPF RULES
# =============================================================================

LTV_LIMIT = 75                    # Max loan-to-value, percent
MIN_CASH_DOWNPAYMENT_RATE = 0.05  # 5% of price must be cash for a bank loan
TDSR_LIMIT = 55                   # Total Debt Servicing Ratio, percent of gross income
CPF_OA_INTEREST_RATE = 0.025      # 2.5% p.a.

# Allowance for stamp duty and fees when backing a price out of cash + CPF
AFFORDABILITY_COST_BUFFER = 0.05
CPF_USABLE_FRACTION = 0.95
MAX_PRICE_ROUNDING_STEP = 50000

STRETCHED_RATIO = 80
OVERSTRETCHED_RATIO = 100


# =============================================================================
# RENTAL ASSUMPTIONS
# =============================================================================

DEEMED_RENTAL_EXPENSE_RATE = 0.15  # IRAS deemed expenses on gross rent
WEEKS_PER_MONTH = 4.33

AVERAGE_RENTAL_YIELD = 0.032  # Gross yield when letting the unit out
MARKET_RENT_YIELD = 0.035     # What a tenant pays for a comparable unit


def _round_to_hundred(amount: float) -> float:
    return math.floor(amount / 100 + 0.5) * 100


def estimate_monthly_rental(price: float) -> float:
    """Estimate achievable monthly rent, rounded to the nearest $100."""
    return float(_round_to_hundred(price * AVERAGE_RENTAL_YIELD / 12))


def estimate_current_rent(price: float) -> float:
    """Estimate the monthly rent you would pay for a similar unit."""
    return float(_round_to_hundred(price * MARKET_RENT_YIELD / 12))


# =============================================================================
# ALTERNATIVE INVESTMENT BENCHMARKS
# =============================================================================

BENCHMARK_RATES = {
    "stocks": 0.08,
    "reits": 0.06,
    "bonds": 0.04,
    "fixed_deposit": 0.025,
}


# =============================================================================
# DEFAULT VALUES
# =============================================================================

DEFAULT_PRICE = 1500000

DEFAULTS = {
    "price": DEFAULT_PRICE,
    "residency_status": PERMANENT_RESIDENT,
    "property_number": 1,
    "holding_period_years": 5,
    "annual_appreciation": 3.0,
    "loan_percentage": 75,
    "loan_interest_rate": 2.6,
    "loan_tenure_years": 30,
    "monthly_income": 15000,
    "existing_monthly_debt": 0,
    "marginal_tax_rate": 15,
    "monthly_condo_fees": 300,
    "is_renting_out": False,
    "expected_monthly_rental": estimate_monthly_rental(DEFAULT_PRICE),
    "current_monthly_rent": estimate_current_rent(DEFAULT_PRICE),
    "rent_out_room": False,
    "room_rental_income": 1500,
    "cash_available": 500000,
    "cpf_oa_balance": 150000,
    "use_cpf_for_downpayment": True,
    "use_cpf_for_monthly": False,
    "agent_fee_percent": 2,
    "prevailing_interest_rate": 2.8,
    "loan_lock_in_years": 2,
    "include_renovation": False,
    "renovation_cost": 50000,
    "vacancy_weeks_per_year": 4,
    "annual_work_income": 185000,
}
