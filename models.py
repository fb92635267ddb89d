"""
Singapore Property Investment Calculator - Input Model

The immutable parameter record every evaluation starts from.
"""

from dataclasses import dataclass, fields
from enum import Enum

from constants import (
    CITIZEN,
    DEFAULTS,
    FOREIGNER,
    LTV_LIMIT,
    PERMANENT_RESIDENT,
    PROPERTY_NUMBERS,
    validate_marginal_tax_rate,
)
from exceptions import InvalidCategoryError, InvalidInputError


class Residency(str, Enum):
    """Buyer residency status for ABSD purposes."""

    CITIZEN = CITIZEN
    PERMANENT_RESIDENT = PERMANENT_RESIDENT
    FOREIGNER = FOREIGNER


# Fields that must never be negative
NON_NEGATIVE_FIELDS = (
    "annual_appreciation",
    "loan_interest_rate",
    "monthly_income",
    "existing_monthly_debt",
    "monthly_condo_fees",
    "expected_monthly_rental",
    "current_monthly_rent",
    "room_rental_income",
    "cash_available",
    "cpf_oa_balance",
    "agent_fee_percent",
    "prevailing_interest_rate",
    "loan_lock_in_years",
    "renovation_cost",
    "vacancy_weeks_per_year",
    "annual_work_income",
)


@dataclass(frozen=True)
class PropertyInputs:
    """
    Buyer, property, loan and market parameters for one evaluation.

    Rates (appreciation, loan interest, marginal tax, agent fee, prevailing
    rate) and loan_percentage are in percent, e.g. 2.6 for 2.6%.

    Only one income path feeds the holding cashflow: expected_monthly_rental
    when is_renting_out, otherwise current_monthly_rent (saved rent) plus
    room_rental_income when rent_out_room is set.
    """

    price: float
    residency_status: Residency
    property_number: int
    holding_period_years: float
    annual_appreciation: float
    loan_percentage: float
    loan_interest_rate: float
    loan_tenure_years: float
    monthly_income: float
    existing_monthly_debt: float
    marginal_tax_rate: float
    monthly_condo_fees: float
    is_renting_out: bool
    expected_monthly_rental: float
    current_monthly_rent: float
    rent_out_room: bool
    room_rental_income: float
    cash_available: float
    cpf_oa_balance: float
    use_cpf_for_downpayment: bool
    use_cpf_for_monthly: bool
    agent_fee_percent: float
    prevailing_interest_rate: float
    loan_lock_in_years: float
    include_renovation: bool
    renovation_cost: float
    vacancy_weeks_per_year: float
    annual_work_income: float = 0

    def __post_init__(self) -> None:
        try:
            residency = Residency(self.residency_status)
        except ValueError:
            raise InvalidCategoryError(f"Unknown residency status: {self.residency_status!r}") from None
        object.__setattr__(self, "residency_status", residency)

        if isinstance(self.property_number, bool) or self.property_number not in PROPERTY_NUMBERS:
            raise InvalidCategoryError(f"Unknown property number: {self.property_number!r}")
        validate_marginal_tax_rate(self.marginal_tax_rate)

        if not self.price > 0:
            raise InvalidInputError(f"price must be positive, got {self.price}")
        if not 0 <= self.loan_percentage <= LTV_LIMIT:
            raise InvalidInputError(f"loan_percentage must be within 0-{LTV_LIMIT}, got {self.loan_percentage}")
        if not self.holding_period_years >= 1:
            raise InvalidInputError(f"holding_period_years must be at least 1, got {self.holding_period_years}")
        if not self.loan_tenure_years > 0:
            raise InvalidInputError(f"loan_tenure_years must be positive, got {self.loan_tenure_years}")

        for name in NON_NEGATIVE_FIELDS:
            value = getattr(self, name)
            if not value >= 0:
                raise InvalidInputError(f"{name} must not be negative, got {value}")

    def to_dict(self) -> dict:
        """Field name to value, with residency as its plain string code."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["residency_status"] = self.residency_status.value
        return data


def default_inputs(**overrides) -> PropertyInputs:
    """Build the default scenario, optionally overriding individual fields."""
    return PropertyInputs(**{**DEFAULTS, **overrides})
