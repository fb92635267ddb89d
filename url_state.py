"""
Singapore Property Investment Calculator - Shareable URL State

Encodes PropertyInputs as a compact query string using fixed short keys,
and decodes such query strings back onto a set of defaults.
"""

import math
from dataclasses import replace
from typing import Mapping, Optional, Union
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from exceptions import InvalidInputError
from logging_setup import get_logger
from models import PropertyInputs, Residency, default_inputs

logger = get_logger(__name__)

COMPRESSED_KEYS = {
    "price": "p",
    "residency_status": "rs",
    "property_number": "pn",
    "holding_period_years": "hp",
    "annual_appreciation": "aa",
    "loan_percentage": "lp",
    "loan_interest_rate": "lr",
    "loan_tenure_years": "lt",
    "monthly_income": "mi",
    "monthly_condo_fees": "cf",
    "is_renting_out": "ro",
    "cash_available": "ca",
    "cpf_oa_balance": "cpf",
    "use_cpf_for_downpayment": "cd",
    "use_cpf_for_monthly": "cm",
    "existing_monthly_debt": "ed",
    "marginal_tax_rate": "tr",
    "current_monthly_rent": "cr",
    "expected_monthly_rental": "er",
    "rent_out_room": "rr",
    "room_rental_income": "ri",
    "annual_work_income": "wi",
    "agent_fee_percent": "af",
    "prevailing_interest_rate": "pr",
    "loan_lock_in_years": "ll",
    "include_renovation": "ir",
    "renovation_cost": "rc",
    "vacancy_weeks_per_year": "vw",
}

REVERSE_KEYS = {short: name for name, short in COMPRESSED_KEYS.items()}


def _encode_value(value) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, Residency):
        return value.value
    return repr(value) if isinstance(value, float) else str(value)


def encode_state_to_query(inputs: PropertyInputs) -> str:
    """Serialize every input field to a short-key query string."""
    params = [
        (short_key, _encode_value(getattr(inputs, name)))
        for name, short_key in COMPRESSED_KEYS.items()
    ]
    return urlencode(params)


def _decode_value(raw: str, default):
    """Parse raw against the type of the default; None if it cannot be parsed."""
    if isinstance(default, bool):
        if raw in ("1", "0"):
            return raw == "1"
        return None
    if isinstance(default, Residency):
        try:
            return Residency(raw)
        except (TypeError, ValueError):
            return None

    try:
        number = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def decode_state_from_query(
    query: Union[str, Mapping[str, str]],
    defaults: Optional[PropertyInputs] = None
) -> PropertyInputs:
    """
    Rebuild PropertyInputs from a query string or mapping of short keys.

    Unknown keys are ignored and missing keys keep their default. A value
    that cannot be parsed, or that would make the inputs invalid, is
    dropped in favour of the default rather than failing the decode.
    """
    result = defaults or default_inputs()

    if isinstance(query, str):
        pairs = parse_qsl(query.lstrip("?"), keep_blank_values=True)
    else:
        pairs = list(query.items())

    for short_key, raw in pairs:
        name = REVERSE_KEYS.get(short_key)
        if name is None:
            continue

        value = _decode_value(raw, getattr(result, name))
        if value is None:
            logger.warning("Ignoring unparseable value %r for %s", raw, name)
            continue

        try:
            result = replace(result, **{name: value})
        except InvalidInputError as e:
            logger.warning("Ignoring invalid value %r for %s: %s", raw, name, e)

    return result


def build_share_url(base_url: str, inputs: PropertyInputs) -> str:
    """Replace any query on base_url with the encoded inputs."""
    scheme, netloc, path, _, _ = urlsplit(base_url)
    return urlunsplit((scheme, netloc, path, encode_state_to_query(inputs), ""))
