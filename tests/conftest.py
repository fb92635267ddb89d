"""Pytest configuration and fixtures."""

import pytest

from models import PropertyInputs, default_inputs


@pytest.fixture
def base_inputs() -> PropertyInputs:
    """Default scenario: PR buying a first $1.5M condo for own stay."""
    return default_inputs()


@pytest.fixture
def citizen_inputs() -> PropertyInputs:
    """Citizen buying a first $1.5M property, 75% loan at 2.6% over 30 years."""
    return default_inputs(residency_status="citizen")


@pytest.fixture
def rental_inputs() -> PropertyInputs:
    """Citizen letting out the whole unit."""
    return default_inputs(residency_status="citizen", is_renting_out=True)
