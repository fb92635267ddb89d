"""Tests for the shareable query-string codec."""

import logging
from dataclasses import fields
from urllib.parse import parse_qs

import pytest

from models import PropertyInputs, Residency, default_inputs
from url_state import (
    COMPRESSED_KEYS,
    REVERSE_KEYS,
    build_share_url,
    decode_state_from_query,
    encode_state_to_query,
)


@pytest.fixture
def custom_inputs() -> PropertyInputs:
    """Every field moved away from its default."""
    return PropertyInputs(
        price=2345678.5,
        residency_status="foreigner",
        property_number=3,
        holding_period_years=7,
        annual_appreciation=2.25,
        loan_percentage=55,
        loan_interest_rate=3.65,
        loan_tenure_years=25,
        monthly_income=23500.75,
        existing_monthly_debt=1200,
        marginal_tax_rate=19.5,
        monthly_condo_fees=450,
        is_renting_out=True,
        expected_monthly_rental=6100,
        current_monthly_rent=5800,
        rent_out_room=True,
        room_rental_income=1700,
        cash_available=910000.1,
        cpf_oa_balance=0,
        use_cpf_for_downpayment=False,
        use_cpf_for_monthly=True,
        agent_fee_percent=1.5,
        prevailing_interest_rate=3.1,
        loan_lock_in_years=3,
        include_renovation=True,
        renovation_cost=80000,
        vacancy_weeks_per_year=6,
        annual_work_income=320000,
    )


class TestShortKeys:
    """Tests for the short-key dictionary."""

    def test_every_field_has_a_key(self) -> None:
        assert set(COMPRESSED_KEYS) == {f.name for f in fields(PropertyInputs)}

    def test_keys_are_unique_and_short(self) -> None:
        assert len(REVERSE_KEYS) == len(COMPRESSED_KEYS)
        assert all(2 <= len(key) <= 3 or key == "p" for key in REVERSE_KEYS)


class TestEncode:
    """Tests for encoding inputs."""

    def test_booleans_as_digits(self, base_inputs: PropertyInputs) -> None:
        params = parse_qs(encode_state_to_query(base_inputs))

        assert params["ro"] == ["0"]
        assert params["cd"] == ["1"]

    def test_residency_as_code(self, base_inputs: PropertyInputs) -> None:
        params = parse_qs(encode_state_to_query(base_inputs))
        assert params["rs"] == ["pr"]

    def test_numbers(self, base_inputs: PropertyInputs) -> None:
        params = parse_qs(encode_state_to_query(base_inputs))

        assert params["p"] == ["1500000"]
        assert params["lr"] == ["2.6"]


class TestRoundTrip:
    """Tests that encoding then decoding restores the inputs."""

    def test_defaults(self, base_inputs: PropertyInputs) -> None:
        assert decode_state_from_query(encode_state_to_query(base_inputs)) == base_inputs

    def test_every_field_changed(self, custom_inputs: PropertyInputs) -> None:
        decoded = decode_state_from_query(encode_state_to_query(custom_inputs))

        assert decoded == custom_inputs
        assert decoded.residency_status is Residency.FOREIGNER
        assert decoded.price == 2345678.5
        assert decoded.is_renting_out is True
        assert decoded.use_cpf_for_downpayment is False


class TestDecode:
    """Tests for lenient decoding."""

    def test_empty_query_gives_defaults(self) -> None:
        assert decode_state_from_query("") == default_inputs()

    def test_partial_query(self) -> None:
        decoded = decode_state_from_query("p=900000&rs=citizen")

        assert decoded.price == 900000
        assert decoded.residency_status is Residency.CITIZEN
        assert decoded.loan_tenure_years == 30

    def test_leading_question_mark(self) -> None:
        assert decode_state_from_query("?hp=10").holding_period_years == 10

    def test_mapping_input(self) -> None:
        assert decode_state_from_query({"ro": "1", "er": "5200"}).expected_monthly_rental == 5200

    def test_unknown_keys_ignored(self) -> None:
        assert decode_state_from_query("zz=1&utm_source=mail") == default_inputs()

    def test_custom_defaults(self, custom_inputs: PropertyInputs) -> None:
        decoded = decode_state_from_query("hp=3", defaults=custom_inputs)

        assert decoded.holding_period_years == 3
        assert decoded.price == custom_inputs.price

    @pytest.mark.parametrize(
        "query, field_name",
        [
            ("p=abc", "price"),
            ("p=", "price"),
            ("lr=nan", "loan_interest_rate"),
            ("rs=martian", "residency_status"),
            ("ro=yes", "is_renting_out"),
            ({"p": None}, "price"),
            ({"lt": ["20"]}, "loan_tenure_years"),
        ],
    )
    def test_malformed_values_keep_default(self, query, field_name) -> None:
        decoded = decode_state_from_query(query)
        assert getattr(decoded, field_name) == getattr(default_inputs(), field_name)

    @pytest.mark.parametrize(
        "query, field_name",
        [
            ("lp=90", "loan_percentage"),
            ("p=0", "price"),
            ("hp=0", "holding_period_years"),
            ("tr=16", "marginal_tax_rate"),
            ("pn=5", "property_number"),
            ("ca=-10", "cash_available"),
        ],
    )
    def test_invalid_values_keep_default(self, query, field_name) -> None:
        decoded = decode_state_from_query(query)
        assert getattr(decoded, field_name) == getattr(default_inputs(), field_name)

    def test_invalid_value_does_not_block_others(self) -> None:
        decoded = decode_state_from_query("lp=90&lt=20")

        assert decoded.loan_percentage == 75
        assert decoded.loan_tenure_years == 20

    def test_non_string_mapping_value_does_not_block_others(self) -> None:
        decoded = decode_state_from_query({"p": None, "hp": "7"})

        assert decoded.price == default_inputs().price
        assert decoded.holding_period_years == 7

    def test_discarded_value_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="url_state"):
            decode_state_from_query("lp=90")

        assert any("loan_percentage" in record.getMessage() for record in caplog.records)


class TestShareUrl:
    """Tests for building a shareable link."""

    def test_replaces_existing_query(self, base_inputs: PropertyInputs) -> None:
        url = build_share_url("https://example.com/calc?old=1#top", base_inputs)

        assert url.startswith("https://example.com/calc?")
        assert "old=1" not in url
        assert url.endswith(encode_state_to_query(base_inputs))

    def test_decodes_back(self, custom_inputs: PropertyInputs) -> None:
        url = build_share_url("https://example.com/", custom_inputs)
        query = url.split("?", 1)[1]

        assert decode_state_from_query(query) == custom_inputs
