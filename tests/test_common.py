from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

import pytest

from rideconnect.common.datetime_utils import format_date
from rideconnect.common.filters import filter_rows, matches_search
from rideconnect.common.validators import normalize_email, require_email, require_min_length, require_positive_int
from rideconnect.core.enums import Role
from rideconnect.core.exceptions import ValidationError


@dataclass
class Row:
    name: str
    email: str
    role: Role = Role.STUDENT


ROWS = [
    Row("Alice Nguyen", "alice@pu.edu"),
    Row("Bob Tran", "bob@pu.edu", Role.STAFF),
    Row("Carol", "carol@example.com", Role.ADMIN),
]


def test_filter_is_case_insensitive_substring():
    assert [r.name for r in filter_rows(ROWS, "ALICE", ("name", "email"))] == ["Alice Nguyen"]
    assert [r.name for r in filter_rows(ROWS, "pu.EDU", ("email",))] == ["Alice Nguyen", "Bob Tran"]


@pytest.mark.parametrize("term", ["", "   ", None])
def test_blank_term_keeps_every_row(term):
    assert filter_rows(ROWS, term, ("name",)) == ROWS


def test_filter_matches_enum_values():
    assert [r.name for r in filter_rows(ROWS, "staff", ("role",))] == ["Bob Tran"]


def test_filter_only_looks_at_named_fields():
    assert filter_rows(ROWS, "example.com", ("name",)) == []


def test_missing_and_none_fields_never_match():
    rows = [{"bus_number": "101", "route_name": None}, {"bus_number": "202"}]
    assert filter_rows(rows, "none", ("route_name", "capacity")) == []
    assert matches_search(rows[0], "10", ("route_name", "bus_number"))


def test_normalize_email_trims_and_lowercases():
    assert normalize_email("  Alice@PU.edu ") == "alice@pu.edu"
    assert normalize_email(None) == ""


def test_require_email_rejects_malformed_address():
    with pytest.raises(ValidationError, match="not a valid email"):
        require_email("not-an-email")


def test_require_min_length():
    assert require_min_length("secret", "Password", 6) == "secret"
    with pytest.raises(ValidationError, match="at least 6 characters"):
        require_min_length("12345", "Password", 6)


@pytest.mark.parametrize("value, message", [("abc", "whole number"), ("0", "greater than zero"), ("-3", "greater than zero")])
def test_require_positive_int_rejects(value, message):
    with pytest.raises(ValidationError, match=message):
        require_positive_int(value, "Capacity")


def test_require_positive_int_parses_padded_input():
    assert require_positive_int(" 40 ", "Capacity") == 40


def test_format_date():
    assert format_date(datetime(2025, 9, 1, 8, 30)) == "01/09/2025"
    assert format_date(None) == "-"
