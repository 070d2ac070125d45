"""
Amount, signature URL and date helpers
"""

from decimal import Decimal, ROUND_HALF_UP

import pytest

from voucher_gateway.utils.helpers import (
    format_amount,
    format_currency,
    format_display_date,
    parse_amount,
    resolve_signature_url,
    split_amount,
    static_root,
    to_input_date,
)


@pytest.mark.parametrize("value, expected", [
    (1234.5, ("1234", "50")),
    (0, ("0", "00")),
    ("1234.50", ("1234", "50")),
    ("99.999", ("100", "00")),
    (Decimal("0.005"), ("0", "01")),
    (-12.345, ("-12", "35")),
    (-0.5, ("-0", "50")),
    ("-0.001", ("0", "00")),
])
def test_split_amount(value, expected):
    assert split_amount(value) == expected


@pytest.mark.parametrize("value", [None, "", "   ", "abc", "1,234", "NaN", "Infinity", True])
def test_split_amount_invalid_input_is_blank(value):
    assert split_amount(value) == ("", "")


def test_split_amount_recombines_to_rounded_value():
    for text in ("0.1", "7", "15.25", "1000000.994", "3.14159", "250.5"):
        whole, cents = split_amount(text)
        rounded = Decimal(text).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        assert Decimal(f"{whole}.{cents}") == rounded
        assert whole == str(int(rounded))
        assert len(cents) == 2


def test_format_amount_and_currency():
    assert format_amount(1234.5) == "1234.50"
    assert format_amount("bad") == ""
    assert format_currency(1234.5) == "₱1,234.50"
    assert format_currency("-1500") == "-₱1,500.00"
    assert format_currency(None) == ""
    assert format_currency(10, symbol="$") == "$10.00"


def test_parse_amount_is_lenient():
    assert parse_amount("₱1,234.50") == Decimal("1234.50")
    assert parse_amount(12) == Decimal("12")
    assert parse_amount("") == Decimal("0")
    assert parse_amount("abc") == Decimal("0")
    assert parse_amount(None) == Decimal("0")


def test_static_root_strips_slash_and_api():
    assert static_root("http://h/api") == "http://h"
    assert static_root("http://h/api/") == "http://h"
    assert static_root("http://h") == "http://h"
    assert static_root("http://h/apis") == "http://h/apis"


class TestResolveSignatureUrl:
    def test_prefix_path_served_from_static_root(self):
        assert resolve_signature_url("/signatures/x.png", "http://h/api") == "http://h/signatures/x.png"

    def test_trailing_slash_on_base(self):
        assert resolve_signature_url("/signatures/x.png", "http://h/api/") == "http://h/signatures/x.png"

    def test_absolute_url_unchanged(self):
        url = "https://cdn.example.com/s/x.png"
        assert resolve_signature_url(url, "http://h/api") == url
        assert resolve_signature_url(url, None) == url

    def test_missing_path_gives_placeholder(self):
        assert resolve_signature_url(None, "http://h/api") == "/placeholder.svg"
        assert resolve_signature_url("", "http://h/api") == "/placeholder.svg"

    def test_missing_base_gives_placeholder(self):
        assert resolve_signature_url("/signatures/x.png", None) == "/placeholder.svg"
        assert resolve_signature_url("/signatures/x.png", "") == "/placeholder.svg"

    def test_other_relative_paths_joined_with_one_slash(self):
        assert resolve_signature_url("storage/x.png", "http://h/api") == "http://h/storage/x.png"
        assert resolve_signature_url("/storage/x.png", "http://h") == "http://h/storage/x.png"

    def test_custom_placeholder(self):
        assert resolve_signature_url(None, "http://h", placeholder="/blank.png") == "/blank.png"


class TestDates:
    def test_input_date_from_datetime(self):
        assert to_input_date("2025-01-05T16:00:00.000000Z") == "2025-01-05"
        assert to_input_date("2025-01-05") == "2025-01-05"

    def test_input_date_normalizes_offset_to_utc(self):
        assert to_input_date("2025-01-06T02:30:00+08:00") == "2025-01-05"

    def test_input_date_invalid(self):
        assert to_input_date(None) == ""
        assert to_input_date("yesterday") == ""

    def test_display_date(self):
        assert format_display_date("2025-01-05") == "January 5, 2025"
        assert format_display_date("2024-12-31T10:00:00Z") == "December 31, 2024"
        assert format_display_date("") == ""
