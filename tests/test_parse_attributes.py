"""Tests for color and size attribute values."""

from __future__ import annotations

import pytest

from richmark.errors import MarkupSyntaxError, UnterminatedAttributeError
from richmark.syntax import NAMED_COLORS


def _color(only_child, value: str) -> str | None:
    return only_child(f"<color={value}>x</color>").value


class TestNamedColors:
    def test_there_are_22(self):
        assert len(NAMED_COLORS) == 22

    @pytest.mark.parametrize("name", ["aqua", "darkblue", "lightblue", "yellow"])
    def test_known_names(self, only_child, name):
        assert _color(only_child, name) == name

    def test_name_is_lowercased(self, only_child):
        assert _color(only_child, "DarkBlue") == "darkblue"

    def test_unknown_name_falls_back_to_white(self, only_child):
        assert _color(only_child, "notacolor") == "white"

    def test_empty_value_falls_back_to_white(self, only_child):
        assert _color(only_child, "") == "white"

    def test_css_injection_falls_back(self, only_child):
        assert _color(only_child, 'red;background:url("x")') == "white"


class TestHexColors:
    @pytest.mark.parametrize("value", ["#f", "#fff", "#A0b1C2", "#12345678"])
    def test_valid(self, only_child, value):
        assert _color(only_child, value) == value

    def test_case_is_kept(self, only_child):
        assert _color(only_child, "#ABCdef") == "#ABCdef"

    def test_hash_alone_is_invalid(self, only_child):
        assert _color(only_child, "#") == "white"

    def test_too_many_digits(self, only_child):
        assert _color(only_child, "#123456789") == "white"

    def test_non_hex_digit(self, only_child):
        assert _color(only_child, "#12g") == "white"


class TestSizeValues:
    def test_value(self, only_child):
        assert only_child("<size=100>x</size>").value == 100

    def test_zero(self, only_child):
        assert only_child("<size=0>x</size>").value == 0

    def test_leading_zeros(self, only_child):
        assert only_child("<size=007>x</size>").value == 7

    def test_no_upper_bound(self, only_child):
        assert only_child("<size=99999999999999999999>x</size>").value == 99999999999999999999

    def test_non_digit_is_fatal(self, parse_source):
        with pytest.raises(MarkupSyntaxError) as exc_info:
            parse_source("ab<size=1a>x</size>")
        assert exc_info.value.offset == 2

    def test_negative_is_fatal(self, parse_source):
        with pytest.raises(MarkupSyntaxError):
            parse_source("<size=-1>x</size>")

    def test_empty_is_fatal(self, parse_source):
        with pytest.raises(MarkupSyntaxError, match="empty size value"):
            parse_source("<size=>x</size>")


class TestUnterminatedValues:
    def test_size_at_eof(self, parse_source):
        with pytest.raises(UnterminatedAttributeError) as exc_info:
            parse_source("<size=12")
        assert exc_info.value.offset == 0

    def test_size_at_newline(self, parse_source):
        with pytest.raises(UnterminatedAttributeError):
            parse_source("<size=12\n>x</size>")

    def test_color_name_at_eof(self, parse_source):
        with pytest.raises(UnterminatedAttributeError) as exc_info:
            parse_source("hi <color=red")
        assert exc_info.value.offset == 3

    def test_hex_color_at_newline(self, parse_source):
        with pytest.raises(UnterminatedAttributeError):
            parse_source("<color=#fff\n>x</color>")

    def test_hash_at_eof(self, parse_source):
        with pytest.raises(UnterminatedAttributeError):
            parse_source("<color=#")

    def test_bad_hex_still_needs_terminator(self, parse_source):
        with pytest.raises(UnterminatedAttributeError):
            parse_source("<color=#zz")


class TestTagNameFollower:
    def test_color_followed_by_letter(self, parse_source):
        with pytest.raises(MarkupSyntaxError) as exc_info:
            parse_source("x <colorful>")
        assert exc_info.value.offset == 2

    def test_size_followed_by_space(self, parse_source):
        with pytest.raises(MarkupSyntaxError):
            parse_source("<size 12>x</size>")

    def test_opener_at_eof(self, parse_source):
        with pytest.raises(MarkupSyntaxError):
            parse_source("<color")
