import pytest

from loxvm.value import format_value, is_number


def test_whole_number_prints_without_fraction():
    assert format_value(1.0) == "1"


def test_fraction_is_kept():
    assert format_value(2.5) == "2.5"


@pytest.mark.parametrize("number", [0.5, 3.0, -7.25, 123456.0, 1e-3])
def test_short_numbers_round_trip(number):
    assert float(format_value(number)) == number


def test_nil_and_booleans():
    assert format_value(None) == "nil"
    assert format_value(True) == "true"
    assert format_value(False) == "false"


@pytest.mark.parametrize("value", [0.0, 1.5, -3.0, 7])
def test_numbers_are_numbers(value):
    assert is_number(value) is True


@pytest.mark.parametrize("value", [None, True, False, "1"])
def test_non_numbers(value):
    assert is_number(value) is False