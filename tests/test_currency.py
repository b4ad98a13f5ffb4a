import pytest

from expense_insights.utils.currency import CurrencyFormatter


def test_indian_grouping():
    formatter = CurrencyFormatter()
    assert formatter.format(0) == "₹0"
    assert formatter.format(999) == "₹999"
    assert formatter.format(100000) == "₹1,00,000"
    assert formatter.format(12345678) == "₹1,23,45,678"


def test_western_grouping():
    formatter = CurrencyFormatter(symbol="$", grouping="western")
    assert formatter.format(1500) == "$1,500"
    assert formatter.format(12345678) == "$12,345,678"


def test_rounds_half_up_to_whole_units():
    formatter = CurrencyFormatter(symbol="$", grouping="western")
    assert formatter.format(1499.5) == "$1,500"
    assert formatter.format(2.5) == "$3"
    assert formatter.format(-1500.4) == "-$1,500"


def test_non_finite_amounts_render_as_zero():
    assert CurrencyFormatter.whole_units(float("nan")) == 0
    assert CurrencyFormatter.whole_units(float("inf")) == 0


def test_unknown_grouping_is_rejected():
    with pytest.raises(ValueError):
        CurrencyFormatter(grouping="chinese")


def test_from_settings():
    class _Settings:
        CURRENCY_SYMBOL = "€"
        CURRENCY_GROUPING = "western"

    formatter = CurrencyFormatter.from_settings(_Settings())
    assert formatter.format(1000) == "€1,000"
