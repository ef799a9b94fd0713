"""
Unit tests for currency/amount parsing.
"""
from fixedfloat.currency import CurrencyAmount, calc_amount_and_direction


class TestCurrencyAmountParse:
    """Test CurrencyAmount.parse."""

    def test_amount_and_code(self):
        parsed = CurrencyAmount.parse("0.1 ETH")

        assert parsed.ccy == "ETH"
        assert parsed.amount == "0.1"

    def test_code_only(self):
        parsed = CurrencyAmount.parse("BTC")

        assert parsed.ccy == "BTC"
        assert parsed.amount is None

    def test_splits_on_first_space(self):
        """Test only the first space separates amount from code."""
        parsed = CurrencyAmount.parse("100 USDT TRC20")

        assert parsed.amount == "100"
        assert parsed.ccy == "USDT TRC20"

    def test_leading_space_gives_empty_amount(self):
        parsed = CurrencyAmount.parse(" ETH")

        assert parsed.amount == ""
        assert parsed.ccy == "ETH"

    def test_extra_spaces_before_code(self):
        parsed = CurrencyAmount.parse("0.1  ETH")

        assert parsed.amount == "0.1"
        assert parsed.ccy == "ETH"

    def test_trailing_space_gives_empty_code(self):
        parsed = CurrencyAmount.parse("0.1 ")

        assert parsed.amount == "0.1"
        assert parsed.ccy == ""

    def test_equality(self):
        assert CurrencyAmount.parse("1 BTC") == CurrencyAmount("BTC", "1")
        assert CurrencyAmount.parse("BTC") != CurrencyAmount("BTC", "1")


class TestCalcAmountAndDirection:
    """Test amount/direction derivation."""

    def test_from_side(self):
        assert calc_amount_and_direction("0.1", None) == ("0.1", "from")

    def test_to_side(self):
        assert calc_amount_and_direction(None, "0.1") == ("0.1", "to")

    def test_from_side_wins(self):
        """Test the source side wins when both sides carry an amount."""
        assert calc_amount_and_direction("1", "2") == ("1", "from")

    def test_empty_from_falls_through(self):
        assert calc_amount_and_direction("", "5") == ("5", "to")

    def test_neither_side(self):
        assert calc_amount_and_direction(None, None) == (None, None)
        assert calc_amount_and_direction("", "") == (None, None)
