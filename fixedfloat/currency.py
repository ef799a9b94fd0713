"""
Currency and amount parsing for price and order requests.
"""
from typing import Optional, Tuple


class CurrencyAmount:
    """A currency code with an optional amount, e.g. "0.1 ETH" or "BTC"."""

    def __init__(self, ccy: str, amount: Optional[str] = None):
        self.ccy = ccy
        self.amount = amount

    @classmethod
    def parse(cls, ccy_data: str) -> "CurrencyAmount":
        """
        Parse a human-entered currency string.

        The amount must precede the code and is separated from it by the
        first space. Whitespace around the code is dropped, so
        "0.1  ETH" and "0.1 ETH" parse the same. A string without a space
        is a bare currency code.

        Args:
            ccy_data: String such as "0.1 ETH" or "BTC"

        Returns:
            CurrencyAmount instance

        Examples:
            >>> CurrencyAmount.parse("0.1 ETH").amount
            '0.1'
            >>> CurrencyAmount.parse("BTC").amount is None
            True
        """
        if " " not in ccy_data:
            return cls(ccy=ccy_data)
        amount, ccy = ccy_data.split(" ", 1)
        return cls(ccy=ccy.strip(), amount=amount)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CurrencyAmount):
            return NotImplemented
        return self.ccy == other.ccy and self.amount == other.amount

    def __repr__(self) -> str:
        return f"CurrencyAmount(ccy={self.ccy!r}, amount={self.amount!r})"


def calc_amount_and_direction(
    from_amount: Optional[str],
    to_amount: Optional[str]
) -> Tuple[Optional[str], Optional[str]]:
    """
    Work out which side of the pair carries the amount.

    The source side wins when both sides carry one.

    Args:
        from_amount: Amount attached to the source currency
        to_amount: Amount attached to the destination currency

    Returns:
        Tuple of (amount, direction), or (None, None) if neither side has an amount
    """
    if from_amount:
        return from_amount, "from"
    if to_amount:
        return to_amount, "to"
    return None, None
