"""
Currency amounts.

Amounts are held as integer satoshis. ``to_string`` yields the canonical
decimal BTC form the mainchain RPC expects: up to eight decimals, trailing
zeros trimmed, and at least one digit after the point.
"""

from decimal import Decimal, InvalidOperation
from typing import Union

from .consensus import COIN, MAX_MONEY

AmountLike = Union["Amount", int, str, Decimal]


class Amount:
    """Non-negative amount of satoshis.

    An ``int`` is read as satoshis; a ``str`` or ``Decimal`` is read as BTC.
    """

    __slots__ = ("value",)

    def __init__(self, value: AmountLike = 0):
        if isinstance(value, Amount):
            satoshis = value.value
        elif isinstance(value, bool):
            raise TypeError("Amount cannot be created from a bool")
        elif isinstance(value, int):
            satoshis = value
        elif isinstance(value, (str, Decimal)):
            satoshis = self._parse_btc(value)
        else:
            raise TypeError(f"Unsupported amount type: {type(value).__name__}")

        if satoshis < 0:
            raise ValueError("Amount cannot be negative")
        if satoshis > MAX_MONEY:
            raise ValueError("Amount exceeds the money supply")

        self.value = satoshis

    @staticmethod
    def _parse_btc(value: Union[str, Decimal]) -> int:
        try:
            btc = Decimal(value)
        except InvalidOperation:
            raise ValueError(f"Invalid BTC amount: {value!r}") from None

        if not btc.is_finite():
            raise ValueError(f"Invalid BTC amount: {value!r}")

        satoshis = btc * COIN
        if satoshis != satoshis.to_integral_value():
            raise ValueError(f"BTC amount has more than 8 decimals: {value!r}")
        return int(satoshis)

    @classmethod
    def from_btc(cls, value: Union[str, Decimal]) -> "Amount":
        return cls(Decimal(value))

    def is_zero(self) -> bool:
        return self.value == 0

    def to_btc(self) -> Decimal:
        return Decimal(self.value) / COIN

    def to_string(self) -> str:
        """Canonical BTC string, e.g. ``0.0001`` or ``1.0``."""
        whole, fraction = divmod(self.value, COIN)
        digits = f"{fraction:08d}".rstrip("0") or "0"
        return f"{whole}.{digits}"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Amount({self.value})"

    def __int__(self) -> int:
        return self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Amount):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)
