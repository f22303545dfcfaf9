from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar

PENCE_PER_SHILLING = 12
SHILLINGS_PER_POUND = 20
PENCE_PER_POUND = PENCE_PER_SHILLING * SHILLINGS_PER_POUND


class InvalidAmountError(ValueError):
    pass


def _truncating_divmod(value: int, divisor: int) -> tuple[int, int]:
    # Quotient rounds toward zero and the remainder keeps the sign of value.
    quotient = abs(value) // divisor
    if value < 0:
        quotient = -quotient
    return quotient, value - quotient * divisor


@dataclass(frozen=True)
class Money:
    """Pre-decimal sterling amount: 1 pound = 20 shillings = 240 pence.

    Pence and shillings overflow is carried upward on construction. Only
    overflow is carried; negative shillings or pence are left as given and
    fail the range check.
    """

    pounds: int
    shillings: int
    pence: int

    ZERO: ClassVar[Money]

    def __post_init__(self) -> None:
        pounds, shillings, pence = self.pounds, self.shillings, self.pence
        if pence >= PENCE_PER_SHILLING:
            carry, pence = _truncating_divmod(pence, PENCE_PER_SHILLING)
            shillings += carry
        if shillings >= SHILLINGS_PER_POUND:
            carry, shillings = _truncating_divmod(shillings, SHILLINGS_PER_POUND)
            pounds += carry

        if not 0 <= shillings < SHILLINGS_PER_POUND:
            raise InvalidAmountError("shillings must be between 0 and 19")
        if not 0 <= pence < PENCE_PER_SHILLING:
            raise InvalidAmountError("pence must be between 0 and 11")

        object.__setattr__(self, "pounds", pounds)
        object.__setattr__(self, "shillings", shillings)
        object.__setattr__(self, "pence", pence)

    @classmethod
    def from_pence(cls, total_pence: int) -> Money:
        pounds, remainder = _truncating_divmod(total_pence, PENCE_PER_POUND)
        shillings, pence = _truncating_divmod(remainder, PENCE_PER_SHILLING)
        return cls(pounds, shillings, pence)

    @property
    def total_pence(self) -> int:
        return self.pounds * PENCE_PER_POUND + self.shillings * PENCE_PER_SHILLING + self.pence

    def times(self, quantity: int) -> Money:
        return Money.from_pence(self.total_pence * quantity)

    def percentage_of(self, fraction: float) -> Money:
        """Return ``fraction`` of this amount rounded to the nearest penny.

        Ties round to the even penny, so 26.5d becomes 26d.
        """
        if not math.isfinite(fraction):
            raise InvalidAmountError(f"fraction must be a finite number, got {fraction}")
        return Money.from_pence(round(self.total_pence * fraction))

    def __str__(self) -> str:
        return f"£{self.pounds} {self.shillings}s {self.pence}d"


Money.ZERO = Money(0, 0, 0)
