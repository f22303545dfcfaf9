from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from invoicing.domain.common.money import Money

DEFAULT_RECIPIENT_NAME = "Default Name"
DEFAULT_RECIPIENT_ADDRESS = "Default Address"


@dataclass(frozen=True)
class Recipient:
    name: str
    address: str


DEFAULT_RECIPIENT = Recipient(name=DEFAULT_RECIPIENT_NAME, address=DEFAULT_RECIPIENT_ADDRESS)


@dataclass(frozen=True)
class InvoiceLine:
    description: str
    quantity: int
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price.times(self.quantity)


@dataclass(frozen=True, init=False)
class InvoiceLines:
    """Ordered, read-only snapshot of invoice lines."""

    lines: tuple[InvoiceLine, ...]

    def __init__(self, lines: Iterable[InvoiceLine] = ()) -> None:
        object.__setattr__(self, "lines", tuple(lines))

    def __iter__(self) -> Iterator[InvoiceLine]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, index: int) -> InvoiceLine:
        return self.lines[index]


def total_of(lines: Iterable[InvoiceLine]) -> Money:
    return Money.from_pence(sum(line.unit_price.total_pence * line.quantity for line in lines))


@dataclass(frozen=True)
class Invoice:
    recipient: Recipient
    lines: InvoiceLines
    discount: Money

    @property
    def subtotal(self) -> Money:
        return total_of(self.lines)
