from __future__ import annotations

from collections.abc import Iterable

from invoicing.domain.common.money import Money
from invoicing.domain.invoice.entities import (
    DEFAULT_RECIPIENT_ADDRESS,
    DEFAULT_RECIPIENT_NAME,
    Invoice,
    InvoiceLine,
    InvoiceLines,
    Recipient,
    total_of,
)


class InvalidDiscountError(ValueError):
    pass


class RecipientBuilder:
    def __init__(self) -> None:
        self._name = DEFAULT_RECIPIENT_NAME
        self._address = DEFAULT_RECIPIENT_ADDRESS

    def with_name(self, name: str) -> RecipientBuilder:
        self._name = name
        return self

    def with_address(self, address: str) -> RecipientBuilder:
        self._address = address
        return self

    def build(self) -> Recipient:
        return Recipient(name=self._name, address=self._address)


class InvoiceBuilder:
    """Fluent, mutable accumulator of invoice state.

    ``build`` snapshots the current state and leaves the builder open, so one
    builder can keep producing invoices. ``but`` starts an independent builder
    from the current state.
    """

    def __init__(self) -> None:
        self._lines: list[InvoiceLine] = []
        self._recipient = RecipientBuilder().build()
        self._discount = Money.ZERO

    def with_line(self, description: str, unit_price: Money, quantity: int = 1) -> InvoiceBuilder:
        self._lines.append(
            InvoiceLine(description=description, quantity=quantity, unit_price=unit_price)
        )
        return self

    def with_recipient(self, recipient: Recipient) -> InvoiceBuilder:
        self._recipient = recipient
        return self

    def with_discount(self, discount: float | Money) -> InvoiceBuilder:
        """Set the discount as a fixed amount or as a fraction of the current total.

        A fractional discount is evaluated against the lines present now;
        lines added later do not change it.
        """
        if isinstance(discount, Money):
            self._discount = discount
            return self

        if not 0 <= discount <= 1:
            raise InvalidDiscountError(f"discount must be between 0 and 1, got {discount}")
        self._discount = self.calculate_total().percentage_of(discount)
        return self

    def calculate_total(self) -> Money:
        return total_of(self._lines)

    def but(self) -> InvoiceBuilder:
        return (
            InvoiceBuilder()
            .with_recipient(self._recipient)
            ._with_lines(self._lines)
            .with_discount(self._discount)
        )

    def _with_lines(self, lines: Iterable[InvoiceLine]) -> InvoiceBuilder:
        self._lines.extend(lines)
        return self

    def build(self) -> Invoice:
        return Invoice(
            recipient=self._recipient,
            lines=InvoiceLines(self._lines),
            discount=self._discount,
        )
