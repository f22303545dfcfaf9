from __future__ import annotations

from invoicing.application.dto.requests import MoneyRequest, RecipientRequest
from invoicing.application.dto.responses import (
    InvoiceLineResponse,
    InvoiceResponse,
    MoneyResponse,
    RecipientResponse,
)
from invoicing.domain.common.money import Money
from invoicing.domain.invoice.builders import RecipientBuilder
from invoicing.domain.invoice.entities import Invoice, Recipient


def to_money(request: MoneyRequest) -> Money:
    return Money(request.pounds, request.shillings, request.pence)


def to_recipient(request: RecipientRequest | None) -> Recipient:
    builder = RecipientBuilder()
    if request is not None:
        builder.with_name(request.name).with_address(request.address)
    return builder.build()


def to_money_response(money: Money) -> MoneyResponse:
    return MoneyResponse(
        pounds=money.pounds,
        shillings=money.shillings,
        pence=money.pence,
        totalPence=money.total_pence,
        display=str(money),
    )


def to_invoice_response(invoice: Invoice, label: str | None = None) -> InvoiceResponse:
    return InvoiceResponse(
        label=label,
        recipient=RecipientResponse(
            name=invoice.recipient.name,
            address=invoice.recipient.address,
        ),
        lines=[
            InvoiceLineResponse(
                description=line.description,
                quantity=line.quantity,
                unitPrice=to_money_response(line.unit_price),
                lineTotal=to_money_response(line.line_total),
            )
            for line in invoice.lines
        ],
        subtotal=to_money_response(invoice.subtotal),
        discount=to_money_response(invoice.discount),
    )
