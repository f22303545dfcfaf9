from __future__ import annotations

from pydantic import BaseModel, Field


class MoneyResponse(BaseModel):
    pounds: int
    shillings: int
    pence: int
    totalPence: int
    display: str


class RecipientResponse(BaseModel):
    name: str
    address: str


class InvoiceLineResponse(BaseModel):
    description: str
    quantity: int
    unitPrice: MoneyResponse
    lineTotal: MoneyResponse


class InvoiceResponse(BaseModel):
    label: str | None = None
    recipient: RecipientResponse
    lines: list[InvoiceLineResponse] = Field(default_factory=list)
    subtotal: MoneyResponse
    discount: MoneyResponse


class DraftInvoicesResponse(BaseModel):
    invoices: list[InvoiceResponse] = Field(default_factory=list)
