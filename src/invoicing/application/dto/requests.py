from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from invoicing.domain.invoice.entities import DEFAULT_RECIPIENT_ADDRESS, DEFAULT_RECIPIENT_NAME


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(part.capitalize() for part in parts[1:])


class CamelBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=_to_camel,
        populate_by_name=True,
    )


class MoneyRequest(CamelBaseModel):
    pounds: int = 0
    shillings: int = 0
    pence: int = 0


class RecipientRequest(CamelBaseModel):
    name: str = DEFAULT_RECIPIENT_NAME
    address: str = DEFAULT_RECIPIENT_ADDRESS


class InvoiceLineRequest(CamelBaseModel):
    description: str
    unit_price: MoneyRequest
    quantity: int = 1


class DiscountVariantRequest(CamelBaseModel):
    label: str
    percentage: float | None = None
    fixed_amount: MoneyRequest | None = None

    @model_validator(mode="after")
    def _single_discount_kind(self) -> DiscountVariantRequest:
        if self.percentage is not None and self.fixed_amount is not None:
            raise ValueError("variant may set percentage or fixedAmount, not both")
        return self


class DraftInvoicesRequest(CamelBaseModel):
    recipient: RecipientRequest | None = None
    lines: list[InvoiceLineRequest] = Field(min_length=1)
    variants: list[DiscountVariantRequest] = Field(min_length=1)
