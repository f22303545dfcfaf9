from __future__ import annotations

import logging

from opentelemetry import trace

from invoicing.application.dto.requests import DiscountVariantRequest, DraftInvoicesRequest
from invoicing.application.dto.responses import DraftInvoicesResponse
from invoicing.application.mappers.invoice_mapper import (
    to_invoice_response,
    to_money,
    to_recipient,
)
from invoicing.application.metrics.invoice_metrics import record_invoice_built
from invoicing.domain.invoice.builders import InvoiceBuilder
from invoicing.domain.invoice.entities import Invoice

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class DraftInvoices:
    """Draft one invoice per discount variant over a shared set of lines."""

    def execute(self, request_dto: DraftInvoicesRequest) -> DraftInvoicesResponse:
        return DraftInvoicesResponse(
            invoices=[
                to_invoice_response(invoice, label=label)
                for label, invoice in self.draft(request_dto)
            ]
        )

    def draft(self, request_dto: DraftInvoicesRequest) -> list[tuple[str, Invoice]]:
        with tracer.start_as_current_span("draft_invoices") as span:
            span.set_attribute("invoicing.line_count", len(request_dto.lines))
            span.set_attribute("invoicing.variant_count", len(request_dto.variants))
            try:
                return self._draft(request_dto)
            except ValueError as exc:
                logger.warning(
                    "invoice_draft_rejected",
                    extra={"error": str(exc), "error_type": type(exc).__name__},
                )
                raise

    def _draft(self, request_dto: DraftInvoicesRequest) -> list[tuple[str, Invoice]]:
        base = InvoiceBuilder().with_recipient(to_recipient(request_dto.recipient))
        for line in request_dto.lines:
            base.with_line(line.description, to_money(line.unit_price), line.quantity)

        # Nothing is recorded until every variant has built.
        built: list[tuple[str, Invoice, str]] = []
        for variant in request_dto.variants:
            builder = base.but()
            discount_kind = _apply_discount(builder, variant)
            built.append((variant.label, builder.build(), discount_kind))

        for label, invoice, discount_kind in built:
            record_invoice_built(invoice, discount_kind)
            logger.info(
                "invoice_drafted",
                extra={
                    "label": label,
                    "discount_kind": discount_kind,
                    "subtotal_pence": invoice.subtotal.total_pence,
                    "discount_pence": invoice.discount.total_pence,
                },
            )
        return [(label, invoice) for label, invoice, _ in built]


def _apply_discount(builder: InvoiceBuilder, variant: DiscountVariantRequest) -> str:
    if variant.fixed_amount is not None:
        builder.with_discount(to_money(variant.fixed_amount))
        return "fixed"
    if variant.percentage is not None:
        builder.with_discount(variant.percentage)
        return "percentage"
    return "none"
