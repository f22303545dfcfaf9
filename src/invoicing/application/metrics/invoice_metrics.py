from __future__ import annotations

from prometheus_client import Counter, Histogram

from invoicing.domain.invoice.entities import Invoice

INVOICES_BUILT_TOTAL = Counter(
    "invoicing_invoices_built_total",
    "Total number of invoices drafted by discount kind.",
    ["discount_kind"],
)

INVOICE_SUBTOTAL_PENCE = Histogram(
    "invoicing_invoice_subtotal_pence",
    "Invoice subtotal before discount, in pence.",
    buckets=(12, 60, 120, 240, 1200, 2400, 12000, 24000),
)


def record_invoice_built(invoice: Invoice, discount_kind: str) -> None:
    INVOICES_BUILT_TOTAL.labels(discount_kind=discount_kind).inc()
    INVOICE_SUBTOTAL_PENCE.observe(invoice.subtotal.total_pence)
