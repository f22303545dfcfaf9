from __future__ import annotations

from invoicing.domain.invoice.entities import Invoice

_RULE = "-" * 48


def render_invoice(invoice: Invoice, label: str | None = None) -> str:
    """Render an invoice as a plain-text block for display."""
    rows: list[str] = []
    if label:
        rows.append(f"Invoice: {label}")
    rows.append(f"To: {invoice.recipient.name}")
    rows.append(f"    {invoice.recipient.address}")
    rows.append(_RULE)
    for line in invoice.lines:
        rows.append(
            f"{line.quantity:>3} x {line.description:<24} {str(line.line_total):>16}"
        )
    rows.append(_RULE)
    rows.append(f"{'Subtotal':<30} {str(invoice.subtotal):>16}")
    rows.append(f"{'Discount':<30} {str(invoice.discount):>16}")
    return "\n".join(rows)
