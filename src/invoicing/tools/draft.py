from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from invoicing.application.dto.requests import DraftInvoicesRequest
from invoicing.application.rendering.invoice_text import render_invoice
from invoicing.application.use_cases.draft_invoices import DraftInvoices
from invoicing.domain.common.money import Money
from invoicing.domain.invoice.builders import InvoiceBuilder
from invoicing.domain.invoice.entities import Invoice
from invoicing.infrastructure.observability.logging_config import configure_logging
from invoicing.infrastructure.observability.otel import configure_otel


def sample_invoices() -> list[tuple[str, Invoice]]:
    invoice_with_10_percent = (
        InvoiceBuilder()
        .with_line("Deerstalker Hat", Money(0, 3, 10))
        .with_line("Tweed Cape", Money(0, 4, 12))
        .with_discount(0.10)
        .build()
    )
    invoice_with_25_percent = (
        InvoiceBuilder()
        .with_line("Deerstalker Hat", Money(0, 3, 10))
        .with_line("Tweed Cape", Money(0, 4, 12))
        .with_discount(0.25)
        .build()
    )

    products = (
        InvoiceBuilder()
        .with_line("Deerstalker Hat", Money(0, 3, 10))
        .with_line("Tweed Cape", Money(0, 4, 12))
    )
    return [
        ("10% discount", invoice_with_10_percent),
        ("25% discount", invoice_with_25_percent),
        ("10% discount (shared lines)", products.but().with_discount(0.10).build()),
        ("25% discount (shared lines)", products.but().with_discount(0.25).build()),
    ]


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Draft pounds/shillings/pence invoices with discount variants."
    )
    parser.add_argument(
        "--request",
        type=Path,
        help="JSON draft request to process. Without it the sample invoices are printed.",
    )
    parser.add_argument(
        "--text",
        action="store_true",
        help="Print rendered text instead of JSON for --request.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Emit JSON logs on stderr and configure tracing from OTEL_* variables.",
    )
    args = parser.parse_args(argv)
    if args.text and args.request is None:
        parser.error("--text requires --request; the sample invoices are always printed as text")
    return args


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    if args.verbose:
        configure_logging()
        configure_otel()

    if args.request is None:
        blocks = [render_invoice(invoice, label=label) for label, invoice in sample_invoices()]
        print("\n\n".join(blocks))
        return 0

    try:
        raw = json.loads(args.request.read_text(encoding="utf-8"))
        request_dto = DraftInvoicesRequest.model_validate(raw)
        use_case = DraftInvoices()
        if args.text:
            blocks = [
                render_invoice(invoice, label=label) for label, invoice in use_case.draft(request_dto)
            ]
            print("\n\n".join(blocks))
        else:
            print(use_case.execute(request_dto).model_dump_json(indent=2))
    except ValidationError as exc:
        print(f"error: invalid request: {exc.error_count()} validation error(s)", file=sys.stderr)
        return 1
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
