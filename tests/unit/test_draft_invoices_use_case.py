from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest
from prometheus_client import REGISTRY
from pydantic import ValidationError

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from invoicing.application.dto.requests import DraftInvoicesRequest
from invoicing.application.use_cases.draft_invoices import DraftInvoices
from invoicing.domain.common.money import InvalidAmountError, Money
from invoicing.domain.invoice.builders import InvalidDiscountError


def _request(**overrides: object) -> DraftInvoicesRequest:
    payload: dict[str, object] = {
        "recipient": {"name": "S. Holmes", "address": "221B Baker Street"},
        "lines": [
            {"description": "Deerstalker Hat", "unitPrice": {"shillings": 3, "pence": 10}},
            {"description": "Tweed Cape", "unitPrice": {"shillings": 4, "pence": 12}},
        ],
        "variants": [
            {"label": "ten", "percentage": 0.10},
            {"label": "quarter", "percentage": 0.25},
        ],
    }
    payload.update(overrides)
    return DraftInvoicesRequest.model_validate(payload)


def test_execute_drafts_one_invoice_per_variant() -> None:
    response = DraftInvoices().execute(_request())

    assert [invoice.label for invoice in response.invoices] == ["ten", "quarter"]
    assert response.invoices[0].discount.totalPence == 11
    assert response.invoices[1].discount.totalPence == 26
    for invoice in response.invoices:
        assert invoice.recipient.name == "S. Holmes"
        assert [line.description for line in invoice.lines] == ["Deerstalker Hat", "Tweed Cape"]
        assert invoice.subtotal.totalPence == 106


def test_draft_returns_domain_invoices() -> None:
    drafted = DraftInvoices().draft(_request())

    (ten_label, ten), (quarter_label, quarter) = drafted
    assert (ten_label, quarter_label) == ("ten", "quarter")
    assert ten.discount == Money(0, 0, 11)
    assert quarter.discount == Money(0, 2, 2)
    assert ten.lines == quarter.lines


def test_fixed_and_absent_discounts() -> None:
    request = _request(
        variants=[
            {"label": "fixed", "fixedAmount": {"shillings": 1}},
            {"label": "none"},
        ]
    )

    response = DraftInvoices().execute(request)

    assert response.invoices[0].discount.display == "£0 1s 0d"
    assert response.invoices[1].discount.totalPence == 0


def test_missing_recipient_uses_default() -> None:
    request = _request(recipient=None)

    response = DraftInvoices().execute(request)

    assert response.invoices[0].recipient.name == "Default Name"
    assert response.invoices[0].recipient.address == "Default Address"


def test_execute_records_metrics() -> None:
    labels = {"discount_kind": "percentage"}
    before = REGISTRY.get_sample_value("invoicing_invoices_built_total", labels) or 0.0

    DraftInvoices().execute(_request())

    assert REGISTRY.get_sample_value("invoicing_invoices_built_total", labels) == before + 2


def test_invalid_discount_is_logged_and_raised(caplog: pytest.LogCaptureFixture) -> None:
    request = _request(variants=[{"label": "too much", "percentage": 1.5}])

    with caplog.at_level(logging.WARNING):
        with pytest.raises(InvalidDiscountError):
            DraftInvoices().execute(request)

    assert any(record.getMessage() == "invoice_draft_rejected" for record in caplog.records)


def test_invalid_amount_is_raised() -> None:
    request = _request(
        lines=[{"description": "Refund", "unitPrice": {"shillings": 1, "pence": -1}}]
    )

    with pytest.raises(InvalidAmountError):
        DraftInvoices().execute(request)


def test_request_requires_lines_and_variants() -> None:
    with pytest.raises(ValidationError):
        _request(lines=[])
    with pytest.raises(ValidationError):
        _request(variants=[])


def test_variant_cannot_set_both_discount_kinds() -> None:
    with pytest.raises(ValidationError):
        _request(
            variants=[{"label": "both", "percentage": 0.1, "fixedAmount": {"pence": 3}}]
        )


def test_request_accepts_snake_case_names() -> None:
    request = DraftInvoicesRequest.model_validate(
        {
            "lines": [{"description": "Pipe", "unit_price": {"pence": 9}, "quantity": 2}],
            "variants": [{"label": "fixed", "fixed_amount": {"pence": 1}}],
        }
    )

    response = DraftInvoices().execute(request)

    assert response.invoices[0].lines[0].lineTotal.totalPence == 18
    assert response.invoices[0].discount.totalPence == 1


def test_rejected_request_records_nothing(caplog: pytest.LogCaptureFixture) -> None:
    labels = {"discount_kind": "percentage"}
    before = REGISTRY.get_sample_value("invoicing_invoices_built_total", labels) or 0.0
    request = _request(
        variants=[
            {"label": "ten", "percentage": 0.10},
            {"label": "refund", "fixedAmount": {"pence": -1}},
        ]
    )

    with caplog.at_level(logging.INFO):
        with pytest.raises(InvalidAmountError):
            DraftInvoices().execute(request)

    assert (REGISTRY.get_sample_value("invoicing_invoices_built_total", labels) or 0.0) == before
    assert not any(record.getMessage() == "invoice_drafted" for record in caplog.records)


def test_late_invalid_discount_records_nothing() -> None:
    labels = {"discount_kind": "percentage"}
    before = REGISTRY.get_sample_value("invoicing_invoices_built_total", labels) or 0.0
    request = _request(
        variants=[
            {"label": "ten", "percentage": 0.10},
            {"label": "too much", "percentage": 1.5},
        ]
    )

    with pytest.raises(InvalidDiscountError):
        DraftInvoices().execute(request)

    assert (REGISTRY.get_sample_value("invoicing_invoices_built_total", labels) or 0.0) == before
