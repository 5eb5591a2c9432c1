"""
Invoice numbering, issuing and PDF rendering.
"""
from datetime import date, timedelta

import pytest

from database import get_session_context
from errors import APIError
from models import Client, Deal, Invoice
from services.invoice_service import InvoiceService, invoice_prefix, parse_sequence


@pytest.fixture
def deal_id(session_factory):
    with get_session_context(session_factory) as db:
        customer = Client(name="Awa Koné", email="awa@example.com")
        db.add(customer)
        db.flush()
        deal = Deal(client_id=customer.id, base_price=85000000)
        db.add(deal)
        db.flush()
        return deal.id


def add_invoice(session_factory, deal_id, number):
    with get_session_context(session_factory) as db:
        db.add(Invoice(deal_id=deal_id, number=number, issue_date=date(2026, 10, 1), amount=100))


class TestNumbering:

    def test_prefix(self):
        assert invoice_prefix(date(2026, 3, 9)) == "INV202603-"

    def test_parse_sequence(self):
        assert parse_sequence("INV202610-0042", "INV202610-") == 42
        assert parse_sequence("INV202609-0042", "INV202610-") == 0
        assert parse_sequence("INV202610-abc", "INV202610-") == 0
        assert parse_sequence(None, "INV202610-") == 0

    def test_first_of_the_month(self, session_factory):
        with get_session_context(session_factory) as db:
            assert InvoiceService.next_invoice_number(db, date(2026, 10, 19)) == "INV202610-0001"

    def test_continues_from_highest_of_the_month(self, session_factory, deal_id):
        for number in ("INV202610-0001", "INV202610-0009", "INV202609-0050", "INV202610-oops"):
            add_invoice(session_factory, deal_id, number)
        with get_session_context(session_factory) as db:
            assert InvoiceService.next_invoice_number(db, date(2026, 10, 19)) == "INV202610-0010"
            assert InvoiceService.next_invoice_number(db, date(2026, 9, 1)) == "INV202609-0051"
            assert InvoiceService.next_invoice_number(db, date(2026, 11, 1)) == "INV202611-0001"

    def test_sequence_grows_past_four_digits(self, session_factory, deal_id):
        add_invoice(session_factory, deal_id, "INV202610-9999")
        with get_session_context(session_factory) as db:
            assert InvoiceService.next_invoice_number(db, date(2026, 10, 2)) == "INV202610-10000"

    def test_unknown_deal(self, session_factory):
        with get_session_context(session_factory) as db:
            with pytest.raises(APIError) as exc:
                InvoiceService.create_invoice(db, deal_id=404, amount=10)
        assert exc.value.status_code == 404


class TestInvoiceRoutes:

    def test_issue_two_invoices(self, client, admin_headers, deal_id):
        prefix = invoice_prefix(date.today())
        first = client.post("/api/admin/invoices", json={"dealId": deal_id, "amount": 2500000}, headers=admin_headers)
        second = client.post("/api/admin/invoices", json={"dealId": deal_id, "amount": 1000}, headers=admin_headers)
        assert first.status_code == 200, first.text
        assert first.json()["number"] == f"{prefix}0001"
        assert second.json()["number"] == f"{prefix}0002"
        assert first.json()["status"] == "open"
        assert first.json()["issueDate"] == date.today().isoformat()

    def test_list_newest_issue_first(self, client, admin_headers, deal_id):
        client.post("/api/admin/invoices", json={"dealId": deal_id, "amount": 1, "issueDate": "2026-01-05"},
                    headers=admin_headers)
        client.post("/api/admin/invoices", json={"dealId": deal_id, "amount": 2, "issueDate": "2026-06-05"},
                    headers=admin_headers)
        invoices = client.get("/api/admin/invoices", headers=admin_headers).json()
        assert [i["issueDate"] for i in invoices] == ["2026-06-05", "2026-01-05"]
        assert invoices[0]["deal"]["id"] == deal_id

    def test_unknown_deal(self, client, admin_headers):
        r = client.post("/api/admin/invoices", json={"dealId": 77, "amount": 10}, headers=admin_headers)
        assert r.status_code == 404
        assert r.json() == {"error": "Deal not found"}

    def test_invalid_amount(self, client, admin_headers, deal_id):
        r = client.post("/api/admin/invoices", json={"dealId": deal_id, "amount": 0}, headers=admin_headers)
        assert r.status_code == 400

    def test_viewer_forbidden(self, client, viewer_headers):
        assert client.get("/api/admin/invoices", headers=viewer_headers).status_code == 403

    def test_pdf(self, client, admin_headers, deal_id):
        invoice = client.post("/api/admin/invoices", json={"dealId": deal_id, "amount": 2500000},
                              headers=admin_headers).json()
        r = client.get(f"/api/admin/invoices/{invoice['id']}/pdf", headers=admin_headers)
        assert r.status_code == 200
        assert r.headers["content-type"] == "application/pdf"
        assert r.content.startswith(b"%PDF")

    def test_pdf_not_found(self, client, admin_headers):
        r = client.get("/api/admin/invoices/5/pdf", headers=admin_headers)
        assert r.status_code == 404
        assert r.json() == {"error": "Invoice not found"}


class TestOverdue:

    def test_open_invoice_past_due(self):
        invoice = Invoice(status="open", due_date=date.today() - timedelta(days=1))
        assert invoice.is_overdue
        invoice.status = "paid"
        assert not invoice.is_overdue
        assert not Invoice(status="open", due_date=None).is_overdue

    def test_listed_with_overdue_flag(self, client, admin_headers, deal_id):
        yesterday = (date.today() - timedelta(days=1)).isoformat()
        client.post("/api/admin/invoices", json={"dealId": deal_id, "amount": 1, "dueDate": yesterday},
                    headers=admin_headers)
        client.post("/api/admin/invoices", json={"dealId": deal_id, "amount": 2, "dueDate": yesterday,
                                                 "status": "paid"},
                    headers=admin_headers)
        flags = {i["amount"]: i["isOverdue"] for i in client.get("/api/admin/invoices", headers=admin_headers).json()}
        assert flags == {1.0: True, 2.0: False}
