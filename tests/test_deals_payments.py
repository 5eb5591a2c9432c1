"""
Clients, deals, payment schedules, payments and expenses.
"""
from datetime import date

import pytest

from database import get_session_context
from models import AuditLog, Invoice, Payment, PaymentSchedule


@pytest.fixture
def customer(client, admin_headers):
    r = client.post("/api/admin/clients", json={"name": "Awa Koné", "phone": "+225 0700000000"},
                    headers=admin_headers)
    assert r.status_code == 200
    return r.json()


@pytest.fixture
def deal(client, admin_headers, customer):
    r = client.post("/api/admin/deals", json={"clientId": customer["id"], "basePrice": 85000000, "discount": 2000000},
                    headers=admin_headers)
    assert r.status_code == 200, r.text
    return r.json()


class TestClients:

    def test_listed_by_name(self, client, sales_headers):
        for name in ("Zadi", "Aya", "Kouassi"):
            client.post("/api/admin/clients", json={"name": name}, headers=sales_headers)
        names = [c["name"] for c in client.get("/api/admin/clients", headers=sales_headers).json()]
        assert names == ["Aya", "Kouassi", "Zadi"]

    def test_name_required(self, client, admin_headers):
        r = client.post("/api/admin/clients", json={"name": ""}, headers=admin_headers)
        assert r.status_code == 400
        assert r.json()["error"] == "Invalid request"

    def test_update(self, client, admin_headers, customer):
        r = client.put(f"/api/admin/clients/{customer['id']}", json={"email": "awa@example.com"},
                       headers=admin_headers)
        assert r.json()["email"] == "awa@example.com"
        assert r.json()["name"] == "Awa Koné"

    def test_delete_refused_while_deals_exist(self, client, admin_headers, customer, deal):
        r = client.delete(f"/api/admin/clients/{customer['id']}", headers=admin_headers)
        assert r.status_code == 409
        assert r.json() == {"error": "Client has deals"}

    def test_delete(self, client, admin_headers, sales_headers, customer):
        url = f"/api/admin/clients/{customer['id']}"
        assert client.delete(url, headers=sales_headers).status_code == 403
        assert client.delete(url, headers=admin_headers).status_code == 200
        assert client.get("/api/admin/clients", headers=admin_headers).json() == []

    def test_import_csv(self, client, admin_headers):
        csv_content = "name,email,phone,address,notes\nAya,aya@example.com,,Cocody,\n,ghost@example.com,,,\nKofi,,0102,,VIP\n"
        r = client.post("/api/admin/clients/import", files={"file": ("clients.csv", csv_content.encode(), "text/csv")},
                        headers=admin_headers)
        assert r.status_code == 200
        assert r.json() == {"imported": 2, "skipped": 1}
        names = [c["name"] for c in client.get("/api/admin/clients", headers=admin_headers).json()]
        assert names == ["Aya", "Kofi"]

    def test_import_requires_file(self, client, admin_headers):
        r = client.post("/api/admin/clients/import", data={"other": "x"}, headers=admin_headers)
        assert r.status_code == 400
        assert r.json() == {"error": "file required"}

    def test_import_rejects_non_utf8(self, client, admin_headers):
        r = client.post("/api/admin/clients/import",
                        files={"file": ("clients.csv", "name\nKoné\n".encode("utf-16"), "text/csv")},
                        headers=admin_headers)
        assert r.status_code == 400

    def test_import_is_admin_only(self, client, sales_headers):
        r = client.post("/api/admin/clients/import", files={"file": ("c.csv", b"name\nA\n", "text/csv")},
                        headers=sales_headers)
        assert r.status_code == 403


class TestDeals:

    def test_create_embeds_client(self, deal, customer):
        assert deal["clientId"] == customer["id"]
        assert deal["client"]["name"] == "Awa Koné"
        assert deal["status"] == "draft"
        assert deal["type"] == "sale"
        assert deal["basePrice"] == 85000000

    def test_unknown_client(self, client, admin_headers):
        r = client.post("/api/admin/deals", json={"clientId": 999}, headers=admin_headers)
        assert r.status_code == 404
        assert r.json() == {"error": "Client not found"}

    def test_update_is_audited(self, client, admin_headers, deal, session_factory):
        r = client.put(f"/api/admin/deals/{deal['id']}", json={"status": "signed"}, headers=admin_headers)
        assert r.json()["status"] == "signed"
        with get_session_context(session_factory) as db:
            log = db.query(AuditLog).filter(AuditLog.entity == "Deal", AuditLog.action == "update").one()
            assert log.before["status"] == "draft"
            assert log.after["status"] == "signed"

    def test_list_newest_first(self, client, admin_headers, customer, deal):
        second = client.post("/api/admin/deals", json={"clientId": customer["id"]}, headers=admin_headers).json()
        ids = [d["id"] for d in client.get("/api/admin/deals", headers=admin_headers).json()]
        assert ids == [second["id"], deal["id"]]

    def test_delete_cascades(self, client, admin_headers, sales_headers, deal, session_factory):
        schedule = client.post(f"/api/admin/deals/{deal['id']}/schedules",
                               json={"dueDate": "2026-11-01", "amount": 1000}, headers=admin_headers).json()
        invoice = client.post("/api/admin/invoices", json={"dealId": deal["id"], "amount": 1000},
                              headers=admin_headers).json()
        client.post("/api/admin/payments", json={"dealId": deal["id"], "invoiceId": invoice["id"],
                                                 "scheduleId": schedule["id"], "amount": 1000},
                    headers=admin_headers)

        assert client.delete(f"/api/admin/deals/{deal['id']}", headers=sales_headers).status_code == 403
        assert client.delete(f"/api/admin/deals/{deal['id']}", headers=admin_headers).status_code == 200
        with get_session_context(session_factory) as db:
            assert db.query(PaymentSchedule).count() == 0
            assert db.query(Invoice).count() == 0
            assert db.query(Payment).count() == 0


class TestSchedules:

    def test_ordered_by_due_date(self, client, admin_headers, deal):
        url = f"/api/admin/deals/{deal['id']}/schedules"
        client.post(url, json={"label": "Solde", "dueDate": "2027-01-01", "amount": 500}, headers=admin_headers)
        client.post(url, json={"label": "Acompte", "dueDate": "2026-11-01", "amount": 500}, headers=admin_headers)
        schedules = client.get(url, headers=admin_headers).json()
        assert [s["label"] for s in schedules] == ["Acompte", "Solde"]
        assert all(s["status"] == "pending" for s in schedules)

    def test_cannot_create_paid(self, client, admin_headers, deal):
        r = client.post(f"/api/admin/deals/{deal['id']}/schedules",
                        json={"dueDate": "2026-11-01", "amount": 500, "status": "paid"}, headers=admin_headers)
        assert r.status_code == 400

    def test_cannot_mark_paid_without_payment(self, client, admin_headers, deal):
        schedule = client.post(f"/api/admin/deals/{deal['id']}/schedules",
                               json={"dueDate": "2026-11-01", "amount": 500}, headers=admin_headers).json()
        r = client.put(f"/api/admin/schedules/{schedule['id']}", json={"status": "paid"}, headers=admin_headers)
        assert r.status_code == 400
        assert r.json() == {"error": "A paid schedule requires a paymentId"}

        r = client.put(f"/api/admin/schedules/{schedule['id']}", json={"status": "late"}, headers=admin_headers)
        assert r.status_code == 200
        assert r.json()["status"] == "late"

    def test_mark_paid_with_payment(self, client, admin_headers, deal):
        schedule = client.post(f"/api/admin/deals/{deal['id']}/schedules",
                               json={"dueDate": "2026-11-01", "amount": 500}, headers=admin_headers).json()
        payment = client.post("/api/admin/payments", json={"dealId": deal["id"], "amount": 500},
                              headers=admin_headers).json()
        r = client.put(f"/api/admin/schedules/{schedule['id']}",
                       json={"status": "paid", "paymentId": payment["id"]}, headers=admin_headers)
        assert r.status_code == 200
        assert r.json()["paymentId"] == payment["id"]

    def test_unknown_schedule(self, client, admin_headers):
        assert client.put("/api/admin/schedules/9", json={"label": "x"}, headers=admin_headers).status_code == 404


class TestPayments:

    def test_payment_settles_schedule(self, client, admin_headers, deal):
        schedule = client.post(f"/api/admin/deals/{deal['id']}/schedules",
                               json={"dueDate": "2026-11-01", "amount": 500}, headers=admin_headers).json()
        r = client.post("/api/admin/payments",
                        json={"dealId": deal["id"], "scheduleId": schedule["id"], "amount": 500,
                              "method": "transfer", "reference": "VIR-1"},
                        headers=admin_headers)
        assert r.status_code == 200
        payment = r.json()
        assert payment["date"] == date.today().isoformat()

        schedules = client.get(f"/api/admin/deals/{deal['id']}/schedules", headers=admin_headers).json()
        assert schedules[0]["status"] == "paid"
        assert schedules[0]["paymentId"] == payment["id"]

    def test_schedule_must_belong_to_deal(self, client, admin_headers, customer, deal):
        other = client.post("/api/admin/deals", json={"clientId": customer["id"]}, headers=admin_headers).json()
        schedule = client.post(f"/api/admin/deals/{other['id']}/schedules",
                               json={"dueDate": "2026-11-01", "amount": 500}, headers=admin_headers).json()
        r = client.post("/api/admin/payments",
                        json={"dealId": deal["id"], "scheduleId": schedule["id"], "amount": 500},
                        headers=admin_headers)
        assert r.status_code == 404
        assert r.json() == {"error": "Schedule not found"}
        assert client.get("/api/admin/payments", headers=admin_headers).json() == []

    def test_unknown_deal_or_invoice(self, client, admin_headers, deal):
        assert client.post("/api/admin/payments", json={"dealId": 99, "amount": 1},
                           headers=admin_headers).status_code == 404
        assert client.post("/api/admin/payments", json={"dealId": deal["id"], "invoiceId": 99, "amount": 1},
                           headers=admin_headers).status_code == 404

    def test_list_most_recent_first(self, client, admin_headers, deal):
        client.post("/api/admin/payments", json={"dealId": deal["id"], "amount": 1, "date": "2026-01-01"},
                    headers=admin_headers)
        client.post("/api/admin/payments", json={"dealId": deal["id"], "amount": 2, "date": "2026-03-01"},
                    headers=admin_headers)
        payments = client.get("/api/admin/payments", headers=admin_headers).json()
        assert [p["amount"] for p in payments] == [2, 1]
        assert payments[0]["deal"]["id"] == deal["id"]


class TestExpensesAndDashboard:

    def test_expenses(self, client, admin_headers):
        client.post("/api/admin/expenses", json={"amount": 300, "category": "bornage", "date": "2000-01-02"},
                    headers=admin_headers)
        client.post("/api/admin/expenses", json={"amount": 100}, headers=admin_headers)
        expenses = client.get("/api/admin/expenses", headers=admin_headers).json()
        assert [e["amount"] for e in expenses] == [100, 300]

    def test_dashboard(self, client, admin_headers, viewer_headers, customer, deal):
        client.post("/api/admin/deals", json={"clientId": customer["id"], "status": "closed"}, headers=admin_headers)
        client.post("/api/admin/invoices", json={"dealId": deal["id"], "amount": 100}, headers=admin_headers)
        client.post("/api/admin/invoices", json={"dealId": deal["id"], "amount": 100, "status": "paid"},
                    headers=admin_headers)
        client.post("/api/admin/payments", json={"dealId": deal["id"], "amount": 250}, headers=admin_headers)
        client.post("/api/admin/payments", json={"dealId": deal["id"], "amount": 999, "date": "2000-01-01"},
                    headers=admin_headers)
        client.post("/api/admin/expenses", json={"amount": 40}, headers=admin_headers)

        r = client.get("/api/admin/dashboard", headers=viewer_headers)
        assert r.status_code == 200
        assert r.json() == {
            "dealsOpen": 1,
            "invoicesOpen": 1,
            "paymentsMonth": 250,
            "expensesMonth": 40,
        }

    def test_empty_dashboard(self, client, admin_headers):
        assert client.get("/api/admin/dashboard", headers=admin_headers).json() == {
            "dealsOpen": 0,
            "invoicesOpen": 0,
            "paymentsMonth": 0,
            "expensesMonth": 0,
        }
