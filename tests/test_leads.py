"""
Contact leads from the storefront form.
"""


class TestSubmit:

    def test_submit(self, client):
        r = client.post("/api/leads", json={"name": "Awa", "email": "awa@example.com", "message": "Bonjour"})
        assert r.status_code == 200
        lead = r.json()
        assert lead["status"] == "new"
        assert lead["propertyId"] is None

    def test_name_and_message_required(self, client):
        r = client.post("/api/leads", json={"name": "Awa"})
        assert r.status_code == 400
        assert r.json() == {"error": "name and message required"}

    def test_unknown_property_is_dropped(self, client):
        r = client.post("/api/leads", json={"name": "Awa", "message": "Visite ?", "propertyId": 404})
        assert r.status_code == 200
        assert r.json()["propertyId"] is None

    def test_known_property_is_kept(self, client, admin_headers):
        prop = client.post("/api/admin/properties", json={"title": "Villa", "slug": "villa"},
                           headers=admin_headers).json()
        r = client.post("/api/leads", json={"name": "Awa", "message": "Visite ?", "propertyId": prop["id"]})
        assert r.json()["propertyId"] == prop["id"]

        # deleting the property keeps the lead
        client.delete(f"/api/admin/properties/{prop['id']}", headers=admin_headers)
        leads = client.get("/api/admin/leads", headers=admin_headers).json()
        assert len(leads) == 1
        assert leads[0]["propertyId"] is None


class TestFollowUp:

    def test_list_and_filter(self, client, sales_headers):
        for name in ("A", "B", "C"):
            client.post("/api/leads", json={"name": name, "message": "m"})
        leads = client.get("/api/admin/leads", headers=sales_headers).json()
        assert [lead["name"] for lead in leads] == ["C", "B", "A"]

        client.patch(f"/api/admin/leads/{leads[0]['id']}", json={"status": "contacted", "notes": "Rappeler lundi"},
                     headers=sales_headers)
        contacted = client.get("/api/admin/leads", params={"status": "contacted"}, headers=sales_headers).json()
        assert [lead["name"] for lead in contacted] == ["C"]
        assert contacted[0]["notes"] == "Rappeler lundi"

    def test_patch_keeps_status_when_absent(self, client, admin_headers):
        lead = client.post("/api/leads", json={"name": "A", "message": "m"}).json()
        r = client.patch(f"/api/admin/leads/{lead['id']}", json={"notes": "n"}, headers=admin_headers)
        assert r.json()["status"] == "new"
        assert r.json()["notes"] == "n"

    def test_unknown_lead(self, client, admin_headers):
        r = client.patch("/api/admin/leads/9", json={"status": "closed"}, headers=admin_headers)
        assert r.status_code == 404
        assert r.json() == {"error": "Lead not found"}

    def test_viewer_forbidden(self, client, viewer_headers):
        assert client.get("/api/admin/leads", headers=viewer_headers).status_code == 403
