# tests/test_family_api.py - Family members, lookups and documents over HTTP
from datetime import date
from decimal import Decimal

import pytest


class TestFamilyMembers:
    """CRUD and ordering for family members."""

    def test_create_member(self, client):
        resp = client.post("/api/family-members/", json={
            "name": "  Grant  ",
            "member_type": "adult",
            "relationship": "self",
            "email": "grant@example.com",
            "phone": "",
            "is_primary": True,
        })
        assert resp.status_code == 201
        data = resp.json()
        assert data["name"] == "Grant"
        assert data["relationship"] == "self"
        assert data["phone"] is None
        assert data["is_primary"] is True

    def test_blank_name_rejected(self, client):
        resp = client.post("/api/family-members/", json={"name": "   ", "member_type": "adult"})
        assert resp.status_code == 422

    def test_future_birth_date_rejected(self, client):
        resp = client.post("/api/family-members/", json={
            "name": "Baby",
            "member_type": "child",
            "date_of_birth": date(date.today().year + 1, 1, 1).isoformat(),
        })
        assert resp.status_code == 422

    def test_list_orders_primary_then_type_then_name(self, client):
        for name, member_type, primary in [
            ("Zara", "child", False), ("Shannon", "adult", False),
            ("Grant", "adult", True), ("Archie", "child", False),
        ]:
            client.post("/api/family-members/", json={
                "name": name, "member_type": member_type, "is_primary": primary,
            })
        names = [m["name"] for m in client.get("/api/family-members/").json()]
        assert names == ["Grant", "Shannon", "Archie", "Zara"]

    def test_filter_by_type(self, client, child):
        client.post("/api/family-members/", json={"name": "Grant", "member_type": "adult"})
        children = client.get("/api/family-members/", params={"member_type": "child"}).json()
        assert [m["name"] for m in children] == ["Olivia"]

    def test_update_keeps_required_fields(self, client, child):
        resp = client.put(f"/api/family-members/{child['id']}", json={
            "name": None,
            "notes": "Allergic to peanuts",
        })
        assert resp.status_code == 200
        assert resp.json()["name"] == "Olivia"
        assert resp.json()["notes"] == "Allergic to peanuts"

    def test_missing_member_is_404(self, client, engine):
        resp = client.get("/api/family-members/00000000-0000-0000-0000-000000000000")
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Family member not found"

    def test_delete_cascades_to_enrolments(self, client, child, enrolment):
        assert client.delete(f"/api/family-members/{child['id']}").status_code == 204
        assert client.get(f"/api/enrolments/{enrolment['id']}").status_code == 404


class TestMemberViews:
    """Summary, enrolments and document links for one member."""

    def test_summary(self, client, child, enrolment):
        resp = client.get(f"/api/family-members/{child['id']}/summary")
        assert resp.status_code == 200
        data = resp.json()
        assert data["name"] == "Olivia"
        assert data["current_school"] == "Brisbane State School"
        assert data["year_level"] == "Year 4"
        assert data["next_year_level"] == "Year 5"
        assert data["active_activities_count"] == 0
        assert data["documents_count"] == 0

    def test_member_enrolments(self, client, child, enrolment):
        resp = client.get(f"/api/family-members/{child['id']}/enrolments")
        assert [e["id"] for e in resp.json()] == [enrolment["id"]]
        assert resp.json()[0]["school"]["name"] == "Brisbane State School"

    def test_link_and_unlink_document(self, client, child):
        document = client.post("/api/documents/", json={"name": "Birth certificate"}).json()
        resp = client.post(f"/api/family-members/{child['id']}/documents", json={
            "document_id": document["id"],
            "document_category": "identification",
        })
        assert resp.status_code == 201
        link = resp.json()
        assert link["document"]["name"] == "Birth certificate"

        duplicate = client.post(f"/api/family-members/{child['id']}/documents", json={
            "document_id": document["id"],
        })
        assert duplicate.status_code == 409

        summary = client.get(f"/api/family-members/{child['id']}/summary").json()
        assert summary["documents_count"] == 1

        assert client.delete(f"/api/family-members/{child['id']}/documents/{link['id']}").status_code == 204
        assert client.get(f"/api/family-members/{child['id']}/documents").json() == []

    def test_link_missing_document(self, client, child):
        resp = client.post(f"/api/family-members/{child['id']}/documents", json={
            "document_id": "00000000-0000-0000-0000-000000000000",
        })
        assert resp.status_code == 404


class TestLookups:
    """System rows are read-only, custom rows are editable."""

    def test_system_fee_types_seeded(self, client, engine):
        names = [row["name"] for row in client.get("/api/lookups/fee-types").json()]
        assert names[0] == "Tuition"
        assert names[-1] == "Other"
        assert "Camp" in names

    def test_frequencies_carry_multiplier(self, client, engine):
        rows = {row["name"]: row for row in client.get("/api/lookups/frequencies").json()}
        assert Decimal(rows["Weekly"]["per_year_multiplier"]) == Decimal("52")
        assert rows["Per Session"]["per_year_multiplier"] is None

    def test_create_custom_activity_type(self, client, engine):
        resp = client.post("/api/lookups/activity-types", json={"name": "Chess", "icon": "crown"})
        assert resp.status_code == 201
        assert resp.json()["is_system"] is False

    def test_duplicate_name_conflicts(self, client, engine):
        resp = client.post("/api/lookups/fee-types", json={"name": "Tuition"})
        assert resp.status_code == 409

    def test_system_rows_cannot_change(self, client, lookup_ids):
        tuition = lookup_ids["fee_types"]["Tuition"]
        assert client.put(f"/api/lookups/fee-types/{tuition}", json={"name": "Fees"}).status_code == 403
        assert client.delete(f"/api/lookups/fee-types/{tuition}").status_code == 403

    def test_update_and_delete_custom(self, client, engine):
        created = client.post("/api/lookups/frequencies", json={"name": "Twice Weekly", "per_year_multiplier": "104"}).json()
        resp = client.put(f"/api/lookups/frequencies/{created['id']}", json={"sort_order": 3})
        assert resp.status_code == 200
        assert resp.json()["name"] == "Twice Weekly"
        assert client.delete(f"/api/lookups/frequencies/{created['id']}").status_code == 204


class TestDocuments:
    """Document records and list filters."""

    @pytest.fixture
    def documents(self, client, engine):
        payloads = [
            {"name": "ANZ statement June", "document_type": "bank_statement", "financial_year": "2024-25"},
            {"name": "Trust deed", "entity_type": "trust", "document_type": "trust_deed"},
            {"name": "Tax return 2023", "document_type": "tax_return", "financial_year": "2023-24", "tags": [" ato ", ""]},
        ]
        return [client.post("/api/documents/", json=p).json() for p in payloads]

    def test_create_cleans_tags(self, documents):
        assert documents[2]["tags"] == ["ato"]
        assert documents[0]["entity_type"] == "personal"

    def test_invalid_financial_year(self, client, engine):
        resp = client.post("/api/documents/", json={"name": "Bad", "financial_year": "2024-26"})
        assert resp.status_code == 422

    def test_filters(self, client, documents):
        assert [d["name"] for d in client.get("/api/documents/", params={"entity_type": "trust"}).json()] == ["Trust deed"]
        assert len(client.get("/api/documents/", params={"financial_year": "2024-25"}).json()) == 1
        assert [d["name"] for d in client.get("/api/documents/", params={"search": "RETURN"}).json()] == ["Tax return 2023"]

    def test_update_and_delete(self, client, documents):
        doc_id = documents[1]["id"]
        resp = client.put(f"/api/documents/{doc_id}", json={"description": "Family trust", "entity_type": None})
        assert resp.status_code == 200
        assert resp.json()["description"] == "Family trust"
        assert resp.json()["entity_type"] == "trust"

        assert client.delete(f"/api/documents/{doc_id}").status_code == 204
        assert client.get(f"/api/documents/{doc_id}").status_code == 404
