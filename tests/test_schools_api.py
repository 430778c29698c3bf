# tests/test_schools_api.py - Schools, school years, terms and enrolments over HTTP
import pytest


@pytest.fixture
def school_year(client, school):
    resp = client.post(f"/api/schools/{school['id']}/years", json={"year": 2025})
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def terms(client, school_year):
    payload = [
        {"term_number": 1, "name": "Term 1", "start_date": "2025-01-28", "end_date": "2025-04-04", "fees_due_date": "2025-01-14"},
        {"term_number": 2, "name": "Term 2", "start_date": "2025-04-22", "end_date": "2025-06-27", "fees_due_date": "2025-04-08"},
        {"term_number": 3, "name": "Term 3", "start_date": "2025-07-14", "end_date": "2025-09-19"},
        {"term_number": 4, "name": "Term 4", "start_date": "2025-10-07", "end_date": "2025-12-12"},
    ]
    resp = client.post(f"/api/schools/years/{school_year['id']}/terms/bulk", json=payload)
    assert resp.status_code == 201
    return resp.json()


class TestSchools:
    """School records."""

    def test_create_defaults_to_queensland(self, school):
        assert school["state"] == "QLD"
        assert school["suburb"] == "Paddington"

    def test_state_is_normalised(self, client, engine):
        resp = client.post("/api/schools/", json={"name": "Sydney Grammar", "state": " nsw "})
        assert resp.status_code == 201
        assert resp.json()["state"] == "NSW"

    def test_list_sorted_by_name(self, client, school):
        client.post("/api/schools/", json={"name": "Ascot State School"})
        names = [s["name"] for s in client.get("/api/schools/").json()]
        assert names == ["Ascot State School", "Brisbane State School"]

    def test_detail_lists_years_newest_first(self, client, school, terms):
        client.post(f"/api/schools/{school['id']}/years", json={"year": 2024})
        resp = client.get(f"/api/schools/{school['id']}")
        assert resp.status_code == 200
        years = resp.json()["years"]
        assert [y["year"] for y in years] == [2025, 2024]
        assert len(years[0]["terms"]) == 4

    def test_update_ignores_null_name(self, client, school):
        resp = client.put(f"/api/schools/{school['id']}", json={"name": None, "phone": "07 3000 0000"})
        assert resp.status_code == 200
        assert resp.json()["name"] == "Brisbane State School"
        assert resp.json()["phone"] == "07 3000 0000"

    def test_delete_removes_years(self, client, school, school_year):
        assert client.delete(f"/api/schools/{school['id']}").status_code == 204
        assert client.get(f"/api/schools/years/{school_year['id']}/terms").status_code == 404

    def test_missing_school(self, client, engine):
        assert client.get("/api/schools/00000000-0000-0000-0000-000000000000").status_code == 404


class TestSchoolYears:
    """One row per school per calendar year."""

    def test_duplicate_year_conflicts(self, client, school, school_year):
        resp = client.post(f"/api/schools/{school['id']}/years", json={"year": 2025})
        assert resp.status_code == 409
        assert resp.json()["detail"] == "Brisbane State School already has a 2025 school year"

    def test_update_year_notes(self, client, school_year):
        resp = client.put(f"/api/schools/years/{school_year['id']}", json={"notes": "Pupil free day 27 Jan"})
        assert resp.status_code == 200
        assert resp.json()["notes"] == "Pupil free day 27 Jan"
        assert resp.json()["year"] == 2025

    def test_blank_notes_cleared(self, client, school_year):
        client.put(f"/api/schools/years/{school_year['id']}", json={"notes": "Pupil free day 27 Jan"})
        resp = client.put(f"/api/schools/years/{school_year['id']}", json={"notes": "   "})
        assert resp.status_code == 200
        assert resp.json()["notes"] is None

    def test_delete_year(self, client, school, school_year):
        assert client.delete(f"/api/schools/years/{school_year['id']}").status_code == 204
        assert client.get(f"/api/schools/{school['id']}/years").json() == []


class TestTerms:
    """Terms within a school year."""

    def test_bulk_create_returns_terms_in_order(self, terms):
        assert [t["term_number"] for t in terms] == [1, 2, 3, 4]

    def test_end_before_start_rejected(self, client, school_year):
        resp = client.post(f"/api/schools/years/{school_year['id']}/terms", json={
            "term_number": 1, "start_date": "2025-04-04", "end_date": "2025-01-28",
        })
        assert resp.status_code == 422

    def test_duplicate_term_number_conflicts(self, client, school_year, terms):
        resp = client.post(f"/api/schools/years/{school_year['id']}/terms", json={
            "term_number": 2, "start_date": "2025-04-22", "end_date": "2025-06-27",
        })
        assert resp.status_code == 409

    def test_default_term_preview(self, client, school_year):
        resp = client.get(f"/api/schools/years/{school_year['id']}/terms/defaults", params={"term_type": "semester"})
        assert resp.status_code == 200
        data = resp.json()
        assert [t["name"] for t in data] == ["Semester 1", "Semester 2"]
        assert data[0]["start_date"] == "2025-01-22"
        # preview only
        assert client.get(f"/api/schools/years/{school_year['id']}/terms").json() == []

    def test_current_and_next_term(self, client, school_year, terms):
        resp = client.get(f"/api/schools/years/{school_year['id']}/terms/current", params={"on": "2025-04-10"})
        data = resp.json()
        assert data["current_term"] is None
        assert data["next_term"]["name"] == "Term 2"
        assert data["days_until_fees_due"] == -2

    def test_current_term_during_term(self, client, school_year, terms):
        resp = client.get(f"/api/schools/years/{school_year['id']}/terms/current", params={"on": "2025-02-01"})
        assert resp.json()["current_term"]["name"] == "Term 1"

    def test_update_term_rejects_inverted_dates(self, client, terms):
        resp = client.put(f"/api/schools/terms/{terms[0]['id']}", json={"end_date": "2025-01-01"})
        assert resp.status_code == 400

    def test_update_term(self, client, terms):
        resp = client.put(f"/api/schools/terms/{terms[0]['id']}", json={"end_date": "2025-04-11"})
        assert resp.status_code == 200
        assert resp.json()["end_date"] == "2025-04-11"

    def test_update_term_blank_text_stored_as_null(self, client, terms):
        resp = client.put(f"/api/schools/terms/{terms[0]['id']}", json={"name": "  ", "notes": ""})
        assert resp.status_code == 200
        assert resp.json()["name"] is None
        assert resp.json()["notes"] is None

    def test_delete_term(self, client, school_year, terms):
        assert client.delete(f"/api/schools/terms/{terms[3]['id']}").status_code == 204
        remaining = client.get(f"/api/schools/years/{school_year['id']}/terms").json()
        assert len(remaining) == 3


class TestTermSync:
    """Replacing a year's terms from the editor in one request."""

    def test_sync_creates_updates_and_deletes(self, client, school_year, terms):
        payload = [
            {**{k: terms[0][k] for k in ("id", "term_number", "start_date", "end_date")}, "name": "Term One"},
            {k: terms[1][k] for k in ("id", "term_number", "name", "start_date", "end_date")},
            # reuses the number of a term being removed
            {"term_number": 3, "name": "Term 3 (new)", "start_date": "2025-07-21", "end_date": "2025-09-26"},
        ]
        resp = client.put(f"/api/schools/years/{school_year['id']}/terms", json=payload)
        assert resp.status_code == 200
        data = resp.json()
        assert (data["created"], data["updated"], data["deleted"]) == (1, 2, 2)
        assert [t["name"] for t in data["terms"]] == ["Term One", "Term 2", "Term 3 (new)"]
        assert data["terms"][2]["id"] not in {t["id"] for t in terms}

    def test_sync_with_unknown_id(self, client, school_year, terms):
        payload = [{
            "id": "00000000-0000-0000-0000-000000000000",
            "term_number": 1, "start_date": "2025-01-28", "end_date": "2025-04-04",
        }]
        resp = client.put(f"/api/schools/years/{school_year['id']}/terms", json=payload)
        assert resp.status_code == 404
        assert len(client.get(f"/api/schools/years/{school_year['id']}/terms").json()) == 4

    def test_sync_with_duplicate_numbers_changes_nothing(self, client, school_year, terms):
        payload = [
            {"term_number": 1, "start_date": "2025-01-28", "end_date": "2025-04-04"},
            {"term_number": 1, "start_date": "2025-04-22", "end_date": "2025-06-27"},
        ]
        resp = client.put(f"/api/schools/years/{school_year['id']}/terms", json=payload)
        assert resp.status_code == 409
        kept = client.get(f"/api/schools/years/{school_year['id']}/terms").json()
        assert [t["id"] for t in kept] == [t["id"] for t in terms]

    def test_empty_sync_clears_terms(self, client, school_year, terms):
        resp = client.put(f"/api/schools/years/{school_year['id']}/terms", json=[])
        assert resp.json()["deleted"] == 4
        assert resp.json()["terms"] == []


class TestEnrolments:
    """Enrolments link a member to a school."""

    def test_enrolment_includes_school(self, enrolment):
        assert enrolment["is_current"] is True
        assert enrolment["school"]["name"] == "Brisbane State School"

    def test_duplicate_enrolment_conflicts(self, client, child, school, enrolment):
        resp = client.post("/api/enrolments/", json={"family_member_id": child["id"], "school_id": school["id"]})
        assert resp.status_code == 409
        assert resp.json()["detail"] == "Olivia is already enrolled at Brisbane State School"

    def test_missing_member_or_school(self, client, school, child):
        missing = "00000000-0000-0000-0000-000000000000"
        assert client.post("/api/enrolments/", json={"family_member_id": missing, "school_id": school["id"]}).status_code == 404
        assert client.post("/api/enrolments/", json={"family_member_id": child["id"], "school_id": missing}).status_code == 404

    def test_new_current_enrolment_replaces_old(self, client, child, enrolment):
        other = client.post("/api/schools/", json={"name": "Kelvin Grove State College"}).json()
        resp = client.post("/api/enrolments/", json={
            "family_member_id": child["id"], "school_id": other["id"], "year_level": "Year 7",
        })
        assert resp.status_code == 201
        assert client.get(f"/api/enrolments/{enrolment['id']}").json()["is_current"] is False

        listed = client.get(f"/api/family-members/{child['id']}/enrolments").json()
        assert [e["is_current"] for e in listed] == [True, False]

    def test_marking_current_on_update(self, client, child, enrolment):
        other = client.post("/api/schools/", json={"name": "Kelvin Grove State College"}).json()
        second = client.post("/api/enrolments/", json={
            "family_member_id": child["id"], "school_id": other["id"],
        }).json()
        resp = client.put(f"/api/enrolments/{enrolment['id']}", json={"is_current": True})
        assert resp.status_code == 200
        assert client.get(f"/api/enrolments/{second['id']}").json()["is_current"] is False

    def test_school_enrolments(self, client, school, enrolment):
        listed = client.get(f"/api/schools/{school['id']}/enrolments").json()
        assert [e["id"] for e in listed] == [enrolment["id"]]

    def test_delete_enrolment(self, client, enrolment):
        assert client.delete(f"/api/enrolments/{enrolment['id']}").status_code == 204
        assert client.get(f"/api/enrolments/{enrolment['id']}/fees").status_code == 404
