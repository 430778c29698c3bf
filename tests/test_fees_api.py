# tests/test_fees_api.py - School fees, fee reports and extracurricular activities over HTTP
from datetime import date, timedelta
from decimal import Decimal

import pytest


def days_from_today(days):
    return (date.today() + timedelta(days=days)).isoformat()


@pytest.fixture
def fees(client, enrolment, lookup_ids):
    fee_types = lookup_ids["fee_types"]
    payloads = [
        {"description": "Term 1 tuition", "amount": "1200.00", "due_date": days_from_today(-10), "fee_type_id": fee_types["Tuition"]},
        {"description": "Year 4 camp", "amount": "350.00", "due_date": days_from_today(3), "fee_type_id": fee_types["Camp"]},
        {"description": "Building levy", "amount": "150.00", "due_date": days_from_today(20), "fee_type_id": fee_types["Building Levy"]},
    ]
    created = []
    for payload in payloads:
        resp = client.post("/api/fees/", json={"enrolment_id": enrolment["id"], **payload})
        assert resp.status_code == 201
        created.append(resp.json())
    return created


class TestFees:
    """Fee records and payment."""

    def test_create_fills_year_and_status(self, fees):
        overdue, due, upcoming = fees
        assert overdue["year"] == date.today().year
        assert overdue["status"] == "overdue"
        assert due["status"] == "due"
        assert upcoming["status"] == "upcoming"
        assert due["member_name"] == "Olivia"
        assert due["school_name"] == "Brisbane State School"
        assert due["fee_type"]["name"] == "Camp"

    def test_amount_must_be_positive(self, client, enrolment):
        resp = client.post("/api/fees/", json={"enrolment_id": enrolment["id"], "description": "Free", "amount": "0"})
        assert resp.status_code == 422

    def test_unknown_references(self, client, enrolment):
        missing = "00000000-0000-0000-0000-000000000000"
        resp = client.post("/api/fees/", json={"enrolment_id": missing, "description": "Fee", "amount": "10"})
        assert resp.status_code == 404
        resp = client.post("/api/fees/", json={
            "enrolment_id": enrolment["id"], "description": "Fee", "amount": "10", "fee_type_id": missing,
        })
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Fee type not found"

    def test_mark_paid_defaults(self, client, fees):
        resp = client.post(f"/api/fees/{fees[0]['id']}/mark-paid")
        assert resp.status_code == 200
        data = resp.json()
        assert data["is_paid"] is True
        assert data["status"] == "paid"
        assert data["paid_date"] == date.today().isoformat()
        assert Decimal(data["paid_amount"]) == Decimal("1200.00")

    def test_mark_paid_with_details(self, client, fees):
        resp = client.post(f"/api/fees/{fees[1]['id']}/mark-paid", json={
            "paid_date": "2025-02-01", "paid_amount": "300.00", "payment_method": "bpay",
        })
        data = resp.json()
        assert data["paid_date"] == "2025-02-01"
        assert Decimal(data["paid_amount"]) == Decimal("300.00")
        assert data["payment_method"] == "bpay"

    def test_update_keeps_required_fields(self, client, fees):
        resp = client.put(f"/api/fees/{fees[2]['id']}", json={"amount": None, "notes": "Invoice emailed"})
        assert resp.status_code == 200
        assert Decimal(resp.json()["amount"]) == Decimal("150.00")
        assert resp.json()["notes"] == "Invoice emailed"

    def test_enrolment_fees_ordered_by_due_date(self, client, enrolment, fees):
        listed = client.get(f"/api/enrolments/{enrolment['id']}/fees").json()
        assert [f["description"] for f in listed] == ["Term 1 tuition", "Year 4 camp", "Building levy"]

    def test_delete_fee(self, client, fees):
        assert client.delete(f"/api/fees/{fees[0]['id']}").status_code == 204
        assert client.get(f"/api/fees/{fees[0]['id']}").status_code == 404


class TestFeeReports:
    """Upcoming, overdue, summary, calendar and family overview."""

    def test_upcoming_window(self, client, fees):
        narrow = client.get("/api/fees/upcoming", params={"days": 7}).json()
        assert [f["description"] for f in narrow] == ["Year 4 camp"]
        # defaults to a 30 day window
        wide = client.get("/api/fees/upcoming").json()
        assert [f["description"] for f in wide] == ["Year 4 camp", "Building levy"]

    def test_overdue(self, client, fees):
        assert [f["description"] for f in client.get("/api/fees/overdue").json()] == ["Term 1 tuition"]
        client.post(f"/api/fees/{fees[0]['id']}/mark-paid")
        assert client.get("/api/fees/overdue").json() == []

    def test_summary(self, client, fees):
        client.post(f"/api/fees/{fees[0]['id']}/mark-paid")
        data = client.get("/api/fees/summary").json()
        assert Decimal(data["total"]) == Decimal("1700.00")
        assert Decimal(data["paid"]) == Decimal("1200.00")
        assert Decimal(data["remaining"]) == Decimal("500.00")
        assert data["paid_percentage"] == 70.6
        assert (data["fee_count"], data["unpaid_count"], data["overdue_count"]) == (3, 2, 0)
        assert [g["name"] for g in data["by_child"]] == ["Olivia"]
        assert [g["name"] for g in data["by_fee_type"]] == ["Tuition", "Camp", "Building Levy"]

    def test_summary_keeps_children_with_same_name_apart(self, client, child, school, enrolment):
        twin = client.post("/api/family-members/", json={
            "name": "Olivia", "member_type": "child", "relationship": "child", "date_of_birth": "2017-06-01",
        }).json()
        twin_enrolment = client.post("/api/enrolments/", json={
            "family_member_id": twin["id"], "school_id": school["id"], "year_level": "Year 2",
        }).json()
        for enrolment_id, amount in [(enrolment["id"], "400"), (twin_enrolment["id"], "250")]:
            client.post("/api/fees/", json={
                "enrolment_id": enrolment_id, "description": "Term 1 tuition", "amount": amount, "year": 2025,
            })
        groups = client.get("/api/fees/summary", params={"year": 2025}).json()["by_child"]
        assert [g["name"] for g in groups] == ["Olivia", "Olivia"]
        assert {g["id"]: Decimal(g["total"]) for g in groups} == {
            child["id"]: Decimal("400.00"), twin["id"]: Decimal("250.00"),
        }

    def test_summary_for_empty_year(self, client, fees):
        data = client.get("/api/fees/summary", params={"year": 1999}).json()
        assert data["fee_count"] == 0
        assert data["paid_percentage"] == 0.0

    def test_calendar(self, client, enrolment):
        for description, due in [("Camp", "2025-03-05"), ("Excursion", "2025-03-05"), ("Levy", "2025-03-20"), ("Music", "2025-04-01")]:
            client.post("/api/fees/", json={
                "enrolment_id": enrolment["id"], "description": description, "amount": "50", "due_date": due, "year": 2025,
            })
        data = client.get("/api/fees/calendar", params={"year": 2025, "month": 3}).json()
        assert Decimal(data["total"]) == Decimal("150.00")
        assert [d["due_date"] for d in data["days"]] == ["2025-03-05", "2025-03-20"]
        assert len(data["days"][0]["fees"]) == 2

    def test_calendar_bad_month(self, client, engine):
        assert client.get("/api/fees/calendar", params={"year": 2025, "month": 13}).status_code == 400

    def test_family_overview(self, client, child, fees, lookup_ids):
        client.post(f"/api/fees/{fees[0]['id']}/mark-paid")
        client.post("/api/extracurriculars/", json={
            "family_member_id": child["id"],
            "name": "Swim squad",
            "cost_amount": "20",
            "cost_frequency_id": lookup_ids["frequencies"]["Weekly"],
            "registration_fee": "50",
        })
        data = client.get("/api/fees/family-overview").json()
        assert [c["name"] for c in data["children"]] == ["Olivia"]
        assert Decimal(data["total_school_fees"]) == Decimal("1700.00")
        assert Decimal(data["total_paid"]) == Decimal("1200.00")
        assert Decimal(data["total_activities"]) == Decimal("1090.00")
        assert Decimal(data["grand_total"]) == Decimal("2790.00")
        assert Decimal(data["remaining_school_fees"]) == Decimal("500.00")


class TestExtracurriculars:
    """Activities, cost summary and the weekly schedule."""

    @pytest.fixture
    def activities(self, client, child, lookup_ids):
        payloads = [
            {
                "name": "Swim squad",
                "activity_type_id": lookup_ids["activity_types"]["Swimming"],
                "day_of_week": ["tuesday", "Thursday", "TUESDAY"],
                "time_start": "16:00", "time_end": "17:30",
                "cost_amount": "20", "cost_frequency_id": lookup_ids["frequencies"]["Weekly"],
                "registration_fee": "50",
            },
            {
                "name": "Piano",
                "activity_type_id": lookup_ids["activity_types"]["Music"],
                "day_of_week": ["Tuesday"],
                "time_start": "15:00", "time_end": "15:30",
                "cost_amount": "250", "cost_frequency_id": lookup_ids["frequencies"]["Per Term"],
            },
        ]
        created = []
        for payload in payloads:
            resp = client.post("/api/extracurriculars/", json={"family_member_id": child["id"], **payload})
            assert resp.status_code == 201
            created.append(resp.json())
        return created

    def test_create_computes_cost_and_hours(self, activities):
        swim = activities[0]
        assert swim["day_of_week"] == ["Tuesday", "Thursday"]
        assert Decimal(swim["annual_cost"]) == Decimal("1090.00")
        assert swim["weekly_hours"] == 3.0
        assert swim["member_name"] == "Olivia"
        assert swim["activity_type"]["name"] == "Swimming"

    def test_end_time_before_start(self, client, child):
        resp = client.post("/api/extracurriculars/", json={
            "family_member_id": child["id"], "name": "Chess", "time_start": "17:00", "time_end": "16:00",
        })
        assert resp.status_code == 400

    def test_unknown_member(self, client, engine):
        resp = client.post("/api/extracurriculars/", json={
            "family_member_id": "00000000-0000-0000-0000-000000000000", "name": "Chess",
        })
        assert resp.status_code == 404

    def test_list_only_active(self, client, child, activities):
        client.put(f"/api/extracurriculars/{activities[1]['id']}", json={"is_active": False})
        names = [a["name"] for a in client.get("/api/extracurriculars/", params={"member_id": child["id"]}).json()]
        assert names == ["Swim squad"]
        # the member view still shows inactive activities
        member_view = client.get(f"/api/family-members/{child['id']}/extracurriculars").json()
        assert [a["name"] for a in member_view] == ["Swim squad", "Piano"]

    def test_summary(self, client, activities):
        data = client.get("/api/extracurriculars/summary").json()
        assert data["active_count"] == 2
        assert Decimal(data["total_annual_cost"]) == Decimal("2090.00")
        assert Decimal(data["monthly_average"]) == Decimal("174.17")
        assert data["total_weekly_hours"] == 3.5
        assert [g["name"] for g in data["by_type"]] == ["Swimming", "Music"]

    def test_summary_keeps_children_with_same_name_apart(self, client, child, activities):
        twin = client.post("/api/family-members/", json={
            "name": "Olivia", "member_type": "child", "relationship": "child", "date_of_birth": "2017-06-01",
        }).json()
        client.post("/api/extracurriculars/", json={
            "family_member_id": twin["id"], "name": "Netball", "registration_fee": "120",
        })
        groups = client.get("/api/extracurriculars/summary").json()["by_child"]
        assert [g["name"] for g in groups] == ["Olivia", "Olivia"]
        assert {g["id"]: Decimal(g["annual_cost"]) for g in groups} == {
            child["id"]: Decimal("2090.00"), twin["id"]: Decimal("120.00"),
        }

    def test_schedule(self, client, activities):
        schedule = {day["day"]: day["activities"] for day in client.get("/api/extracurriculars/schedule").json()}
        assert list(schedule)[0] == "Monday"
        assert [a["name"] for a in schedule["Tuesday"]] == ["Piano", "Swim squad"]
        assert [a["name"] for a in schedule["Thursday"]] == ["Swim squad"]
        assert schedule["Monday"] == []

    def test_member_summary_counts_active_activities(self, client, child, activities):
        data = client.get(f"/api/family-members/{child['id']}/summary").json()
        assert data["active_activities_count"] == 2
        assert Decimal(data["activities_annual_cost"]) == Decimal("2090.00")

    def test_update_rejects_inverted_times(self, client, activities):
        resp = client.put(f"/api/extracurriculars/{activities[0]['id']}", json={"time_end": "15:00"})
        assert resp.status_code == 400
        assert client.get(f"/api/extracurriculars/{activities[0]['id']}").json()["time_end"] == "17:30:00"

    def test_update_rejects_blank_name(self, client, activities):
        resp = client.put(f"/api/extracurriculars/{activities[0]['id']}", json={"name": "   "})
        assert resp.status_code == 422
        assert client.get(f"/api/extracurriculars/{activities[0]['id']}").json()["name"] == "Swim squad"

    def test_delete(self, client, activities):
        assert client.delete(f"/api/extracurriculars/{activities[0]['id']}").status_code == 204
        assert client.get(f"/api/extracurriculars/{activities[0]['id']}").status_code == 404
