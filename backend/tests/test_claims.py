import re

from claimtracker.extensions import db
from claimtracker.models import Claim, RTIRequest, ValidationReport

from .conftest import register


def test_scenario_sequential_research_numbers(client):
    assert register(client).status_code == 201
    login = client.post("/api/auth/login", json={"username": "alice", "password": "pw123"})
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.get_json()['token']}"}

    body = {
        "claim_title": "Test",
        "description": "d",
        "published_url": "http://x",
        "category": "Research",
        "date_published": "2024-01-01",
    }
    first = client.post("/api/claims", json=body, headers=headers)
    assert first.status_code == 201
    assert first.get_json()["claim_nb_tx"] == "RES-00001"
    assert first.get_json()["created_by_username"] == "alice"

    second = client.post("/api/claims", json=dict(body, claim_title="Another"), headers=headers)
    assert second.get_json()["claim_nb_tx"] == "RES-00002"
    assert re.match(r"^[A-Z]{3}-\d{5}$", second.get_json()["claim_nb_tx"])


def test_create_then_fetch_round_trip(client, auth_headers, create_claim):
    created = create_claim()
    assert created["status"] == "Opened"
    assert created["created_by_username"] == "alice"

    resp = client.get(f"/api/claims/{created['id']}", headers=auth_headers)
    assert resp.status_code == 200
    fetched = resp.get_json()
    for field in ("claim_title", "description", "published_url", "category", "status", "date_published"):
        assert fetched[field] == created[field]
    assert fetched["claim_title"] == "Test"
    assert fetched["date_published"] == "2024-01-01"
    assert fetched["created_at"] is not None


def test_create_accepts_iso_timestamp_for_publication_date(create_claim):
    created = create_claim(date_published="2024-03-05T10:30:00.000Z")
    assert created["date_published"] == "2024-03-05"


def test_create_requires_title(client, auth_headers):
    resp = client.post("/api/claims", json={"category": "Health"}, headers=auth_headers)
    assert resp.status_code == 400
    assert "Claim title is required" in resp.get_json()["error"]


def test_create_rejects_unknown_status(client, auth_headers):
    resp = client.post(
        "/api/claims",
        json={"claim_title": "x", "category": "Health", "status": "In Progress"},
        headers=auth_headers,
    )
    assert resp.status_code == 400


def test_get_missing_claim(client, auth_headers):
    resp = client.get("/api/claims/4242", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Claim not found"}


def test_update_only_status_keeps_other_fields(client, auth_headers, create_claim):
    created = create_claim()
    client.put(f"/api/claims/{created['id']}", json={"comments": "first note"}, headers=auth_headers)

    resp = client.put(f"/api/claims/{created['id']}", json={"status": "Closed"}, headers=auth_headers)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "Closed"
    assert body["description"] == "d"
    assert body["comments"] == "first note"
    assert body["updated_at"] is not None


def test_update_with_nulls_keeps_values(client, auth_headers, create_claim):
    created = create_claim()
    resp = client.put(
        f"/api/claims/{created['id']}",
        json={"description": None, "comments": None, "status": None},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.get_json()["description"] == "d"
    assert resp.get_json()["status"] == "Opened"


def test_update_allows_any_status_jump(client, auth_headers, create_claim):
    created = create_claim()
    resp = client.put(
        f"/api/claims/{created['id']}",
        json={"status": "RTI Information Received"},
        headers=auth_headers,
    )
    assert resp.get_json()["status"] == "RTI Information Received"


def test_update_rejects_status_outside_vocabulary(client, auth_headers, create_claim):
    created = create_claim()
    resp = client.put(f"/api/claims/{created['id']}", json={"status": "Done"}, headers=auth_headers)
    assert resp.status_code == 400


def test_update_missing_claim(client, auth_headers):
    resp = client.put("/api/claims/999", json={"status": "Closed"}, headers=auth_headers)
    assert resp.status_code == 404


def _add_documents(app, claim_id):
    with app.app_context():
        claim = db.session.get(Claim, claim_id)
        db.session.add(ValidationReport(
            claim_id=claim.id, validator_id=claim.created_by, status="REPORT_GENERATED",
            ai_generated_full_report="full", ai_generated_conclusion="short",
        ))
        db.session.add(RTIRequest(
            claim_id=claim.id, validator_id=claim.created_by, status="GENERATED",
            ai_generated_rti_request="letter",
        ))
        db.session.commit()


def test_delete_cascades_reports_and_requests(app, client, auth_headers, create_claim):
    created = create_claim()
    _add_documents(app, created["id"])
    assert len(client.get(f"/api/claims/{created['id']}/validations", headers=auth_headers).get_json()) == 1

    resp = client.delete(f"/api/claims/{created['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Claim deleted successfully"}

    assert client.get(f"/api/claims/{created['id']}", headers=auth_headers).status_code == 404
    assert client.get(f"/api/claims/{created['id']}/validations", headers=auth_headers).get_json() == []
    with app.app_context():
        assert RTIRequest.query.count() == 0
        assert ValidationReport.query.count() == 0


def test_delete_missing_claim(client, auth_headers):
    assert client.delete("/api/claims/77", headers=auth_headers).status_code == 404


def test_validation_report_endpoints(app, client, auth_headers, create_claim):
    created = create_claim()
    _add_documents(app, created["id"])
    reports = client.get(f"/api/claims/{created['id']}/validations", headers=auth_headers).get_json()
    report_id = reports[0]["id"]
    assert reports[0]["validator_username"] == "alice"

    one = client.get(f"/api/claims/{created['id']}/validations/{report_id}", headers=auth_headers)
    assert one.status_code == 200
    assert one.get_json()["ai_generated_conclusion"] == "short"

    assert client.get(f"/api/claims/{created['id']}/validations/999", headers=auth_headers).status_code == 404

    deleted = client.delete(f"/api/claims/{created['id']}/validations/{report_id}", headers=auth_headers)
    assert deleted.status_code == 200
    assert client.get(f"/api/claims/{created['id']}/validations", headers=auth_headers).get_json() == []
    assert client.delete(f"/api/claims/{created['id']}/validations/{report_id}", headers=auth_headers).status_code == 404


def test_list_is_newest_first(client, auth_headers, create_claim):
    a = create_claim(claim_title="a")
    b = create_claim(claim_title="b")
    ids = [c["id"] for c in client.get("/api/claims", headers=auth_headers).get_json()]
    assert ids == [b["id"], a["id"]]


def test_list_filters_server_side(client, auth_headers, create_claim):
    create_claim(claim_title="Vaccine rollout", category="Health", date_published="2024-01-10")
    create_claim(claim_title="Budget surplus", category="Political", date_published="2024-02-15")
    closed = create_claim(claim_title="Bridge repaired", category="Political", date_published="2024-03-20")
    client.put(f"/api/claims/{closed['id']}", json={"status": "Closed"}, headers=auth_headers)

    def titles(**params):
        resp = client.get("/api/claims", query_string=params, headers=auth_headers)
        assert resp.status_code == 200
        return sorted(c["claim_title"] for c in resp.get_json())

    assert titles(search="budget") == ["Budget surplus"]
    assert titles(search="hea-0000") == ["Vaccine rollout"]
    assert titles(category="Political") == ["Bridge repaired", "Budget surplus"]
    assert titles(status="Closed") == ["Bridge repaired"]
    assert titles(dateFrom="2024-02-01") == ["Bridge repaired", "Budget surplus"]
    assert titles(dateTo="2024-02-15") == ["Budget surplus", "Vaccine rollout"]
    assert titles(dateFrom="2024-02-01", dateTo="2024-02-28", category="Political") == ["Budget surplus"]
    assert titles(search="", category="") == ["Bridge repaired", "Budget surplus", "Vaccine rollout"]


def test_list_rejects_bad_dates(client, auth_headers):
    assert client.get("/api/claims?dateFrom=yesterday", headers=auth_headers).status_code == 400
    assert client.get("/api/claims?dateFrom=2024-05-01&dateTo=2024-01-01", headers=auth_headers).status_code == 400


def test_stats(client, auth_headers, create_claim):
    create_claim()
    create_claim()
    closed = create_claim()
    client.put(f"/api/claims/{closed['id']}", json={"status": "Closed"}, headers=auth_headers)

    resp = client.get("/api/claims/stats", headers=auth_headers)
    assert resp.get_json() == {"total": 3, "active": 2, "completed": 1}


def test_search_treats_wildcards_literally(client, auth_headers, create_claim):
    create_claim(claim_title="Budget up 100%")
    create_claim(claim_title="Bridge repaired")
    create_claim(claim_title="snake_case policy")

    def titles(search):
        resp = client.get("/api/claims", query_string={"search": search}, headers=auth_headers)
        return [c["claim_title"] for c in resp.get_json()]

    assert titles("%") == ["Budget up 100%"]
    assert titles("_") == ["snake_case policy"]
    assert titles("SNAKE_") == ["snake_case policy"]
