from claimtracker.extensions import db
from claimtracker.models import Claim, RTIRequest


def _validate(client, auth_headers, claim_id, fake_llm, report="FULL REPORT", conclusion="Needs more investigation."):
    fake_llm.replies = [report, conclusion]
    resp = client.post(
        "/api/validate/generate-report",
        json={"claim_id": claim_id, "messages": []},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    fake_llm.calls.clear()


def test_start_without_validation(client, auth_headers, fake_llm):
    resp = client.post("/api/rti/start", json={"claim_title": "Test", "description": "d"}, headers=auth_headers)
    assert resp.status_code == 200

    messages = fake_llm.calls[0]["messages"]
    assert len(messages) == 1 and messages[0]["role"] == "system"
    prompt = messages[0]["content"]
    assert "Latest Validation Summary" not in prompt
    assert "1. Preliminary Review" in prompt
    assert "9. Document the Decision" in prompt


def test_start_includes_latest_conclusion(client, auth_headers, create_claim, fake_llm):
    claim = create_claim()
    _validate(client, auth_headers, claim["id"], fake_llm)

    client.post("/api/rti/start", json={"claim_id": claim["id"], "claim_title": "Test"}, headers=auth_headers)
    prompt = fake_llm.calls[0]["messages"][0]["content"]
    assert "Latest Validation Summary:\nNeeds more investigation." in prompt


def test_chat_requires_claim_id(client, auth_headers, fake_llm):
    resp = client.post("/api/rti/chat", json={"message": "hi", "messages": []}, headers=auth_headers)
    assert resp.status_code == 400
    assert "Claim ID is required" in resp.get_json()["error"]
    assert fake_llm.calls == []


def test_chat_unknown_claim(client, auth_headers):
    resp = client.post("/api/rti/chat", json={"claim_id": 5, "message": "hi"}, headers=auth_headers)
    assert resp.status_code == 404


def test_chat_forwards_history(client, auth_headers, create_claim, fake_llm):
    claim = create_claim()
    history = [{"role": "assistant", "content": "Claim Summary: ..."}]
    resp = client.post(
        "/api/rti/chat",
        json={"claim_id": claim["id"], "message": "Which office?", "messages": history},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    sent = fake_llm.calls[0]["messages"]
    assert "Right to Information" in sent[0]["content"]
    assert "RES-00001" in sent[0]["content"]
    assert sent[1:] == history + [{"role": "user", "content": "Which office?"}]


def test_draft_is_not_saved(app, client, auth_headers, fake_llm):
    fake_llm.replies = ["Subject: Request"]
    resp = client.post("/api/rti/generate", json={"claim_title": "Test"}, headers=auth_headers)
    assert resp.get_json() == {"rtiRequest": "Subject: Request"}
    with app.app_context():
        assert RTIRequest.query.count() == 0


def test_generate_request_persists_and_updates_status(app, client, auth_headers, create_claim, fake_llm):
    claim = create_claim()
    _validate(client, auth_headers, claim["id"], fake_llm, report="VALIDATION BODY")
    fake_llm.replies = ["Dear Information Officer"]

    resp = client.post(
        "/api/rti/generate-request",
        json={"claim_id": claim["id"], "messages": [{"role": "user", "content": "Ask for the contract"}]},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["ai_generated_rti_request"] == "Dear Information Officer"
    assert body["status"] == "GENERATED"
    assert body["validator_username"] == "alice"

    call = fake_llm.calls[0]
    assert call["max_tokens"] == 2000
    prompt = call["messages"][1]["content"]
    assert "LATEST VALIDATION REPORT:\nVALIDATION BODY" in prompt
    assert "USER: Ask for the contract" in prompt
    assert "Formulate Potential RTI Requests:\n  Develop clear" in prompt

    refreshed = client.get(f"/api/claims/{claim['id']}", headers=auth_headers).get_json()
    assert refreshed["status"] == "RTI Request Created"

    listed = client.get(f"/api/rti?claimId={claim['id']}", headers=auth_headers).get_json()
    assert [r["id"] for r in listed] == [body["id"]]
    alias = client.get(f"/api/claims/{claim['id']}/rti-requests", headers=auth_headers).get_json()
    assert alias == listed

    one = client.get(f"/api/rti/{body['id']}?claimId={claim['id']}", headers=auth_headers)
    assert one.status_code == 200
    assert one.get_json()["ai_generated_rti_request"] == "Dear Information Officer"


def test_generate_request_failure_writes_nothing(app, client, auth_headers, create_claim, fake_llm):
    claim = create_claim()
    fake_llm.fail = True
    resp = client.post("/api/rti/generate-request", json={"claim_id": claim["id"]}, headers=auth_headers)
    assert resp.status_code == 502
    with app.app_context():
        assert RTIRequest.query.count() == 0
        assert db.session.get(Claim, claim["id"]).status == "Opened"


def test_listing_requires_claim_id(client, auth_headers):
    assert client.get("/api/rti", headers=auth_headers).status_code == 400
    assert client.get("/api/rti/1", headers=auth_headers).status_code == 400


def test_get_missing_request(client, auth_headers, create_claim):
    claim = create_claim()
    resp = client.get(f"/api/rti/12?claimId={claim['id']}", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "RTI request not found"}
