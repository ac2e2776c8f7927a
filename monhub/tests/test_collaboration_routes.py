from fastapi.testclient import TestClient

from conftest import auth_headers, make_collaboration
from monhub.config import settings
from monhub.constants import COLLABORATION_ERRORS
from monhub.main import app
from monhub.services.api_client import ApiError

DETAIL = "/collaboration/collab1"


def _seed_page(api, **overrides):
    api.on("GET", DETAIL, {"collaboration": make_collaboration(**overrides)})
    api.on("GET", "/property/prop1", {"data": {
        "_id": "prop1", "title": "Maison", "price": 320000, "address": "3 rue Vauban",
        "city": "Saint-Malo", "postalCode": "35400", "owner": "agent1",
    }})
    api.on("GET", "/message/users", {"users": [{"_id": "apporteur1", "unreadCount": 2}]})
    api.on("GET", "/message/users/agent1", {"user": {"_id": "agent1", "firstName": "Paul", "lastName": "Martin"}})
    api.on("GET", "/message/users/apporteur1", {"user": {"_id": "apporteur1", "firstName": "Léa", "lastName": "Roux"}})


def test_requires_token(client):
    assert client.get("/collaboration/").status_code == 401


def test_invalid_token_rejected(client):
    r = client.get("/collaboration/", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Could not authenticate user"


def test_unpaid_agent_cannot_open_protected_pages(client, api):
    headers = auth_headers("agent1", "agent", isPaid=False)
    assert client.get("/collaboration/", headers=headers).status_code == 403

    api.on("GET", "/collaboration", {"collaborations": []})
    granted = auth_headers("agent1", "agent", isPaid=False, accessGrantedByAdmin=True)
    assert client.get("/collaboration/", headers=granted).status_code == 200


def test_incomplete_profile_blocked(client):
    headers = auth_headers("apporteur1", "apporteur", profileCompleted=False)
    assert client.get("/collaboration/", headers=headers).status_code == 403


def test_list_collaborations(client, api):
    api.on("GET", "/collaboration", {"collaborations": [
        make_collaboration(collaboratorId={"_id": "apporteur1", "firstName": "Léa", "lastName": "Roux"}),
    ]})
    r = client.get("/collaboration/", headers=auth_headers())
    assert r.status_code == 200
    row = r.json()[0]
    assert row["is_owner"] is True
    assert row["partner"] == "Léa Roux"
    assert row["status_label"] == "En attente"


def test_collaboration_page(client, api):
    _seed_page(api, status="accepted")
    r = client.get(DETAIL, headers=auth_headers("agent1"))
    assert r.status_code == 200
    page = r.json()
    assert page["post"]["address"] == "3 rue Vauban, 35400 Saint-Malo"
    assert page["participants"]["collaborator"]["name"] == "Léa Roux"
    assert page["chat"] == {"peer_id": "apporteur1", "unread_count": 2}
    assert page["contract"]["requires_my_signature"] is True


def test_propose_validation_error(client, api):
    body = {
        "post_type": "property",
        "post_id": "prop1",
        "owner_user_type": "apporteur",
        "commission_percentage": "55",
        "agree_to_terms": True,
    }
    r = client.post("/collaboration/", json=body, headers=auth_headers("agent2"))
    assert r.status_code == 400
    assert "50%" in r.json()["detail"]
    assert api.calls == []


def test_propose_collaboration(client, api):
    api.on("POST", "/collaboration", {"success": True, "collaboration": make_collaboration()})
    body = {
        "post_type": "property",
        "post_id": "prop1",
        "owner_user_type": "agent",
        "commission_percentage": "40",
        "message": "Intéressé",
        "agree_to_terms": True,
    }
    r = client.post("/collaboration/", json=body, headers=auth_headers("apporteur1", "apporteur"))
    assert r.status_code == 201
    assert r.json()["toast"]["type"] == "success"
    assert api.called("POST", "/collaboration")[0]["json"] == {
        "propertyId": "prop1",
        "commissionPercentage": 40.0,
        "message": "Intéressé",
    }


def test_activate_accepted_opens_contract_modal(client, api):
    api.on("GET", DETAIL, {"collaboration": make_collaboration(status="accepted")})
    r = client.post(f"{DETAIL}/status", json={"status": "active"}, headers=auth_headers())
    assert r.status_code == 200
    assert r.json()["action"] == "open_contract_modal"
    assert [c["method"] for c in api.calls] == ["GET"]


def test_cancel_then_confirm(client, api):
    api.on("GET", DETAIL, {"collaboration": make_collaboration(status="active")})
    api.on("DELETE", f"{DETAIL}/cancel", {"success": True})

    r = client.post(f"{DETAIL}/status", json={"status": "cancelled"}, headers=auth_headers())
    assert r.json()["action"] == "confirm"
    assert r.json()["data"]["pending_action"] == "cancelled"

    r = client.post(f"{DETAIL}/confirm", json={"pending_action": "cancelled"}, headers=auth_headers())
    assert r.json()["action"] == "updated"
    assert len(api.called("DELETE", f"{DETAIL}/cancel")) == 1


def test_confirm_rejects_other_actions(client):
    r = client.post(f"{DETAIL}/confirm", json={"pending_action": "accepted"}, headers=auth_headers())
    assert r.status_code == 422


def test_completion_reason_must_be_known(client):
    r = client.post(f"{DETAIL}/complete", json={"reason": "autre"}, headers=auth_headers())
    assert r.status_code == 422


def test_progress_blocked_when_not_active(client, api):
    api.on("GET", DETAIL, {"collaboration": make_collaboration(status="accepted")})
    r = client.post(f"{DETAIL}/progress", json={"step": "premier_contact"}, headers=auth_headers())
    assert r.status_code == 200
    assert r.json()["action"] == "blocked"
    assert r.json()["error"] == COLLABORATION_ERRORS["NOT_ACTIVE"]
    assert api.called("POST", f"{DETAIL}/notes") == []


def test_outsider_cannot_act_on_collaboration(client, api):
    api.on("GET", DETAIL, {"collaboration": make_collaboration(status="active")})
    headers = auth_headers("agent9", "agent")

    r = client.post(f"{DETAIL}/activities", json={"content": "Visite"}, headers=headers)
    assert r.status_code == 403
    assert r.json()["detail"] == "Accès refusé"

    r = client.post(f"{DETAIL}/contract/sign", headers=headers)
    assert r.status_code == 403
    assert api.called("POST", f"{DETAIL}/notes") == []


def test_unpaid_agent_cannot_update_status(client, api):
    api.on("GET", DETAIL, {"collaboration": make_collaboration(status="pending")})
    headers = auth_headers("agent1", "agent", isPaid=False)

    r = client.post(f"{DETAIL}/status", json={"status": "accepted"}, headers=headers)

    assert r.status_code == 403
    assert api.calls == []


def test_unknown_progress_step_rejected(client):
    r = client.put(
        f"{DETAIL}/progress-status",
        json={"target_step": "demenagement", "validated_by": "owner"},
        headers=auth_headers(),
    )
    assert r.status_code == 422


def test_contract_read_and_update(client, api):
    api.on("GET", DETAIL, {"collaboration": make_collaboration(status="accepted")})
    api.on("GET", "/contract/collab1", {"contract": {"contractText": "Contrat", "ownerSigned": True}})
    api.on("PUT", "/contract/collab1", ApiError("Contrat déjà signé", status_code=400))

    r = client.get(f"{DETAIL}/contract", headers=auth_headers())
    assert r.json()["contractText"] == "Contrat"
    assert r.json()["ownerSigned"] is True

    r = client.put(f"{DETAIL}/contract", json={"contract_text": "Nouveau"}, headers=auth_headers())
    assert r.status_code == 400
    assert r.json()["detail"] == "Contrat déjà signé"


# Error mapping


def test_upstream_client_error_keeps_status(client, api):
    api.on("GET", DETAIL, ApiError("Collaboration introuvable", status_code=404))
    r = client.post(f"{DETAIL}/status", json={"status": "active"}, headers=auth_headers())
    assert r.status_code == 404
    assert r.json()["toast"] == {"type": "error", "message": "Collaboration introuvable"}


def test_upstream_server_error_is_bad_gateway(client, api):
    api.on("GET", DETAIL, ApiError("Erreur serveur", status_code=500))
    r = client.post(f"{DETAIL}/status", json={"status": "active"}, headers=auth_headers())
    assert r.status_code == 502


def test_upstream_timeout(client, api):
    api.on("GET", DETAIL, ApiError("Le serveur ne répond pas", timeout=True))
    r = client.post(f"{DETAIL}/status", json={"status": "active"}, headers=auth_headers())
    assert r.status_code == 504
    assert r.json()["error"] == "timeout"


def test_unexpected_error_renders_error_boundary(client, api, monkeypatch):
    api.on("GET", "/collaboration", RuntimeError("kaboom"))
    safe_client = TestClient(app, raise_server_exceptions=False)

    r = safe_client.get("/collaboration/", headers=auth_headers())
    assert r.status_code == 500
    body = r.json()
    assert body["title"] == "Une erreur est survenue"
    assert body["actions"] == ["retry", "reload"]
    assert body["details"]["message"] == "kaboom"

    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    r = safe_client.get("/collaboration/", headers=auth_headers())
    assert "details" not in r.json()


def test_health(client):
    assert client.get("/healthy").json() == {"status": "Healthy"}
