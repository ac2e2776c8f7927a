from conftest import auth_headers, make_collaboration

ADMIN = {"user_id": "admin1", "user_type": "admin"}


def test_admin_routes_require_admin(client):
    r = client.get("/admin/users", headers=auth_headers("agent1", "agent"))
    assert r.status_code == 403
    assert r.json()["detail"] == "Accès refusé"


def test_users_table(client, api):
    api.on("GET", "/admin/users", {"users": [
        {"_id": "u1", "firstName": "Paul", "lastName": "Martin", "userType": "agent",
         "isPaid": True, "subscriptionEndDate": "2025-04-01T00:00:00Z"},
        {"_id": "u2", "firstName": "Léa", "userType": "apporteur"},
    ]})
    r = client.get("/admin/users", headers=auth_headers(**ADMIN))
    assert r.status_code == 200
    table = r.json()
    assert [c["header"] for c in table["columns"]][-1] == "Paiement"
    assert table["rows"][0][-1]["label"] == "Payé"
    assert table["rows"][1][-1]["text"] == "N/A"


def test_update_user(client, api):
    api.on("PUT", "/admin/users/u1", {"user": {"_id": "u1", "userType": "agent", "accessGrantedByAdmin": True}})
    r = client.put("/admin/users/u1", json={"access_granted_by_admin": True}, headers=auth_headers(**ADMIN))
    assert r.json()["payment"]["label"] == "Accès manuel"
    assert api.called("PUT", "/admin/users/u1")[0]["json"] == {"accessGrantedByAdmin": True}


def test_collaborations_table_and_actions(client, api):
    api.on("GET", "/collaboration/admin/all", {"collaborations": [make_collaboration(status="active")]})
    api.on("POST", "/collaboration/admin/collab1/close", {"success": True, "collaboration": make_collaboration(status="cancelled")})
    api.on("DELETE", "/collaboration/admin/collab1", {"success": True})
    headers = auth_headers(**ADMIN)

    table = client.get("/admin/collaborations", headers=headers).json()
    assert table["rows"][0][3]["label"] == "Active"

    closed = client.post("/admin/collaborations/collab1/close", json={"action": "cancel"}, headers=headers)
    assert closed.json()["success"] is True
    assert api.called("POST", "/collaboration/admin/collab1/close")[0]["json"] == {"action": "cancel"}

    bad = client.post("/admin/collaborations/collab1/close", json={"action": "archive"}, headers=headers)
    assert bad.status_code == 422

    assert client.delete("/admin/collaborations/collab1", headers=headers).json()["success"] is True


def test_properties_table(client, api):
    api.on("GET", "/admin/properties", {"properties": [
        {"_id": "p1", "title": "Maison", "type": "Maison", "price": 420000, "status": "draft"},
    ]})
    row = client.get("/admin/properties", headers=auth_headers(**ADMIN)).json()["rows"][0]
    assert row[2]["text"] == "€420k"
    assert row[3]["variant"] == "warning"


def test_collaboration_chat(client, api):
    api.on("GET", "/admin/chat/collaboration/collab1", {"conversation": None})
    r = client.get("/admin/chat?collaborationId=collab1", headers=auth_headers(**ADMIN))
    assert r.status_code == 200
    assert r.json()["groups"] == []
