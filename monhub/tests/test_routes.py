from datetime import date, timedelta

from conftest import auth_headers, make_collaboration


PROPERTY = {
    "_id": "prop1",
    "title": "Maison avec jardin",
    "price": 320000,
    "address": "3 rue Vauban",
    "city": "Saint-Malo",
    "postalCode": "35400",
    "owner": {"_id": "agent1", "firstName": "Paul", "lastName": "Martin"},
    "mainImage": {"url": "https://monhubimmo.s3.eu-west-3.amazonaws.com/p/prop1.jpg"},
    "viewCount": 12,
}


# Chat


def test_chat_users_and_thread(client, api):
    api.on("GET", "/message/users", [{"_id": "apporteur1", "firstName": "Léa", "unreadCount": 1}])
    api.on("GET", "/message/users/apporteur1", {"user": {"_id": "apporteur1", "firstName": "Léa"}})
    api.on("GET", "/message/apporteur1", {"messages": [
        {"_id": "m1", "senderId": "agent1", "receiverId": "apporteur1", "text": "Bonjour",
         "createdAt": "2025-03-05T09:00:00Z", "isRead": True},
    ]})
    headers = auth_headers()

    users = client.get("/chat/users", headers=headers).json()
    assert users[0]["unread_count"] == 1

    thread = client.get("/chat/apporteur1/messages?limit=20", headers=headers).json()
    assert thread["peer"]["name"] == "Léa"
    assert thread["groups"][0]["messages"][0]["read_receipt"] == "read"
    assert api.called("GET", "/message/apporteur1")[0]["params"] == {"limit": 20}


def test_send_message_with_attachment(client, api):
    api.on("POST", "/upload/chat-file", {"data": {
        "url": "https://b.s3.amazonaws.com/chat/plan.pdf", "name": "plan.pdf",
        "mime": "application/pdf", "size": 4,
    }})
    api.on("POST", "/message/send/apporteur1", lambda json, params: {"message": {
        "_id": "m9", "senderId": "agent1", "receiverId": "apporteur1",
        "text": json["text"], "attachments": json.get("attachments", []),
        "createdAt": "2025-03-05T09:00:00Z",
    }})

    r = client.post(
        "/chat/apporteur1/messages",
        data={"text": " Voici le plan "},
        files={"file": ("plan.pdf", b"%PDF", "application/pdf")},
        headers=auth_headers(),
    )

    assert r.status_code == 201
    bubble = r.json()
    assert bubble["align"] == "right"
    assert bubble["attachments"][0]["url"] == "https://cdn.monhubimmo.fr/chat/plan.pdf"
    sent = api.called("POST", "/message/send/apporteur1")[0]["json"]
    assert sent["text"] == "Voici le plan"
    assert sent["attachments"][0]["type"] == "pdf"


def test_send_message_rejects_unsupported_file(client, api):
    r = client.post(
        "/chat/apporteur1/messages",
        files={"file": ("archive.zip", b"PK", "application/zip")},
        headers=auth_headers(),
    )
    assert r.status_code == 400
    assert api.calls == []


def test_send_empty_message_rejected(client):
    r = client.post("/chat/apporteur1/messages", data={"text": "  "}, headers=auth_headers())
    assert r.status_code == 400


def test_mark_thread_read(client, api):
    api.on("PUT", "/message/read/apporteur1", {"success": True})
    assert client.post("/chat/apporteur1/read", headers=auth_headers()).status_code == 204


# Properties


def test_property_list_is_public(client, api):
    api.on("GET", "/property", {"data": [PROPERTY]})
    r = client.get("/property/?city=Saint-Malo&min_price=100000")
    assert r.status_code == 200
    item = r.json()[0]
    assert item["image"] == "https://cdn.monhubimmo.fr/p/prop1.jpg"
    assert item["views_label"] == "12 vues"
    assert api.called("GET", "/property")[0]["params"]["minPrice"] == 100000


def test_property_detail_anonymous_hides_address(client, api):
    api.on("GET", "/property/prop1", {"data": PROPERTY})
    r = client.get("/property/prop1")
    assert r.json()["address"] == "35400 Saint-Malo"
    assert r.json()["address_hint"]
    assert api.called("GET", "/collaboration/property/prop1") == []


def test_property_detail_with_accepted_collaboration(client, api):
    api.on("GET", "/property/prop1", {"data": PROPERTY})
    api.on("GET", "/collaboration/property/prop1", {"collaborations": [
        make_collaboration(status="accepted"),
    ]})
    r = client.get("/property/prop1", headers=auth_headers("apporteur1", "apporteur"))
    assert r.json()["address"] == "3 rue Vauban, 35400 Saint-Malo"
    assert r.json()["owner"]["name"] == "Paul Martin"


def test_property_with_pending_collaboration_blocks_proposals(client, api):
    api.on("GET", "/property/prop1", {"data": PROPERTY})
    api.on("GET", "/collaboration/property/prop1", {"collaborations": [
        make_collaboration(status="pending", collaboratorId="agent3"),
    ]})
    r = client.get("/property/prop1", headers=auth_headers("agent2", "agent"))
    body = r.json()
    assert body["has_blocking_collaboration"] is True
    assert body["blocking_status"] == "pending"
    assert body["blocking_message"] == "Propriété déjà en collaboration (en attente)"
    assert body["can_propose_collaboration"] is False
    assert body["contact_href"] == "/chat?userId=agent1&propertyId=prop1"


def test_property_open_to_proposals(client, api):
    api.on("GET", "/property/prop1", {"data": PROPERTY})
    api.on("GET", "/collaboration/property/prop1", {"collaborations": [
        make_collaboration(status="cancelled", collaboratorId="agent3"),
    ]})
    body = client.get("/property/prop1", headers=auth_headers("agent2", "agent")).json()
    assert body["has_blocking_collaboration"] is False
    assert body["can_propose_collaboration"] is True

    anonymous = client.get("/property/prop1").json()
    assert anonymous["contact_href"] == "/auth/login"
    assert anonymous["can_propose_collaboration"] is False


def test_guest_cannot_publish_property(client):
    r = client.post("/property/", json={"title": "x"}, headers=auth_headers("g1", "guest"))
    assert r.status_code == 403


def test_property_status_update(client, api):
    api.on("PATCH", "/property/prop1/status", {"data": {**PROPERTY, "status": "sold"}})
    r = client.patch("/property/prop1/status", json={"status": "sold"}, headers=auth_headers())
    assert r.json()["status"] == "sold"
    bad = client.patch("/property/prop1/status", json={"status": "gone"}, headers=auth_headers())
    assert bad.status_code == 422


def test_search_ad_detail(client, api):
    api.on("GET", "/search-ads/ad1", {"data": {
        "_id": "ad1", "title": "Recherche T3", "authorId": "apporteur1",
        "location": {"cities": ["Rennes"]}, "budget": {"max": 300000},
    }})
    r = client.get("/search-ads/ad1", headers=auth_headers("apporteur1", "apporteur"))
    assert r.json()["is_author"] is True
    assert r.json()["budget_max"] == "300\u202f000\u00a0€"


# Appointments


def _booking(**overrides):
    data = {
        "agent_id": "agent1",
        "appointment_type": "estimation",
        "scheduled_date": (date.today() + timedelta(days=7)).isoformat(),
        "scheduled_time": "10:30",
        "first_name": "Jean",
        "last_name": "Dupont",
        "email": "jean@example.com",
        "phone": "06 12 34 56 78",
    }
    data.update(overrides)
    return data


def test_book_appointment(client, api):
    scheduled = (date.today() + timedelta(days=7)).isoformat()
    api.on("POST", "/appointments", {"data": {
        "_id": "a1", "agentId": "agent1", "appointmentType": "estimation",
        "scheduledDate": scheduled, "scheduledTime": "10:30",
        "contactInfo": {"firstName": "Jean", "lastName": "Dupont", "email": "jean@example.com"},
    }})

    r = client.post("/appointments/", json=_booking())

    assert r.status_code == 201
    assert r.json()["type_label"] == "Estimation"
    assert r.json()["status_label"] == "En attente"
    payload = api.called("POST", "/appointments")[0]["json"]
    assert payload["contactInfo"]["email"] == "jean@example.com"
    assert payload["scheduledDate"] == scheduled


def test_booking_validation(client, api):
    past = (date.today() - timedelta(days=1)).isoformat()
    assert client.post("/appointments/", json=_booking(scheduled_date=past)).status_code == 422
    assert client.post("/appointments/", json=_booking(scheduled_time="25:00")).status_code == 422
    assert client.post("/appointments/", json=_booking(email="jean@")).status_code == 422
    assert client.post("/appointments/", json=_booking(appointment_type="visite")).status_code == 422
    assert api.calls == []


# Notifications


def test_notification_targets(client, api):
    api.on("GET", "/notifications", {"items": [
        {"_id": "n1", "type": "chat:newMessage", "title": "Nouveau message", "message": "Léa vous a écrit",
         "entity": {"type": "chat", "id": "conv1"}, "actorId": {"_id": "apporteur1", "firstName": "Léa"}},
        {"_id": "n2", "type": "collab:proposal_received", "title": "Proposition", "message": "...",
         "entity": {"type": "collaboration", "id": "collab1"}},
        {"_id": "n3", "type": "appointment:new", "title": "Rendez-vous", "message": "...",
         "entity": {"type": "appointment", "id": "a1"}, "read": True},
    ]})
    r = client.get("/notifications/", headers=auth_headers())
    targets = [n["target"] for n in r.json()]
    assert targets == ["/chat?userId=apporteur1", "/collaboration/collab1", "/dashboard"]


def test_notification_mark_read(client, api):
    api.on("PATCH", "/notifications/n1/read", {"success": True})
    api.on("PATCH", "/notifications/read-all", {"success": True})
    api.on("GET", "/notifications/unread-count", {"count": 4})
    headers = auth_headers()
    assert client.patch("/notifications/n1/read", headers=headers).status_code == 204
    assert client.patch("/notifications/read-all", headers=headers).status_code == 204
    assert client.get("/notifications/unread-count", headers=headers).json() == {"count": 4}


# Legal


def test_legal_pages(client):
    listing = client.get("/legal/").json()
    assert {p["slug"] for p in listing} == {
        "mentions-legales",
        "politique-de-confidentialite",
        "politique-cookies",
        "cookies",
    }
    page = client.get("/legal/mentions-legales").json()
    assert page["sections"][0]["title"] == "Éditeur du site"
    assert page["sections"][0]["number"] == 1
    assert client.get("/legal/cgv").status_code == 404
