"""Tests for /api/enquiries endpoints."""

import pytest


@pytest.fixture
def thread(client, make_user, make_property, auth_headers):
    """A buyer's enquiry on an agent's listing."""
    agent = make_user(role="agent", name="Agent Diallo")
    buyer = make_user(name="Buyer Camara")
    prop = make_property(agent=agent)
    response = client.post(
        "/api/enquiries",
        json={"propertyId": prop.id, "message": "Is it still available?"},
        headers=auth_headers(buyer),
    )
    assert response.status_code == 201
    return {
        "agent": agent,
        "buyer": buyer,
        "property": prop,
        "enquiry": response.json()["data"],
    }


@pytest.mark.api
def test_create_enquiry(thread):
    enquiry = thread["enquiry"]

    assert enquiry["status"] == "sent"
    assert enquiry["message"] == "Is it still available?"
    assert enquiry["sender"]["id"] == thread["buyer"].id
    assert enquiry["recipientAgent"]["id"] == thread["agent"].id
    assert enquiry["recipientAgent"]["phoneNumber"] == thread["agent"].phone_number
    assert enquiry["property"]["id"] == thread["property"].id
    assert [m["message"] for m in enquiry["conversation"]] == ["Is it still available?"]
    assert enquiry["readAt"] is None


@pytest.mark.api
def test_create_enquiry_requires_token(client, make_property, make_user):
    prop = make_property(agent=make_user(role="agent"))

    response = client.post("/api/enquiries", json={"propertyId": prop.id, "message": "Hello"})

    assert response.status_code == 401


@pytest.mark.api
def test_create_enquiry_reports_missing_fields(client, make_user, auth_headers):
    buyer = make_user()

    response = client.post("/api/enquiries", json={}, headers=auth_headers(buyer))

    assert response.status_code == 400
    assert response.json()["error"] == ["Property ID is required", "Message cannot be empty"]


@pytest.mark.api
def test_create_enquiry_message_too_long(client, make_user, make_property, auth_headers):
    prop = make_property(agent=make_user(role="agent"))
    buyer = make_user()

    response = client.post(
        "/api/enquiries",
        json={"propertyId": prop.id, "message": "x" * 501},
        headers=auth_headers(buyer),
    )

    assert response.status_code == 400
    assert response.json()["error"] == ["Message cannot be more than 500 characters"]


@pytest.mark.api
def test_create_enquiry_for_unknown_property(client, make_user, auth_headers):
    buyer = make_user()

    response = client.post(
        "/api/enquiries",
        json={"propertyId": 999, "message": "Hello"},
        headers=auth_headers(buyer),
    )

    assert response.status_code == 404
    assert response.json()["error"] == "Property not found"


@pytest.mark.api
def test_create_enquiry_for_property_without_agent(client, make_user, make_property, auth_headers):
    prop = make_property()
    buyer = make_user()

    response = client.post(
        "/api/enquiries",
        json={"propertyId": prop.id, "message": "Hello"},
        headers=auth_headers(buyer),
    )

    assert response.status_code == 400


@pytest.mark.api
def test_recipient_is_fixed_at_creation(client, db, make_user, auth_headers, thread):
    new_agent = make_user(role="agent")
    thread["property"].agent_id = new_agent.id
    db.commit()

    received = client.get("/api/enquiries/my-received", headers=auth_headers(thread["agent"]))
    not_received = client.get("/api/enquiries/my-received", headers=auth_headers(new_agent))

    assert [e["id"] for e in received.json()["data"]] == [thread["enquiry"]["id"]]
    assert not_received.json()["count"] == 0


@pytest.mark.api
def test_my_sent_lists_own_enquiries(client, make_user, auth_headers, thread):
    other = make_user()

    mine = client.get("/api/enquiries/my-sent", headers=auth_headers(thread["buyer"]))
    theirs = client.get("/api/enquiries/my-sent", headers=auth_headers(other))

    assert mine.json()["count"] == 1
    assert mine.json()["data"][0]["id"] == thread["enquiry"]["id"]
    assert theirs.json() == {"success": True, "count": 0, "data": []}


@pytest.mark.api
def test_my_received_is_agent_only(client, auth_headers, thread):
    response = client.get("/api/enquiries/my-received", headers=auth_headers(thread["buyer"]))

    assert response.status_code == 403
    assert response.json()["error"] == "User role user is not authorized to access this route"


@pytest.mark.api
def test_participants_and_admin_can_view(client, make_user, auth_headers, thread):
    enquiry_id = thread["enquiry"]["id"]
    admin = make_user(role="admin")
    outsider = make_user()

    for user in (thread["buyer"], thread["agent"], admin):
        response = client.get(f"/api/enquiries/{enquiry_id}", headers=auth_headers(user))
        assert response.status_code == 200

    response = client.get(f"/api/enquiries/{enquiry_id}", headers=auth_headers(outsider))
    assert response.status_code == 403


@pytest.mark.api
def test_mark_read_is_idempotent(client, auth_headers, thread):
    url = f"/api/enquiries/{thread['enquiry']['id']}/read"
    headers = auth_headers(thread["agent"])

    first = client.patch(url, headers=headers)
    second = client.patch(url, headers=headers)

    assert first.status_code == 200
    assert first.json()["data"]["status"] == "read"
    assert first.json()["data"]["readAt"] is not None
    assert second.json()["data"]["status"] == "read"
    assert second.json()["data"]["readAt"] == first.json()["data"]["readAt"]


@pytest.mark.api
def test_only_recipient_marks_read(client, auth_headers, thread):
    response = client.patch(
        f"/api/enquiries/{thread['enquiry']['id']}/read",
        headers=auth_headers(thread["buyer"]),
    )

    assert response.status_code == 403


@pytest.mark.api
def test_agent_reply_sets_replied(client, auth_headers, thread):
    enquiry_id = thread["enquiry"]["id"]

    response = client.post(
        f"/api/enquiries/{enquiry_id}/messages",
        json={"message": "Yes, visits on Saturday"},
        headers=auth_headers(thread["agent"]),
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "replied"
    assert data["repliedAt"] is not None
    assert [m["senderId"] for m in data["conversation"]] == [thread["buyer"].id, thread["agent"].id]


@pytest.mark.api
def test_status_never_regresses(client, auth_headers, thread):
    enquiry_id = thread["enquiry"]["id"]
    client.post(
        f"/api/enquiries/{enquiry_id}/messages",
        json={"message": "Yes"},
        headers=auth_headers(thread["agent"]),
    )

    mark = client.patch(f"/api/enquiries/{enquiry_id}/read", headers=auth_headers(thread["agent"]))
    follow_up = client.post(
        f"/api/enquiries/{enquiry_id}/messages",
        json={"message": "Great, see you then"},
        headers=auth_headers(thread["buyer"]),
    )

    assert mark.json()["data"]["status"] == "replied"
    assert follow_up.json()["data"]["status"] == "replied"
    assert len(follow_up.json()["data"]["conversation"]) == 3


@pytest.mark.api
def test_sender_message_keeps_status_sent(client, auth_headers, thread):
    response = client.post(
        f"/api/enquiries/{thread['enquiry']['id']}/messages",
        json={"message": "Any news?"},
        headers=auth_headers(thread["buyer"]),
    )

    assert response.json()["data"]["status"] == "sent"


@pytest.mark.api
def test_outsider_cannot_append(client, make_user, auth_headers, thread):
    outsider = make_user()

    response = client.post(
        f"/api/enquiries/{thread['enquiry']['id']}/messages",
        json={"message": "Hi"},
        headers=auth_headers(outsider),
    )

    assert response.status_code == 403


@pytest.mark.api
def test_empty_reply_is_rejected(client, auth_headers, thread):
    response = client.post(
        f"/api/enquiries/{thread['enquiry']['id']}/messages",
        json={"message": "   "},
        headers=auth_headers(thread["agent"]),
    )

    assert response.status_code == 400
    assert response.json()["error"] == ["Message cannot be empty"]


@pytest.mark.api
def test_sender_delete_hides_thread_for_sender_only(client, auth_headers, thread):
    enquiry_id = thread["enquiry"]["id"]
    buyer_headers = auth_headers(thread["buyer"])
    agent_headers = auth_headers(thread["agent"])

    deleted = client.delete(f"/api/enquiries/{enquiry_id}", headers=buyer_headers)

    assert deleted.status_code == 200
    assert client.get(f"/api/enquiries/{enquiry_id}", headers=buyer_headers).status_code == 404
    assert client.delete(f"/api/enquiries/{enquiry_id}", headers=buyer_headers).status_code == 404
    assert client.get("/api/enquiries/my-sent", headers=buyer_headers).json()["count"] == 0

    received = client.get("/api/enquiries/my-received", headers=agent_headers).json()
    assert [e["id"] for e in received["data"]] == [enquiry_id]
    assert client.get(f"/api/enquiries/{enquiry_id}", headers=agent_headers).status_code == 200
    assert client.patch(f"/api/enquiries/{enquiry_id}/read", headers=agent_headers).status_code == 200


@pytest.mark.api
def test_agent_delete_hides_thread_for_agent_only(client, auth_headers, thread):
    enquiry_id = thread["enquiry"]["id"]
    buyer_headers = auth_headers(thread["buyer"])
    agent_headers = auth_headers(thread["agent"])

    assert client.delete(f"/api/enquiries/{enquiry_id}", headers=agent_headers).status_code == 200

    assert client.get("/api/enquiries/my-received", headers=agent_headers).json()["count"] == 0
    assert client.patch(f"/api/enquiries/{enquiry_id}/read", headers=agent_headers).status_code == 404
    assert client.get("/api/enquiries/my-sent", headers=buyer_headers).json()["count"] == 1
    assert client.get(f"/api/enquiries/{enquiry_id}", headers=buyer_headers).status_code == 200


@pytest.mark.api
def test_admin_delete_hides_thread_for_both(client, make_user, auth_headers, thread):
    enquiry_id = thread["enquiry"]["id"]
    admin_headers = auth_headers(make_user(role="admin"))

    assert client.delete(f"/api/enquiries/{enquiry_id}", headers=admin_headers).status_code == 200

    assert client.get("/api/enquiries/my-sent", headers=auth_headers(thread["buyer"])).json()["count"] == 0
    assert client.get("/api/enquiries/my-received", headers=auth_headers(thread["agent"])).json()["count"] == 0
    assert client.get(f"/api/enquiries/{enquiry_id}", headers=admin_headers).status_code == 404


@pytest.mark.api
def test_outsider_cannot_delete(client, make_user, auth_headers, thread):
    outsider = make_user(role="agent")

    response = client.delete(f"/api/enquiries/{thread['enquiry']['id']}", headers=auth_headers(outsider))

    assert response.status_code == 403
