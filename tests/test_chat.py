def test_member_message_opens_conversation(client, member, member_headers, admin_headers):
    sent = client.post("/api/chat/messages", json={"content": "<i>Is the pool open?</i>"}, headers=member_headers)
    assert sent.status_code == 201
    message = sent.json()["data"]
    assert message["content"] == "Is the pool open?"
    assert message["sender_role"] == "member"

    assert client.get("/api/chat/unread-count", headers=admin_headers).json()["unread_count"] == 1

    listed = client.get("/api/chat/conversations", headers=admin_headers).json()
    assert listed["total_unread"] == 1
    conversation = listed["data"][0]
    assert conversation["member"]["id"] == member.id
    assert conversation["last_message"] == "Is the pool open?"

    messages = client.get(f"/api/chat/messages/{conversation['id']}", headers=admin_headers).json()["data"]
    assert [m["content"] for m in messages] == ["Is the pool open?"]
    assert client.get("/api/chat/unread-count", headers=admin_headers).json()["unread_count"] == 0


def test_admin_reply_counts_for_member(client, member, member_headers, admin_headers):
    conversation = client.get("/api/chat/my-conversation", headers=member_headers).json()["data"]

    missing = client.post("/api/chat/messages", json={"content": "Hello"}, headers=admin_headers)
    assert missing.status_code == 400
    assert missing.json()["message"] == "Admin must specify a conversation ID"

    client.post(
        "/api/chat/messages",
        json={"conversation_id": conversation["id"], "content": "Yes, 6am to 10pm"},
        headers=admin_headers,
    )
    assert client.get("/api/chat/unread-count", headers=member_headers).json()["unread_count"] == 1

    client.put(f"/api/chat/messages/{conversation['id']}/read", headers=member_headers)
    assert client.get("/api/chat/unread-count", headers=member_headers).json()["unread_count"] == 0


def test_empty_message_rejected(client, member_headers):
    response = client.post("/api/chat/messages", json={"content": "<b></b>  "}, headers=member_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Message content is required"


def test_other_member_cannot_read(client, member_headers, make_member, auth_headers):
    conversation = client.get("/api/chat/my-conversation", headers=member_headers).json()["data"]
    intruder = auth_headers(make_member("intruder@fitzone.in"))
    response = client.get(f"/api/chat/messages/{conversation['id']}", headers=intruder)
    assert response.status_code == 403


def test_archive_hides_until_next_message(client, member, member_headers, admin_headers):
    client.post("/api/chat/messages", json={"content": "First"}, headers=member_headers)
    conversation = client.get(f"/api/chat/conversation/member/{member.id}", headers=admin_headers).json()["data"]

    archived = client.delete(f"/api/chat/conversation/{conversation['id']}", headers=admin_headers)
    assert archived.json()["message"] == "Conversation archived"
    assert client.get("/api/chat/conversations", headers=admin_headers).json()["data"] == []

    client.post("/api/chat/messages", json={"content": "Back again"}, headers=member_headers)
    assert len(client.get("/api/chat/conversations", headers=admin_headers).json()["data"]) == 1


def test_conversation_for_unknown_member(client, admin_headers):
    response = client.get("/api/chat/conversation/member/9999", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Member not found"
