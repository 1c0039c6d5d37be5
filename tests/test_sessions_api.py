"""
HTTP tests for /api/sessions, run against the app wired to in-memory ports.
Run with: pytest tests/test_sessions_api.py -v
"""

import pytest

from conftest import StorageFailure, bearer, service_token
from chat_storage.domain.ports.services import CompletionOutcome

PAGE_KEYS = {
    "content",
    "current_page",
    "total_items",
    "total_pages",
    "page_size",
    "has_next",
    "has_previous",
    "is_first",
    "is_last",
}


def create(client, headers, name="My chat"):
    response = client.post("/api/sessions", json={"session_name": name}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


# =============================================================================
# HEALTH & OBSERVABILITY
# =============================================================================


def test_root_and_health(client):
    assert client.get("/").status_code == 200
    assert client.get("/health").json() == {"status": "healthy"}


def test_metrics_endpoint_exposes_exchange_metrics(client, auth_headers):
    session = create(client, auth_headers)
    client.post(
        f"/api/sessions/{session['id']}/messages",
        json={"content": "hi"},
        headers=auth_headers,
    )

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "chat_exchange_duration_seconds" in response.text
    assert "chat_completion_outcomes_total" in response.text


def test_correlation_id_is_echoed(client):
    response = client.get("/health", headers={"X-Correlation-ID": "abc-123"})
    assert response.headers["X-Correlation-ID"] == "abc-123"


# =============================================================================
# AUTH
# =============================================================================


def test_missing_token_is_unauthorized(client):
    response = client.get("/api/sessions")
    assert response.status_code == 401
    assert "error" in response.json()


@pytest.mark.parametrize(
    "token",
    [
        service_token(expires_in=-60),
        service_token(secret="some-other-secret-that-is-long-enough"),
        service_token(sub=None),
        "not-a-jwt",
    ],
)
def test_invalid_tokens_are_unauthorized(client, token):
    response = client.get(
        "/api/sessions", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 401


# =============================================================================
# SESSIONS
# =============================================================================


def test_create_session(client, auth_headers, event_publisher):
    body = create(client, auth_headers, "Trip planning")

    assert body["session_name"] == "Trip planning"
    assert body["user_id"] == "alice"
    assert body["is_favorite"] is False
    assert body["message_count"] == 0
    assert event_publisher.event_types == ["SESSION_CREATED"]


def test_create_session_with_blank_name(client, auth_headers):
    response = client.post(
        "/api/sessions", json={"session_name": "   "}, headers=auth_headers
    )
    assert response.status_code == 422
    assert response.json() == {"error": "Session name is required"}


def test_list_sessions_page_shape(client, auth_headers):
    for i in range(3):
        create(client, auth_headers, f"chat {i}")
    create(client, bearer("bob"), "bob's chat")

    response = client.get("/api/sessions?page=0&size=2", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert set(body) == PAGE_KEYS
    assert body["total_items"] == 3
    assert body["total_pages"] == 2
    assert body["page_size"] == 2
    assert body["has_next"] is True
    assert body["is_first"] is True
    assert len(body["content"]) == 2
    assert all(s["user_id"] == "alice" for s in body["content"])


def test_list_sessions_sorted_by_name(client, auth_headers):
    for name in ("b", "c", "a"):
        create(client, auth_headers, name)

    response = client.get(
        "/api/sessions?sort_by=session_name&direction=ASC", headers=auth_headers
    )

    assert [s["session_name"] for s in response.json()["content"]] == ["a", "b", "c"]


@pytest.mark.parametrize("query", ["page=-1", "size=0", "size=1000"])
def test_bad_paging_is_rejected(client, auth_headers, query):
    response = client.get(f"/api/sessions?{query}", headers=auth_headers)
    assert response.status_code == 422


@pytest.mark.parametrize(
    "path",
    [
        "/api/sessions?size=1000",
        "/api/sessions/favorites?size=1000",
        "/api/sessions/1/messages?size=1000",
    ],
)
def test_oversized_page_does_not_use_rate_limit_quota(
    client, auth_headers, rate_limiter, path
):
    response = client.get(path, headers=auth_headers)

    assert response.status_code == 422
    assert rate_limiter.checked == []


def test_get_rename_favorite_delete(client, auth_headers, event_publisher):
    session_id = create(client, auth_headers, "Old")["id"]

    assert client.get(f"/api/sessions/{session_id}", headers=auth_headers).json()[
        "session_name"
    ] == "Old"

    renamed = client.put(
        f"/api/sessions/{session_id}",
        json={"session_name": "New"},
        headers=auth_headers,
    )
    assert renamed.status_code == 200
    assert renamed.json()["session_name"] == "New"

    favorite = client.patch(f"/api/sessions/{session_id}/favorite", headers=auth_headers)
    assert favorite.json()["is_favorite"] is True

    favorites = client.get("/api/sessions/favorites", headers=auth_headers).json()
    assert [s["id"] for s in favorites["content"]] == [session_id]

    deleted = client.delete(f"/api/sessions/{session_id}", headers=auth_headers)
    assert deleted.status_code == 204
    assert client.get(f"/api/sessions/{session_id}", headers=auth_headers).status_code == 404

    assert event_publisher.event_types == [
        "SESSION_CREATED",
        "SESSION_RENAMED",
        "SESSION_FAVORITED",
        "SESSION_DELETED",
    ]


def test_other_users_session_is_not_found(client, auth_headers):
    session_id = create(client, bearer("bob"), "bob's")["id"]

    for method, path in [
        ("get", f"/api/sessions/{session_id}"),
        ("patch", f"/api/sessions/{session_id}/favorite"),
        ("delete", f"/api/sessions/{session_id}"),
        ("get", f"/api/sessions/{session_id}/messages"),
    ]:
        response = client.request(method, path, headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"error": f"Session not found with id: {session_id}"}


# =============================================================================
# MESSAGE EXCHANGE
# =============================================================================


def test_add_message_returns_user_and_assistant(client, auth_headers):
    session_id = create(client, auth_headers)["id"]

    response = client.post(
        f"/api/sessions/{session_id}/messages",
        json={"content": "Hello", "context": "earlier"},
        headers=auth_headers,
    )

    assert response.status_code == 201
    user, assistant = response.json()
    assert user["sender"] == "USER"
    assert user["content"] == "Hello"
    assert user["context"] == "earlier"
    assert assistant["sender"] == "ASSISTANT"
    assert assistant["content"] == "Echo: Hello"
    assert assistant["context"] == "earlier\nEcho: Hello"
    assert user["session_id"] == assistant["session_id"] == session_id

    history = client.get(f"/api/sessions/{session_id}/messages", headers=auth_headers)
    assert [m["sender"] for m in history.json()["content"]] == ["USER", "ASSISTANT"]
    assert client.get(f"/api/sessions/{session_id}", headers=auth_headers).json()[
        "message_count"
    ] == 2


def test_degraded_completion_still_returns_201(client, auth_headers, completion_client):
    completion_client.outcome = CompletionOutcome.QUOTA_EXCEEDED
    session_id = create(client, auth_headers)["id"]

    response = client.post(
        f"/api/sessions/{session_id}/messages",
        json={"content": "Hello"},
        headers=auth_headers,
    )

    assert response.status_code == 201
    assert response.json()[1]["content"] == "Rate limit exceeded. Please try again later."


def test_blank_message_is_rejected(client, auth_headers, message_repository):
    session_id = create(client, auth_headers)["id"]

    response = client.post(
        f"/api/sessions/{session_id}/messages",
        json={"content": "  "},
        headers=auth_headers,
    )

    assert response.status_code == 422
    assert message_repository.rows == []


def test_rate_limit_returns_429(client, auth_headers, rate_limiter, message_repository):
    session_id = create(client, auth_headers)["id"]
    rate_limiter.max_requests = rate_limiter.counts["alice"]

    response = client.post(
        f"/api/sessions/{session_id}/messages",
        json={"content": "Hello"},
        headers=auth_headers,
    )

    assert response.status_code == 429
    assert response.json() == {
        "error": f"Rate limit exceeded. Maximum {rate_limiter.max_requests} "
        "requests per 60 seconds allowed."
    }
    assert message_repository.rows == []
    # other users are unaffected
    assert client.get("/api/sessions", headers=bearer("bob")).status_code == 200


def test_storage_failure_is_500(client, auth_headers, message_repository):
    session_id = create(client, auth_headers)["id"]
    message_repository.fail_on["ASSISTANT"] = StorageFailure("database went away")

    response = client.post(
        f"/api/sessions/{session_id}/messages",
        json={"content": "Hello"},
        headers=auth_headers,
    )

    assert response.status_code == 500
    assert "database went away" in response.json()["error"]
    assert len(message_repository.rows) == 1


def test_non_positive_session_id_is_rejected(client, auth_headers):
    response = client.post(
        "/api/sessions/0/messages", json={"content": "Hello"}, headers=auth_headers
    )
    assert response.status_code == 422
