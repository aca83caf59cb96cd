"""End-to-end test of the admin review flow.

Submit feedback publicly, log in as admin, list it newest first, log out and
confirm the revoked token no longer works.
"""

from fastapi.testclient import TestClient

ADMIN_CREDENTIALS = {"username": "admin", "password": "s3cret"}


def test_admin_review_flow(client):
    first = client.post("/submit-feedback", json={"name": "A", "feedback": "hi"})
    second = client.post(
        "/submit-feedback",
        json={"name": "B", "email": "b@example.com", "feedback": "second thoughts"},
    )
    assert first.status_code == 200
    assert second.status_code == 200

    rejected = client.post("/admin/login", json={"username": "admin", "password": "nope"})
    assert rejected.status_code == 401
    assert "token" not in rejected.json()

    login = client.post("/admin/login", json=ADMIN_CREDENTIALS)
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.json()['token']}"}

    listing = client.get("/admin/feedbacks", headers=headers)
    assert listing.status_code == 200
    feedbacks = listing.json()["feedbacks"]
    assert [f["name"] for f in feedbacks] == ["B", "A"]
    assert feedbacks[0]["email"] == "b@example.com"
    assert feedbacks[1]["email"] == ""

    assert client.post("/admin/logout", headers=headers).json() == {"success": True}
    assert client.get("/admin/feedbacks", headers=headers).status_code == 401
    assert client.post("/admin/logout", headers=headers).status_code == 200


def test_sessions_do_not_survive_restart(feedback_file):
    from main import app

    with TestClient(app) as client:
        token = client.post("/admin/login", json=ADMIN_CREDENTIALS).json()["token"]
        registry = app.state.session_registry
        assert registry.authorize(token)

    assert len(registry) == 0

    with TestClient(app) as client:
        response = client.get("/admin/feedbacks", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


def test_feedback_survives_restart(feedback_file):
    from main import app

    with TestClient(app) as client:
        client.post("/submit-feedback", json={"name": "A", "feedback": "persisted"})

    with TestClient(app) as client:
        token = client.post("/admin/login", json=ADMIN_CREDENTIALS).json()["token"]
        feedbacks = client.get(
            "/admin/feedbacks", headers={"Authorization": f"Bearer {token}"}
        ).json()["feedbacks"]

    assert [f["feedback"] for f in feedbacks] == ["persisted"]


def test_multiple_admin_tokens_are_independent(client):
    first = client.post("/admin/login", json=ADMIN_CREDENTIALS).json()["token"]
    second = client.post("/admin/login", json=ADMIN_CREDENTIALS).json()["token"]

    client.post("/admin/logout", headers={"Authorization": f"Bearer {first}"})

    assert client.get("/admin/feedbacks", headers={"Authorization": f"Bearer {first}"}).status_code == 401
    assert client.get("/admin/feedbacks", headers={"Authorization": f"Bearer {second}"}).status_code == 200
