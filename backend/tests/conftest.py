"""
Pytest configuration and fixtures for backend tests.
"""
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient


# Make `main` and `feedback_service` importable when running pytest from backend/
backend_path = Path(__file__).resolve().parents[1]
if str(backend_path) not in sys.path:
    sys.path.insert(0, str(backend_path))


ADMIN_USER = "admin"
ADMIN_PASS = "s3cret"

_MANAGED_ENV = (
    "SMTP_HOST",
    "SMTP_PORT",
    "SMTP_USER",
    "SMTP_PASS",
    "ALERT_TO",
    "ADMIN_USER",
    "ADMIN_PASS",
    "FEEDBACK_FILE",
)


@pytest.fixture
def feedback_file(monkeypatch, tmp_path):
    """Point the app at a fresh feedback file with mail disabled.

    Returns the path of the (not yet created) feedback file.
    """
    for var in _MANAGED_ENV:
        monkeypatch.delenv(var, raising=False)

    path = tmp_path / "feedbacks.json"
    monkeypatch.setenv("FEEDBACK_FILE", str(path))
    monkeypatch.setenv("ADMIN_USER", ADMIN_USER)
    monkeypatch.setenv("ADMIN_PASS", ADMIN_PASS)
    return path


@pytest.fixture
def mail_env(monkeypatch, feedback_file):
    """Enable SMTP configuration on top of the base test environment."""
    monkeypatch.setenv("SMTP_HOST", "smtp.test.com")
    monkeypatch.setenv("SMTP_PORT", "587")
    monkeypatch.setenv("SMTP_USER", "alerts@example.com")
    monkeypatch.setenv("SMTP_PASS", "test_password")
    monkeypatch.setenv("ALERT_TO", "team@example.com")
    return feedback_file


@pytest.fixture
def mock_smtp():
    """Mock SMTP server (plain connection offering STARTTLS)."""
    with patch("feedback_service.lib.feedback.email_notifier.smtplib.SMTP") as mock:
        server = MagicMock()
        server.has_extn.return_value = True
        server.send_message.return_value = {}
        mock.return_value.__enter__.return_value = server
        yield server


@pytest.fixture
def client(feedback_file):
    """Test client with the app lifespan running (mail disabled)."""
    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def mail_client(mail_env, mock_smtp):
    """Test client with SMTP configured and the SMTP transport mocked."""
    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers(client):
    """Authorization header carrying a freshly issued admin token."""
    response = client.post("/admin/login", json={"username": ADMIN_USER, "password": ADMIN_PASS})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
