# tests/test_health.py
def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json().get("status") in {"ok","OK","healthy","up"}


def test_versioned_health(client):
    r = client.get("/api/v1/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_info_reports_mock_without_keys(client):
    r = client.get("/info")
    assert r.status_code == 200
    assert r.json()["provider"] == "Mock"
    assert r.json()["aws_ready"] is False


def test_info_reports_gemini(client, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "g-key")
    r = client.get("/info")
    assert r.json()["provider"] == "Google Gemini"
