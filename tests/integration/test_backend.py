from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from backend import app, get_analyzer
from core.analyzer import CodeComplexityAnalyzer
from core.config import Settings
from providers.anthropic_provider import AnthropicAPIError

NESTED = "for i in range(n):\n    for j in range(n):\n        print(i, j)"


@pytest.fixture
def make_client():
    def factory(analyzer):
        app.dependency_overrides[get_analyzer] = lambda: analyzer
        return TestClient(app)

    yield factory
    app.dependency_overrides.clear()


def test_root_and_health(make_client, offline_settings):
    client = make_client(CodeComplexityAnalyzer(offline_settings))
    assert "/complexity" in client.get("/").json()["endpoints"]
    assert client.get("/health").json() == {"status": "healthy", "online": False}


def test_estimate(make_client, offline_settings):
    client = make_client(CodeComplexityAnalyzer(offline_settings))
    response = client.post("/estimate", json={"code": "sorted(arr)"})
    assert response.status_code == 200
    result = response.json()["result"]
    assert result["notation"] == "O(n log n)"
    assert result["source"] == "heuristic"
    assert result["color"] == "#ce9178"


def test_complexity_offline_is_cached(make_client, offline_settings):
    client = make_client(CodeComplexityAnalyzer(offline_settings))
    first = client.post("/complexity", json={"code": NESTED}).json()["result"]
    second = client.post("/complexity", json={"code": NESTED}).json()["result"]
    assert first["notation"] == "O(n²)"
    assert not first["cached"]
    assert second["cached"]


def test_complexity_falls_back_when_model_fails(make_client, online_settings):
    provider = AsyncMock()
    provider.complete.side_effect = AnthropicAPIError("down", status_code=500)
    client = make_client(CodeComplexityAnalyzer(online_settings, provider=provider))

    response = client.post("/complexity", json={"code": NESTED})

    assert response.status_code == 200
    assert response.json()["result"]["source"] == "heuristic"


def test_analyze_returns_report_and_page(make_client, online_settings):
    provider = AsyncMock()
    provider.complete.return_value = "**Time Complexity**: O(n²) - nested\n**Rating**: 🔴 Poor"
    client = make_client(CodeComplexityAnalyzer(online_settings, provider=provider))

    response = client.post("/analyze", json={"code": NESTED})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["model"] == online_settings.ANALYSIS_MODEL
    assert body["result"]["blocks"][0] == {"kind": "time", "text": "- nested", "notation": "O(n²)"}
    assert '<span class="keyword">for</span>' in body["html"]


def test_analyze_without_key_is_unavailable(make_client, offline_settings):
    client = make_client(CodeComplexityAnalyzer(offline_settings))
    response = client.post("/analyze", json={"code": NESTED})
    assert response.status_code == 503
    assert response.json()["success"] is False


def test_analyze_provider_failure(make_client, online_settings):
    provider = AsyncMock()
    provider.complete.side_effect = AnthropicAPIError("API error (500): boom", status_code=500)
    client = make_client(CodeComplexityAnalyzer(online_settings, provider=provider))

    response = client.post("/analyze", json={"code": NESTED})

    assert response.status_code == 502
    assert response.json() == {"success": False, "error": "Analysis failed: API error (500): boom"}


def test_highlight(make_client, offline_settings):
    client = make_client(CodeComplexityAnalyzer(offline_settings))
    response = client.post("/highlight", json={"code": "x = 1 # one"})
    assert response.json()["html"] == (
        'x = <span class="number">1</span> <span class="comment"># one</span>'
    )


@pytest.mark.parametrize("code", ["", "   \n"])
def test_blank_code_is_rejected(make_client, offline_settings, code):
    client = make_client(CodeComplexityAnalyzer(offline_settings))
    assert client.post("/estimate", json={"code": code}).status_code == 422


def test_code_length_limit_comes_from_settings(make_client, offline_settings, monkeypatch):
    limited = Settings(ANTHROPIC_API_KEY="", MAX_CODE_LENGTH=20, _env_file=None)
    monkeypatch.setattr("backend.get_settings", lambda: limited)
    client = make_client(CodeComplexityAnalyzer(offline_settings))

    assert client.post("/estimate", json={"code": "x = 1"}).status_code == 200
    response = client.post("/estimate", json={"code": "x = 1\n" * 10})
    assert response.status_code == 422
    assert "maximum length of 20" in response.text
