import json

import pytest
from fastapi.testclient import TestClient

import mcp_server
from web.routes import app


@pytest.fixture
def bridge(monkeypatch):
    """Route the bridge's HTTP helpers into the app in-process."""
    client = TestClient(app)
    client.post("/api/shift/start", json={"shift": "SHIFT_1"})
    monkeypatch.setattr(mcp_server, "_get", lambda path: client.get(path).text)
    monkeypatch.setattr(mcp_server, "_post",
                        lambda path, data=None: client.post(path, json=data or {}).text)
    return client


def test_checkpoint_state_summary(bridge):
    text = mcp_server.get_checkpoint_state()
    assert "SHIFT: SHIFT_1" in text
    assert "DENY: WARRANTS" in text
    assert "S1-01" in text
    assert "BPM at greeting: 84" in text


def test_subject_file_lists_questions(bridge):
    bridge.post("/api/subject/check", json={"check": "identity_scan"})
    text = mcp_server.get_subject_file()
    assert "[x] identity_scan" in text
    assert "identity-occupation:" in text


def test_ask_subject(bridge):
    text = mcp_server.ask_subject("origin", "harsh")
    assert "Why are you shouting?" in text
    assert "2 remaining" in text


def test_ask_subject_after_limit(bridge):
    for _ in range(3):
        mcp_server.ask_subject("purpose")
    assert mcp_server.ask_subject("purpose").startswith("Error:")


def test_build_subject(bridge):
    seed = {"id": "X-02", "seed": 42, "subject_type": "HUMAN", "hierarchy_tier": "LOWER",
            "origin": "IO", "truth_flags": {"has_transit_issue": True}}
    text = mcp_server.build_subject(json.dumps(seed), "SHIFT_3")
    assert "under SHIFT_3" in text
    assert "VERDICT: DENY" in text
    assert "[TRANSIT]" in text


def test_build_subject_rejects_bad_json(bridge):
    assert mcp_server.build_subject("{not json").startswith("Error:")
    bad = json.dumps({"id": "X", "seed": 1, "subject_type": "ALIEN",
                      "hierarchy_tier": "LOWER", "origin": "IO"})
    assert mcp_server.build_subject(bad).startswith("Error:")


def test_server_unavailable(monkeypatch):
    monkeypatch.setattr(mcp_server, "GAME_SERVER", "http://127.0.0.1:9")
    assert mcp_server.get_checkpoint_state().startswith("Error: Checkpoint server unavailable")
