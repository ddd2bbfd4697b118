import pytest
from fastapi.testclient import TestClient

from deps.sessions import get_store
from main import app
from store import SessionStore

client = TestClient(app)


@pytest.fixture(autouse=True)
def fresh_store():
    st = SessionStore(max_sessions=50)
    app.dependency_overrides[get_store] = lambda: st
    yield st
    app.dependency_overrides.clear()


def _new_session(seed=42):
    r = client.post("/sessions", json={"seed": seed})
    assert r.status_code == 201
    return r.json()["id"]


def test_health():
    r = client.get("/")
    assert r.status_code == 200
    assert r.json().get("ok") is True


def test_health_live_counts_sessions():
    _new_session()
    r = client.get("/health/live")
    assert r.status_code == 200
    assert r.json() == {"ok": True, "sessions": 1}


def test_config():
    r = client.get("/config")
    assert r.status_code == 200
    body = r.json()
    assert body["min_bound"] == 1 and body["max_bound"] == 12
    assert body["difficulties"] == {"easy": 3, "medium": 5, "hard": 7}


def test_create_session_without_body():
    r = client.post("/sessions")
    assert r.status_code == 201
    body = r.json()
    assert body["status"] == "idle"
    assert body["total"] == 0 and body["score"] == 0


def test_start_easy():
    sid = _new_session()
    r = client.post(f"/sessions/{sid}/start", json={"difficulty": "easy", "min_value": 1, "max_value": 12})
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "in_progress"
    assert body["total"] == 3 and body["score"] == 0
    p = body["problem"]
    assert p["index"] == 0
    assert 1 <= p["a"] <= 12 and 1 <= p["b"] <= 12
    assert p["prompt"] == f"{max(p['a'], p['b'])} × {min(p['a'], p['b'])}"


def test_start_clamps_slider_values():
    sid = _new_session()
    r = client.post(f"/sessions/{sid}/start", json={"difficulty": "hard", "min_value": 11.8, "max_value": 99})
    assert r.status_code == 200
    s = client.get(f"/sessions/{sid}").json()
    assert s["range"] == {"low": 11, "high": 12}
    assert s["difficulty"] == "hard"
    assert s["total"] == 7


def test_start_rejects_unknown_difficulty():
    sid = _new_session()
    r = client.post(f"/sessions/{sid}/start", json={"difficulty": "extreme"})
    assert r.status_code == 422


def test_correct_answer():
    sid = _new_session()
    client.post(f"/sessions/{sid}/start", json={"difficulty": "easy", "min_value": 12, "max_value": 12})
    r = client.post(f"/sessions/{sid}/answer", json={"answer": "144"})
    assert r.status_code == 200
    body = r.json()
    assert body["is_correct"] is True
    assert body["correct_answer"] == 144
    assert body["score"] == 1
    assert body["title"] == "Correct!"


def test_non_numeric_answer_graded_wrong():
    sid = _new_session()
    client.post(f"/sessions/{sid}/start", json={"difficulty": "easy", "min_value": 2, "max_value": 2})
    r = client.post(f"/sessions/{sid}/answer", json={"answer": "four"})
    assert r.status_code == 200
    body = r.json()
    assert body["is_correct"] is False and body["score"] == 0
    assert body["feedback"] == "The answer was 4."


def test_buffered_answer_text_is_filtered_and_graded():
    sid = _new_session()
    client.post(f"/sessions/{sid}/start", json={"difficulty": "easy", "min_value": 3, "max_value": 3})
    r = client.put(f"/sessions/{sid}/answer-text", json={"text": "9 apples"})
    assert r.status_code == 200
    assert r.json()["answer_text"] == "9"
    r = client.post(f"/sessions/{sid}/answer")
    assert r.json()["is_correct"] is True


def test_double_submit_conflict():
    sid = _new_session()
    client.post(f"/sessions/{sid}/start", json={"difficulty": "easy"})
    client.post(f"/sessions/{sid}/answer", json={"answer": "1"})
    r = client.post(f"/sessions/{sid}/answer", json={"answer": "1"})
    assert r.status_code == 409


def test_answer_before_start_conflict():
    sid = _new_session()
    r = client.post(f"/sessions/{sid}/answer", json={"answer": "1"})
    assert r.status_code == 409
    r = client.post(f"/sessions/{sid}/advance")
    assert r.status_code == 409


def test_play_through_to_completion():
    sid = _new_session()
    step = client.post(f"/sessions/{sid}/start", json={"difficulty": "medium"}).json()
    while step["status"] == "in_progress":
        p = step["problem"]
        client.post(f"/sessions/{sid}/answer", json={"answer": str(p["a"] * p["b"])})
        step = client.post(f"/sessions/{sid}/advance").json()
    assert step["status"] == "complete"
    assert step["score"] == 5 and step["total"] == 5
    assert step["message"] == "You scored 5 out of 5."
    assert step["problem"] is None

    r = client.post(f"/sessions/{sid}/advance")
    assert r.status_code == 409


def test_restart_resets_score():
    sid = _new_session()
    client.post(f"/sessions/{sid}/start", json={"difficulty": "easy", "min_value": 1, "max_value": 1})
    client.post(f"/sessions/{sid}/answer", json={"answer": "1"})
    client.post(f"/sessions/{sid}/advance")
    r = client.post(f"/sessions/{sid}/start", json={"difficulty": "hard"})
    body = r.json()
    assert body["score"] == 0 and body["total"] == 7
    assert body["problem"]["index"] == 0


def test_sessions_do_not_share_state():
    a, b = _new_session(), _new_session()
    client.post(f"/sessions/{a}/start", json={"difficulty": "easy", "min_value": 2, "max_value": 2})
    client.post(f"/sessions/{a}/answer", json={"answer": "4"})
    body = client.get(f"/sessions/{b}").json()
    assert body["status"] == "idle" and body["score"] == 0


def test_unknown_session_404():
    assert client.get("/sessions/missing").status_code == 404
    assert client.post("/sessions/missing/start", json={}).status_code == 404
    assert client.post("/sessions/missing/answer", json={"answer": "1"}).status_code == 404
    assert client.post("/sessions/missing/advance").status_code == 404
    assert client.delete("/sessions/missing").status_code == 404


def test_delete_session():
    sid = _new_session()
    r = client.delete(f"/sessions/{sid}")
    assert r.status_code == 204
    assert client.get(f"/sessions/{sid}").status_code == 404


def test_very_long_answer_graded_wrong():
    sid = _new_session()
    client.post(f"/sessions/{sid}/start", json={"difficulty": "easy"})
    r = client.post(f"/sessions/{sid}/answer", json={"answer": "9" * 5000})
    assert r.status_code == 200
    body = r.json()
    assert body["is_correct"] is False and body["score"] == 0
    assert body["answer"] is None


def test_start_rejects_nan_slider_value():
    sid = _new_session()
    r = client.post(
        f"/sessions/{sid}/start",
        content='{"difficulty": "easy", "min_value": NaN, "max_value": 12}',
        headers={"content-type": "application/json"},
    )
    assert r.status_code == 422
    assert client.get(f"/sessions/{sid}").json()["status"] == "idle"
