from conftest import FakeGenerator, FakeModerator, matches_json
from fastapi.testclient import TestClient

from role_model_matcher.api.app import app, service

client = TestClient(app)

FUTURE = "I want to help cure diseases and run a health nonprofit someday."


def test_healthz() -> None:
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_recommend_success_shape(monkeypatch, build_workflow) -> None:
    workflow = build_workflow(generator=FakeGenerator(matches_json(("Paul Farmer", "Paul_Farmer"))))
    monkeypatch.setattr(service, "workflow", workflow)

    resp = client.post("/api/recommend", json={"future": FUTURE})

    assert resp.status_code == 200
    data = resp.json()
    assert data["ok"] is True
    assert "error" not in data
    assert data["matches"] == [
        {
            "name": "Paul Farmer",
            "wiki_title": "Paul_Farmer",
            "reason": "Paul Farmer fits your goals.",
            "wiki_summary": "Paul Farmer is a notable person.",
            "wiki_url": "https://en.wikipedia.org/wiki/Paul_Farmer",
        }
    ]


def test_recommend_zero_matches_is_ok(monkeypatch, build_workflow) -> None:
    monkeypatch.setattr(service, "workflow", build_workflow(generator=FakeGenerator('{"matches": []}')))

    resp = client.post("/api/recommend", json={"future": FUTURE})

    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "matches": []}


def test_recommend_short_future_is_400(monkeypatch, build_workflow) -> None:
    moderator = FakeModerator()
    monkeypatch.setattr(service, "workflow", build_workflow(moderator=moderator))

    resp = client.post("/api/recommend", json={"future": "be rich", "values": "a" * 200})

    assert resp.status_code == 400
    data = resp.json()
    assert data["ok"] is False
    assert "matches" not in data
    assert moderator.calls == []


def test_recommend_missing_or_malformed_body_is_400() -> None:
    assert client.post("/api/recommend", json={}).status_code == 400

    resp = client.post("/api/recommend", json={"future": 12345})
    assert resp.status_code == 400
    assert resp.json()["ok"] is False

    resp = client.post("/api/recommend", content=b"not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400


def test_recommend_flagged_is_400(monkeypatch, build_workflow) -> None:
    generator = FakeGenerator(matches_json(("A", "A")))
    monkeypatch.setattr(service, "workflow", build_workflow(moderator=FakeModerator(flagged=True), generator=generator))

    resp = client.post("/api/recommend", json={"future": FUTURE})

    assert resp.status_code == 400
    assert resp.json()["ok"] is False
    assert generator.calls == []


def test_recommend_malformed_generation_is_500(monkeypatch, build_workflow) -> None:
    monkeypatch.setattr(service, "workflow", build_workflow(generator=FakeGenerator("oops, no json")))

    resp = client.post("/api/recommend", json={"future": FUTURE})

    assert resp.status_code == 500
    data = resp.json()
    assert data["ok"] is False
    assert "matches" not in data


def test_cors_allows_configured_origin() -> None:
    origin = service.settings.cors_allow_origin
    resp = client.options(
        "/api/recommend",
        headers={
            "Origin": origin,
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == origin
