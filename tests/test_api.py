from urllib.parse import urlencode

import pytest
from litestar.testing import TestClient

from webui.backend.app import app
from webui.backend.routes import broll
from conftest import GOOD_PROMPTS, SCRIPT, FakeClient, make_response

USER = {"X-User-Id": "user-1"}


@pytest.fixture
def fake(monkeypatch):
    monkeypatch.setenv("HF_TOKEN", "hf_test_token")
    client = FakeClient(make_response(GOOD_PROMPTS))
    monkeypatch.setattr(broll, "get_chat_client", lambda cfg: client)
    return client


@pytest.fixture
def http():
    with TestClient(app=app) as client:
        yield client


# ---------------------------------------------------------------------------
# /api/generate-broll
# ---------------------------------------------------------------------------

def test_generate_success(fake, http):
    resp = http.post("/api/generate-broll", json={"script": SCRIPT})

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["promptCount"] == 10
    assert [p["prompt"] for p in body["brollPrompts"]] == GOOD_PROMPTS
    assert set(body["brollPrompts"][0]) == {"prompt", "scriptReference"}


def test_generate_missing_key_is_503(http, monkeypatch):
    called = []
    monkeypatch.setattr(broll, "get_chat_client", lambda cfg: called.append(cfg))

    resp = http.post("/api/generate-broll", json={"script": SCRIPT})

    assert resp.status_code == 503
    assert resp.json() == {"error": "API key not configured"}
    assert called == []


@pytest.mark.parametrize("payload", [{}, {"script": ""}, {"script": "   \n"}, {"script": None}])
def test_generate_blank_script_is_400(fake, http, payload):
    resp = http.post("/api/generate-broll", json=payload)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Script content is required"}
    assert fake.calls == []


def test_generate_exhaustion_is_500(fake, http):
    fake.responses = [make_response(GOOD_PROMPTS[:4])]

    resp = http.post("/api/generate-broll", json={"script": SCRIPT})

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Failed to generate B-roll prompts"
    assert "last observed count: 4" in body["details"]
    assert len(fake.calls) == 3


# ---------------------------------------------------------------------------
# /api/projects
# ---------------------------------------------------------------------------

def test_create_project_with_generation(fake, http):
    resp = http.post(
        "/api/projects",
        data={"title": "Sleep VSL", "description": SCRIPT},
        headers=USER,
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["broll"]["success"] is True
    assert body["broll"]["promptCount"] == 10
    project = body["project"]
    assert project["title"] == "Sleep VSL"
    assert project["vsl_content"] == SCRIPT.strip()
    assert len(project["broll_prompts"]) == 10

    fetched = http.get(f"/api/projects/{project['id']}", headers=USER)
    assert fetched.status_code == 200
    assert fetched.json()["broll_prompts"] == project["broll_prompts"]


def test_create_project_from_upload(fake, http):
    resp = http.post(
        "/api/projects",
        data={"title": "From file", "generate": "false"},
        files={"file": ("script.txt", SCRIPT.encode(), "text/plain")},
        headers=USER,
    )

    assert resp.status_code == 201
    body = resp.json()
    assert "broll" not in body
    assert body["project"]["vsl_content"] == SCRIPT.strip()
    assert fake.calls == []


def test_create_project_from_plain_form_post(fake, http):
    resp = http.post(
        "/api/projects",
        content=urlencode({"title": "Typed", "description": SCRIPT, "generate": "false"}),
        headers={**USER, "Content-Type": "application/x-www-form-urlencoded"},
    )

    assert resp.status_code == 201
    body = resp.json()
    assert "broll" not in body
    assert body["project"]["title"] == "Typed"
    assert fake.calls == []


def test_create_project_keeps_record_when_generation_fails(fake, http):
    fake.responses = ["no array here"]

    resp = http.post("/api/projects", data={"title": "T", "description": SCRIPT}, headers=USER)

    assert resp.status_code == 201
    body = resp.json()
    assert body["broll"]["success"] is False
    assert body["broll"]["error"] == "Failed to generate B-roll prompts"
    assert body["project"]["broll_prompts"] == []
    assert len(http.get("/api/projects", headers=USER).json()) == 1


def test_create_project_without_key_still_saves(http):
    resp = http.post("/api/projects", data={"title": "T", "description": SCRIPT}, headers=USER)

    assert resp.status_code == 201
    assert resp.json()["broll"] == {"success": False, "error": "API key not configured"}


def test_create_project_requires_user(fake, http):
    resp = http.post("/api/projects", data={"title": "T", "description": SCRIPT})
    assert resp.status_code == 401
    assert "logged in" in resp.json()["error"]


def test_create_project_requires_title(fake, http):
    resp = http.post("/api/projects", data={"title": " ", "description": SCRIPT}, headers=USER)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Title is required."}


def test_create_project_requires_script(fake, http):
    resp = http.post("/api/projects", data={"title": "T", "description": ""}, headers=USER)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Description or valid PDF is required."}


def test_projects_scoped_to_user(fake, http):
    created = http.post(
        "/api/projects",
        data={"title": "Mine", "description": SCRIPT, "generate": "false"},
        headers=USER,
    ).json()["project"]

    other = {"X-User-Id": "user-2"}
    assert http.get("/api/projects", headers=other).json() == []
    assert http.get(f"/api/projects/{created['id']}", headers=other).status_code == 404
    assert [p["id"] for p in http.get("/api/projects", headers=USER).json()] == [created["id"]]


# ---------------------------------------------------------------------------
# /api/config
# ---------------------------------------------------------------------------

def test_config_masks_token(http, monkeypatch):
    monkeypatch.setenv("HF_TOKEN", "hf_abcdefghijkl")
    body = http.get("/api/config").json()
    assert body["hf_token"] == "hf_a…ijkl"
    assert body["target_count"] == 10


def test_config_save_keeps_token_when_masked(http):
    from brollgen.config import Config

    Config(hf_token="hf_original_token").save()
    resp = http.post("/api/config", json={"hf_token": "hf_o…oken", "target_count": 20})

    assert resp.status_code == 200
    saved = Config.load()
    assert saved.hf_token == "hf_original_token"
    assert saved.target_count == 20
