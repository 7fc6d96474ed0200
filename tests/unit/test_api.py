"""HTTP API tests."""

import pytest

from show_shaper.core.id import new_request_id

from conftest import STARTER

DARK = {"op": "set_style", "path": "styles", "value": {"theme": "dark"}}


@pytest.mark.unit
def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["translator_configured"] is True
    assert body["cache"] is None


@pytest.mark.unit
def test_request_id_header(client):
    first = client.get("/health").headers["x-request-id"]
    second = client.get("/health").headers["x-request-id"]

    assert first.startswith("req_")
    assert first != second


@pytest.mark.unit
def test_well_formed_request_id_is_kept(client):
    upstream = new_request_id()

    assert client.get("/health", headers={"x-request-id": upstream}).headers["x-request-id"] == upstream

    replaced = client.get("/health", headers={"x-request-id": "req_not-a-ulid"}).headers["x-request-id"]
    assert replaced != "req_not-a-ulid"
    assert replaced.startswith("req_")


@pytest.mark.unit
def test_metrics_endpoint(client, user_headers):
    client.post("/api/apply", json={"commands": [DARK]}, headers=user_headers)

    response = client.get("/metrics")

    assert response.status_code == 200
    assert "shaper_commands_total" in response.text
    assert "shaper_http_requests_total" in response.text


@pytest.mark.unit
@pytest.mark.parametrize(
    "method,path",
    [("get", "/api/schema"), ("post", "/api/undo"), ("post", "/api/redo"), ("post", "/api/apply")],
)
def test_user_routes_require_identity(client, method, path):
    kwargs = {"json": {"commands": []}} if path == "/api/apply" else {}
    response = getattr(client, method)(path, **kwargs)
    assert response.status_code == 401


@pytest.mark.unit
def test_invalid_identity_rejected(client):
    response = client.get("/api/schema", headers={"x-user-id": "bad id!"})
    assert response.status_code == 400


@pytest.mark.unit
def test_load_returns_default_record(client, user_headers):
    response = client.get("/api/schema", headers=user_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["schema"]["layout"]["order"] == ["table1", "chart1", "kpi1"]
    assert body["history"] == []
    assert body["historyIndex"] == -1


@pytest.mark.unit
def test_apply_returns_schema_and_outcomes(client, user_headers):
    response = client.post(
        "/api/apply",
        json={"commands": [DARK, {"op": "remove_component", "path": "/components[id=ghost]"}]},
        headers=user_headers,
    )

    assert response.status_code == 200
    body = response.json()
    assert body["schema"]["styles"]["theme"] == "dark"
    assert [o["status"] for o in body["outcomes"]] == ["applied", "skipped"]

    stored = client.get("/api/schema", headers=user_headers).json()
    assert stored["schema"]["styles"]["theme"] == "dark"
    assert len(stored["history"]) == 2


@pytest.mark.unit
def test_apply_invalid_commands(client, user_headers):
    response = client.post("/api/apply", json={"commands": [{"op": "explode"}]}, headers=user_headers)

    assert response.status_code == 422
    assert "error" in response.json()


@pytest.mark.unit
def test_users_are_isolated(client):
    client.post("/api/apply", json={"commands": [DARK]}, headers={"x-user-id": "alice"})

    bob = client.get("/api/schema", headers={"x-user-id": "bob"}).json()

    assert bob["schema"]["styles"]["theme"] == "light"


@pytest.mark.unit
def test_save_and_load(client, user_headers):
    schema = {**STARTER, "layout": {"columns": 2, "order": ["kpi1", "table1", "chart1"]}}

    response = client.post("/api/schema", json={"schema": schema}, headers=user_headers)
    assert response.status_code == 200
    assert response.json() == {"ok": True}

    loaded = client.get("/api/schema", headers=user_headers).json()
    assert loaded["schema"]["layout"] == {"columns": 2, "order": ["kpi1", "table1", "chart1"]}


@pytest.mark.unit
def test_save_invalid_schema(client, user_headers):
    response = client.post("/api/schema", json={"schema": {"styles": {}}}, headers=user_headers)
    assert response.status_code == 422


@pytest.mark.unit
def test_undo_without_history_conflicts(client, user_headers):
    assert client.post("/api/undo", headers=user_headers).status_code == 409
    assert client.post("/api/redo", headers=user_headers).status_code == 409


@pytest.mark.unit
def test_undo_then_redo(client, user_headers):
    client.post("/api/apply", json={"commands": [DARK]}, headers=user_headers)

    undone = client.post("/api/undo", headers=user_headers)
    assert undone.status_code == 200
    assert undone.json()["historyIndex"] == 0
    assert undone.json()["current"]["styles"]["theme"] == "light"

    redone = client.post("/api/redo", headers=user_headers).json()
    assert redone["historyIndex"] == -1
    assert redone["current"]["styles"]["theme"] == "dark"


@pytest.mark.unit
def test_ai_translates_without_auth(client, mock_generator):
    response = client.post("/api/ai", json={"prompt": "dark mode", "schema": STARTER})

    assert response.status_code == 200
    assert response.json() == {"commands": [DARK]}
    mock_generator.generate.assert_called_once()


@pytest.mark.unit
def test_ai_degrades_to_empty(client, mock_generator):
    mock_generator.generate.return_value = "no idea"

    response = client.post("/api/ai", json={"prompt": "dark mode", "schema": STARTER})

    assert response.status_code == 200
    assert response.json() == {"commands": []}


@pytest.mark.unit
def test_ai_rejects_empty_prompt(client):
    response = client.post("/api/ai", json={"prompt": "  ", "schema": STARTER})
    assert response.status_code == 422


@pytest.mark.unit
def test_prompt_route(client, user_headers):
    response = client.post("/api/prompt", json={"prompt": "dark mode"}, headers=user_headers)

    assert response.status_code == 200
    assert response.json()["schema"]["styles"]["theme"] == "dark"
    assert response.json()["outcomes"][0]["status"] == "applied"


@pytest.mark.unit
def test_login_is_stable_per_name(client):
    first = client.post("/api/login", json={"displayName": "Ada"}).json()
    second = client.post("/api/login", json={"displayName": "Ada"}).json()
    other = client.post("/api/login", json={"displayName": "Grace"}).json()

    assert first["userId"].startswith("user_")
    assert first["userId"] == second["userId"]
    assert first["userId"] != other["userId"]


@pytest.mark.unit
def test_login_id_works_as_identity(client):
    user_id = client.post("/api/login", json={"displayName": "Ada"}).json()["userId"]

    response = client.get("/api/schema", headers={"x-user-id": user_id})
    assert response.status_code == 200


@pytest.mark.unit
def test_data_route_lists_projected_shows(client):
    response = client.get("/api/data")

    assert response.status_code == 200
    shows = response.json()
    assert [show["id"] for show in shows] == [1, 2, 3]
    assert set(shows[0]) == {"id", "title", "genres", "rating", "premiered", "image"}
    assert shows[1]["image"] is None


@pytest.mark.unit
def test_data_summary_route(client):
    response = client.get("/api/data/summary")

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert body["byGenre"]["Drama"] == 2
    assert body["byMonth"] == {"2013-06": 1, "2011-09": 1}


@pytest.mark.unit
@pytest.mark.parametrize(
    "path,message",
    [("/api/data", "Failed to fetch data"), ("/api/data/summary", "Failed to fetch summary")],
)
def test_data_routes_map_catalog_failure_to_500(client, catalog, path, message):
    catalog.status_code = 502

    response = client.get(path)

    assert response.status_code == 500
    assert response.json() == {"error": message}
