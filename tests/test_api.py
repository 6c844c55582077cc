import time

import pytest
from fastapi.testclient import TestClient

from services.api.main import app, workspace_store


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def _create_workspace(client, **payload):
    response = client.post("/v1/workspaces", json=payload)
    assert response.status_code == 201
    return response.json()


def test_healthcheck(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_generate_code_from_elements(client):
    payload = {
        "elements": [{"id": "el-1", "type": "button", "x": 10, "y": 20, "properties": {"text": "Go"}}],
        "options": {"darkMode": True},
    }

    response = client.post("/v1/code:generate", json=payload)

    assert response.status_code == 200
    code = response.json()["code"]
    assert "Text('Go')" in code
    assert "Brightness.dark" in code
    assert "width: 120.0," in code


def test_generate_code_from_document(client, login_document):
    response = client.post("/v1/code:generate", json={"document": login_document.model_dump()})

    assert response.status_code == 200
    assert "class OrderHistoryPage" in response.json()["code"]


def test_workspace_editing_flow(client):
    workspace = _create_workspace(client)
    workspace_id = workspace["id"]
    assert workspace["history"] == {"cursor": 0, "length": 1, "can_undo": False, "can_redo": False}

    added = client.post(f"/v1/workspaces/{workspace_id}/elements", json={"type": "card", "x": 5, "y": 6})
    assert added.status_code == 201
    element_id = added.json()["id"]

    patched = client.patch(
        f"/v1/workspaces/{workspace_id}/elements/{element_id}",
        json={"width": 320, "properties": {"elevation": 6}},
    )
    assert patched.status_code == 200
    assert patched.json()["width"] == 320
    assert patched.json()["properties"]["elevation"] == 6
    assert patched.json()["properties"]["borderRadius"] == 8

    undone = client.post(f"/v1/workspaces/{workspace_id}/undo").json()
    assert undone["document"]["screens"][0]["elements"][0]["width"] == 300
    assert undone["history"]["can_redo"] is True

    redone = client.post(f"/v1/workspaces/{workspace_id}/redo").json()
    assert redone["document"]["screens"][0]["elements"][0]["width"] == 320

    removed = client.delete(f"/v1/workspaces/{workspace_id}/elements/{element_id}")
    assert removed.status_code == 204
    assert client.delete(f"/v1/workspaces/{workspace_id}/elements/{element_id}").status_code == 404

    cleared = client.post(f"/v1/workspaces/{workspace_id}/clear").json()
    assert cleared["history"]["length"] == 5


def test_unknown_element_update_returns_404(client):
    workspace_id = _create_workspace(client)["id"]

    response = client.patch(f"/v1/workspaces/{workspace_id}/elements/element-404", json={"x": 1})

    assert response.status_code == 404


def test_workspace_from_stored_document(client):
    workspace = _create_workspace(client, document_id="DOC-login-flow")

    screens = workspace["document"]["screens"]
    assert [screen["name"] for screen in screens] == ["Login", "Order history"]
    assert workspace["history"]["can_undo"] is False


def test_workspace_from_unknown_document(client):
    response = client.post("/v1/workspaces", json={"document_id": "DOC-missing"})

    assert response.status_code == 404


def test_unknown_workspace_returns_404(client):
    assert client.get("/v1/workspaces/ws_missing").status_code == 404
    assert client.post("/v1/workspaces/ws_missing/undo").status_code == 404
    assert client.delete("/v1/workspaces/ws_missing").status_code == 404


def test_delete_workspace(client):
    workspace_id = _create_workspace(client)["id"]

    assert client.delete(f"/v1/workspaces/{workspace_id}").status_code == 204
    assert client.get(f"/v1/workspaces/{workspace_id}").status_code == 404


def test_screen_management(client):
    workspace_id = _create_workspace(client)["id"]

    created = client.post(f"/v1/workspaces/{workspace_id}/screens", json={"name": "Details"})
    assert created.status_code == 201
    screen_id = created.json()["id"]

    renamed = client.patch(f"/v1/workspaces/{workspace_id}/screens/{screen_id}", json={"name": "Profile"})
    assert renamed.json()["document"]["screens"][1]["name"] == "Profile"
    assert renamed.json()["document"]["current_screen_id"] == screen_id

    selected = client.post(f"/v1/workspaces/{workspace_id}/screens/screen-1/select")
    assert selected.json()["document"]["current_screen_id"] == "screen-1"

    deleted = client.delete(f"/v1/workspaces/{workspace_id}/screens/screen-1")
    assert deleted.status_code == 200
    assert deleted.json()["document"]["current_screen_id"] == screen_id

    last = client.delete(f"/v1/workspaces/{workspace_id}/screens/{screen_id}")
    assert last.status_code == 409

    missing = client.delete(f"/v1/workspaces/{workspace_id}/screens/screen-404")
    assert missing.status_code == 404


def test_workspace_code_endpoint(client):
    workspace_id = _create_workspace(client, document_id="DOC-login-flow")["id"]

    screen = client.get(f"/v1/workspaces/{workspace_id}/code", params={"dark_mode": "true"})
    document = client.get(f"/v1/workspaces/{workspace_id}/code", params={"scope": "document"})

    assert screen.status_code == 200
    assert screen.headers["content-type"].startswith("text/plain")
    assert "class MyHomePage" in screen.text
    assert "Brightness.dark" in screen.text
    assert "Navigator.pushNamed(context, '/screen-2')" in document.text


def test_chat_reply_is_delivered(client):
    workspace_id = _create_workspace(client)["id"]

    sent = client.post(f"/v1/workspaces/{workspace_id}/chat", json={"text": "Hello"})
    assert sent.status_code == 201
    assert sent.json()["sender"] == "user"

    time.sleep(0.3)
    messages = client.get(f"/v1/workspaces/{workspace_id}/chat").json()

    assert [message["sender"] for message in messages] == ["assistant", "user", "assistant"]
    assert messages[-1]["text"] == 'I received your message: "Hello". This is a simulated response.'


def test_empty_chat_message_is_rejected(client):
    workspace_id = _create_workspace(client)["id"]

    response = client.post(f"/v1/workspaces/{workspace_id}/chat", json={"text": ""})

    assert response.status_code == 422


def test_shutdown_closes_workspaces():
    with TestClient(app) as test_client:
        workspace_id = _create_workspace(test_client)["id"]
        workspace = workspace_store.get_workspace(workspace_id)
        assert not workspace.chat.closed

    assert workspace.chat.closed
    assert workspace_store.get_workspace(workspace_id) is None
