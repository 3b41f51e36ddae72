from fastapi.testclient import TestClient

from mathapi.main import create_app


def create_test_client() -> TestClient:
    return TestClient(create_app())


def test_tools_list_over_http() -> None:
    client = create_test_client()

    response = client.post("/mcp", json={"jsonrpc": "2.0", "method": "tools/list", "id": 1})

    assert response.status_code == 200
    payload = response.json()
    assert payload["id"] == 1
    assert payload["error"] is None
    assert [tool["name"] for tool in payload["result"]["tools"]] == ["calculate_math", "latex_to_expr"]


def test_tool_call_over_http() -> None:
    client = create_test_client()

    response = client.post(
        "/mcp",
        json={
            "jsonrpc": "2.0",
            "method": "tools/call",
            "params": {"name": "calculate_math", "arguments": {"expression": "2 * \\pi"}},
            "id": "call-1",
        },
    )

    payload = response.json()
    assert payload["id"] == "call-1"
    assert "Normalized expression: 2 * pi" in payload["result"]["content"][0]["text"]


def test_malformed_body_returns_parse_error() -> None:
    client = create_test_client()

    response = client.post("/mcp", content=b"{oops", headers={"content-type": "application/json"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["error"]["code"] == -32700
    assert payload["id"] is None
    assert payload["result"] is None


def test_unknown_method_over_http() -> None:
    client = create_test_client()

    response = client.post("/mcp", json={"jsonrpc": "2.0", "method": "foo", "id": 7})

    payload = response.json()
    assert payload["error"]["code"] == -32602
    assert payload["error"]["message"] == "Unknown method: foo"
    assert payload["id"] == 7
