from fastapi.testclient import TestClient

from mathapi.core.exceptions import AppError
from mathapi.main import create_app


def create_test_client() -> TestClient:
    app = create_app()
    return TestClient(app)


def test_calculate_returns_result_for_valid_expression() -> None:
    client = create_test_client()

    response = client.post("/calculate", json={"expression": "2 + 3 * 4"})

    assert response.status_code == 200
    assert response.json() == {
        "result": 14,
        "expression": "2 + 3 * 4",
        "success": True,
        "error": None,
    }
    assert response.headers["X-Request-ID"]


def test_calculate_accepts_latex() -> None:
    client = create_test_client()

    response = client.post("/calculate", json={"expression": "\\frac{\\frac{1}{2}}{4}"})

    assert response.status_code == 200
    assert response.json()["result"] == 0.125


def test_calculate_rejects_non_finite_result() -> None:
    client = create_test_client()

    response = client.post("/calculate", json={"expression": "\\sqrt{-1}"})

    assert response.status_code == 400
    assert response.json() == {
        "result": 0.0,
        "expression": "\\sqrt{-1}",
        "success": False,
        "error": "Invalid calculation result",
    }


def test_calculate_reports_evaluation_errors() -> None:
    client = create_test_client()

    response = client.post("/calculate", json={"expression": "abc"})

    assert response.status_code == 400
    payload = response.json()
    assert payload["success"] is False
    assert payload["expression"] == "abc"
    assert payload["error"].startswith("Calculation error: ")


def test_calculate_requires_expression_field() -> None:
    client = create_test_client()

    response = client.post("/calculate", json={})

    assert response.status_code == 422


def test_request_id_header_is_echoed() -> None:
    client = create_test_client()

    response = client.post("/calculate", json={"expression": "1+1"}, headers={"x-request-id": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"


def test_unhandled_app_errors_render_error_envelope() -> None:
    app = create_app()

    @app.get("/boom")
    async def boom() -> None:
        raise AppError("Something broke.", details={"stage": "test"})

    client = TestClient(app)

    response = client.get("/boom")

    assert response.status_code == 500
    payload = response.json()
    assert payload["error"]["type"] == "APP_ERROR"
    assert payload["error"]["details"] == {"stage": "test"}
    assert payload["error"]["traceId"] == response.headers["X-Request-ID"]
