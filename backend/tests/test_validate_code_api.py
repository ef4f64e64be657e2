"""
POST /api/validate-code: 200 {valid, message, code} for well-formed codes;
400 for missing, empty, malformed or badly formatted input.
"""


def test_valid_code_returns_200_and_echoes_code(client):
    response = client.post("/api/validate-code", json={"code": "WN-2026-K3Q9ZA-4821"})
    assert response.status_code == 200
    data = response.json()
    assert data == {
        "valid": True,
        "message": "Access code validated successfully",
        "code": "WN-2026-K3Q9ZA-4821",
    }


def test_never_issued_but_well_formed_code_is_accepted(client):
    """Format-only gate: a forged code that fits the format passes."""
    response = client.post("/api/validate-code", json={"code": "WN-FORGED-99"})
    assert response.status_code == 200
    assert response.json()["valid"] is True


def test_missing_code_returns_400(client):
    response = client.post("/api/validate-code", json={})
    assert response.status_code == 400
    assert response.json()["detail"] == "Access code is required"


def test_empty_code_returns_400(client):
    response = client.post("/api/validate-code", json={"code": ""})
    assert response.status_code == 400
    assert response.json()["detail"] == "Access code is required"


def test_badly_formatted_code_returns_400_with_valid_false(client):
    response = client.post("/api/validate-code", json={"code": "ABC-123456789"})
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["valid"] is False
    assert detail["error"] == "Invalid access code format"


def test_short_code_returns_400(client):
    response = client.post("/api/validate-code", json={"code": "WN-ABC"})
    assert response.status_code == 400
    assert response.json()["detail"]["valid"] is False


def test_malformed_json_returns_400_with_request_id(client):
    response = client.post(
        "/api/validate-code",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    data = response.json()
    request_id = data.get("request_id")
    assert request_id and len(request_id) == 36


def test_non_string_code_returns_400(client):
    response = client.post("/api/validate-code", json={"code": 1234567890})
    assert response.status_code == 400
