"""
Tests for the HTTP endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from decimal_schema.main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_infer_decimal(client):
    response = client.post("/infer-decimal", json={"values": ["1.23", "100", None, "abc", 7]})
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "SUCCESS"
    assert body["decimal_type"] == {"precision": 5, "scale": 2}
    assert body["total"] == 5
    assert body["nulls"] == 1
    assert body["invalid"] == 1


def test_infer_decimal_nothing_observed(client):
    response = client.post("/infer-decimal", json={"values": [None]})
    assert response.status_code == 200
    assert response.json()["decimal_type"] is None


def test_convert_decimal(client):
    response = client.post(
        "/convert-decimal", json={"value": "123.45", "precision": 5, "scale": 2}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["mantissa"] == "12345"
    assert body["value"] == "123.45"


def test_convert_decimal_overflow(client):
    response = client.post(
        "/convert-decimal", json={"value": "123.456", "precision": 5, "scale": 2}
    )
    assert response.status_code == 422
    assert response.json()["detail"]["error_type"] == "PrecisionOverflow"


def test_convert_decimal_invalid_type(client):
    response = client.post(
        "/convert-decimal", json={"value": "1", "precision": 0, "scale": 0}
    )
    assert response.status_code == 422
    assert response.json()["detail"]["error_type"] == "InvalidDecimalType"


def test_convert_decimal_extreme_exponent(client):
    response = client.post(
        "/convert-decimal", json={"value": "1E-3000000", "precision": 5, "scale": 2}
    )
    assert response.status_code == 422
    assert response.json()["detail"]["error_type"] == "DecimalParseError"
