import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.core.exception_handlers import setup_exception_handlers
from api.main import app
from config import settings

client = TestClient(app)


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": settings.APP_VERSION}
    assert "X-Request-ID" in response.headers


def test_request_id_is_echoed():
    response = client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


def test_thresholds_at_strictest_level():
    response = client.get("/v1/sensitivity/10/thresholds")
    assert response.status_code == 200
    data = response.json()
    assert data["sensitivity"] == 10
    assert data["neckAngleMin"] == pytest.approx(156.0)
    assert data["alarmDistanceRatio"] == pytest.approx(1.05)
    assert data["slouchMargin"] == pytest.approx(0.021)
    assert data["shoulderRaiseGapRatio"] == pytest.approx(0.87)


def test_head_turned_margin_is_stricter_at_middle_level():
    data = client.get("/v1/sensitivity/5/thresholds").json()
    assert data["slouchMarginHeadTurned"] < data["slouchMargin"]


@pytest.mark.parametrize("level", [0, 11])
def test_out_of_range_level_rejected(level):
    response = client.get(f"/v1/sensitivity/{level}/thresholds")
    assert response.status_code == 422
    assert response.json()["error"] == "InvalidSensitivityError"


def test_non_integer_level_rejected():
    response = client.get("/v1/sensitivity/high/thresholds")
    assert response.status_code == 422


def test_unexpected_error_returns_standard_500():
    failing = FastAPI()
    setup_exception_handlers(failing)

    @failing.get("/boom")
    async def boom():
        raise RuntimeError("kaput")

    response = TestClient(failing, raise_server_exceptions=False).get("/boom")
    assert response.status_code == 500
    assert response.json() == {
        "error": "InternalServerError",
        "detail": "Unexpected error while serving GET /boom",
    }
