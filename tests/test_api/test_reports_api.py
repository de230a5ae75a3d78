"""Tests for report endpoints."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

from dbe_shared.errors import UpstreamFetchFailure

FETCH = "dbe_api.services.report_service.fetch_contracts"


def test_health(api_client):
    response = api_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_stats(api_client, scenario_contracts):
    """GET /v1/reports/stats returns the three chart series."""
    with patch(FETCH, AsyncMock(return_value=scenario_contracts)):
        response = api_client.get("/v1/reports/stats")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["participation"][0] == {"name": "DBE Participation", "value": 100.0}
    assert [p["year"] for p in data["trends"]] == ["2022", "2023"]
    assert round(data["certified_percentage"], 2) == 66.67


def test_contracts_filtered(api_client, scenario_contracts):
    """GET /v1/reports/contracts applies filters; empty params are unset."""
    with patch(FETCH, AsyncMock(return_value=scenario_contracts)):
        response = api_client.get(
            "/v1/reports/contracts",
            params={"category": "Supplier", "start_date": "", "certified": "yes"},
        )

    assert response.status_code == 200
    body = response.json()
    assert body["meta"]["total_count"] == 1
    assert body["meta"]["filters"] == {"category": "Supplier", "certified": "yes"}
    assert body["data"][0]["Contract #"] == "CNT-001"


def test_contracts_invalid_date(api_client, scenario_contracts):
    fetch = AsyncMock(return_value=scenario_contracts)
    with patch(FETCH, fetch):
        response = api_client.get("/v1/reports/contracts", params={"start_date": "2024-99-01"})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "invalid_argument"
    fetch.assert_not_called()


def test_export_csv(api_client, scenario_contracts):
    """GET /v1/reports/contracts/export streams a CSV attachment."""
    with patch(FETCH, AsyncMock(return_value=scenario_contracts)):
        response = api_client.get(
            "/v1/reports/contracts/export", params={"filename": "dbe.csv"}
        )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="dbe.csv"' in response.headers["content-disposition"]
    lines = response.text.split("\n")
    assert len(lines) == 3
    assert lines[0].startswith("TAD Project #,Contract #")


def test_export_nothing_matched(api_client, scenario_contracts):
    with patch(FETCH, AsyncMock(return_value=scenario_contracts)):
        response = api_client.get(
            "/v1/reports/contracts/export", params={"category": "Broker"}
        )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "export_failed"


def test_upstream_failure(api_client):
    with patch(FETCH, AsyncMock(side_effect=UpstreamFetchFailure("store down"))):
        response = api_client.get("/v1/reports/stats")

    assert response.status_code == 502
    assert response.json()["error"] == {
        "code": "upstream_unavailable",
        "message": "store down",
    }
