from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.features.evaluation.exceptions import EvaluationFailed, FetchError
from app.features.evaluation.routes.evaluation import get_issue_sink
from app.features.evaluation.schemas.evaluation import (
    EvaluationReport,
    IssueBundle,
    IssueResult,
    IssueStatus,
    ScanConfig,
    UrlFailure,
)
from app.features.evaluation.services.issue_sink import IssueSink

ROUTES = "app.features.evaluation.routes.evaluation"


def test_run_evaluation_returns_report(client):
    report = EvaluationReport(domain="example.com", date_of_scan="2024-05-01", total_urls=2, succeeded=["u1", "u2"])

    with patch(f"{ROUTES}.initiate_evaluation", AsyncMock(return_value=report)) as mock_run:
        response = client.post("/api/v1/evaluations", json={"domain": "example.com", "date_of_scan": "2024-05-01"})

    assert response.status_code == 200
    assert response.json()["data"]["succeeded"] == ["u1", "u2"]
    mock_run.assert_awaited_once_with("example.com", "2024-05-01")


def test_partial_failure_returns_multi_status(client):
    report = EvaluationReport(
        domain="example.com",
        date_of_scan="2024-05-01",
        total_urls=2,
        succeeded=["u1"],
        failed=[UrlFailure(url_id="u2", stage="sink", error="disk full")],
    )

    with patch(f"{ROUTES}.initiate_evaluation", AsyncMock(side_effect=EvaluationFailed(report))):
        response = client.post("/api/v1/evaluations", json={"domain": "example.com", "date_of_scan": "2024-05-01"})

    assert response.status_code == 207
    data = response.json()["data"]
    assert data["succeeded"] == ["u1"]
    assert data["failed"][0]["url_id"] == "u2"


def test_fetch_failure_returns_service_unavailable(client):
    error = FetchError("example.com", "2024-05-01", "connection refused")

    with patch(f"{ROUTES}.initiate_evaluation", AsyncMock(side_effect=error)):
        response = client.post("/api/v1/evaluations", json={"domain": "example.com", "date_of_scan": "2024-05-01"})

    assert response.status_code == 503
    assert response.json()["data"] == {"domain": "example.com", "date_of_scan": "2024-05-01"}


def test_run_evaluation_requires_domain(client):
    response = client.post("/api/v1/evaluations", json={"domain": "", "date_of_scan": "2024-05-01"})

    assert response.status_code == 422


def test_queue_evaluation(client):
    task = MagicMock(id="task-123")

    with patch("app.features.evaluation.workers.tasks.run_evaluation") as mock_task:
        mock_task.delay.return_value = task
        response = client.post("/api/v1/evaluations/queue", json={"domain": "Example.com", "date_of_scan": "2024-05-01"})

    assert response.status_code == 202
    assert response.json()["data"]["task_id"] == "task-123"
    assert response.headers["location"] == "/api/v1/evaluations/Example.com/2024-05-01/issues"
    mock_task.delay.assert_called_once_with("Example.com", "2024-05-01")


@pytest.mark.asyncio
async def test_list_issues(session_factory, test_app):
    from httpx import ASGITransport, AsyncClient

    sink = IssueSink(session_factory)
    passed = IssueResult(status=IssueStatus.passed)
    await sink.persist_issues(
        ScanConfig(domain="example.com", date_of_scan="2024-05-01", url_id="home"),
        IssueBundle(meta=passed, body=passed, social=passed, schema=passed),
    )
    test_app.dependency_overrides[get_issue_sink] = lambda: sink

    try:
        async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
            response = await client.get("/api/v1/evaluations/example.com/2024-05-01/issues")
    finally:
        test_app.dependency_overrides.pop(get_issue_sink, None)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total_urls"] == 1
    assert data["issues"][0]["url_id"] == "home"
    assert data["issues"][0]["schema"]["status"] == "passed"
