from unittest.mock import AsyncMock, patch

import pytest

from app.features.evaluation.exceptions import EvaluationFailed, FetchError
from app.features.evaluation.schemas.evaluation import EvaluationReport, UrlFailure
from app.features.evaluation.workers.tasks import run_evaluation

TASKS = "app.features.evaluation.workers.tasks"


def test_task_returns_report():
    report = EvaluationReport(domain="example.com", date_of_scan="2024-05-01", total_urls=1, succeeded=["u1"])

    with patch(f"{TASKS}.initiate_evaluation", AsyncMock(return_value=report)):
        result = run_evaluation("example.com", "2024-05-01")

    assert result["succeeded"] == ["u1"]
    assert result["failed"] == []


def test_task_returns_partial_report_on_url_failures():
    report = EvaluationReport(
        domain="example.com",
        date_of_scan="2024-05-01",
        total_urls=2,
        succeeded=["u1"],
        failed=[UrlFailure(url_id="u2", stage="check", error="boom", categories=["meta"])],
    )

    with patch(f"{TASKS}.initiate_evaluation", AsyncMock(side_effect=EvaluationFailed(report))):
        result = run_evaluation("example.com", "2024-05-01")

    assert result["failed"][0]["url_id"] == "u2"
    assert result["failed"][0]["categories"] == ["meta"]


def test_task_fails_when_scan_data_is_unavailable():
    with patch(f"{TASKS}.initiate_evaluation", AsyncMock(side_effect=FetchError("example.com", "2024-05-01", "down"))):
        with pytest.raises(FetchError):
            run_evaluation("example.com", "2024-05-01")
