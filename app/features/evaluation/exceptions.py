"""
Evaluation errors.

FetchError aborts a run before any check or write. CheckError and SinkError
are scoped to a single URL and are collected into the run report;
EvaluationFailed is raised once the whole run has settled and at least one
URL failed.
"""
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from app.features.evaluation.schemas.evaluation import EvaluationReport


class EvaluationError(Exception):
    """Base class for evaluation pipeline errors."""


class FetchError(EvaluationError):
    def __init__(self, domain: str, date_of_scan: str, reason: str):
        self.domain = domain
        self.date_of_scan = date_of_scan
        self.reason = reason
        super().__init__(f"Failed to fetch scan data for {domain} ({date_of_scan}): {reason}")


class CheckError(EvaluationError):
    def __init__(self, url_id: str, category: str, reason: str):
        self.url_id = url_id
        self.category = category
        self.reason = reason
        super().__init__(f"{category} check failed for {url_id}: {reason}")


class SinkError(EvaluationError):
    def __init__(self, domain: str, date_of_scan: str, url_id: Optional[str], reason: str):
        self.domain = domain
        self.date_of_scan = date_of_scan
        self.url_id = url_id
        self.reason = reason
        super().__init__(
            f"Failed to persist issues for {domain} ({date_of_scan}) url_id={url_id}: {reason}"
        )


class EvaluationFailed(EvaluationError):
    def __init__(self, report: "EvaluationReport"):
        self.report = report
        failed_ids = ", ".join(failure.url_id for failure in report.failed)
        super().__init__(
            f"Evaluation of {report.domain} ({report.date_of_scan}) failed for "
            f"{len(report.failed)}/{report.total_urls} URLs: {failed_ids}"
        )
