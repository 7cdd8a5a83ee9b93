"""In-memory collaborators for evaluator tests."""
import asyncio
from typing import Dict, List, Optional, Tuple

from app.features.evaluation.exceptions import FetchError
from app.features.evaluation.schemas.evaluation import (
    DuplicateContext,
    IssueBundle,
    ScanConfig,
    UrlScanData,
)


class FakeDataSource:
    def __init__(
        self,
        scan_results: Dict[str, dict],
        duplicates: Optional[DuplicateContext] = None,
        fail_on: Optional[str] = None,
    ):
        self.scan_results = {
            url_id: UrlScanData.model_validate(data) for url_id, data in scan_results.items()
        }
        self.duplicates = duplicates or DuplicateContext()
        self.fail_on = fail_on
        self.calls: List[Tuple[str, str, str]] = []

    async def fetch_scan_results(self, domain: str, date_of_scan: str):
        self.calls.append(("scan_results", domain, date_of_scan))
        if self.fail_on == "scan_results":
            raise FetchError(domain, date_of_scan, "connection refused")
        return self.scan_results

    async def fetch_duplicate_context(self, domain: str, date_of_scan: str):
        self.calls.append(("duplicates", domain, date_of_scan))
        if self.fail_on == "duplicates":
            raise FetchError(domain, date_of_scan, "connection refused")
        return self.duplicates


class RecordingSink:
    """Collects submissions; optionally fails or delays specific url_ids."""

    def __init__(self, fail_for=(), error: Optional[Exception] = None, delays=None):
        self.fail_for = set(fail_for)
        self.error = error
        self.delays = delays or {}
        self.submissions: List[Tuple[ScanConfig, IssueBundle]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def persist_issues(self, config: ScanConfig, bundle: IssueBundle) -> None:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(config.url_id, 0))
            if config.url_id in self.fail_for:
                raise self.error or RuntimeError("write rejected")
            self.submissions.append((config, bundle))
        finally:
            self.in_flight -= 1

    @property
    def submitted_ids(self) -> List[str]:
        return [config.url_id for config, _ in self.submissions]
