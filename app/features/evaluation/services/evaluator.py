"""
Evaluation Service

Runs the category checks over every URL of a domain scan and persists one
issue bundle per URL.
"""
import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from app.features.evaluation.exceptions import CheckError, EvaluationFailed, SinkError
from app.features.evaluation.schemas.evaluation import (
    DuplicateContext,
    EvaluationReport,
    IssueBundle,
    IssueResult,
    ScanConfig,
    UrlFailure,
    UrlScanData,
)
from app.features.evaluation.services.checks import DEFAULT_CHECKS, EvaluationChecks
from app.features.evaluation.services.config_resolver import resolve_config
from app.features.evaluation.services.issue_sink import IssueSink
from app.features.evaluation.services.scan_data_source import ScanDataSource
from app.platform.config import settings

logger = logging.getLogger(__name__)


class EvaluationService:

    def __init__(
        self,
        data_source: ScanDataSource,
        sink: IssueSink,
        checks: EvaluationChecks = DEFAULT_CHECKS,
        max_concurrency: Optional[int] = settings.EVALUATION_MAX_CONCURRENCY,
    ):
        self.data_source = data_source
        self.sink = sink
        self.checks = checks
        self.max_concurrency = max_concurrency

    async def run_evaluation(self, domain: str, date_of_scan: str) -> EvaluationReport:
        """
        Evaluate every scanned URL of a domain scan.

        Process:
        1. Resolve the run configuration
        2. Fetch scan results and the duplicate check data
        3. Check and persist every URL concurrently
        4. Wait until every URL has settled, then report

        Args:
            domain: Scanned domain
            date_of_scan: Identifier of the scan date

        Returns:
            EvaluationReport listing every URL that was persisted

        Raises:
            FetchError: If scan data cannot be loaded; nothing is checked or written
            EvaluationFailed: If at least one URL failed; carries the full report
        """
        config = resolve_config(domain, date_of_scan)
        tag = f"[{config.domain}/{config.date_of_scan}]"

        scan_results = await self.data_source.fetch_scan_results(config.domain, config.date_of_scan)
        duplicates = await self.data_source.fetch_duplicate_context(config.domain, config.date_of_scan)

        logger.info(f"{tag} Evaluating {len(scan_results)} scanned URLs")

        semaphore = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency else None

        # Each task gets its own config snapshot, taken before dispatch
        tasks = [
            asyncio.create_task(
                self._evaluate_url(config.for_url(url_id), url_data, duplicates, semaphore)
            )
            for url_id, url_data in scan_results.items()
        ]
        failures = await asyncio.gather(*tasks)

        report = EvaluationReport(
            domain=config.domain,
            date_of_scan=config.date_of_scan,
            total_urls=len(scan_results),
        )
        for url_id, failure in zip(scan_results, failures):
            if failure is None:
                report.succeeded.append(url_id)
            else:
                report.failed.append(failure)

        if report.has_failures:
            logger.error(
                f"{tag} Evaluation finished with {len(report.failed)} failed URLs "
                f"out of {report.total_urls}"
            )
            raise EvaluationFailed(report)

        logger.info(f"{tag} Evaluation complete: {len(report.succeeded)} URLs persisted")
        return report

    async def _evaluate_url(
        self,
        config: ScanConfig,
        url_data: UrlScanData,
        duplicates: DuplicateContext,
        semaphore: Optional[asyncio.Semaphore],
    ) -> Optional[UrlFailure]:
        if semaphore is None:
            return await self._process_url(config, url_data, duplicates)
        async with semaphore:
            return await self._process_url(config, url_data, duplicates)

    async def _process_url(
        self, config: ScanConfig, url_data: UrlScanData, duplicates: DuplicateContext
    ) -> Optional[UrlFailure]:
        """Check and persist one URL. Returns the failure instead of raising it."""
        tag = f"[{config.domain}/{config.date_of_scan}]"

        bundle, check_errors = await self._run_checks(config.url_id, url_data, duplicates)
        if check_errors:
            for error in check_errors:
                logger.error(f"{tag} {error}")
            # A partial bundle is never written
            return UrlFailure(
                url_id=config.url_id,
                stage="check",
                error="; ".join(str(error) for error in check_errors),
                categories=[error.category for error in check_errors],
            )

        try:
            await self.sink.persist_issues(config, bundle)
        except SinkError as e:
            logger.error(f"{tag} {e}")
            return UrlFailure(url_id=config.url_id, stage="sink", error=str(e))
        except Exception as e:
            error = SinkError(config.domain, config.date_of_scan, config.url_id, str(e))
            logger.error(f"{tag} {error}", exc_info=True)
            return UrlFailure(url_id=config.url_id, stage="sink", error=str(error))

        return None

    async def _run_checks(
        self, url_id: str, url_data: UrlScanData, duplicates: DuplicateContext
    ) -> Tuple[Optional[IssueBundle], List[CheckError]]:
        """Run the four category checks of one URL concurrently."""
        calls: List[Tuple[str, Callable[..., Any], tuple]] = [
            ("meta", self.checks.check_meta, (url_data.meta, duplicates)),
            ("body", self.checks.check_body, (url_data.body,)),
            ("social", self.checks.check_social, (url_data.social,)),
            ("schema", self.checks.check_schema, (url_data.schema_data,)),
        ]
        outcomes = await asyncio.gather(
            *(_run_check(url_id, category, check, args) for category, check, args in calls),
            return_exceptions=True,
        )

        results: Dict[str, IssueResult] = {}
        errors: List[CheckError] = []
        for (category, _, _), outcome in zip(calls, outcomes):
            if isinstance(outcome, CheckError):
                errors.append(outcome)
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                results[category] = outcome

        if errors:
            return None, errors

        bundle = IssueBundle(
            meta=results["meta"],
            body=results["body"],
            social=results["social"],
            schema=results["schema"],
        )
        return bundle, []


async def _run_check(url_id: str, category: str, check: Callable[..., Any], args: tuple) -> IssueResult:
    try:
        result = check(*args)
        if inspect.isawaitable(result):
            result = await result
        if isinstance(result, dict):
            result = IssueResult.model_validate(result)
    except Exception as e:
        raise CheckError(url_id, category, str(e) or type(e).__name__) from e

    if not isinstance(result, IssueResult):
        raise CheckError(url_id, category, f"check returned {type(result).__name__}")
    return result


async def initiate_evaluation(domain: str, date_of_scan: str) -> EvaluationReport:
    """Run one evaluation against the application database."""
    from app.platform.db.session import SessionLocal

    service = EvaluationService(
        data_source=ScanDataSource(SessionLocal),
        sink=IssueSink(SessionLocal),
    )
    return await service.run_evaluation(domain, date_of_scan)
