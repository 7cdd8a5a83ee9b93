"""
Issue Sink

Persists the issue bundle of each evaluated URL into scan_issues.
"""
import logging
from datetime import datetime
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.features.evaluation.exceptions import SinkError
from app.features.evaluation.models.scan_issue import ScanIssue
from app.features.evaluation.schemas.evaluation import IssueBundle, IssueDocument, ScanConfig

logger = logging.getLogger(__name__)


class IssueSink:

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def persist_issues(self, config: ScanConfig, bundle: IssueBundle) -> None:
        """
        Upsert the issue document of config.url_id.

        Each call uses its own session, so calls for different URLs may run
        concurrently. Writing the same bundle twice leaves the same row.

        Raises:
            SinkError: If the config has no url_id or the write fails
        """
        if not config.url_id:
            raise SinkError(config.domain, config.date_of_scan, config.url_id, "missing url_id")

        results = {
            category: result.model_dump(mode="json")
            for category, result in bundle.results().items()
        }
        critical_count = sum(result.count("error") for result in bundle.results().values())
        warning_count = sum(result.count("warning") for result in bundle.results().values())

        async with self.session_factory() as session:
            try:
                query = select(ScanIssue).where(
                    ScanIssue.domain == config.domain,
                    ScanIssue.date_of_scan == config.date_of_scan,
                    ScanIssue.url_id == config.url_id,
                )
                issue = (await session.execute(query)).scalar_one_or_none()

                if issue is None:
                    issue = ScanIssue(
                        domain=config.domain,
                        date_of_scan=config.date_of_scan,
                        url_id=config.url_id,
                    )
                    session.add(issue)

                issue.meta = results["meta"]
                issue.body = results["body"]
                issue.social = results["social"]
                issue.schema_data = results["schema"]
                issue.critical_issues_count = critical_count
                issue.warning_issues_count = warning_count
                issue.evaluated_at = datetime.utcnow()

                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(
                    f"[{config.domain}/{config.date_of_scan}] Failed to save issues for {config.url_id}: {e}",
                    exc_info=True,
                )
                raise SinkError(config.domain, config.date_of_scan, config.url_id, str(e)) from e

    async def list_issues(self, domain: str, date_of_scan: str) -> List[IssueDocument]:
        """Read back the stored issue documents of a scan, ordered by url_id."""
        query = (
            select(ScanIssue)
            .where(ScanIssue.domain == domain, ScanIssue.date_of_scan == date_of_scan)
            .order_by(ScanIssue.url_id)
        )
        async with self.session_factory() as session:
            issues = (await session.execute(query)).scalars().all()

        return [
            IssueDocument(
                url_id=issue.url_id,
                meta=issue.meta,
                body=issue.body,
                social=issue.social,
                schema=issue.schema_data,
                critical_issues_count=issue.critical_issues_count,
                warning_issues_count=issue.warning_issues_count,
            )
            for issue in issues
        ]
