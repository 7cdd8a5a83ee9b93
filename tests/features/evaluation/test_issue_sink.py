from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from app.features.evaluation.exceptions import SinkError
from app.features.evaluation.models.scan_issue import ScanIssue
from app.features.evaluation.schemas.evaluation import (
    CheckIssue,
    IssueBundle,
    IssueResult,
    IssueStatus,
    ScanConfig,
)
from app.features.evaluation.services.issue_sink import IssueSink

CONFIG = ScanConfig(domain="example.com", date_of_scan="2024-05-01", url_id="home")


def make_bundle(meta_status=IssueStatus.failed) -> IssueBundle:
    return IssueBundle(
        meta=IssueResult(
            status=meta_status,
            issues=[CheckIssue(field="title", severity="warning", message="Title is too short")],
        ),
        body=IssueResult(
            status=IssueStatus.failed,
            issues=[CheckIssue(field="h1", severity="error", message="Page has no <h1> heading.")],
        ),
        social=IssueResult(status=IssueStatus.passed),
        schema=IssueResult(status=IssueStatus.missing),
    )


async def count_rows(session_factory) -> int:
    async with session_factory() as session:
        return (await session.execute(select(func.count()).select_from(ScanIssue))).scalar_one()


class TestPersistIssues:

    @pytest.mark.asyncio
    async def test_stores_bundle_and_counts(self, session_factory):
        sink = IssueSink(session_factory)

        await sink.persist_issues(CONFIG, make_bundle())

        documents = await sink.list_issues("example.com", "2024-05-01")
        assert len(documents) == 1
        document = documents[0]
        assert document.url_id == "home"
        assert document.meta["status"] == "failed"
        assert document.body["issues"][0]["field"] == "h1"
        assert document.schema_data["status"] == "missing"
        assert document.critical_issues_count == 1
        assert document.warning_issues_count == 1

    @pytest.mark.asyncio
    async def test_resubmitting_updates_the_same_row(self, session_factory):
        sink = IssueSink(session_factory)

        await sink.persist_issues(CONFIG, make_bundle())
        await sink.persist_issues(CONFIG, make_bundle())
        assert await count_rows(session_factory) == 1

        await sink.persist_issues(CONFIG, make_bundle(meta_status=IssueStatus.duplicate))
        documents = await sink.list_issues("example.com", "2024-05-01")
        assert await count_rows(session_factory) == 1
        assert documents[0].meta["status"] == "duplicate"

    @pytest.mark.asyncio
    async def test_urls_of_a_scan_are_stored_separately(self, session_factory):
        sink = IssueSink(session_factory)

        await sink.persist_issues(CONFIG.model_copy(update={"url_id": "b"}), make_bundle())
        await sink.persist_issues(CONFIG.model_copy(update={"url_id": "a"}), make_bundle())
        await sink.persist_issues(
            ScanConfig(domain="example.com", date_of_scan="2024-06-01", url_id="a"), make_bundle()
        )

        documents = await sink.list_issues("example.com", "2024-05-01")
        assert [document.url_id for document in documents] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_missing_url_id_raises_sink_error(self, session_factory):
        sink = IssueSink(session_factory)

        with pytest.raises(SinkError, match="missing url_id"):
            await sink.persist_issues(ScanConfig(domain="example.com", date_of_scan="2024-05-01"), make_bundle())

    @pytest.mark.asyncio
    async def test_database_error_raises_sink_error_with_context(self):
        session = MagicMock()
        session.__aenter__ = AsyncMock(return_value=session)
        session.__aexit__ = AsyncMock(return_value=False)
        session.execute = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("database is locked")))
        session.rollback = AsyncMock()
        sink = IssueSink(MagicMock(return_value=session))

        with pytest.raises(SinkError) as exc_info:
            await sink.persist_issues(CONFIG, make_bundle())

        assert (exc_info.value.domain, exc_info.value.date_of_scan, exc_info.value.url_id) == (
            "example.com", "2024-05-01", "home",
        )
        session.rollback.assert_awaited_once()
