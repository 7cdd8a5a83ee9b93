"""
Scan Data Source

Reads crawl snapshots of a domain scan from the scan_pages table.
"""
import logging
from collections import defaultdict
from typing import Dict, List

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.features.evaluation.exceptions import FetchError
from app.features.evaluation.models.scan_page import ScanPage
from app.features.evaluation.schemas.evaluation import DuplicateContext, UrlScanData

logger = logging.getLogger(__name__)


class ScanDataSource:

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def fetch_scan_results(self, domain: str, date_of_scan: str) -> Dict[str, UrlScanData]:
        """
        Fetch every scanned URL of a scan with its category data.

        Returns:
            Mapping of url_id to validated UrlScanData

        Raises:
            FetchError: If the database is unreachable or a row is malformed
        """
        query = (
            select(ScanPage)
            .where(ScanPage.domain == domain, ScanPage.date_of_scan == date_of_scan)
            .order_by(ScanPage.url_id)
        )

        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                pages = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(f"[{domain}/{date_of_scan}] Failed to load scan pages: {e}")
            raise FetchError(domain, date_of_scan, "scan data source unavailable") from e

        scan_results: Dict[str, UrlScanData] = {}
        for page in pages:
            try:
                scan_results[page.url_id] = UrlScanData.model_validate({
                    "meta": page.meta or {},
                    "body": page.body or {},
                    "social": page.social or {},
                    "schema": page.schema_data or {},
                })
            except ValidationError as e:
                logger.error(f"[{domain}/{date_of_scan}] Malformed scan data for {page.url_id}: {e}")
                raise FetchError(
                    domain, date_of_scan, f"malformed scan data for url_id {page.url_id}"
                ) from e

        logger.info(f"[{domain}/{date_of_scan}] Loaded {len(scan_results)} scanned URLs")
        return scan_results

    async def fetch_duplicate_context(self, domain: str, date_of_scan: str) -> DuplicateContext:
        """Group the titles and descriptions of a scan by normalised value."""
        query = (
            select(ScanPage.url_id, ScanPage.meta)
            .where(ScanPage.domain == domain, ScanPage.date_of_scan == date_of_scan)
        )

        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                rows = result.all()
        except SQLAlchemyError as e:
            logger.error(f"[{domain}/{date_of_scan}] Failed to load duplicate check data: {e}")
            raise FetchError(domain, date_of_scan, "scan data source unavailable") from e

        titles: Dict[str, List[str]] = defaultdict(list)
        descriptions: Dict[str, List[str]] = defaultdict(list)

        for url_id, meta in rows:
            if meta is not None and not isinstance(meta, dict):
                raise FetchError(domain, date_of_scan, f"malformed meta data for url_id {url_id}")
            meta = meta or {}

            # Untitled pages are grouped too, under ""
            titles[DuplicateContext.normalise(meta.get("title"))].append(url_id)

            description = DuplicateContext.normalise(meta.get("description"))
            if description:
                descriptions[description].append(url_id)

        return DuplicateContext(titles=dict(titles), descriptions=dict(descriptions))
