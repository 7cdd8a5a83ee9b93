from sqlalchemy import Column, String, Integer, DateTime, JSON, UniqueConstraint, Index

from app.platform.db.base import BaseModel


class ScanIssue(BaseModel):
    """
    Issue bundle produced for one scanned URL.

    One row per (domain, date_of_scan, url_id); re-evaluating a scan
    overwrites the row in place.
    """
    __tablename__ = "scan_issues"

    # Scan identification
    domain = Column(String(255), nullable=False, index=True)
    date_of_scan = Column(String(32), nullable=False, index=True)
    url_id = Column(String(255), nullable=False)

    # Category results (IssueResult documents)
    meta = Column(JSON, nullable=False)
    body = Column(JSON, nullable=False)
    social = Column(JSON, nullable=False)
    schema_data = Column("schema", JSON, nullable=False)

    # Issue counts (denormalized)
    critical_issues_count = Column(Integer, default=0, nullable=False)
    warning_issues_count = Column(Integer, default=0, nullable=False)

    evaluated_at = Column(DateTime, nullable=True)

    __table_args__ = (
        UniqueConstraint("domain", "date_of_scan", "url_id", name="uq_scan_issues_scan_url"),
        Index("idx_scan_issues_scan", "domain", "date_of_scan"),
    )
