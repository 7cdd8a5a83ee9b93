from sqlalchemy import Column, String, JSON, UniqueConstraint, Index

from app.platform.db.base import BaseModel


class ScanPage(BaseModel):
    """
    Crawl snapshot of one URL within a domain scan.

    Each category is stored as an opaque JSON document produced by the
    crawler; the evaluator validates it on read.
    """
    __tablename__ = "scan_pages"

    # Scan identification
    domain = Column(String(255), nullable=False, index=True)
    date_of_scan = Column(String(32), nullable=False, index=True)
    url_id = Column(String(255), nullable=False)
    page_url = Column(String(2048), nullable=True)

    # Category documents
    meta = Column(JSON, nullable=False, default=dict)
    body = Column(JSON, nullable=False, default=dict)
    social = Column(JSON, nullable=False, default=dict)
    schema_data = Column("schema", JSON, nullable=False, default=dict)

    __table_args__ = (
        UniqueConstraint("domain", "date_of_scan", "url_id", name="uq_scan_pages_scan_url"),
        Index("idx_scan_pages_scan", "domain", "date_of_scan"),
    )
