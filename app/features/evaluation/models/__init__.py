"""
Evaluation models package.
"""
from app.features.evaluation.models.scan_page import ScanPage
from app.features.evaluation.models.scan_issue import ScanIssue

__all__ = ["ScanPage", "ScanIssue"]
