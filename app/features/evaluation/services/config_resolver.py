from typing import Any

from app.features.evaluation.schemas.evaluation import ScanConfig


def resolve_config(domain: Any, date_of_scan: Any) -> ScanConfig:
    """
    Build the run configuration for one scan of a domain.

    Values are kept exactly as given; scans are stored under the domain the
    crawler saw, so any rewriting here would miss them.
    """
    return ScanConfig.model_construct(domain=domain, date_of_scan=date_of_scan, url_id=None)
