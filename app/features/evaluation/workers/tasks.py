import asyncio
import logging
from typing import Any, Dict

from app.features.evaluation.exceptions import EvaluationFailed
from app.features.evaluation.services.evaluator import initiate_evaluation
from app.platform.celery_app import celery_app

logger = logging.getLogger(__name__)


@celery_app.task(name="app.features.evaluation.workers.tasks.run_evaluation")
def run_evaluation(domain: str, date_of_scan: str) -> Dict[str, Any]:
    """
    Evaluate a scan from a Celery worker.

    URL level failures are returned in the report; a FetchError is re-raised
    so the task is marked failed.
    """
    logger.info(f"[{domain}/{date_of_scan}] Starting queued evaluation")
    try:
        report = asyncio.run(initiate_evaluation(domain, date_of_scan))
    except EvaluationFailed as e:
        logger.warning(f"[{domain}/{date_of_scan}] {e}")
        report = e.report

    return report.model_dump(mode="json")
