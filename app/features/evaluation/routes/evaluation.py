from fastapi import APIRouter, Depends, status

from app.features.evaluation.exceptions import EvaluationFailed
from app.features.evaluation.schemas.evaluation import EvaluationRequest
from app.features.evaluation.services.config_resolver import resolve_config
from app.features.evaluation.services.evaluator import initiate_evaluation
from app.features.evaluation.services.issue_sink import IssueSink
from app.platform.db.session import SessionLocal
from app.platform.response import api_response

router = APIRouter(prefix="/evaluations", tags=["Evaluation"])


def get_issue_sink() -> IssueSink:
    return IssueSink(SessionLocal)


@router.post(
    "",
    response_model=dict,
    status_code=status.HTTP_200_OK,
    summary="Evaluate a domain scan",
    description="Run the meta, body, social and schema checks over every URL of a scan and store the issues"
)
async def run_evaluation(request: EvaluationRequest):
    """
    Evaluate a scan and wait for the result.

    Returns 207 with the per-URL report when some URLs could not be
    evaluated or stored; the other URLs are persisted regardless.
    """
    try:
        report = await initiate_evaluation(request.domain, request.date_of_scan)
    except EvaluationFailed as e:
        return api_response(
            data=e.report,
            message=f"Evaluation completed with {len(e.report.failed)} failed URLs",
            status_code=status.HTTP_207_MULTI_STATUS
        )

    return api_response(
        data=report,
        message="Evaluation completed",
        status_code=status.HTTP_200_OK
    )


@router.post(
    "/queue",
    response_model=dict,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Queue a domain scan evaluation"
)
async def queue_evaluation(request: EvaluationRequest):
    from app.features.evaluation.workers.tasks import run_evaluation as run_evaluation_task

    config = resolve_config(request.domain, request.date_of_scan)
    task = run_evaluation_task.delay(config.domain, config.date_of_scan)

    return api_response(
        data={"task_id": task.id, "domain": config.domain, "date_of_scan": config.date_of_scan},
        message="Evaluation queued",
        status_code=status.HTTP_202_ACCEPTED,
        headers={"Location": f"/api/v1/evaluations/{config.domain}/{config.date_of_scan}/issues"}
    )


@router.get(
    "/{domain}/{date_of_scan}/issues",
    response_model=dict,
    summary="List stored issues of a scan"
)
async def list_issues(
    domain: str,
    date_of_scan: str,
    sink: IssueSink = Depends(get_issue_sink)
):
    config = resolve_config(domain, date_of_scan)
    issues = await sink.list_issues(config.domain, config.date_of_scan)

    return api_response(
        data={
            "domain": config.domain,
            "date_of_scan": config.date_of_scan,
            "total_urls": len(issues),
            "issues": issues,
        },
        message="Issues retrieved",
    )
