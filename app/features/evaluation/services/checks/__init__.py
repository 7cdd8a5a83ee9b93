"""
Category checks run by the evaluator for every scanned URL.
"""
from dataclasses import dataclass
from typing import Any, Callable

from app.features.evaluation.services.checks.body import check_body_data
from app.features.evaluation.services.checks.meta import check_meta_data
from app.features.evaluation.services.checks.schema import check_schema_data
from app.features.evaluation.services.checks.social import check_social_data


@dataclass(frozen=True)
class EvaluationChecks:
    """
    One callable per category. A check may return an IssueResult or an
    awaitable resolving to one.
    """
    check_meta: Callable[..., Any]
    check_body: Callable[..., Any]
    check_social: Callable[..., Any]
    check_schema: Callable[..., Any]


DEFAULT_CHECKS = EvaluationChecks(
    check_meta=check_meta_data,
    check_body=check_body_data,
    check_social=check_social_data,
    check_schema=check_schema_data,
)

__all__ = [
    "EvaluationChecks",
    "DEFAULT_CHECKS",
    "check_meta_data",
    "check_body_data",
    "check_social_data",
    "check_schema_data",
]
