from typing import List

from app.features.evaluation.schemas.evaluation import BodyData, CheckIssue, IssueResult

MIN_WORD_COUNT = 300


def check_body_data(body: BodyData) -> IssueResult:
    issues: List[CheckIssue] = []

    headings = [heading for heading in body.h1 if heading.strip()]
    if not headings:
        issues.append(CheckIssue(
            field="h1",
            severity="error",
            message="Page has no <h1> heading.",
        ))
    elif len(headings) > 1:
        issues.append(CheckIssue(
            field="h1",
            severity="warning",
            message=f"Page has {len(headings)} <h1> headings. Use a single main heading.",
        ))

    if body.word_count < MIN_WORD_COUNT:
        issues.append(CheckIssue(
            field="word_count",
            severity="warning",
            message=f"Thin content ({body.word_count} words). Recommended: at least {MIN_WORD_COUNT} words.",
        ))

    if body.images_missing_alt:
        issues.append(CheckIssue(
            field="images",
            severity="warning",
            message=f"{body.images_missing_alt} image(s) are missing alt text.",
        ))

    return IssueResult.from_issues(issues)
