from typing import List

from app.features.evaluation.schemas.evaluation import (
    CheckIssue,
    IssueResult,
    IssueStatus,
    SchemaData,
)


def check_schema_data(schema: SchemaData) -> IssueResult:
    """Evaluate structured data (JSON-LD and microdata) of a page."""
    if not schema.json_ld and not schema.microdata_types and not schema.parse_errors:
        return IssueResult(
            status=IssueStatus.missing,
            issues=[CheckIssue(
                field="structured_data",
                severity="info",
                message="No structured data found on the page.",
            )],
        )

    issues: List[CheckIssue] = []

    for index, block in enumerate(schema.json_ld):
        if not block.get("@type"):
            issues.append(CheckIssue(
                field=f"json_ld[{index}]",
                severity="error",
                message="JSON-LD block has no @type.",
            ))

    for error in schema.parse_errors:
        issues.append(CheckIssue(
            field="json_ld",
            severity="error",
            message=f"Structured data could not be parsed: {error}",
        ))

    return IssueResult.from_issues(issues)
