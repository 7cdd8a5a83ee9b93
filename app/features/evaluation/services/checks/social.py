from typing import List

from app.features.evaluation.schemas.evaluation import (
    CheckIssue,
    IssueResult,
    IssueStatus,
    SocialData,
)

OPEN_GRAPH_FIELDS = ("og_title", "og_description", "og_image", "og_url")


def check_social_data(social: SocialData) -> IssueResult:
    """Evaluate Open Graph and Twitter card tags used for link previews."""
    present = [name for name in OPEN_GRAPH_FIELDS if getattr(social, name)]

    if not present and not social.og_type:
        return IssueResult(
            status=IssueStatus.missing,
            issues=[CheckIssue(
                field="open_graph",
                severity="warning",
                message="No Open Graph tags found. Shared links will have no preview.",
            )],
        )

    issues: List[CheckIssue] = [
        CheckIssue(
            field=name,
            severity="warning",
            message=f"Open Graph tag og:{name[3:]} is missing.",
        )
        for name in OPEN_GRAPH_FIELDS
        if name not in present
    ]

    if not social.twitter_card:
        issues.append(CheckIssue(
            field="twitter_card",
            severity="info",
            message="No twitter:card tag found.",
        ))

    return IssueResult.from_issues(issues)
