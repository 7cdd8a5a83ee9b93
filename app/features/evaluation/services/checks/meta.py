from typing import List

from app.features.evaluation.schemas.evaluation import (
    CheckIssue,
    DuplicateContext,
    IssueResult,
    IssueStatus,
    MetaData,
)

TITLE_MIN_LENGTH = 30
TITLE_MAX_LENGTH = 70
DESCRIPTION_MIN_LENGTH = 120
DESCRIPTION_MAX_LENGTH = 160


def check_meta_data(meta: MetaData, duplicates: DuplicateContext) -> IssueResult:
    """
    Evaluate title, description and head tags of a page.

    A page whose title or description is shared with another page of the
    same scan is reported as a duplicate and no other check runs. Several
    untitled pages count as sharing the empty title.
    """
    title = (meta.title or "").strip()
    description = (meta.description or "").strip()

    duplicate_issues: List[CheckIssue] = []
    if duplicates.is_duplicate_title(title):
        duplicate_issues.append(CheckIssue(
            field="title",
            severity="error",
            message=(
                "Title is used by more than one page of this site."
                if title else "Title is missing on more than one page of this site."
            ),
        ))
    if duplicates.is_duplicate_description(description):
        duplicate_issues.append(CheckIssue(
            field="description",
            severity="error",
            message="Meta description is used by more than one page of this site.",
        ))
    if duplicate_issues:
        return IssueResult(status=IssueStatus.duplicate, issues=duplicate_issues)

    if not title:
        return IssueResult(
            status=IssueStatus.missing,
            issues=[CheckIssue(
                field="title",
                severity="error",
                message="Page title is missing. Every page should have a <title> tag.",
            )],
        )

    issues: List[CheckIssue] = []

    if len(title) < TITLE_MIN_LENGTH:
        issues.append(CheckIssue(
            field="title",
            severity="warning",
            message=f"Title is too short ({len(title)} chars). Recommended: {TITLE_MIN_LENGTH}-{TITLE_MAX_LENGTH} characters for optimal SEO.",
        ))
    elif len(title) > TITLE_MAX_LENGTH:
        issues.append(CheckIssue(
            field="title",
            severity="warning",
            message=f"Title is too long ({len(title)} chars). Recommended: {TITLE_MIN_LENGTH}-{TITLE_MAX_LENGTH} characters. Long titles may be truncated in search results.",
        ))

    if not description:
        issues.append(CheckIssue(
            field="description",
            severity="error",
            message="Meta description is missing. Search engines will generate their own snippet.",
        ))
    elif len(description) < DESCRIPTION_MIN_LENGTH:
        issues.append(CheckIssue(
            field="description",
            severity="warning",
            message=f"Description is too short ({len(description)} chars). Recommended: {DESCRIPTION_MIN_LENGTH}-{DESCRIPTION_MAX_LENGTH} characters for optimal display in search results.",
        ))
    elif len(description) > DESCRIPTION_MAX_LENGTH:
        issues.append(CheckIssue(
            field="description",
            severity="warning",
            message=f"Description is too long ({len(description)} chars). Recommended: {DESCRIPTION_MIN_LENGTH}-{DESCRIPTION_MAX_LENGTH} characters. Long descriptions may be truncated in search results.",
        ))

    if not meta.canonical_url:
        issues.append(CheckIssue(
            field="canonical_url",
            severity="info",
            message="No canonical URL declared.",
        ))

    if not meta.viewport:
        issues.append(CheckIssue(
            field="viewport",
            severity="warning",
            message="No viewport meta tag. The page may not render well on mobile devices.",
        ))

    return IssueResult.from_issues(issues)
