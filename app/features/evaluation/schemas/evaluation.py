"""
Evaluation Schemas

Records exchanged between the scan data source, the checks, the issue sink
and the API. Category records accept unknown keys so crawler output can grow
without breaking evaluation.
"""
import enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ScanConfig(BaseModel):
    """Identifies one evaluation run, or one URL within it when url_id is set."""
    model_config = ConfigDict(frozen=True)

    domain: str
    date_of_scan: str
    url_id: Optional[str] = None

    def for_url(self, url_id: str) -> "ScanConfig":
        return self.model_copy(update={"url_id": url_id})


# ── Scan data ───────────────────────────────────


class MetaData(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    description: Optional[str] = None
    canonical_url: Optional[str] = None
    robots: Optional[str] = None
    viewport: Optional[str] = None
    lang: Optional[str] = None


class BodyData(BaseModel):
    model_config = ConfigDict(extra="allow")

    h1: List[str] = Field(default_factory=list)
    h2: List[str] = Field(default_factory=list)
    word_count: int = 0
    images_missing_alt: int = 0
    internal_links: int = 0


class SocialData(BaseModel):
    model_config = ConfigDict(extra="allow")

    og_title: Optional[str] = None
    og_description: Optional[str] = None
    og_image: Optional[str] = None
    og_url: Optional[str] = None
    og_type: Optional[str] = None
    twitter_card: Optional[str] = None
    twitter_title: Optional[str] = None
    twitter_image: Optional[str] = None


class SchemaData(BaseModel):
    model_config = ConfigDict(extra="allow")

    json_ld: List[Dict[str, Any]] = Field(default_factory=list)
    microdata_types: List[str] = Field(default_factory=list)
    parse_errors: List[str] = Field(default_factory=list)


class UrlScanData(BaseModel):
    """Raw category data captured for one scanned URL."""
    model_config = ConfigDict(populate_by_name=True)

    meta: MetaData = Field(default_factory=MetaData)
    body: BodyData = Field(default_factory=BodyData)
    social: SocialData = Field(default_factory=SocialData)
    schema_data: SchemaData = Field(default_factory=SchemaData, alias="schema")


class DuplicateContext(BaseModel):
    """
    Normalised title/description values of every page in a scan, mapped to
    the url_ids that use them. Pages without a title share the "" key.
    """
    model_config = ConfigDict(frozen=True)

    titles: Dict[str, List[str]] = Field(default_factory=dict)
    descriptions: Dict[str, List[str]] = Field(default_factory=dict)

    @staticmethod
    def normalise(value: Optional[str]) -> str:
        return " ".join((value or "").split()).casefold()

    def is_duplicate_title(self, title: Optional[str]) -> bool:
        return len(self.titles.get(self.normalise(title), [])) > 1

    def is_duplicate_description(self, description: Optional[str]) -> bool:
        key = self.normalise(description)
        return bool(key) and len(self.descriptions.get(key, [])) > 1


# ── Issues ──────────────────────────────────────


class IssueStatus(str, enum.Enum):
    passed = "passed"
    failed = "failed"
    missing = "missing"
    duplicate = "duplicate"


class CheckIssue(BaseModel):
    """A single finding within a category"""
    field: str
    severity: Literal["error", "warning", "info"]
    message: str


class IssueResult(BaseModel):
    status: IssueStatus
    issues: List[CheckIssue] = Field(default_factory=list)

    @classmethod
    def from_issues(cls, issues: List[CheckIssue]) -> "IssueResult":
        return cls(status=IssueStatus.failed if issues else IssueStatus.passed, issues=issues)

    def count(self, severity: str) -> int:
        return sum(1 for issue in self.issues if issue.severity == severity)


class IssueBundle(BaseModel):
    """The four category outcomes for one scanned URL."""
    model_config = ConfigDict(populate_by_name=True)

    meta: IssueResult
    body: IssueResult
    social: IssueResult
    schema_data: IssueResult = Field(alias="schema")

    def results(self) -> Dict[str, IssueResult]:
        return {
            "meta": self.meta,
            "body": self.body,
            "social": self.social,
            "schema": self.schema_data,
        }


# ── Run report ──────────────────────────────────


class UrlFailure(BaseModel):
    url_id: str
    stage: Literal["check", "sink"]
    error: str
    categories: List[str] = Field(default_factory=list)


class EvaluationReport(BaseModel):
    domain: str
    date_of_scan: str
    total_urls: int = 0
    succeeded: List[str] = Field(default_factory=list)
    failed: List[UrlFailure] = Field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)


# ── API ─────────────────────────────────────────


class EvaluationRequest(BaseModel):
    domain: str = Field(..., min_length=1, description="Domain that was scanned")
    date_of_scan: str = Field(..., min_length=1, description="Identifier of the scan date")

    class Config:
        json_schema_extra = {
            "example": {
                "domain": "example.com",
                "date_of_scan": "2024-05-01",
            }
        }


class IssueDocument(BaseModel):
    """Stored issue bundle for one URL, as returned by the issues endpoint."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    url_id: str
    meta: Dict[str, Any]
    body: Dict[str, Any]
    social: Dict[str, Any]
    schema_data: Dict[str, Any] = Field(alias="schema")
    critical_issues_count: int = 0
    warning_issues_count: int = 0
