"""Pydantic schemas for Reports API endpoints"""
from datetime import date, datetime
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field


class ScoreResponse(BaseModel):
    """Current accessibility score"""

    score: Union[int, Literal["unavailable"]] = Field(
        ..., description="0-100, or 'unavailable' when no scan has run"
    )
    available: bool = Field(..., description="False until the first scan is recorded")


class ComplianceResponse(BaseModel):
    """Compliance tier derived from the score"""

    level: str = Field(..., description="excellent, good, needs-work, needs-improvement, poor")
    label: str
    description: str


class IssueAggregateResponse(BaseModel):
    issue_type: str
    issue_severity: str
    count: int = Field(..., ge=1)


class LastScanResponse(BaseModel):
    last_scan_date: Optional[datetime] = None


class ScoreReportResponse(BaseModel):
    """Snapshot of score, both compliance views and scan metadata"""

    score: Union[int, Literal["unavailable"]]
    compliance: Optional[ComplianceResponse] = None
    display_compliance: Optional[ComplianceResponse] = None
    last_scan_date: Optional[datetime] = None
    unresolved_total: int
    generated_at: datetime
    cached: bool = Field(False, description="Served from the snapshot cache")


class IssueRecordResponse(BaseModel):
    id: int
    page_url: str
    issue_type: str
    issue_severity: str
    issue_description: Optional[str] = None
    element_selector: Optional[str] = None
    wcag_criteria: Optional[str] = None
    fixed: bool
    scan_date: Optional[datetime] = None
    session_id: Optional[str] = None


class IssueListResponse(BaseModel):
    issues: List[IssueRecordResponse]
    total: int


class WcagBreakdownResponse(BaseModel):
    criteria: str
    total: int
    fixed_count: int
    open_count: int


class ScanSessionResponse(BaseModel):
    session_date: date
    issue_count: int
    start_time: datetime
    end_time: datetime
