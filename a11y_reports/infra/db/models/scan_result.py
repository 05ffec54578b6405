"""Accessibility scan result model (one row per detected issue).

The scanner owns writes to this table; this service only reads it.
"""
from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, Text
from sqlalchemy.sql import func

from a11y_reports.database import Base

SCAN_RESULTS_TABLE = "accessibility_scan_results"


class ScanResultRecord(Base):
    """A single accessibility issue found on a page"""

    __tablename__ = SCAN_RESULTS_TABLE

    id = Column(Integer, primary_key=True, index=True)
    page_url = Column(String(500), nullable=False, default="")
    issue_type = Column(String(100), nullable=False, default="")  # e.g., "missing-alt-text"
    issue_severity = Column(String(50), nullable=False, default="medium")  # critical, high, medium, low
    issue_description = Column(Text)
    element_selector = Column(Text)

    # WCAG mapping
    wcag_criteria = Column(String(50), default="")  # e.g., "1.1.1"
    wcag_reference = Column(String(50), default="")
    wcag_level = Column(String(10), default="")  # A, AA, AAA
    wcag_criterion = Column(String(50), default="")

    auto_fixable = Column(Boolean, default=False)
    page_type = Column(String(50), default="")
    scan_session_id = Column(String(100), default="")
    session_id = Column(String(100), default="")
    compliance_impact = Column(String(50), default="")
    confidence_level = Column(String(20), default="")

    fixed = Column(Boolean, nullable=False, default=False)
    scan_date = Column(DateTime, server_default=func.now())

    __table_args__ = (
        Index("idx_scan_results_page_url", "page_url"),
        Index("idx_scan_results_issue_type", "issue_type"),
        Index("idx_scan_results_issue_severity", "issue_severity"),
        Index("idx_scan_results_scan_date", "scan_date"),
        Index("idx_scan_results_session_id", "session_id"),
    )

    def __repr__(self):
        return (
            f"<ScanResultRecord(id={self.id}, type='{self.issue_type}', "
            f"severity='{self.issue_severity}', fixed={self.fixed})>"
        )
