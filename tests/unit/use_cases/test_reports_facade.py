"""Tests for ReportsFacade — pure in-memory, no infrastructure."""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from a11y_reports.domain.common.errors import StoreUnavailableError, ValidationError
from a11y_reports.domain.common.types import UNAVAILABLE
from a11y_reports.domain.reports.compliance import DISPLAY
from a11y_reports.domain.reports.models import ComplianceLevel, IssueAggregate, IssueFilter
from a11y_reports.use_cases.reports.facade import ReportsFacade

from tests.unit.use_cases.conftest import FakeIssueStore, make_row, rows_for

T0 = datetime(2026, 3, 1, 9, 0, 0)
T1 = datetime(2026, 3, 1, 17, 30, 0)
T2 = datetime(2026, 3, 4, 8, 15, 0)


class TestScoreAndCompliance:
    def test_unprovisioned_store(self):
        facade = ReportsFacade(FakeIssueStore(provisioned=False))
        assert facade.calculate_accessibility_score() is UNAVAILABLE
        assert facade.calculate_compliance_assessment() is None
        assert facade.get_issue_summary() == ()
        assert facade.get_last_scan_date() is None

    def test_empty_store(self, store):
        facade = ReportsFacade(store)
        assert facade.get_score() is UNAVAILABLE
        assert facade.get_compliance() is None
        assert facade.get_last_scan_date() is None

    def test_clean_scan_scores_100(self):
        store = FakeIssueStore([make_row(severity="high", fixed=True)])
        facade = ReportsFacade(store)
        assert facade.get_score() == 100
        assert facade.get_issue_summary() == ()
        assert facade.get_compliance().level == ComplianceLevel.EXCELLENT

    def test_weighted_score(self):
        store = FakeIssueStore(
            rows_for("critical", 1) + rows_for("high", 1) + rows_for("medium", 1) + rows_for("low", 1)
        )
        facade = ReportsFacade(store)
        assert facade.calculate_accessibility_score() == 81
        assert facade.calculate_compliance_assessment().level == ComplianceLevel.GOOD

    def test_aliases_match(self):
        facade = ReportsFacade(FakeIssueStore(rows_for("high", 3)))
        assert facade.get_score() == facade.calculate_accessibility_score() == 85
        assert facade.get_compliance() == facade.calculate_compliance_assessment()

    def test_explicit_table_overrides_default(self):
        facade = ReportsFacade(FakeIssueStore(rows_for("critical", 1)))  # score 90
        assert facade.get_compliance().level == ComplianceLevel.EXCELLENT
        assert facade.get_compliance(DISPLAY).level == ComplianceLevel.GOOD

    def test_default_table_injected(self):
        facade = ReportsFacade(FakeIssueStore(rows_for("critical", 1)), default_table=DISPLAY)
        assert facade.get_compliance().level == ComplianceLevel.GOOD

    def test_score_reflects_current_store_state(self):
        store = FakeIssueStore(rows_for("low", 1))
        facade = ReportsFacade(store)
        assert facade.get_score() == 99
        store.add(*rows_for("critical", 1))
        assert facade.get_score() == 89

    def test_store_failure_is_not_unavailable(self):
        facade = ReportsFacade(FakeIssueStore(rows_for("low", 1), failing=True))
        with pytest.raises(StoreUnavailableError):
            facade.get_score()
        with pytest.raises(StoreUnavailableError):
            facade.get_compliance()


class TestSummaryAndLastScan:
    def test_summary_groups_unresolved_by_type_and_severity(self):
        store = FakeIssueStore([
            make_row("missing-alt-text", "high"),
            make_row("missing-alt-text", "high"),
            make_row("missing-alt-text", "low"),
            make_row("empty-link", "critical"),
            make_row("empty-link", "critical", fixed=True),
        ])
        summary = ReportsFacade(store).get_issue_summary()
        assert set(summary) == {
            IssueAggregate("missing-alt-text", "high", 2),
            IssueAggregate("missing-alt-text", "low", 1),
            IssueAggregate("empty-link", "critical", 1),
        }

    def test_last_scan_date_includes_fixed_rows(self):
        store = FakeIssueStore([
            make_row(scan_date=T0),
            make_row(scan_date=T2, fixed=True),
            make_row(scan_date=T1),
        ])
        assert ReportsFacade(store).get_last_scan_date() == T2


class TestListings:
    def _store(self) -> FakeIssueStore:
        return FakeIssueStore([
            make_row("contrast", "low", scan_date=T0, page_url="https://example.com/about"),
            make_row("contrast", "critical", scan_date=T1, page_url="https://example.com/"),
            make_row("label", "high", scan_date=T2, fixed=True, wcag_criteria="1.3.1"),
            make_row("label", "medium", scan_date=T2, wcag_criteria="1.3.1"),
            make_row("alt", "odd", scan_date=T2, wcag_criteria="1.1.1"),
        ])

    def test_scan_results_newest_first(self):
        records = ReportsFacade(self._store()).get_scan_results(limit=3)
        assert len(records) == 3
        assert all(r.scan_date == T2 for r in records)

    def test_manual_issues_unresolved_severity_first(self):
        records = ReportsFacade(self._store()).get_detailed_manual_issues()
        assert [r.issue_severity for r in records] == ["critical", "medium", "low", "odd"]
        assert not any(r.fixed for r in records)

    def test_wcag_breakdown(self):
        breakdown = {b.criteria: b for b in ReportsFacade(self._store()).get_wcag_compliance_breakdown()}
        assert breakdown["1.3.1"].total == 2
        assert breakdown["1.3.1"].fixed_count == 1
        assert breakdown["1.3.1"].open_count == 1
        assert breakdown["uncategorized"].total == 2

    def test_scan_sessions_per_day(self):
        sessions = ReportsFacade(self._store()).get_scan_sessions()
        assert [s.session_date for s in sessions] == [date(2026, 3, 4), date(2026, 3, 1)]
        assert sessions[1].issue_count == 2
        assert sessions[1].start_time == T0
        assert sessions[1].end_time == T1

    def test_filtered_results(self):
        facade = ReportsFacade(self._store())
        assert len(facade.get_filtered_results(IssueFilter(issue_type="contrast"))) == 2
        assert len(facade.get_filtered_results(IssueFilter(page_url="/about"))) == 1
        assert len(facade.get_filtered_results(IssueFilter(fixed=True))) == 1
        assert len(facade.get_filtered_results()) == 5

    def test_listings_empty_when_unprovisioned(self):
        store = FakeIssueStore(provisioned=False)
        facade = ReportsFacade(store)
        assert facade.get_scan_results() == ()
        assert facade.get_detailed_manual_issues() == ()
        assert facade.get_wcag_compliance_breakdown() == ()
        assert facade.get_scan_sessions() == ()
        assert facade.get_filtered_results() == ()
        assert set(store.calls) == {"exists"}

    @pytest.mark.parametrize("limit", [0, -5, 1001])
    def test_limit_validated(self, store, limit):
        with pytest.raises(ValidationError):
            ReportsFacade(store).get_scan_results(limit=limit)


class TestBuildReport:
    def test_report_snapshot(self):
        store = FakeIssueStore(rows_for("critical", 1, scan_date=T1) + rows_for("low", 2, scan_date=T0))
        now = datetime(2026, 3, 5, tzinfo=timezone.utc)
        report = ReportsFacade(store).build_report(now=now)

        assert report.score == 88
        assert report.compliance.level == ComplianceLevel.GOOD
        assert report.display_compliance.level == ComplianceLevel.GOOD
        assert report.last_scan_date == T1
        assert report.unresolved_total == 3
        assert report.generated_at == now

    def test_report_before_first_scan(self, store):
        report = ReportsFacade(store).build_report()
        assert report.score is UNAVAILABLE
        assert report.compliance is None
        assert report.display_compliance is None
        assert report.unresolved_total == 0
        assert report.generated_at.tzinfo is not None

    def test_report_reads_summary_once(self):
        store = FakeIssueStore(rows_for("high", 3, scan_date=T2))
        report = ReportsFacade(store).build_report()

        assert report.score == 85
        assert report.unresolved_total == 3
        assert store.calls.count("unresolved_summary") == 1
        assert store.calls.count("exists") == 1

    def test_report_unprovisioned_store(self):
        store = FakeIssueStore(provisioned=False)
        report = ReportsFacade(store).build_report()
        assert report.score is UNAVAILABLE
        assert report.last_scan_date is None
        assert store.calls == ["exists"]

    def test_report_only_fixed_issues(self):
        store = FakeIssueStore([make_row(severity="critical", fixed=True, scan_date=T1)])
        report = ReportsFacade(store).build_report()
        assert report.score == 100
        assert report.unresolved_total == 0
        assert report.last_scan_date == T1
