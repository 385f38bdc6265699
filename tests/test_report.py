"""Tests for markdown rendering of timeline analyses."""

from datetime import date
from pathlib import Path

from conftest import AS_OF, make_entry
from verifyzen.config import ReportConfig
from verifyzen.core.models import TimelineAnalysis
from verifyzen.core.timeline import analyze_timeline
from verifyzen.output.text_report import TimelineReportGenerator, generate_timeline_report


class TestTimelineReport:
    """Section layout and formatting."""

    def test_gap_report(self, career_gap_entries) -> None:
        analysis = analyze_timeline(career_gap_entries, as_of=AS_OF)

        assert generate_timeline_report(analysis) == (
            "# Timeline Analysis Report\n"
            "\n"
            "**Risk Score:** 15/100\n"
            "\n"
            "## Red Flags\n"
            "- Found 1 significant timeline gap(s)\n"
            "\n"
            "## Timeline Gaps\n"
            "1. Gap of 243 days (high severity)\n"
            "   From 2018-12-01 to 2019-08-01\n"
            "\n"
        )

    def test_overlap_report(self, overlapping_entries) -> None:
        analysis = analyze_timeline(overlapping_entries, as_of=AS_OF)
        report = generate_timeline_report(analysis)

        assert "**Risk Score:** 25/100" in report
        assert "- Found 1 suspicious overlapping position(s)\n" in report
        assert (
            "## Overlapping Positions\n"
            "1. Engineer at Acme overlaps with\n"
            "   Consultant at Globex\n"
            "   Overlap: 92 days (high severity)\n"
            "\n"
        ) in report
        assert "## Timeline Gaps" not in report

    def test_section_order(self, career_gap_entries, overlapping_entries) -> None:
        analysis = analyze_timeline(career_gap_entries + overlapping_entries, as_of=AS_OF)
        report = generate_timeline_report(analysis)

        positions = [
            report.index("**Risk Score:**"),
            report.index("## Red Flags"),
            report.index("## Timeline Gaps"),
            report.index("## Overlapping Positions"),
        ]
        assert positions == sorted(positions)

    def test_low_gaps_are_listed_without_flags(self) -> None:
        entries = [
            make_entry("a", date(2020, 1, 1), date(2020, 3, 1)),
            make_entry("b", date(2020, 3, 31), date(2020, 12, 1)),
        ]
        report = generate_timeline_report(analyze_timeline(entries, as_of=AS_OF))

        assert "## Red Flags" not in report
        assert "1. Gap of 30 days (low severity)" in report
        assert "## No Issues Found" not in report

    def test_no_issues(self) -> None:
        report = generate_timeline_report(TimelineAnalysis(evaluated_on=AS_OF))

        assert report == (
            "# Timeline Analysis Report\n"
            "\n"
            "**Risk Score:** 0/100\n"
            "\n"
            "## No Issues Found\n"
            "The timeline appears consistent with no significant gaps or overlaps.\n"
        )

    def test_rendering_is_repeatable(self, career_gap_entries, overlapping_entries) -> None:
        analysis = analyze_timeline(career_gap_entries + overlapping_entries, as_of=AS_OF)
        generator = TimelineReportGenerator()

        assert generator.generate(analysis) == generator.generate(analysis)
        assert generator.generate(analysis) == generate_timeline_report(analysis)


class TestReportConfig:
    """Configurable title and sections."""

    def test_custom_title(self, career_gap_entries) -> None:
        analysis = analyze_timeline(career_gap_entries, as_of=AS_OF)
        report = generate_timeline_report(analysis, ReportConfig(title="Candidate 42"))
        assert report.startswith("# Candidate 42\n\n**Risk Score:** 15/100")

    def test_hidden_sections(self, career_gap_entries) -> None:
        analysis = analyze_timeline(career_gap_entries, as_of=AS_OF)
        config = ReportConfig(include_gaps=False, include_flags=False)
        report = generate_timeline_report(analysis, config)

        assert "## Timeline Gaps" not in report
        assert "## Red Flags" not in report
        assert "## No Issues Found" not in report

    def test_write_to_file(self, tmp_path: Path, career_gap_entries) -> None:
        analysis = analyze_timeline(career_gap_entries, as_of=AS_OF)
        output = tmp_path / "reports" / "timeline.md"

        text = TimelineReportGenerator().generate(analysis, output_path=output)

        assert output.read_text(encoding="utf-8") == text
