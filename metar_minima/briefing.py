"""Decode, evaluate and summarize a batch of METARs into one briefing."""

import logging
from dataclasses import dataclass, field
from typing import Optional, List, Sequence

from metar_minima import config
from metar_minima.analysis import WeatherAnalyzer
from metar_minima.exceptions import MissingReportError
from metar_minima.models import (
    DecodedReport,
    Minima,
    TrendSummary,
    Violation,
    ViolationKind,
    WindComponents,
)
from metar_minima.parser import MetarParser

logger = logging.getLogger(__name__)


@dataclass
class ReportAnalysis:
    """A decoded report together with everything derived from it."""

    report: DecodedReport
    components: Optional[WindComponents] = None
    violations: List[Violation] = field(default_factory=list)

    def violation(self, kind: ViolationKind) -> Optional[Violation]:
        """Return the violation of the given kind, if any."""
        for v in self.violations:
            if v.kind is kind:
                return v
        return None


@dataclass
class MetarBriefing:
    """
    Analysed reports for one invocation, in the order supplied.

    Attributes:
        analyses: One ReportAnalysis per report, oldest first
        minima: Minima the reports were evaluated against
        runway_heading: Runway heading used for wind components (0 = unset)
        trend: Trend over all reports, None if fewer than two
        taf_raw: Optional forecast text, passed through unparsed
    """

    analyses: List[ReportAnalysis]
    minima: Minima
    runway_heading: int = 0
    trend: Optional[TrendSummary] = None
    taf_raw: Optional[str] = None

    @property
    def reports(self) -> List[DecodedReport]:
        return [a.report for a in self.analyses]


def analyze_report(
    report: DecodedReport,
    minima: Minima,
    runway_heading: int = 0,
) -> ReportAnalysis:
    """Compute wind components and minima violations for one report."""
    components = WeatherAnalyzer.wind_components(report.wind, runway_heading)
    return ReportAnalysis(
        report=report,
        components=components,
        violations=WeatherAnalyzer.evaluate_minima(report, components, minima),
    )


def build_briefing(
    raw_reports: Sequence[str],
    runway_heading: int = 0,
    minima: Optional[Minima] = None,
    taf_raw: Optional[str] = None,
) -> MetarBriefing:
    """
    Run the full decode/evaluate/summarize pipeline.

    Args:
        raw_reports: Raw METAR strings, oldest first
        runway_heading: Runway heading in degrees, 0 to skip wind components
        minima: Personal minima, defaults to config.default_minima()
        taf_raw: Optional forecast text re-emitted unchanged

    Returns:
        MetarBriefing

    Raises:
        MissingReportError: if no reports were supplied, or one is blank
    """
    if isinstance(raw_reports, str):
        raw_reports = [raw_reports]
    if not raw_reports:
        raise MissingReportError("No METAR reports supplied")
    for index, raw in enumerate(raw_reports):
        if raw is None or not raw.strip():
            raise MissingReportError(f"Report {index + 1} is empty", details=index)

    minima = minima or config.default_minima()
    runway_heading = runway_heading or 0

    analyses = []
    for raw in raw_reports:
        report = MetarParser.parse_metar(raw)
        logger.debug("Decoded %r: wind=%s vis=%s ceiling=%s", report, report.wind,
                     report.visibility_sm, report.ceiling)
        analyses.append(analyze_report(report, minima, runway_heading))

    return MetarBriefing(
        analyses=analyses,
        minima=minima,
        runway_heading=runway_heading,
        trend=WeatherAnalyzer.trend([a.report for a in analyses]),
        taf_raw=taf_raw or None,
    )
