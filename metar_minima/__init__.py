"""
METAR decoding and personal minima checks.

Provides:
- MetarParser: Tokenize and decode raw METAR text
- DecodedReport: Decoded station, time, wind, visibility, ceiling, weather
- WeatherAnalyzer: Wind components, minima violations, trends
- build_briefing: Full pipeline over an ordered list of reports
- TextRenderer / JsonRenderer: Human and machine output

Example:
    from metar_minima import build_briefing, render

    briefing = build_briefing(
        ["KJFK 011651Z 18012G18KT 10SM BKN025 OVC035 18/12 A2992"],
        runway_heading=220,
    )
    print(render(briefing, "text"))
"""

from metar_minima.models import (
    Ceiling,
    DecodedReport,
    FieldTrend,
    Minima,
    ReportType,
    TrendState,
    TrendSummary,
    Violation,
    ViolationKind,
    Wind,
    WindComponents,
)
from metar_minima.exceptions import MetarMinimaError, MissingReportError, InvalidMinimaError
from metar_minima.parser import MetarParser
from metar_minima.analysis import WeatherAnalyzer
from metar_minima.briefing import MetarBriefing, ReportAnalysis, analyze_report, build_briefing
from metar_minima.render import TextRenderer, JsonRenderer, render

__version__ = '0.1.0'
__all__ = [
    'Ceiling',
    'DecodedReport',
    'FieldTrend',
    'Minima',
    'ReportType',
    'TrendState',
    'TrendSummary',
    'Violation',
    'ViolationKind',
    'Wind',
    'WindComponents',
    'MetarMinimaError',
    'MissingReportError',
    'InvalidMinimaError',
    'MetarParser',
    'WeatherAnalyzer',
    'MetarBriefing',
    'ReportAnalysis',
    'analyze_report',
    'build_briefing',
    'TextRenderer',
    'JsonRenderer',
    'render',
]
