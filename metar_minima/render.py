"""
Human-readable and JSON renderers for a MetarBriefing.

Both renderers read the same MetarBriefing and never recompute decoded
fields. Rounding to one decimal place happens here and only here.
"""

import json
from typing import Any, Dict, Optional

from metar_minima.briefing import MetarBriefing, ReportAnalysis
from metar_minima.models import TrendSummary, ViolationKind


def _fmt(value: float) -> str:
    return f"{value:.1f}"


def _round(value: Optional[float]) -> Optional[float]:
    return round(float(value), 1) if value is not None else None


class TextRenderer:
    """Render a briefing as labelled text blocks."""

    def render(self, briefing: MetarBriefing) -> str:
        blocks = [
            self._render_report(index, analysis, briefing)
            for index, analysis in enumerate(briefing.analyses, start=1)
        ]
        text = "\n\n".join(blocks)

        if briefing.taf_raw:
            text += f"\n\n=== TAF (raw) ===\n{briefing.taf_raw}"

        if briefing.trend is not None:
            text += "\n\n" + self._render_trend(briefing.trend)

        return text + "\n"

    def _render_report(self, index: int, analysis: ReportAnalysis, briefing: MetarBriefing) -> str:
        report = analysis.report
        minima = briefing.minima

        lines = [f"=== METAR {index} ===", report.raw_text]
        if not briefing.runway_heading:
            lines.append("(Tip: set a runway heading to compute crosswind)")

        station = report.station or "N/A"
        if report.timestamp:
            station += f" @ {report.timestamp}"
        lines.append(f"Station: {station}")

        lines.append("- Wind: " + self._wind_line(analysis, minima.max_crosswind_kt))

        if report.visibility_sm is not None:
            vis = f"{_fmt(report.visibility_sm)} SM"
            if analysis.violation(ViolationKind.VISIBILITY):
                vis += f" (BELOW {_fmt(minima.min_visibility_sm)} SM)"
            else:
                vis += f" (OK >= {_fmt(minima.min_visibility_sm)} SM)"
            lines.append(f"- Visibility: {vis}")
        else:
            lines.append("- Visibility: N/A")

        if report.ceiling is not None:
            ceiling = f"{report.ceiling.height_ft} ft {report.ceiling.layer}"
            if analysis.violation(ViolationKind.CEILING):
                ceiling += f" (BELOW {minima.min_ceiling_ft:.0f} ft)"
            else:
                ceiling += f" (OK >= {minima.min_ceiling_ft:.0f} ft)"
            lines.append(f"- Ceiling: {ceiling}")
        else:
            lines.append("- Ceiling: No ceiling reported")

        if report.weather:
            lines.append("- Weather: " + ", ".join(report.weather))
        else:
            lines.append("- Weather: None significant")

        return "\n".join(lines)

    @staticmethod
    def _wind_line(analysis: ReportAnalysis, max_crosswind_kt: float) -> str:
        wind = analysis.report.wind
        if wind is None:
            return "N/A"

        gust = f" G{wind.gust}" if wind.gust is not None else ""
        if wind.direction is None:
            return f"VRB {wind.speed}kt{gust} (variable direction)"

        line = f"{wind.direction:03d}@{wind.speed}kt{gust}"
        comps = analysis.components
        if comps is None:
            return line + " | no runway heading, components not computed"

        side = f" from {comps.crosswind_direction}" if comps.crosswind_direction else ""
        line += f" | headwind {_fmt(comps.headwind)} kt, crosswind {_fmt(abs(comps.crosswind))} kt{side}"
        if analysis.violation(ViolationKind.CROSSWIND):
            line += f" (EXCEEDS {_fmt(max_crosswind_kt)} kt)"
        else:
            line += f" (OK <= {_fmt(max_crosswind_kt)} kt)"
        return line

    @staticmethod
    def _render_trend(trend: TrendSummary) -> str:
        lines = ["=== Trend (oldest -> latest) ==="]
        if trend.visibility is not None:
            v = trend.visibility
            lines.append(
                f"- Visibility: {v.state.value} ({_fmt(v.first)} -> {_fmt(v.last)} SM)"
            )
        if trend.ceiling is not None:
            c = trend.ceiling
            lines.append(
                f"- Ceiling: {c.state.value} ({c.first:.0f} -> {c.last:.0f} ft)"
            )
        if trend.wind_direction is not None:
            w = trend.wind_direction
            line = f"- Wind: {w.first:.0f} -> {w.last:.0f} deg"
            if w.shift:
                line += f" (shift {w.shift:+.0f} deg)"
            lines.append(line)
        if trend.is_empty():
            lines.append("- No field observed in both the oldest and latest report")
        return "\n".join(lines)


class JsonRenderer:
    """Render a briefing as a JSON document."""

    def __init__(self, indent: Optional[int] = 2):
        self.indent = indent

    def render(self, briefing: MetarBriefing) -> str:
        return json.dumps(self.to_dict(briefing), indent=self.indent)

    def to_dict(self, briefing: MetarBriefing) -> Dict[str, Any]:
        """Build the structured document with display rounding applied."""
        document: Dict[str, Any] = {
            'metars': [self._report_dict(a) for a in briefing.analyses],
            'trend': self._trend_dict(briefing.trend),
        }
        if briefing.taf_raw:
            document['taf_raw'] = briefing.taf_raw
        return document

    @staticmethod
    def _report_dict(analysis: ReportAnalysis) -> Dict[str, Any]:
        data = analysis.report.to_dict()
        data.pop('report_type')

        if data['wind'] is not None and analysis.components is not None:
            data['wind']['headwind'] = _round(analysis.components.headwind)
            data['wind']['crosswind'] = _round(analysis.components.crosswind)
        data['visibility_sm'] = _round(data['visibility_sm'])
        data['alerts'] = {v.kind.value: v.kind.alert for v in analysis.violations}
        return data

    @staticmethod
    def _trend_dict(trend: Optional[TrendSummary]) -> Optional[Dict[str, Any]]:
        if trend is None:
            return None
        result = trend.to_dict()
        for name, entry in result.items():
            if name == 'visibility':
                entry['from'] = _round(entry['from'])
                entry['to'] = _round(entry['to'])
        return result


RENDERERS = {
    'text': TextRenderer,
    'json': JsonRenderer,
}


def render(briefing: MetarBriefing, output_format: str = 'text') -> str:
    """
    Render a briefing in the requested format.

    Args:
        briefing: Analysed reports
        output_format: "text" or "json" (case-insensitive)

    Raises:
        ValueError: for an unknown format
    """
    try:
        renderer_cls = RENDERERS[output_format.lower()]
    except KeyError:
        raise ValueError(f"Unknown output format: {output_format}") from None
    return renderer_cls().render(briefing)
