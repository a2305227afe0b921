"""Weather analysis: wind components, minima checks and trends."""

from math import cos, sin, radians
from typing import Optional, List, Sequence

from metar_minima.models import (
    DecodedReport,
    FieldTrend,
    Minima,
    TrendState,
    TrendSummary,
    Violation,
    ViolationKind,
    Wind,
    WindComponents,
)

# Changes within this tolerance (in the field's own unit) are steady
TREND_TOLERANCE = 0.05


class WeatherAnalyzer:
    """
    Aviation weather analysis functions.

    All methods are static - pure functions with no state.
    """

    @staticmethod
    def wind_components(
        wind: Optional[Wind],
        runway_heading: Optional[int],
    ) -> Optional[WindComponents]:
        """
        Calculate headwind and crosswind for a runway.

        Only the sustained speed is projected; gusts are informational.

        Args:
            wind: Decoded wind
            runway_heading: Runway heading in degrees, 0 or None meaning unset

        Returns:
            WindComponents, or None when there is no wind, the wind is
            variable, or the runway heading is unset
        """
        if wind is None or wind.direction is None or not runway_heading:
            return None

        headwind, crosswind = _compute_components(wind.direction, runway_heading, wind.speed)

        xwind_dir = ""
        if round(crosswind, 9) > 0:
            relative = (wind.direction - runway_heading) % 360
            xwind_dir = "left" if relative > 180 else "right"

        return WindComponents(
            runway_heading=runway_heading,
            headwind=headwind,
            crosswind=crosswind,
            crosswind_direction=xwind_dir,
        )

    @staticmethod
    def evaluate_minima(
        report: DecodedReport,
        components: Optional[WindComponents],
        minima: Minima,
    ) -> List[Violation]:
        """
        Compare a report against personal minima.

        A field that was not observed (or crosswind that could not be
        computed) never produces a violation.

        Returns:
            Violations in visibility, ceiling, crosswind order
        """
        violations = []

        if report.visibility_sm is not None and report.visibility_sm < minima.min_visibility_sm:
            violations.append(Violation(
                kind=ViolationKind.VISIBILITY,
                threshold=minima.min_visibility_sm,
                observed=report.visibility_sm,
            ))

        if report.ceiling is not None and report.ceiling.height_ft < minima.min_ceiling_ft:
            violations.append(Violation(
                kind=ViolationKind.CEILING,
                threshold=minima.min_ceiling_ft,
                observed=report.ceiling.height_ft,
            ))

        if components is not None and abs(components.crosswind) > minima.max_crosswind_kt:
            violations.append(Violation(
                kind=ViolationKind.CROSSWIND,
                threshold=minima.max_crosswind_kt,
                observed=abs(components.crosswind),
            ))

        return violations

    @staticmethod
    def trend(reports: Sequence[DecodedReport]) -> Optional[TrendSummary]:
        """
        Summarize the change between the oldest and latest report.

        The sequence is trusted to be ordered oldest first and is not
        re-sorted. Fields missing at either end are left out.

        Args:
            reports: Decoded reports for one station, oldest first

        Returns:
            TrendSummary, or None for fewer than two reports
        """
        if len(reports) < 2:
            return None

        first = reports[0]
        last = reports[-1]

        visibility = None
        if first.visibility_sm is not None and last.visibility_sm is not None:
            visibility = FieldTrend(
                first=first.visibility_sm,
                last=last.visibility_sm,
                state=_trend_state(last.visibility_sm - first.visibility_sm),
            )

        ceiling = None
        if first.ceiling is not None and last.ceiling is not None:
            ceiling = FieldTrend(
                first=first.ceiling.height_ft,
                last=last.ceiling.height_ft,
                state=_trend_state(last.ceiling.height_ft - first.ceiling.height_ft),
            )

        wind_direction = None
        if first.wind_direction is not None and last.wind_direction is not None:
            wind_direction = FieldTrend(first=first.wind_direction, last=last.wind_direction)

        return TrendSummary(
            visibility=visibility,
            ceiling=ceiling,
            wind_direction=wind_direction,
        )


# --- Module-level helpers (pure functions) ---

def _compute_components(
    wind_dir: int,
    runway_heading: int,
    speed: float,
) -> tuple:
    """
    Compute headwind and crosswind components.

    Returns:
        (headwind, crosswind) where positive headwind = from ahead and
        crosswind is the non-negative magnitude.
    """
    angle = abs(wind_dir - runway_heading)
    if angle > 180:
        angle = 360 - angle
    headwind = speed * cos(radians(angle))
    crosswind = speed * sin(radians(angle))
    return headwind, crosswind


def _trend_state(delta: float) -> TrendState:
    if delta > TREND_TOLERANCE:
        return TrendState.IMPROVING
    if delta < -TREND_TOLERANCE:
        return TrendState.WORSENING
    return TrendState.STEADY
