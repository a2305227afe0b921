"""Decoded report data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any

from metar_minima.exceptions import InvalidMinimaError


class ReportType(Enum):
    """Type of observation."""

    METAR = "METAR"
    SPECI = "SPECI"


@dataclass(frozen=True)
class Wind:
    """
    Observed surface wind.

    A wind with no direction is variable (VRB). Calm wind is reported as
    direction 0, speed 0 and is a valid observation, distinct from no wind
    group at all (which is modelled as ``DecodedReport.wind is None``).
    """

    direction: Optional[int]
    speed: int
    gust: Optional[int] = None

    @property
    def is_variable(self) -> bool:
        return self.direction is None

    @property
    def is_calm(self) -> bool:
        return self.speed == 0 and not self.gust


@dataclass(frozen=True)
class Ceiling:
    """Lowest broken, overcast or vertical visibility layer."""

    height_ft: int
    layer: str  # "BKN", "OVC" or "VV"


@dataclass
class DecodedReport:
    """
    One decoded METAR/SPECI observation.

    Every field except ``station`` is independently optional. ``None`` always
    means "not observed" and is never replaced by a default value.

    Attributes:
        raw_text: Original report text
        station: Station identifier (first positional token)
        timestamp: Raw time group, e.g. "011651Z"
        report_type: METAR or SPECI
        wind: Decoded wind group
        visibility_sm: Prevailing visibility in statute miles
        ceiling: Lowest BKN/OVC/VV layer
        weather: Plain-language phenomenon labels, deduplicated
    """

    raw_text: str
    station: str
    timestamp: Optional[str] = None
    report_type: ReportType = ReportType.METAR
    wind: Optional[Wind] = None
    visibility_sm: Optional[float] = None
    ceiling: Optional[Ceiling] = None
    weather: List[str] = field(default_factory=list)

    @property
    def ceiling_ft(self) -> Optional[int]:
        return self.ceiling.height_ft if self.ceiling else None

    @property
    def wind_direction(self) -> Optional[int]:
        return self.wind.direction if self.wind else None

    @classmethod
    def from_metar(cls, raw_text: str) -> 'DecodedReport':
        """
        Decode a raw METAR string.

        Args:
            raw_text: Raw report text

        Returns:
            DecodedReport
        """
        from metar_minima.parser import MetarParser
        return MetarParser.parse_metar(raw_text)

    def to_dict(self) -> dict:
        """Serialize to dictionary, without any display rounding."""
        wind = None
        if self.wind is not None:
            wind = {
                'dir': self.wind.direction,
                'spd': self.wind.speed,
                'gust': self.wind.gust,
            }
        return {
            'raw': self.raw_text,
            'station': self.station,
            'timestamp': self.timestamp,
            'report_type': self.report_type.value,
            'wind': wind,
            'visibility_sm': self.visibility_sm,
            'ceiling_ft': self.ceiling.height_ft if self.ceiling else None,
            'ceiling_layer': self.ceiling.layer if self.ceiling else None,
            'weather': list(self.weather),
        }

    def __repr__(self) -> str:
        stamp = f" {self.timestamp}" if self.timestamp else ""
        return f"DecodedReport({self.station}{stamp})"


@dataclass(frozen=True)
class Minima:
    """
    Pilot personal minima.

    Defaults: ceiling 1000 ft, visibility 3 SM, crosswind 15 kt.
    """

    min_ceiling_ft: float = 1000.0
    min_visibility_sm: float = 3.0
    max_crosswind_kt: float = 15.0

    def __post_init__(self):
        for name in ('min_ceiling_ft', 'min_visibility_sm', 'max_crosswind_kt'):
            value = getattr(self, name)
            if value < 0:
                raise InvalidMinimaError(f"{name} must not be negative, got {value}", details=name)


@dataclass(frozen=True)
class WindComponents:
    """
    Wind components relative to a runway.

    Positive headwind means wind is coming from ahead, negative is a tailwind.
    ``crosswind`` is the magnitude and ``crosswind_direction`` the side
    it comes from ("left", "right", or "" when there is none).
    """

    runway_heading: int
    headwind: float
    crosswind: float
    crosswind_direction: str = ""


class ViolationKind(Enum):
    """Which minimum was breached."""

    VISIBILITY = "visibility"
    CEILING = "ceiling"
    CROSSWIND = "crosswind"

    @property
    def alert(self) -> str:
        """Short alert text used in structured output."""
        if self is ViolationKind.CROSSWIND:
            return "exceeds minima"
        return "below minima"


@dataclass(frozen=True)
class Violation:
    """A single breached minimum, with the threshold and observed value."""

    kind: ViolationKind
    threshold: float
    observed: float


class TrendState(Enum):
    """Qualitative direction of change between two observations."""

    IMPROVING = "improving"
    WORSENING = "worsening"
    STEADY = "steady"


@dataclass(frozen=True)
class FieldTrend:
    """
    Change of one field between the oldest and latest report.

    ``state`` is None for fields without a better/worse polarity (wind
    direction), which report ``shift`` only.
    """

    first: float
    last: float
    state: Optional[TrendState] = None

    @property
    def shift(self) -> float:
        return self.last - self.first


@dataclass(frozen=True)
class TrendSummary:
    """
    Trend over an ordered sequence of reports (oldest first).

    A field is None when either endpoint did not observe it.
    """

    visibility: Optional[FieldTrend] = None
    ceiling: Optional[FieldTrend] = None
    wind_direction: Optional[FieldTrend] = None

    def fields(self) -> Dict[str, FieldTrend]:
        """Present fields keyed by their structured-output name."""
        result: Dict[str, FieldTrend] = {}
        if self.visibility is not None:
            result['visibility'] = self.visibility
        if self.ceiling is not None:
            result['ceiling'] = self.ceiling
        if self.wind_direction is not None:
            result['wind_dir'] = self.wind_direction
        return result

    def is_empty(self) -> bool:
        return not self.fields()

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for name, trend in self.fields().items():
            entry: Dict[str, Any] = {'from': trend.first, 'to': trend.last}
            if trend.state is not None:
                entry['state'] = trend.state.value
            else:
                entry['shift'] = trend.shift
            result[name] = entry
        return result
