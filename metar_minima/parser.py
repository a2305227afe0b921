"""METAR tokenizer and field decoders."""

import re
import logging
from typing import Optional, List, Tuple

from metar_minima.exceptions import MissingReportError
from metar_minima.models import DecodedReport, ReportType, Wind, Ceiling

logger = logging.getLogger(__name__)

_WIND_RE = re.compile(r'([0-9]{3}|VRB)([0-9]{2,3})(?:G([0-9]{2,3}))?KT')

# Plain ASCII digits, as accepted by int()
_DIGITS_RE = re.compile(r'[0-9]+')


def _is_number(text: str) -> bool:
    return _DIGITS_RE.fullmatch(text) is not None

_VISIBILITY_SUFFIX = "SM"

# Sky cover prefixes that constitute a ceiling
_CEILING_PREFIXES = ("BKN", "OVC", "VV")

# Significant weather codes, iterated in this order
WEATHER_CODES: List[Tuple[str, str]] = [
    ("TS", "thunderstorm"),
    ("RA", "rain"),
    ("DZ", "drizzle"),
    ("SN", "snow"),
    ("SG", "snow grains"),
    ("PL", "ice pellets"),
    ("FG", "fog"),
    ("BR", "mist"),
    ("HZ", "haze"),
    ("FU", "smoke"),
    ("SH", "showers"),
]


class MetarParser:
    """
    Decode METAR/SPECI reports into DecodedReport objects.

    Decoding is best-effort: each field decoder scans the whole token
    sequence independently, and a field with no matching token is left as
    None. Only a missing report (empty or blank text) is an error.

    Example:
        report = MetarParser.parse_metar(
            "KJFK 011651Z 18012G18KT 10SM BKN025 OVC035 18/12 A2992"
        )
        report.wind        # Wind(direction=180, speed=12, gust=18)
        report.ceiling     # Ceiling(height_ft=2500, layer='BKN')
    """

    @classmethod
    def parse_metar(cls, raw_text: str) -> DecodedReport:
        """
        Parse a METAR string.

        Args:
            raw_text: Raw report text, one observation (may include a
                "METAR" or "SPECI" prefix)

        Returns:
            DecodedReport

        Raises:
            MissingReportError: if raw_text is empty or blank
        """
        if raw_text is None or not raw_text.strip():
            raise MissingReportError("No report text supplied", details=raw_text)

        tokens = cls.tokenize(raw_text)
        report_type, tokens = cls._strip_report_type(tokens)

        return DecodedReport(
            raw_text=raw_text.strip(),
            station=tokens[0] if tokens else "",
            timestamp=cls.decode_timestamp(tokens),
            report_type=report_type,
            wind=cls.decode_wind(tokens),
            visibility_sm=cls.decode_visibility(tokens),
            ceiling=cls.decode_ceiling(tokens),
            weather=cls.decode_weather(tokens),
        )

    @staticmethod
    def tokenize(raw_text: str) -> List[str]:
        """Split a report on whitespace and upper-case every token."""
        return [token.upper() for token in raw_text.split()]

    @staticmethod
    def _strip_report_type(tokens: List[str]) -> Tuple[ReportType, List[str]]:
        """Drop a leading METAR/SPECI keyword (and COR) so the station is token 0."""
        report_type = ReportType.METAR
        if len(tokens) > 1 and tokens[0] in ("METAR", "SPECI"):
            report_type = ReportType(tokens[0])
            tokens = tokens[1:]
            if len(tokens) > 1 and tokens[0] == "COR":
                tokens = tokens[1:]
        return report_type, tokens

    # --- Field decoders ---

    @staticmethod
    def decode_timestamp(tokens: List[str]) -> Optional[str]:
        """Time group: token 1, at least 5 characters, ending in Z."""
        if len(tokens) > 1 and len(tokens[1]) >= 5 and tokens[1].endswith("Z"):
            return tokens[1]
        return None

    @staticmethod
    def decode_wind(tokens: List[str]) -> Optional[Wind]:
        """
        Decode the first wind group, e.g. "18012G18KT" or "VRB03KT".

        Returns:
            Wind, with direction None for variable wind, or None if no
            token matches.
        """
        for token in tokens:
            match = _WIND_RE.fullmatch(token)
            if not match:
                continue
            heading, speed, gust = match.groups()
            return Wind(
                direction=None if heading == "VRB" else int(heading),
                speed=int(speed),
                gust=int(gust) if gust else None,
            )
        return None

    @classmethod
    def decode_visibility(cls, tokens: List[str]) -> Optional[float]:
        """
        Decode prevailing visibility in statute miles.

        Handles "10SM", "1/2SM", "P6SM", "M1/4SM" and the two-token forms
        "1 1/2SM" and "10 SM", where a bare whole number precedes the token.

        Returns:
            Visibility in SM (strictly positive) or None
        """
        for index, token in enumerate(tokens):
            if not token.endswith(_VISIBILITY_SUFFIX):
                continue
            value_part = token[:-len(_VISIBILITY_SUFFIX)]
            value = cls._parse_distance(value_part) if value_part else 0.0
            if value is None:
                continue
            if index > 0 and _is_number(tokens[index - 1]):
                value += int(tokens[index - 1])
            if value > 0:
                return value
            logger.debug("Ignoring non-positive visibility token %s", token)
        return None

    @classmethod
    def _parse_distance(cls, text: str) -> Optional[float]:
        """Parse "10", "1/2", "M1/4" or "P6". Returns None if unparseable."""
        if text[:1] in ("M", "P"):
            text = text[1:]
        if _is_number(text):
            return float(text)
        if "/" in text:
            return cls._parse_simple_fraction(text)
        return None

    @staticmethod
    def _parse_simple_fraction(text: str) -> Optional[float]:
        """Parse a simple fraction like '1/2' or '3/4'."""
        parts = text.split("/")
        if len(parts) != 2 or not _is_number(parts[0]) or not _is_number(parts[1]):
            return None
        num = int(parts[0])
        den = int(parts[1])
        if den == 0:
            logger.debug("Ignoring visibility fraction with zero denominator: %s", text)
            return None
        return num / den

    @staticmethod
    def decode_ceiling(tokens: List[str]) -> Optional[Ceiling]:
        """
        Decode the ceiling: the lowest BKN, OVC or VV layer.

        Layer heights are three digits in hundreds of feet ("BKN025" is
        2500 ft). Tokens with a non-numeric height are skipped.
        """
        ceiling = None
        for token in tokens:
            prefix = next((p for p in _CEILING_PREFIXES if token.startswith(p)), None)
            if prefix is None:
                continue
            height_str = token[len(prefix):len(prefix) + 3]
            if not _is_number(height_str) or len(height_str) != 3:
                logger.debug("Skipping sky cover token without height: %s", token)
                continue
            height = int(height_str) * 100
            if ceiling is None or height < ceiling.height_ft:
                ceiling = Ceiling(height_ft=height, layer=prefix)
        return ceiling

    @staticmethod
    def decode_weather(tokens: List[str]) -> List[str]:
        """
        Decode significant weather labels.

        Every code in WEATHER_CODES found anywhere inside a token adds its
        label once, so "TSRA" yields both thunderstorm and rain.
        """
        found: List[str] = []
        for token in tokens:
            for code, label in WEATHER_CODES:
                if code in token and label not in found:
                    found.append(label)
        return found
