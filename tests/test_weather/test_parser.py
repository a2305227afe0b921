"""Tests for the METAR tokenizer and field decoders."""

import pytest

from metar_minima.exceptions import MissingReportError
from metar_minima.models import ReportType, Wind, Ceiling
from metar_minima.parser import MetarParser


class TestTokenize:
    """Test report tokenization."""

    def test_splits_and_uppercases(self):
        assert MetarParser.tokenize("kjfk 011651z  18012kt\t10sm") == [
            "KJFK", "011651Z", "18012KT", "10SM",
        ]

    def test_no_empty_tokens(self):
        tokens = MetarParser.tokenize("  KJFK   011651Z   ")
        assert tokens == ["KJFK", "011651Z"]
        assert all(tokens)


class TestParseMetar:
    """Test full report decoding."""

    def test_basic_metar(self, kjfk_raw):
        report = MetarParser.parse_metar(kjfk_raw)

        assert report.station == "KJFK"
        assert report.timestamp == "011651Z"
        assert report.report_type == ReportType.METAR
        assert report.wind == Wind(direction=180, speed=12, gust=18)
        assert report.visibility_sm == 10.0
        assert report.ceiling == Ceiling(height_ft=2500, layer="BKN")
        assert report.weather == []
        assert report.raw_text == kjfk_raw

    def test_lowercase_report(self):
        report = MetarParser.parse_metar("kjfk 011651z 18012kt 10sm ovc008")

        assert report.station == "KJFK"
        assert report.timestamp == "011651Z"
        assert report.wind == Wind(direction=180, speed=12)
        assert report.ceiling_ft == 800

    def test_metar_prefix_skipped(self):
        report = MetarParser.parse_metar("METAR KJFK 011651Z 18012KT 10SM")
        assert report.station == "KJFK"
        assert report.timestamp == "011651Z"

    def test_speci_cor_prefix(self):
        report = MetarParser.parse_metar("SPECI COR KJFK 011705Z 18012KT 2SM")
        assert report.report_type == ReportType.SPECI
        assert report.station == "KJFK"
        assert report.timestamp == "011705Z"

    def test_station_only(self):
        report = MetarParser.parse_metar("KJFK")

        assert report.station == "KJFK"
        assert report.timestamp is None
        assert report.wind is None
        assert report.visibility_sm is None
        assert report.ceiling is None
        assert report.weather == []

    def test_garbage_is_partial_not_error(self):
        report = MetarParser.parse_metar("GARBAGE NOT A METAR")
        assert report.station == "GARBAGE"
        assert report.timestamp is None
        assert report.wind is None

    @pytest.mark.parametrize("raw", [
        "KJFK 011651Z 18012KT BKN²²²",
        "KJFK 011651Z 18012KT ²SM",
        "KJFK 011651Z 18012KT 1/²SM",
        "KJFK 011651Z ²²²12KT",
    ])
    def test_non_ascii_digits_leave_field_absent(self, raw):
        report = MetarParser.parse_metar(raw)
        assert report.visibility_sm is None
        assert report.ceiling is None

    def test_non_ascii_whole_number_before_fraction(self):
        report = MetarParser.parse_metar("KJFK 011651Z 18012KT ² 1/2SM")
        assert report.visibility_sm == 0.5

    def test_empty_string_raises(self):
        with pytest.raises(MissingReportError):
            MetarParser.parse_metar("")

    def test_blank_string_raises(self):
        with pytest.raises(MissingReportError):
            MetarParser.parse_metar("   \t ")

    def test_from_metar_classmethod(self, kjfk_raw):
        from metar_minima.models import DecodedReport
        report = DecodedReport.from_metar(kjfk_raw)
        assert report.wind.direction == 180


class TestDecodeTimestamp:
    """Test the positional time group."""

    def test_short_token_rejected(self):
        assert MetarParser.decode_timestamp(["KJFK", "51Z"]) is None

    def test_missing_zulu_rejected(self):
        assert MetarParser.decode_timestamp(["KJFK", "011651"]) is None

    def test_five_characters_accepted(self):
        assert MetarParser.decode_timestamp(["KJFK", "1651Z"]) == "1651Z"

    def test_only_token_one(self):
        assert MetarParser.decode_timestamp(["KJFK", "AUTO", "011651Z"]) is None


class TestDecodeWind:
    """Test the wind decoder."""

    @pytest.mark.parametrize("direction,speed", [(0, 5), (90, 12), (275, 8), (360, 45), (180, 105)])
    def test_numeric_payload_preserved(self, direction, speed):
        token = f"{direction:03d}{speed:02d}KT"
        wind = MetarParser.decode_wind([token])
        assert wind.direction == direction
        assert wind.speed == speed
        assert wind.gust is None

    def test_gust(self):
        assert MetarParser.decode_wind(["27015G25KT"]) == Wind(270, 15, 25)

    def test_three_digit_gust(self):
        assert MetarParser.decode_wind(["27065G105KT"]) == Wind(270, 65, 105)

    def test_variable(self):
        wind = MetarParser.decode_wind(["VRB03KT"])
        assert wind.direction is None
        assert wind.is_variable
        assert wind.speed == 3

    def test_calm_is_observed(self):
        wind = MetarParser.decode_wind(["00000KT"])
        assert wind is not None
        assert wind.speed == 0
        assert wind.is_calm

    def test_first_match_wins(self):
        assert MetarParser.decode_wind(["18010KT", "27020KT"]).direction == 180

    def test_other_units_not_decoded(self):
        assert MetarParser.decode_wind(["18005MPS"]) is None

    def test_absent(self):
        assert MetarParser.decode_wind(["KJFK", "011651Z", "10SM"]) is None


class TestDecodeVisibility:
    """Test the statute mile visibility decoder."""

    def test_whole_miles(self):
        assert MetarParser.decode_visibility(["KJFK", "10SM"]) == 10.0

    def test_fraction(self):
        assert MetarParser.decode_visibility(["KJFK", "1/2SM"]) == 0.5

    def test_whole_plus_fraction(self):
        assert MetarParser.decode_visibility(["18012KT", "1", "1/2SM", "BR"]) == 1.5

    def test_zero_denominator_absent(self):
        assert MetarParser.decode_visibility(["KJFK", "1/0SM"]) is None

    def test_zero_denominator_continues_scanning(self):
        assert MetarParser.decode_visibility(["1/0SM", "3SM"]) == 3.0

    def test_zero_visibility_absent(self):
        assert MetarParser.decode_visibility(["0SM"]) is None

    def test_less_than_prefix(self):
        assert MetarParser.decode_visibility(["M1/4SM"]) == 0.25

    def test_more_than_prefix(self):
        assert MetarParser.decode_visibility(["P6SM"]) == 6.0

    def test_metric_not_decoded(self):
        assert MetarParser.decode_visibility(["9999"]) is None

    def test_unit_in_separate_token(self):
        assert MetarParser.decode_visibility(["KJFK", "10", "SM"]) == 10.0

    def test_bare_unit_without_number_absent(self):
        assert MetarParser.decode_visibility(["KJFK", "SM"]) is None

    @pytest.mark.parametrize("tokens", [
        ["KJFK", "\u00b2SM"],
        ["KJFK", "1/\u00b2SM"],
        ["KJFK", "M\u00b2\u00b2SM"],
    ])
    def test_non_ascii_digits_absent(self, tokens):
        assert MetarParser.decode_visibility(tokens) is None

    def test_non_ascii_whole_number_ignored(self):
        assert MetarParser.decode_visibility(["\u00b2", "1/2SM"]) == 0.5

    def test_absent(self):
        assert MetarParser.decode_visibility(["KJFK", "18012KT"]) is None


class TestDecodeCeiling:
    """Test the ceiling decoder."""

    def test_lowest_layer_wins(self):
        ceiling = MetarParser.decode_ceiling(["BKN025", "OVC008"])
        assert ceiling == Ceiling(800, "OVC")

    def test_lowest_layer_wins_in_any_order(self):
        ceiling = MetarParser.decode_ceiling(["OVC008", "BKN025"])
        assert ceiling == Ceiling(800, "OVC")

    def test_vertical_visibility(self):
        assert MetarParser.decode_ceiling(["VV002"]) == Ceiling(200, "VV")

    def test_few_and_scattered_ignored(self):
        assert MetarParser.decode_ceiling(["FEW005", "SCT010"]) is None

    def test_layer_with_cloud_type(self):
        assert MetarParser.decode_ceiling(["BKN030CB"]) == Ceiling(3000, "BKN")

    def test_non_numeric_height_skipped(self):
        assert MetarParser.decode_ceiling(["BKN///", "OVC040"]) == Ceiling(4000, "OVC")

    def test_non_ascii_height_skipped(self):
        assert MetarParser.decode_ceiling(["BKN\u00b2\u00b2\u00b2", "OVC040"]) == Ceiling(4000, "OVC")

    def test_absent(self):
        assert MetarParser.decode_ceiling(["KJFK", "10SM"]) is None


class TestDecodeWeather:
    """Test significant weather decoding."""

    def test_combined_codes_in_one_token(self):
        assert MetarParser.decode_weather(["-TSRA"]) == ["thunderstorm", "rain"]

    def test_deduplicated(self):
        assert MetarParser.decode_weather(["RA", "-RA", "+RA"]) == ["rain"]

    def test_multiple_tokens(self):
        assert MetarParser.decode_weather(["-TSRA", "BR"]) == ["thunderstorm", "rain", "mist"]

    def test_showers_of_snow(self):
        assert set(MetarParser.decode_weather(["+SHSN"])) == {"snow", "showers"}

    def test_freezing_fog(self):
        assert MetarParser.decode_weather(["FZFG"]) == ["fog"]

    def test_none(self, kjfk_raw):
        assert MetarParser.decode_weather(MetarParser.tokenize(kjfk_raw)) == []
