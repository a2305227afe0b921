import pytest

from metar_minima.models import DecodedReport, Wind, Ceiling


@pytest.fixture
def kjfk_raw() -> str:
    """A typical US METAR with gusts and two ceiling layers."""
    return "KJFK 011651Z 18012G18KT 10SM BKN025 OVC035 18/12 A2992"


@pytest.fixture
def kjfk_series() -> list:
    """Three KJFK METARs, oldest first, with visibility and ceiling dropping."""
    return [
        "KJFK 011451Z 17008KT 10SM BKN030 17/11 A2994",
        "KJFK 011551Z 18010KT 6SM BR BKN020 17/12 A2993",
        "KJFK 011651Z 20014KT 4SM -RA BR OVC008 16/13 A2990",
    ]


@pytest.fixture
def make_report():
    """Factory for DecodedReport objects with only the fields a test needs."""
    def _make(
        station="KJFK",
        wind=None,
        visibility_sm=None,
        ceiling=None,
        weather=None,
    ) -> DecodedReport:
        if isinstance(wind, tuple):
            wind = Wind(*wind)
        if isinstance(ceiling, tuple):
            ceiling = Ceiling(*ceiling)
        return DecodedReport(
            raw_text=f"{station} TEST",
            station=station,
            wind=wind,
            visibility_sm=visibility_sm,
            ceiling=ceiling,
            weather=weather or [],
        )
    return _make
