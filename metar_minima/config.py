"""
Runtime configuration for metar_minima.

Values are read once from the environment at import time and fall back to
the documented defaults.
"""

import os

from metar_minima.models import Minima

# Personal minima defaults
DEFAULT_MIN_CEILING_FT = 1000.0
DEFAULT_MIN_VISIBILITY_SM = 3.0
DEFAULT_MAX_CROSSWIND_KT = 15.0

MIN_CEILING_FT = float(os.getenv("METAR_MINIMA_CEILING_FT", DEFAULT_MIN_CEILING_FT))
MIN_VISIBILITY_SM = float(os.getenv("METAR_MINIMA_VISIBILITY_SM", DEFAULT_MIN_VISIBILITY_SM))
MAX_CROSSWIND_KT = float(os.getenv("METAR_MINIMA_MAX_CROSSWIND_KT", DEFAULT_MAX_CROSSWIND_KT))

# Acquisition
NOAA_BASE_URL = os.getenv(
    "METAR_NOAA_BASE_URL",
    "https://tgftp.nws.noaa.gov/data/observations/metar",
)
FETCH_TIMEOUT = int(os.getenv("METAR_FETCH_TIMEOUT", "5"))
HISTORY_MAX_HOURS = 48


def default_minima() -> Minima:
    """Build the minima configured through the environment."""
    return Minima(
        min_ceiling_ft=MIN_CEILING_FT,
        min_visibility_sm=MIN_VISIBILITY_SM,
        max_crosswind_kt=MAX_CROSSWIND_KT,
    )
