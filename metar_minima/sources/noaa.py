"""NOAA text observation service (tgftp.nws.noaa.gov) source for raw METARs."""

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import requests

from metar_minima import config

logger = logging.getLogger(__name__)


class NoaaMetarSource:
    """
    Fetch raw METAR lines from the NOAA observation text files.

    The source only returns raw report strings; decoding is left to
    MetarParser. Every network failure resolves to "no data" (None or an
    empty list) and is logged.

    Example:
        source = NoaaMetarSource()
        latest = source.fetch_latest("KJFK")
        history = source.fetch_history("KJFK", 6)  # oldest first
    """

    USER_AGENT = "metar-minima/0.1 (aviation weather tool)"

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: int = config.FETCH_TIMEOUT,
        base_url: str = config.NOAA_BASE_URL,
    ):
        """
        Args:
            session: Optional requests.Session for dependency injection (testing).
            timeout: HTTP request timeout in seconds.
            base_url: Root of the observation text files.
        """
        self._session = session or requests.Session()
        self._timeout = timeout
        self._base_url = base_url.rstrip("/")
        self._session.headers.setdefault("User-Agent", self.USER_AGENT)

    def fetch_latest(self, icao: str) -> Optional[str]:
        """
        Fetch the most recent METAR for a station.

        Args:
            icao: Station identifier (at least 3 characters)

        Returns:
            Raw METAR line, or None if unavailable
        """
        icao = icao.strip().upper()
        if len(icao) < 3:
            logger.warning("Station identifier too short: %r", icao)
            return None

        text = self._fetch_raw(f"stations/{icao}.TXT")
        lines = [line.strip() for line in text.splitlines() if line.strip()]
        if not lines:
            return None
        return lines[-1]

    def fetch_history(
        self,
        icao: str,
        count: int,
        now: Optional[datetime] = None,
    ) -> List[str]:
        """
        Collect up to ``count`` recent METARs for a station from the hourly
        cycle files, walking back at most HISTORY_MAX_HOURS hours.

        Args:
            icao: Station identifier
            count: Number of reports wanted
            now: Reference time (UTC), defaults to the current time

        Returns:
            Distinct raw METAR lines, oldest first
        """
        icao = icao.strip().upper()
        now = now or datetime.now(timezone.utc)
        prefix = icao + " "

        collected: List[str] = []
        for back in range(config.HISTORY_MAX_HOURS):
            if len(collected) >= count:
                break
            hour = (now - timedelta(hours=back)).hour
            for line in self._fetch_cycle(hour):
                if len(collected) >= count:
                    break
                if line.startswith(prefix) and line not in collected:
                    collected.append(line)

        if not collected:
            logger.warning("No METAR history found for %s", icao)

        # Cycles were walked newest first
        collected.reverse()
        return collected

    def _fetch_cycle(self, hour: int) -> List[str]:
        text = self._fetch_raw(f"cycles/{hour:02d}Z.TXT")
        return [line.strip() for line in text.splitlines() if line.strip()]

    def _fetch_raw(self, path: str) -> str:
        """
        Make HTTP GET request and return raw text.

        Returns an empty string on any HTTP or connection error.
        """
        url = f"{self._base_url}/{path}"
        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
            return response.text
        except requests.RequestException as e:
            logger.warning("NOAA fetch failed for %s: %s", url, e)
            return ""
