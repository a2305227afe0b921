"""Acquisition sources returning raw METAR text."""

from metar_minima.sources.noaa import NoaaMetarSource

__all__ = ['NoaaMetarSource']
