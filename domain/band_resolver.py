"""
Domain Layer - Band Resolution
File: domain/band_resolver.py
"""

from typing import Optional

from config.settings import NOT_AVAILABLE, UNKNOWN_BAND
from domain.band_tables import BandTables
from domain.models import BandRange, Generation


class BandResolver:
    """Resolves EARFCN / NR-ARFCN channel numbers into band labels."""

    @staticmethod
    def lookup_band(generation: Generation, channel_number: Optional[int]) -> Optional[BandRange]:
        """Return the first declared range containing the channel, if any."""
        if channel_number is None:
            return None

        for band_range in BandTables.for_generation(generation):
            if band_range.contains(channel_number):
                return band_range
        return None

    @staticmethod
    def candidate_bands(generation: Generation, channel_number: Optional[int]) -> list[BandRange]:
        """Every range containing the channel, in declaration order."""
        if channel_number is None:
            return []
        return [r for r in BandTables.for_generation(generation) if r.contains(channel_number)]

    @staticmethod
    def resolve_band(generation: Generation, channel_number: Optional[int]) -> str:
        """
        Resolve a channel number to a band label.

        Returns "B<n>" for LTE and "n<n>" for NR, "N/A" when there is no
        channel number at all, and "Unknown" when no range matches.
        """
        if channel_number is None:
            return NOT_AVAILABLE

        band_range = BandResolver.lookup_band(generation, channel_number)
        if band_range is None:
            return UNKNOWN_BAND
        return band_range.label


def resolve_band(generation: Generation, channel_number: Optional[int]) -> str:
    return BandResolver.resolve_band(generation, channel_number)
